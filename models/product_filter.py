from models import db
from models.document import DocumentMixin

DEFAULT_FILTERS = [
    ('Gomas Nuevas', 'gomas nuevas'),
    ('Gomas Usadas', 'gomas usadas'),
    ('Aros', 'aros'),
    ('Baterías', 'baterias'),
    ('Aceite', 'aceite'),
    ('Filtros', 'filtros'),
    ('Frenos', 'frenos'),
    ('Suspensión', 'suspension'),
    ('Luces', 'luces'),
    ('Accesorios', 'accesorios'),
]

# Tarjetas de filtro rápido de la página de productos, una lista por usuario
class ProductFilter(DocumentMixin, db.Model):
    __tablename__ = 'product_filters'
    document_fields = ('user_id', 'name', 'term')

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    name = db.Column(db.String(64), nullable=False)
    term = db.Column(db.String(64), nullable=False)

    user = db.relationship('User', backref=db.backref('product_filters', cascade='all, delete-orphan'))
