from models import db
from models.document import DocumentMixin

# Modelo de producto
class Product(DocumentMixin, db.Model):
    __tablename__ = 'products'
    document_fields = ('name', 'description', 'price', 'stock', 'image_url', 'barcode', 'reorder_point')

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    description = db.Column(db.Text, nullable=True)
    price = db.Column(db.Float, nullable=False, default=0)
    stock = db.Column(db.Integer, nullable=False, default=0)
    image_url = db.Column(db.String(255), nullable=True)
    barcode = db.Column(db.String(64), unique=True, nullable=True)
    reorder_point = db.Column(db.Integer, nullable=False, default=0)

    def apply(self, data):
        # Un código vacío se guarda como NULL para no chocar con la restricción única
        if 'barcode' in data and not data['barcode']:
            data = dict(data, barcode=None)
        return super().apply(data)
