from models import db
from models.document import DocumentMixin

PERMISSIONS = [
    'ver_productos',
    'editar_productos',
    'ver_clientes',
    'editar_clientes',
    'ver_facturas',
    'crear_facturas',
    'ver_reportes',
]

class Employee(DocumentMixin, db.Model):
    __tablename__ = 'employees'
    document_fields = ('name', 'email', 'position', 'permissions')

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    email = db.Column(db.String(128), nullable=False)
    position = db.Column(db.String(64), nullable=False)
    permissions = db.Column(db.JSON, nullable=False, default=list)

    def apply(self, data):
        if 'permissions' in data:
            # Se descartan permisos desconocidos y se reasigna la lista para que SQLAlchemy detecte el cambio
            data = dict(data, permissions=[p for p in data['permissions'] or [] if p in PERMISSIONS])
        return super().apply(data)
