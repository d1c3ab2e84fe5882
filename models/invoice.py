from models import db
from models.document import DocumentMixin
from datetime import datetime

class Invoice(DocumentMixin, db.Model):
    __tablename__ = 'invoices'
    document_fields = ('invoice_number', 'client_id', 'client', 'date', 'items', 'total')

    id = db.Column(db.Integer, primary_key=True)
    invoice_number = db.Column(db.String(32), nullable=False, index=True)
    # Sin clave foránea: la factura conserva su copia aunque el cliente se borre
    client_id = db.Column(db.Integer, nullable=False, index=True)
    client = db.Column(db.JSON, nullable=False, default=dict)
    date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    total = db.Column(db.Float, nullable=False, default=0)
    # Relaciones
    items = db.relationship('InvoiceItem', backref='invoice', cascade='all, delete-orphan',
                            order_by='InvoiceItem.id')

    def to_dict(self):
        doc = super().to_dict()
        doc['items'] = [item.to_dict() for item in self.items]
        doc['client'] = dict(self.client or {})
        return doc

    def apply(self, data):
        data = dict(data)
        if 'date' in data and isinstance(data['date'], str):
            data['date'] = datetime.fromisoformat(data['date'])
        if 'client' in data:
            data['client'] = dict(data['client'] or {})
        if 'items' in data:
            # Las líneas se reemplazan completas, igual que el resto del documento
            data['items'] = [InvoiceItem.from_dict(item) for item in data['items'] or []]
        return super().apply(data)


class InvoiceItem(db.Model):
    __tablename__ = 'invoice_items'
    id = db.Column(db.Integer, primary_key=True)
    invoice_id = db.Column(db.Integer, db.ForeignKey('invoices.id'), nullable=False)
    product_id = db.Column(db.Integer, nullable=False)
    product_name = db.Column(db.String(128), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    price = db.Column(db.Float, nullable=False)

    @classmethod
    def from_dict(cls, data):
        if isinstance(data, InvoiceItem):
            return data
        return cls(
            product_id=int(data['product_id']),
            product_name=data.get('product_name', ''),
            quantity=int(data['quantity']),
            price=float(data.get('price') or 0),
        )

    def to_dict(self):
        return {
            'product_id': self.product_id,
            'product_name': self.product_name,
            'quantity': self.quantity,
            'price': self.price,
        }
