from models import db
from models.document import DocumentMixin

class Client(DocumentMixin, db.Model):
    __tablename__ = 'clients'
    document_fields = ('name', 'email', 'phone', 'address')

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    email = db.Column(db.String(128), nullable=True)
    phone = db.Column(db.String(32), nullable=True)
    address = db.Column(db.String(255), nullable=True)

    def __repr__(self):
        return f'<Client {self.name}>'
