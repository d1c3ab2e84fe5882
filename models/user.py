from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from models import db
from models.document import DocumentMixin

ROLES = ('admin', 'user')

# Modelo de usuario
class User(UserMixin, DocumentMixin, db.Model):
    __tablename__ = 'users'
    document_fields = ('name', 'email', 'role', 'created_at')

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(128), nullable=False)
    email = db.Column(db.String(128), unique=True, nullable=False)
    password_hash = db.Column(db.String(256), nullable=False)
    role = db.Column(db.String(20), nullable=False, default='user')  # admin, user
    created_at = db.Column(db.DateTime, default=db.func.current_timestamp())

    def apply(self, data):
        data = dict(data)
        data.pop('created_at', None)
        password = data.pop('password', None)
        if password:
            self.set_password(password)
        return super().apply(data)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def is_admin(self):
        return self.role == 'admin'

    def has_role(self, *roles):
        return self.role in roles
