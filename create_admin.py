import os

from app import create_app
from models import db
from models.user import User


def create_admin(email=None, password=None):
    email = (email or os.environ.get('ADMIN_EMAIL') or 'admin@gftire.com').lower()
    password = password or os.environ.get('ADMIN_PASSWORD') or 'admin123456'

    db.create_all()
    admin_user = User.query.filter_by(email=email).first()
    if admin_user:
        return admin_user, False

    admin_user = User().apply({'name': 'Administrador', 'email': email, 'role': 'admin', 'password': password})
    db.session.add(admin_user)
    db.session.commit()
    return admin_user, True


if __name__ == '__main__':
    app = create_app()
    with app.app_context():
        user, created = create_admin()
        if created:
            print(f'Usuario administrador creado: {user.email}')
        else:
            print(f'El usuario {user.email} ya existe')
