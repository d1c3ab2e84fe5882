"""
Pytest configuration and fixtures
"""
import pytest
from flask import g

from app import create_app
from config import TestingConfig
from models import db as _db
from models.user import User


@pytest.fixture(scope='function')
def app(tmp_path):
    """Create Flask application with an empty in-memory database"""
    class Config(TestingConfig):
        UPLOAD_FOLDER = str(tmp_path / 'uploads')

    app = create_app(Config)

    # Requests reuse the app context pushed below, and with it `g`;
    # the logged-in user must come from each client's own session cookie
    @app.before_request
    def reload_user():
        g.pop('_login_user', None)

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def db(app):
    return _db


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


def make_user(email, password='secret123', role='user', name='Usuario'):
    user = User().apply({'name': name, 'email': email, 'role': role, 'password': password})
    _db.session.add(user)
    _db.session.commit()
    return user


def login_user(client, email, password='secret123'):
    """Helper function to login a user"""
    return client.post('/auth/login', data={
        'email': email,
        'password': password,
    }, follow_redirects=True)


@pytest.fixture(scope='function')
def admin_user(app):
    return make_user('admin@gftire.com', role='admin', name='Admin')


@pytest.fixture(scope='function')
def regular_user(app):
    return make_user('vendedor@gftire.com', role='user', name='Vendedor')


@pytest.fixture(scope='function')
def admin_client(client, admin_user):
    """Test client logged in as an administrator"""
    login_user(client, 'admin@gftire.com')
    return client


@pytest.fixture(scope='function')
def user_client(client, regular_user):
    """Test client logged in as a regular user"""
    login_user(client, 'vendedor@gftire.com')
    return client
