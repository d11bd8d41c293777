"""Shared fixtures: a fresh app on in-memory SQLite per test, uploads under tmp_path."""
from datetime import timedelta

import pytest

from app import create_app
from config import TestingConfig
from models import db, utcnow
from models.admin import Admin
from models.category import Category
from models.product import Product

ADMIN_EMAIL = 'owner@brijnamkeen.in'
ADMIN_PASSWORD = 'namkeen-secret'


@pytest.fixture()
def app(tmp_path):
    class _Config(TestingConfig):
        UPLOAD_FOLDER = str(tmp_path / 'uploads')

    application = create_app(_Config)
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def admin_account(app):
    with app.app_context():
        admin = Admin(email=ADMIN_EMAIL, name='Store Owner', role='admin', is_active=True)
        admin.set_password(ADMIN_PASSWORD)
        db.session.add(admin)
        db.session.commit()
        return {'id': admin.id, 'email': ADMIN_EMAIL, 'password': ADMIN_PASSWORD}


@pytest.fixture()
def issue_token(app):
    def _issue(account_id=1, email=ADMIN_EMAIL, role='admin'):
        return app.extensions['token_service'].issue(account_id, email, role)
    return _issue


@pytest.fixture()
def auth_headers(admin_account, issue_token):
    token = issue_token(admin_account['id'], admin_account['email'], 'admin')
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture()
def make_product(app):
    """Insert a product; each call is one second newer than the previous by default."""
    counter = {'n': 0}

    def _make(name=None, category='Namkeen', created_at=None, **fields):
        counter['n'] += 1
        with app.app_context():
            product = Product(
                name=name or f'Product {counter["n"]}',
                description='Crunchy and fresh',
                category=category,
                price=fields.pop('price', 100),
                created_at=created_at or utcnow() - timedelta(hours=1) + timedelta(seconds=counter['n']),
                **fields,
            )
            db.session.add(product)
            db.session.commit()
            return product.id
    return _make


@pytest.fixture()
def make_category(app):
    def _make(name, display_order=0, **fields):
        with app.app_context():
            category = Category(name=name, display_order=display_order, **fields)
            db.session.add(category)
            db.session.commit()
            return category.id
    return _make
