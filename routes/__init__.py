"""
Routes package for the Namkeen store API
"""
from routes.public import public_bp
from routes.auth import auth_bp
from routes.categories import categories_bp
from routes.products import products_bp
from routes.blogs import blogs_bp
from routes.settings import settings_bp
from routes.contact import contact_bp

__all__ = [
    'public_bp',
    'auth_bp',
    'categories_bp',
    'products_bp',
    'blogs_bp',
    'settings_bp',
    'contact_bp',
]
