"""
Models package for the Namkeen store
"""
from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def utcnow():
    """Naive UTC timestamp, matching how DateTime columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat(value):
    return value.isoformat() if value else None


# Import all models here to ensure they're registered
from models.admin import Admin
from models.category import Category
from models.product import Product
from models.blog import Blog
from models.settings import Settings
from models.rate_limit import RequestLog

__all__ = [
    'db',
    'utcnow',
    'Admin',
    'Category',
    'Product',
    'Blog',
    'Settings',
    'RequestLog',
]
