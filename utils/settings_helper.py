"""
Settings helper: read and write site settings stored as key/value rows.
"""
from datetime import datetime

from models import db
from models.settings import Settings

CATALOGUE_KEYS = ('catalogue_pdf', 'catalogue_file_name', 'catalogue_uploaded_at')


def get_setting(key, default=''):
    """Get setting value by key. Safe to call from any request context."""
    try:
        setting = Settings.query.filter_by(key=key).first()
        return setting.value if setting and setting.value is not None else default
    except Exception:
        return default


def set_setting(key, value, description=''):
    """Set or update setting value (caller commits)"""
    setting = Settings.query.filter_by(key=key).first()
    if setting:
        setting.value = value
        if description:
            setting.description = description
    else:
        setting = Settings(key=key, value=value, description=description)
        db.session.add(setting)
    return setting


def get_catalogue():
    """Current catalogue info: stored path, original file name, upload time."""
    uploaded_at = get_setting('catalogue_uploaded_at', None)
    return {
        'path': get_setting('catalogue_pdf', None),
        'file_name': get_setting('catalogue_file_name', None),
        'uploaded_at': datetime.fromisoformat(uploaded_at) if uploaded_at else None,
    }


def set_catalogue(path, file_name, uploaded_at):
    set_setting('catalogue_pdf', path, 'Catalogue PDF path (relative to upload folder)')
    set_setting('catalogue_file_name', file_name, 'Catalogue original file name')
    set_setting('catalogue_uploaded_at', uploaded_at.isoformat() if uploaded_at else None, 'Catalogue upload time')


def clear_catalogue():
    set_catalogue(None, None, None)
