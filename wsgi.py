"""
WSGI entry point (Railway/Render): gunicorn -c gunicorn_config.py wsgi:app
"""
from app import create_app

app = create_app()
application = app
