"""
Gunicorn config for the store API: gunicorn -c gunicorn_config.py wsgi:app
Binds to 0.0.0.0 and PORT for Railway/Render.
"""
import os

bind = "0.0.0.0:{}".format(os.environ.get("PORT", "5000"))
workers = int(os.environ.get("WEB_CONCURRENCY", "1"))
threads = 2
timeout = 120
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
