"""
Main Flask application entry point for the Namkeen store API
"""
import logging
import os
from datetime import timedelta

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from config import get_config, resolve_jwt_secret
from models import db
from utils.lockout import LockoutPolicy
from utils.mail import mail
from utils.rate_limit import enforce_general_limit
from utils.tokens import TokenService

logger = logging.getLogger(__name__)

def create_app(config_class=None):
    """Application factory pattern. DB init runs inside app_context; non-fatal on failure."""
    app = Flask(__name__)
    app.config.from_object(config_class or get_config())
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    if app.config.get('TRUST_PROXY'):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)

    # Auth collaborators are built once from config and handed to the routes
    app.extensions['token_service'] = TokenService(
        resolve_jwt_secret(app.config, app.logger),
        lifetime=app.config.get('TOKEN_LIFETIME', timedelta(hours=24)),
    )
    app.extensions['lockout_policy'] = LockoutPolicy.from_config(app.config)

    db.init_app(app)
    mail.init_app(app)
    CORS(app, resources={r"/api/*": {"origins": app.config.get('CORS_ORIGINS', [])}}, supports_credentials=True)

    register_error_handlers(app)
    register_request_hooks(app)

    # Create tables and seed only inside app context; do not crash if DB temporarily unavailable
    with app.app_context():
        try:
            db.create_all()
            seed_admin(app)
        except Exception as e:
            logger.warning("Database init/seed skipped (non-fatal): %s", e)

    from routes import public_bp, auth_bp, categories_bp, products_bp, blogs_bp, settings_bp, contact_bp

    app.register_blueprint(public_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(categories_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(blogs_bp)
    app.register_blueprint(settings_bp)
    app.register_blueprint(contact_bp)

    return app


def register_error_handlers(app):
    """JSON errors everywhere; stack traces never leave the server."""

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        if e.code == 404:
            message = f"Route {request.method} {request.path} not found"
        elif e.code == 400 and request.is_json:
            message = 'Request body contains invalid JSON'
        elif e.code == 413:
            message = 'File too large. Maximum size is 50MB.'
        else:
            message = e.description
        return jsonify({'success': False, 'error': e.name, 'message': message}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        db.session.rollback()
        app.logger.error("Server error on %s %s: %s", request.method, request.path, e, exc_info=True)
        production = app.config.get('ENV_NAME') == 'production'
        return jsonify({
            'success': False,
            'error': 'Server error',
            'message': 'An unexpected error occurred' if production else str(e),
        }), 500


def register_request_hooks(app):
    @app.before_request
    def log_request():
        if app.config.get('DEBUG'):
            app.logger.debug("%s %s", request.method, request.path)

    app.before_request(enforce_general_limit)

    @app.after_request
    def security_headers(response):
        response.headers.setdefault('X-Content-Type-Options', 'nosniff')
        response.headers.setdefault('X-Frame-Options', 'DENY')
        response.headers.setdefault('Referrer-Policy', 'strict-origin-when-cross-origin')
        if app.config.get('ENV_NAME') == 'production':
            response.headers.setdefault('Strict-Transport-Security', 'max-age=31536000; includeSubDomains')
        return response


def seed_admin(app):
    """Create the bootstrap admin from ADMIN_EMAIL/ADMIN_PASSWORD when no admin exists yet."""
    from models.admin import Admin

    email = (app.config.get('ADMIN_EMAIL') or '').strip().lower()
    password = app.config.get('ADMIN_PASSWORD')
    if not email or not password:
        return None
    if Admin.query.count() > 0:
        return None

    admin = Admin(email=email, name=app.config.get('ADMIN_NAME') or 'Admin', role='admin', is_active=True)
    admin.set_password(password)
    db.session.add(admin)
    try:
        db.session.commit()
        logger.info("Default admin created: %s", email)
    except Exception as e:
        db.session.rollback()
        logger.error("Error seeding admin: %s", e)
        return None
    return admin


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    create_app().run(host="0.0.0.0", port=port, debug=os.environ.get("FLASK_DEBUG", "false").lower() in ("true", "1"))
