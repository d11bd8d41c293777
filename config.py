"""
Configuration for the Namkeen store Flask app.
Production (Railway/Render): uses DATABASE_URL only; fails if missing.
Local: DATABASE_URL or a SQLite file in the instance directory.
"""
import os
from pathlib import Path
from datetime import timedelta

MIN_JWT_SECRET_LENGTH = 32
DEV_FALLBACK_JWT_SECRET = "dev_fallback_secret_not_for_production"


def _is_production():
    """True when running on Railway, Render, or explicit production."""
    return (
        os.environ.get("RENDER") == "true"
        or os.environ.get("RAILWAY_ENVIRONMENT") is not None
        or os.environ.get("FLASK_ENV") == "production"
        or os.environ.get("APP_ENV") == "production"
    )


def _env_flag(name, default="false"):
    return os.environ.get(name, default).lower() in ("true", "on", "1")


def _env_int(name, default):
    try:
        return int(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


def _normalize_database_url(url):
    """Convert postgres:// to postgresql+psycopg2:// for SQLAlchemy/psycopg2."""
    if not url:
        return url
    url = url.strip()
    if url.startswith("postgres://"):
        return "postgresql+psycopg2://" + url[11:]
    if url.startswith("postgresql://") and "psycopg2" not in url:
        return "postgresql+psycopg2://" + url[13:]
    return url


def _get_database_uri(instance_dir):
    """Database URI: production = DATABASE_URL only; local = DATABASE_URL or SQLite."""
    url = os.environ.get("DATABASE_URL")
    if _is_production():
        if not url or not url.strip():
            raise RuntimeError(
                "DATABASE_URL is required in production (Railway/Render). "
                "Set it in your service environment variables."
            )
        return _normalize_database_url(url)

    if url and url.strip():
        return _normalize_database_url(url)
    return f"sqlite:///{instance_dir / 'namkeen_store.db'}"


class Config:
    """Base configuration."""
    ENV_NAME = "development"
    DEBUG = False
    TESTING = False

    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key-change-in-production"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Session tokens (JWT, HS256)
    JWT_SECRET = os.environ.get("JWT_SECRET", "")
    TOKEN_LIFETIME = timedelta(hours=_env_int("TOKEN_LIFETIME_HOURS", 24))
    TOKEN_COOKIE_NAME = "token"
    SESSION_COOKIE_SECURE = _env_flag("SESSION_COOKIE_SECURE")

    # Account lockout
    LOGIN_MAX_ATTEMPTS = _env_int("LOGIN_MAX_ATTEMPTS", 5)
    LOGIN_LOCK_MINUTES = _env_int("LOGIN_LOCK_MINUTES", 15)

    # Per-IP request limits
    RATELIMIT_ENABLED = _env_flag("RATELIMIT_ENABLED", "true")
    AUTH_RATE_LIMIT_MAX = _env_int("AUTH_RATE_LIMIT_MAX", 5)
    AUTH_RATE_LIMIT_WINDOW_MINUTES = _env_int("AUTH_RATE_LIMIT_WINDOW_MINUTES", 15)
    CONTACT_RATE_LIMIT_MAX = _env_int("CONTACT_RATE_LIMIT_MAX", 3)
    CONTACT_RATE_LIMIT_WINDOW_MINUTES = _env_int("CONTACT_RATE_LIMIT_WINDOW_MINUTES", 60)
    # General /api quota per client IP and account, production only unless forced on
    GENERAL_RATE_LIMIT_ENABLED = _env_flag("GENERAL_RATE_LIMIT_ENABLED")
    GENERAL_RATE_LIMIT_MAX = _env_int("GENERAL_RATE_LIMIT_MAX", 100)
    GENERAL_RATE_LIMIT_WINDOW_MINUTES = _env_int("GENERAL_RATE_LIMIT_WINDOW_MINUTES", 15)
    TRUST_PROXY = _env_flag("TRUST_PROXY")

    CORS_ORIGINS = [o.strip() for o in os.environ.get(
        "CORS_ORIGINS", "http://localhost:5173,http://localhost:3000"
    ).split(",") if o.strip()]

    BASE_DIR = Path(__file__).parent
    INSTANCE_DIR = BASE_DIR / "instance"
    try:
        INSTANCE_DIR.mkdir(exist_ok=True)
    except OSError:
        pass
    SQLALCHEMY_DATABASE_URI = _get_database_uri(INSTANCE_DIR)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    UPLOAD_FOLDER = os.environ.get("UPLOAD_FOLDER") or str(BASE_DIR / "uploads")
    MAX_CONTENT_LENGTH = 50 * 1024 * 1024  # catalogue PDFs go up to 50MB

    MAIL_SERVER = os.environ.get("MAIL_SERVER")
    MAIL_PORT = _env_int("MAIL_PORT", 587)
    MAIL_USE_TLS = _env_flag("MAIL_USE_TLS", "true")
    MAIL_USERNAME = os.environ.get("MAIL_USERNAME")
    MAIL_PASSWORD = os.environ.get("MAIL_PASSWORD")
    MAIL_DEFAULT_SENDER = os.environ.get("MAIL_DEFAULT_SENDER") or os.environ.get("MAIL_USERNAME") or "noreply@brijnamkeen.in"
    OWNER_EMAIL = os.environ.get("OWNER_EMAIL") or os.environ.get("MAIL_USERNAME")

    # Bootstrap admin, created on startup when no admin exists
    ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL")
    ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD")
    ADMIN_NAME = os.environ.get("ADMIN_NAME", "Admin")


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    ENV_NAME = "production"
    GENERAL_RATE_LIMIT_ENABLED = True
    SESSION_COOKIE_SECURE = True


class TestingConfig(Config):
    ENV_NAME = "testing"
    TESTING = True
    GENERAL_RATE_LIMIT_ENABLED = False
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET = "test-secret-key-with-at-least-32-characters"
    MAIL_SUPPRESS_SEND = True
    MAIL_SERVER = "localhost"
    OWNER_EMAIL = "owner@example.com"
    ADMIN_EMAIL = None
    ADMIN_PASSWORD = None


def get_config():
    """Pick the config class for the current environment."""
    return ProductionConfig if _is_production() else DevelopmentConfig


def resolve_jwt_secret(config, logger):
    """
    Return the signing secret to use. A missing or short secret is tolerated
    outside production (with a warning) and refused in production.
    """
    secret = config.get("JWT_SECRET") or ""
    if len(secret) >= MIN_JWT_SECRET_LENGTH:
        return secret
    if config.get("ENV_NAME") == "production":
        raise RuntimeError(
            f"JWT_SECRET must be set to at least {MIN_JWT_SECRET_LENGTH} characters in production."
        )
    logger.warning("SECURITY WARNING: JWT_SECRET is not properly configured; using a development fallback")
    return secret or DEV_FALLBACK_JWT_SECRET
