"""
Per-IP request limits backed by the request_log table.
"""
import math
from datetime import timedelta
from functools import wraps

from flask import current_app, jsonify, request

from models import db, utcnow
from models.rate_limit import RequestLog
from utils.auth_utils import client_ip, request_token

LOG_RETENTION = timedelta(hours=24)
RATE_LIMIT_MSG = "You have exceeded the rate limit. Please try again later."
GENERAL_LIMIT_EXEMPT = ("/api/health",)


def _cleanup_old_logs(now):
    RequestLog.query.filter(RequestLog.created_at <= now - LOG_RETENTION).delete()


def check_and_record(scope, ip, limit, window, now=None):
    """
    Record a request for (scope, ip) unless the window is already full.
    Returns seconds until the oldest counted request leaves the window when
    limited, else 0.
    """
    now = now or utcnow()
    since = now - window
    _cleanup_old_logs(now)
    recent = (
        RequestLog.query.filter(
            RequestLog.scope == scope,
            RequestLog.client_ip == ip,
            RequestLog.created_at > since,
        )
        .order_by(RequestLog.created_at)
        .all()
    )
    if len(recent) >= limit:
        db.session.commit()
        oldest = recent[0].created_at
        return max(1, math.ceil((oldest + window - now).total_seconds()))

    db.session.add(RequestLog(scope=scope, client_ip=ip, created_at=now))
    db.session.commit()
    return 0


def _too_many_requests(message, retry_after, limit):
    response = jsonify({
        'success': False,
        'error': 'Too many requests',
        'message': message,
        'retryAfter': retry_after,
        'limit': limit,
    })
    response.status_code = 429
    response.headers['Retry-After'] = str(retry_after)
    return response


def _checked(scope, key, limit, window):
    try:
        return check_and_record(scope, key, limit, window)
    except Exception as e:
        db.session.rollback()
        current_app.logger.error("Rate limit check failed for %s: %s", scope, e, exc_info=True)
        raise


def rate_limited(scope, limit_key, window_minutes_key, message=RATE_LIMIT_MSG):
    """Decorator: reject with 429 once a client IP exceeds its quota."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            config = current_app.config
            if not config.get('RATELIMIT_ENABLED', True):
                return f(*args, **kwargs)

            limit = config[limit_key]
            ip = client_ip(request)
            retry_after = _checked(scope, ip, limit, timedelta(minutes=config[window_minutes_key]))
            if retry_after:
                current_app.logger.warning("Rate limit hit: scope=%s ip=%s", scope, ip)
                return _too_many_requests(message, retry_after, limit)
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def enforce_general_limit():
    """
    before_request hook: quota for every /api request, counted per client
    IP and signed-in account. Health checks are not counted.
    """
    config = current_app.config
    if not (config.get('RATELIMIT_ENABLED', True) and config.get('GENERAL_RATE_LIMIT_ENABLED')):
        return None
    if not request.path.startswith('/api/') or request.path in GENERAL_LIMIT_EXEMPT:
        return None
    if request.method == 'OPTIONS':
        return None

    result = request_token()
    account = result.claims.get('id') if result.ok else None
    key = f"{client_ip(request)}-{account if account is not None else 'anonymous'}"
    limit = config['GENERAL_RATE_LIMIT_MAX']
    retry_after = _checked('general', key, limit, timedelta(minutes=config['GENERAL_RATE_LIMIT_WINDOW_MINUTES']))
    if retry_after:
        current_app.logger.warning("Rate limit hit: scope=general key=%s", key)
        return _too_many_requests(RATE_LIMIT_MSG, retry_after, limit)
    return None
