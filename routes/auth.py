"""
Admin authentication routes: login with account lockout, logout, session checks
"""
from functools import wraps

from flask import Blueprint, current_app, g, request

from models import db, utcnow
from models.admin import Admin
from utils.auth_utils import (
    burn_password_check,
    client_ip,
    get_lockout_policy,
    get_token_service,
    request_token,
    token_cookie_name,
)
from utils.lockout import LockoutState, LoginOutcome
from utils.rate_limit import rate_limited
from utils.responses import json_error, json_success, request_data, validation_error
from utils.tokens import TokenStatus
from utils.validators import validate_login

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

INVALID_CREDENTIALS_MSG = 'Email or password is incorrect'
TOKEN_ERRORS = {
    TokenStatus.MISSING: ('Authentication required', 'No authentication token provided'),
    TokenStatus.INVALID: ('Invalid token', 'Authentication token is invalid'),
    TokenStatus.EXPIRED: ('Token expired', 'Your session has expired. Please login again.'),
}


def _unauthenticated(result):
    error, message = TOKEN_ERRORS[result.status]
    return json_error(401, error, message)


def token_required(f):
    """Decorator: require a valid bearer token and attach its claims to g.user"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        result = request_token()
        if not result.ok:
            return _unauthenticated(result)
        g.user = result.claims
        return f(*args, **kwargs)
    return decorated_function


def optional_auth(f):
    """Decorator: attach claims when a valid token is present, otherwise g.user is None"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        result = request_token()
        g.user = result.claims if result.ok else None
        return f(*args, **kwargs)
    return decorated_function


def require_admin(f):
    """Decorator: the identity already attached to g.user must have the admin role"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = g.get('user')
        if not user:
            return json_error(401, 'Authentication required', 'Please login first')
        if user.get('role') != 'admin':
            return json_error(403, 'Access denied', 'Admin privileges required')
        return f(*args, **kwargs)
    return decorated_function


def admin_required(f):
    """Decorator: valid token whose role is admin"""
    return token_required(require_admin(f))


def is_admin_request():
    user = g.get('user')
    return bool(user) and user.get('role') == 'admin'


def _set_token_cookie(response, token):
    lifetime = current_app.config['TOKEN_LIFETIME']
    response.set_cookie(
        token_cookie_name(),
        token,
        max_age=int(lifetime.total_seconds()),
        httponly=True,
        secure=current_app.config.get('SESSION_COOKIE_SECURE', False),
        samesite='Strict',
    )


@auth_bp.route('/login', methods=['POST'])
@rate_limited('auth', 'AUTH_RATE_LIMIT_MAX', 'AUTH_RATE_LIMIT_WINDOW_MINUTES',
              message='Too many login attempts. Please try again after 15 minutes.')
def login():
    """Admin login"""
    data = request_data(request)
    errors = validate_login(data)
    if errors:
        return validation_error(errors)

    email = data['email'].strip().lower()
    password = data['password']

    admin = Admin.find_by_email(email)
    if not admin:
        burn_password_check(password)
        current_app.logger.info("Failed admin login for unknown email from %s", client_ip(request))
        return json_error(401, 'Invalid credentials', INVALID_CREDENTIALS_MSG)

    policy = get_lockout_policy()
    now = utcnow()
    state = LockoutState(
        failed_attempts=admin.failed_attempts or 0,
        lock_until=admin.lock_until,
        last_login=admin.last_login,
    )
    password_ok = False
    if not policy.is_locked(state, now) and admin.is_active:
        password_ok = admin.check_password(password)
    decision = policy.evaluate(state, now, password_ok, is_active=bool(admin.is_active))

    if decision.changed:
        admin.failed_attempts = decision.state.failed_attempts
        admin.lock_until = decision.state.lock_until
        admin.last_login = decision.state.last_login
        try:
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            current_app.logger.error("Failed to persist login attempt for %s: %s", admin.email, e, exc_info=True)
            raise

    if decision.outcome is LoginOutcome.LOCKED:
        current_app.logger.warning("Login attempt on locked admin account %s", admin.email)
        return json_error(
            423, 'Account locked',
            f'Account is locked. Try again in {decision.remaining_minutes} minutes.',
            retryAfterMinutes=decision.remaining_minutes,
        )

    if decision.outcome is LoginOutcome.DISABLED:
        current_app.logger.warning("Login attempt on disabled admin account %s", admin.email)
        return json_error(403, 'Account disabled', 'This account has been disabled')

    if decision.outcome is LoginOutcome.INVALID_CREDENTIALS:
        if decision.newly_locked:
            current_app.logger.warning(
                "Admin account %s locked after %s failed attempts", admin.email, decision.state.failed_attempts
            )
        else:
            current_app.logger.info("Failed admin login for %s (%s)", admin.email, decision.state.failed_attempts)
        return json_error(401, 'Invalid credentials', INVALID_CREDENTIALS_MSG)

    token = get_token_service().issue(admin.id, admin.email, admin.role)
    current_app.logger.info("Admin %s logged in", admin.email)
    response, status = json_success(
        {'token': token, 'admin': admin.to_dict()},
        message='Login successful',
    )
    _set_token_cookie(response, token)
    return response, status


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Clear the token cookie. Previously issued tokens stay valid until they expire."""
    response, status = json_success(message='Logged out successfully')
    response.delete_cookie(
        token_cookie_name(),
        httponly=True,
        secure=current_app.config.get('SESSION_COOKIE_SECURE', False),
        samesite='Strict',
    )
    return response, status


@auth_bp.route('/me', methods=['GET'])
@token_required
def me():
    """Current admin profile"""
    admin = Admin.query.get(g.user.get('id')) if g.user.get('id') is not None else None
    if not admin:
        return json_error(404, 'Admin not found')
    return json_success(admin.to_admin_dict())


@auth_bp.route('/verify', methods=['GET'])
@token_required
def verify():
    """Check whether the presented token is valid"""
    return json_success({'valid': True, 'user': g.user})
