"""
Authentication utility functions
"""
from flask import current_app, g, request
from werkzeug.security import generate_password_hash, check_password_hash

# Compared against when the email is unknown so the response time does not
# reveal whether an account exists.
_DUMMY_HASH = generate_password_hash("not-a-real-password")


def burn_password_check(password):
    """Spend the same work as a real check, always failing."""
    check_password_hash(_DUMMY_HASH, password or "")
    return False


def extract_token(request, cookie_name='token'):
    """
    Read a bearer token from the Authorization header, falling back to the
    cookie of the same name. The header wins when both are present.
    """
    auth_header = request.headers.get('Authorization', '')
    if auth_header.startswith('Bearer '):
        token = auth_header[7:].strip()
        if token:
            return token
    return request.cookies.get(cookie_name) or None


def get_token_service():
    return current_app.extensions['token_service']


def get_lockout_policy():
    return current_app.extensions['lockout_policy']


def client_ip(request):
    return request.remote_addr or 'unknown'


def token_cookie_name():
    return current_app.config.get('TOKEN_COOKIE_NAME', 'token')


def request_token():
    """
    Verify the token sent with the current request (header first, then
    cookie). Checked once per request; later calls reuse the result.
    """
    if 'token_result' not in g:
        g.token_result = get_token_service().verify(extract_token(request, token_cookie_name()))
    return g.token_result
