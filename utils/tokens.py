"""
Signed session tokens for the admin console (JWT, HS256 only).
Tokens are stateless: logout clears the cookie but an issued token stays
valid until it expires.
"""
import enum
from dataclasses import dataclass, field
from datetime import timedelta, timezone
from typing import Optional

import jwt

from models import utcnow

ALGORITHM = 'HS256'
DEFAULT_TOKEN_LIFETIME = timedelta(hours=24)


class TokenStatus(enum.Enum):
    VALID = 'valid'
    MISSING = 'missing'
    INVALID = 'invalid'
    EXPIRED = 'expired'


@dataclass(frozen=True)
class TokenResult:
    status: TokenStatus
    claims: Optional[dict] = field(default=None)

    @property
    def ok(self):
        return self.status is TokenStatus.VALID


def _timestamp(value):
    return int(value.replace(tzinfo=timezone.utc).timestamp())


class TokenService:
    """Issue and verify bearer tokens with a fixed secret and lifetime."""

    def __init__(self, secret, lifetime=DEFAULT_TOKEN_LIFETIME, clock=utcnow):
        if not secret:
            raise ValueError("A signing secret is required")
        self._secret = secret
        self.lifetime = lifetime
        self._clock = clock

    def issue(self, account_id, email, role='admin'):
        issued_at = self._clock()
        payload = {
            'id': account_id,
            'email': email,
            'role': role or 'admin',
            'iat': _timestamp(issued_at),
            'exp': _timestamp(issued_at + self.lifetime),
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token):
        """
        Check signature, then expiry against this service's clock.
        Never raises; the status tells the caller what went wrong.
        """
        if not token:
            return TokenResult(TokenStatus.MISSING)
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={'verify_exp': False, 'verify_iat': False, 'require': ['exp', 'iat']},
            )
        except jwt.PyJWTError:
            return TokenResult(TokenStatus.INVALID)

        exp = payload.get('exp')
        if not isinstance(exp, (int, float)):
            return TokenResult(TokenStatus.INVALID)
        if _timestamp(self._clock()) >= exp:
            return TokenResult(TokenStatus.EXPIRED)

        claims = {
            'id': payload.get('id'),
            'email': payload.get('email'),
            'role': payload.get('role') or 'user',
        }
        return TokenResult(TokenStatus.VALID, claims)

