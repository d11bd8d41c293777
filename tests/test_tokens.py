from datetime import datetime, timedelta, timezone

import jwt
import pytest

from utils.tokens import TokenService, TokenStatus

SECRET = 'unit-test-secret-key-with-32-plus-chars'
ISSUED = datetime(2024, 3, 1, 10, 0, 0)


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture()
def clock():
    return FakeClock(ISSUED)


@pytest.fixture()
def service(clock):
    return TokenService(SECRET, lifetime=timedelta(hours=24), clock=clock)


def _ts(value):
    return int(value.replace(tzinfo=timezone.utc).timestamp())


def test_issued_token_carries_identity(service):
    result = service.verify(service.issue(7, 'owner@brijnamkeen.in', 'admin'))
    assert result.ok
    assert result.claims == {'id': 7, 'email': 'owner@brijnamkeen.in', 'role': 'admin'}


def test_token_valid_just_before_lifetime_ends(service, clock):
    token = service.issue(1, 'a@b.in')
    clock.now = ISSUED + timedelta(hours=23, minutes=59)
    assert service.verify(token).status is TokenStatus.VALID


def test_token_expired_after_lifetime(service, clock):
    token = service.issue(1, 'a@b.in')
    clock.now = ISSUED + timedelta(hours=24, minutes=1)
    assert service.verify(token).status is TokenStatus.EXPIRED


def test_token_expired_exactly_at_exp(service, clock):
    token = service.issue(1, 'a@b.in')
    clock.now = ISSUED + timedelta(hours=24)
    assert service.verify(token).status is TokenStatus.EXPIRED


def test_token_from_other_secret_is_invalid(service, clock):
    other = TokenService('another-secret-that-is-long-enough-too', clock=clock)
    assert service.verify(other.issue(1, 'a@b.in')).status is TokenStatus.INVALID


def test_missing_and_malformed_tokens(service):
    assert service.verify(None).status is TokenStatus.MISSING
    assert service.verify('').status is TokenStatus.MISSING
    assert service.verify('not.a.jwt').status is TokenStatus.INVALID


def test_unsigned_token_rejected(service):
    payload = {'id': 1, 'email': 'a@b.in', 'role': 'admin', 'iat': _ts(ISSUED), 'exp': _ts(ISSUED + timedelta(hours=1))}
    token = jwt.encode(payload, None, algorithm='none')
    assert service.verify(token).status is TokenStatus.INVALID


def test_other_algorithm_rejected(service):
    payload = {'id': 1, 'email': 'a@b.in', 'role': 'admin', 'iat': _ts(ISSUED), 'exp': _ts(ISSUED + timedelta(hours=1))}
    token = jwt.encode(payload, SECRET, algorithm='HS512')
    assert service.verify(token).status is TokenStatus.INVALID


def test_token_without_expiry_rejected(service):
    token = jwt.encode({'id': 1, 'iat': _ts(ISSUED)}, SECRET, algorithm='HS256')
    assert service.verify(token).status is TokenStatus.INVALID


def test_role_defaults_to_user(service):
    payload = {'id': 3, 'email': 'c@d.in', 'iat': _ts(ISSUED), 'exp': _ts(ISSUED + timedelta(hours=1))}
    result = service.verify(jwt.encode(payload, SECRET, algorithm='HS256'))
    assert result.ok
    assert result.claims['role'] == 'user'


def test_secret_required():
    with pytest.raises(ValueError):
        TokenService('')
