"""
Account lockout policy for admin login.

Pure decision logic: given an account's lockout state and the result of a
password check, decide the outcome and compute the next state. Persisting
that state is left to the caller.
"""
import enum
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_LOCK_MINUTES = 15


class LoginOutcome(enum.Enum):
    SUCCESS = 'success'
    INVALID_CREDENTIALS = 'invalid_credentials'
    LOCKED = 'locked'
    DISABLED = 'disabled'


@dataclass(frozen=True)
class LockoutState:
    failed_attempts: int = 0
    lock_until: Optional[datetime] = None
    last_login: Optional[datetime] = None


@dataclass(frozen=True)
class LoginDecision:
    outcome: LoginOutcome
    state: LockoutState
    changed: bool = False
    remaining_minutes: int = 0

    @property
    def newly_locked(self):
        return self.outcome is LoginOutcome.INVALID_CREDENTIALS and self.state.lock_until is not None


class LockoutPolicy:
    """Lock an account for a fixed window after repeated failed logins."""

    def __init__(self, max_attempts=DEFAULT_MAX_ATTEMPTS, lock_duration=timedelta(minutes=DEFAULT_LOCK_MINUTES)):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.lock_duration = lock_duration

    @classmethod
    def from_config(cls, config):
        return cls(
            max_attempts=config.get('LOGIN_MAX_ATTEMPTS', DEFAULT_MAX_ATTEMPTS),
            lock_duration=timedelta(minutes=config.get('LOGIN_LOCK_MINUTES', DEFAULT_LOCK_MINUTES)),
        )

    @staticmethod
    def is_locked(state, now):
        return state.lock_until is not None and state.lock_until > now

    @staticmethod
    def remaining_minutes(state, now):
        """Minutes left on an active lock, rounded up."""
        if state.lock_until is None or state.lock_until <= now:
            return 0
        return math.ceil((state.lock_until - now).total_seconds() / 60)

    def evaluate(self, state, now, password_ok, is_active=True):
        """
        Decide a single login attempt.

        An active lock rejects before anything else and leaves the state as is.
        A disabled account is rejected next, also without touching counters.
        An expired lock is cleared and the attempt counts from zero.
        """
        if self.is_locked(state, now):
            return LoginDecision(
                outcome=LoginOutcome.LOCKED,
                state=state,
                remaining_minutes=self.remaining_minutes(state, now),
            )

        if not is_active:
            return LoginDecision(outcome=LoginOutcome.DISABLED, state=state)

        attempts = state.failed_attempts or 0
        if state.lock_until is not None:
            attempts = 0

        if not password_ok:
            attempts += 1
            lock_until = now + self.lock_duration if attempts >= self.max_attempts else None
            return LoginDecision(
                outcome=LoginOutcome.INVALID_CREDENTIALS,
                state=LockoutState(failed_attempts=attempts, lock_until=lock_until, last_login=state.last_login),
                changed=True,
            )

        return LoginDecision(
            outcome=LoginOutcome.SUCCESS,
            state=LockoutState(failed_attempts=0, lock_until=None, last_login=now),
            changed=True,
        )
