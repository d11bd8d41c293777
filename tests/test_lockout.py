from datetime import datetime, timedelta

import pytest

from utils.lockout import LockoutPolicy, LockoutState, LoginOutcome

NOW = datetime(2024, 3, 1, 10, 0, 0)


@pytest.fixture()
def policy():
    return LockoutPolicy(max_attempts=5, lock_duration=timedelta(minutes=15))


def test_failure_increments_counter(policy):
    decision = policy.evaluate(LockoutState(failed_attempts=2), NOW, password_ok=False)
    assert decision.outcome is LoginOutcome.INVALID_CREDENTIALS
    assert decision.state.failed_attempts == 3
    assert decision.state.lock_until is None
    assert decision.changed


def test_fifth_failure_locks_for_fifteen_minutes(policy):
    decision = policy.evaluate(LockoutState(failed_attempts=4), NOW, password_ok=False)
    assert decision.outcome is LoginOutcome.INVALID_CREDENTIALS
    assert decision.state.failed_attempts == 5
    assert decision.state.lock_until == NOW + timedelta(minutes=15)
    assert decision.newly_locked


def test_active_lock_rejects_without_touching_state(policy):
    state = LockoutState(failed_attempts=5, lock_until=NOW + timedelta(minutes=10, seconds=1))
    decision = policy.evaluate(state, NOW, password_ok=True)
    assert decision.outcome is LoginOutcome.LOCKED
    assert decision.state == state
    assert not decision.changed
    assert decision.remaining_minutes == 11


def test_lock_expiring_exactly_now_is_not_active(policy):
    state = LockoutState(failed_attempts=5, lock_until=NOW)
    assert not policy.is_locked(state, NOW)
    assert policy.remaining_minutes(state, NOW) == 0


def test_expired_lock_counts_failure_from_zero(policy):
    state = LockoutState(failed_attempts=5, lock_until=NOW - timedelta(minutes=1))
    decision = policy.evaluate(state, NOW, password_ok=False)
    assert decision.outcome is LoginOutcome.INVALID_CREDENTIALS
    assert decision.state.failed_attempts == 1
    assert decision.state.lock_until is None


def test_success_resets_counter_and_sets_last_login(policy):
    state = LockoutState(failed_attempts=3, lock_until=NOW - timedelta(minutes=1))
    decision = policy.evaluate(state, NOW, password_ok=True)
    assert decision.outcome is LoginOutcome.SUCCESS
    assert decision.state == LockoutState(failed_attempts=0, lock_until=None, last_login=NOW)


def test_disabled_account_rejected_without_counting(policy):
    state = LockoutState(failed_attempts=2)
    decision = policy.evaluate(state, NOW, password_ok=True, is_active=False)
    assert decision.outcome is LoginOutcome.DISABLED
    assert decision.state == state
    assert not decision.changed


def test_lock_is_checked_before_disabled(policy):
    state = LockoutState(failed_attempts=5, lock_until=NOW + timedelta(minutes=5))
    decision = policy.evaluate(state, NOW, password_ok=False, is_active=False)
    assert decision.outcome is LoginOutcome.LOCKED


def test_from_config_reads_limits():
    policy = LockoutPolicy.from_config({'LOGIN_MAX_ATTEMPTS': 3, 'LOGIN_LOCK_MINUTES': 30})
    decision = policy.evaluate(LockoutState(failed_attempts=2), NOW, password_ok=False)
    assert decision.state.lock_until == NOW + timedelta(minutes=30)


def test_max_attempts_must_be_positive():
    with pytest.raises(ValueError):
        LockoutPolicy(max_attempts=0)
