import threading
from datetime import timedelta

import pytest

from qr_attendance.core.exceptions import PersistenceError
from qr_attendance.tokens.issuer import TokenIssuer
from qr_attendance.tokens.rotator import TokenRotator


class FlakyTokens:
    """Fails the first ``failures`` creates."""

    def __init__(self, inner, failures: int):
        self.inner = inner
        self.failures = failures

    def get(self, token_id):
        return self.inner.get(token_id)

    def create(self, token):
        if self.failures > 0:
            self.failures -= 1
            raise PersistenceError("create", "attendance_tokens")
        return self.inner.create(token)

    def delete_issued_before(self, moment):
        return self.inner.delete_issued_before(moment)


def test_tick_stores_current_token(tokens_repo, settings_repo, clock):
    rotator = TokenRotator(TokenIssuer(tokens_repo, settings_repo, clock=clock), clock=clock)

    delay = rotator.tick()

    assert delay == 10
    assert rotator.current() is not None
    assert rotator.seconds_remaining() == 10
    clock.advance(seconds=4)
    assert rotator.seconds_remaining() == 6


def test_failed_tick_keeps_previous_token_and_reschedules(tokens_repo, settings_repo, clock):
    flaky = FlakyTokens(tokens_repo, failures=0)
    rotator = TokenRotator(TokenIssuer(flaky, settings_repo, clock=clock), clock=clock)
    rotator.tick()
    previous = rotator.current()

    flaky.failures = 1
    delay = rotator.tick()

    assert delay == 10
    assert rotator.current() == previous

    rotator.tick()
    assert rotator.current() != previous


def test_ensure_current_reissues_after_expiry(tokens_repo, settings_repo, clock):
    rotator = TokenRotator(TokenIssuer(tokens_repo, settings_repo, clock=clock), clock=clock)
    first = rotator.ensure_current()
    assert rotator.ensure_current() == first

    clock.advance(seconds=10)
    second = rotator.ensure_current()

    assert second.token_id != first.token_id


def test_ensure_current_propagates_issue_failures(tokens_repo, settings_repo, clock):
    rotator = TokenRotator(TokenIssuer(FlakyTokens(tokens_repo, failures=1), settings_repo, clock=clock), clock=clock)

    with pytest.raises(PersistenceError):
        rotator.ensure_current()


def test_context_manager_runs_and_stops_thread(tokens_repo, settings_repo, clock):
    issued = threading.Event()

    class SignallingTokens(FlakyTokens):
        def create(self, token):
            token_id = super().create(token)
            issued.set()
            return token_id

    issuer = TokenIssuer(SignallingTokens(tokens_repo, failures=0), settings_repo, clock=clock)
    with TokenRotator(issuer, clock=clock) as rotator:
        assert issued.wait(timeout=5)
        assert rotator.is_running

    assert not rotator.is_running
    assert rotator.current() is not None


def test_seconds_remaining_is_zero_before_first_rotation(tokens_repo, settings_repo, clock):
    rotator = TokenRotator(TokenIssuer(tokens_repo, settings_repo, clock=clock), clock=clock)

    assert rotator.seconds_remaining() == 0
    assert rotator.seconds_remaining(clock.now + timedelta(days=1)) == 0


class CorruptSettings:
    """Settings row that cannot be converted (bad stored TIME value)."""

    def get(self):
        raise ValueError("Invalid time string: 'x'")

    def save(self, settings):
        raise ValueError("read-only")


def test_corrupt_settings_do_not_stop_rotation(tokens_repo, clock):
    rotator = TokenRotator(TokenIssuer(tokens_repo, CorruptSettings(), clock=clock, default_rotation_seconds=7), clock=clock)

    delay = rotator.tick()

    assert delay == 7
    assert rotator.current() is not None
    assert rotator.current().rotation_seconds == 7


def test_failed_first_tick_reschedules_with_default_delay(tokens_repo, clock):
    issuer = TokenIssuer(FlakyTokens(tokens_repo, failures=1), CorruptSettings(), clock=clock, default_rotation_seconds=12)
    rotator = TokenRotator(issuer, clock=clock)

    assert rotator.tick() == 12
    assert rotator.current() is None
    assert rotator.tick() == 12
    assert rotator.current() is not None
