"""Tests for the database-backed rate limiter."""

import pytest

from focuslist.engine.rate_limiter import RateLimiter, TOKEN_BUCKET, FIXED_WINDOW
from focuslist.models.constants import RATE_LIMITS, MINUTE_MS, HOUR_MS


class FakeClock:
    def __init__(self, start=1_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


def test_default_limits_cover_every_mutation():
    for name in (
        "createTodo", "updateTodo", "deleteTodo", "sendMessage", "createThread",
        "updateThread", "deleteThread", "updatePreferences", "sendEmail",
    ):
        assert name in RATE_LIMITS
    assert RATE_LIMITS["sendEmail"] == {"kind": FIXED_WINDOW, "rate": 10, "period": HOUR_MS}


class TestTokenBucket:
    def test_burst_up_to_capacity_then_denied(self, db_session, clock):
        limiter = RateLimiter(clock=clock)
        # createTodo: capacity 5, 20 per minute
        for _ in range(5):
            assert limiter.limit(db_session, "createTodo", key="u1").ok is True

        status = limiter.limit(db_session, "createTodo", key="u1")
        assert status.ok is False
        # One token refills every 3 seconds.
        assert status.retry_after_ms == pytest.approx(3000)

    def test_refills_over_time(self, db_session, clock):
        limiter = RateLimiter(clock=clock)
        for _ in range(5):
            limiter.limit(db_session, "createTodo", key="u1")
        assert limiter.limit(db_session, "createTodo", key="u1").ok is False

        clock.advance(3000)
        assert limiter.limit(db_session, "createTodo", key="u1").ok is True
        assert limiter.limit(db_session, "createTodo", key="u1").ok is False

    def test_denial_does_not_consume(self, db_session, clock):
        limiter = RateLimiter(clock=clock)
        for _ in range(5):
            limiter.limit(db_session, "createTodo", key="u1")
        for _ in range(3):
            limiter.limit(db_session, "createTodo", key="u1")

        clock.advance(3000)
        assert limiter.limit(db_session, "createTodo", key="u1").ok is True

    def test_keys_are_independent(self, db_session, clock):
        limiter = RateLimiter(clock=clock)
        for _ in range(2):
            limiter.limit(db_session, "sendMessage", key="u1")
        assert limiter.limit(db_session, "sendMessage", key="u1").ok is False
        assert limiter.limit(db_session, "sendMessage", key="u2").ok is True
        assert limiter.limit(db_session, "createThread", key="u1").ok is True


class TestFixedWindow:
    def test_window_allows_rate_then_resets(self, db_session, clock):
        limiter = RateLimiter(clock=clock)
        for _ in range(10):
            assert limiter.limit(db_session, "sendEmail", key="u1").ok is True

        clock.advance(MINUTE_MS)
        status = limiter.limit(db_session, "sendEmail", key="u1")
        assert status.ok is False
        assert status.retry_after_ms == pytest.approx(HOUR_MS - MINUTE_MS)

        clock.advance(HOUR_MS - MINUTE_MS)
        assert limiter.limit(db_session, "sendEmail", key="u1").ok is True


def test_reset_forgets_state(db_session, clock):
    limiter = RateLimiter(clock=clock)
    for _ in range(2):
        limiter.limit(db_session, "sendMessage", key="u1")
    limiter.reset(db_session, "sendMessage", key="u1")
    assert limiter.limit(db_session, "sendMessage", key="u1").ok is True


def test_unknown_name_raises(db_session, clock):
    with pytest.raises(ValueError):
        RateLimiter(clock=clock).limit(db_session, "launchRocket", key="u1")


def test_unknown_kind_rejected():
    with pytest.raises(ValueError):
        RateLimiter(limits={"x": {"kind": "leaky", "rate": 1, "period": 1}})


def test_custom_limits(db_session, clock):
    limiter = RateLimiter(
        limits={"ping": {"kind": TOKEN_BUCKET, "rate": 1, "period": 1000, "capacity": 1}},
        clock=clock,
    )
    assert limiter.limit(db_session, "ping", key="k").ok is True
    assert limiter.limit(db_session, "ping", key="k").retry_after_ms == pytest.approx(1000)
