"""
Tests for sliding window admission control.
"""
import threading

import pytest

from outfit_ai.core.errors import RateLimitExceeded
from outfit_ai.core.rate_limit import (
    GENERATION_LIMIT,
    RATING_LIMIT,
    RateLimitConfig,
    SlidingWindowRateLimiter,
    get_rate_limit_headers,
)


class TestSlidingWindow:
    """Admission decisions over a sliding window."""

    def test_window_scenario(self, clock):
        limiter = SlidingWindowRateLimiter(max_calls=2, window_ms=1000, clock=clock)

        clock.now = 0
        assert limiter.can_admit() is True
        clock.now = 10
        assert limiter.can_admit() is True
        clock.now = 20
        assert limiter.can_admit() is False
        assert limiter.time_until_next_slot() == pytest.approx(980)
        clock.now = 1010
        assert limiter.can_admit() is True

    def test_denied_check_does_not_consume_slot(self, clock):
        limiter = SlidingWindowRateLimiter(max_calls=1, window_ms=1000, clock=clock)
        assert limiter.can_admit() is True

        for t in (100, 200, 300):
            clock.now = t
            assert limiter.can_admit() is False

        # Only the t=0 call is in the window, so the slot frees at t=1000
        clock.now = 1000
        assert limiter.can_admit() is True

    def test_time_until_next_slot_zero_when_not_full(self, clock):
        limiter = SlidingWindowRateLimiter(max_calls=3, window_ms=1000, clock=clock)
        limiter.can_admit()
        assert limiter.time_until_next_slot() == 0.0

    def test_remaining(self, clock):
        limiter = SlidingWindowRateLimiter(max_calls=3, window_ms=1000, clock=clock)
        assert limiter.remaining() == 3
        limiter.can_admit()
        limiter.can_admit()
        assert limiter.remaining() == 1
        clock.now = 5000
        assert limiter.remaining() == 3

    def test_invalid_configuration(self):
        with pytest.raises(ValueError):
            SlidingWindowRateLimiter(max_calls=0)
        with pytest.raises(ValueError):
            SlidingWindowRateLimiter(window_ms=0)

    def test_concurrent_callers_never_overshoot(self):
        limiter = SlidingWindowRateLimiter(max_calls=15, window_ms=60_000)
        admitted = []
        lock = threading.Lock()

        def worker():
            for _ in range(10):
                if limiter.can_admit():
                    with lock:
                        admitted.append(1)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(admitted) == 15


class TestEnsureAdmitted:
    """RateLimitExceeded carries the wait in whole seconds."""

    def test_raises_with_rounded_up_wait(self, clock):
        limiter = SlidingWindowRateLimiter(max_calls=1, window_ms=60_000, clock=clock)
        limiter.ensure_admitted()

        clock.now = 500
        with pytest.raises(RateLimitExceeded) as exc_info:
            limiter.ensure_admitted()

        assert exc_info.value.wait_seconds == 60
        assert exc_info.value.status_code == 429
        assert "60 seconds" in exc_info.value.message

    def test_from_config(self, clock):
        limiter = SlidingWindowRateLimiter.from_config(RateLimitConfig(max_calls=4, window_ms=10), clock=clock)
        assert limiter.max_calls == 4
        assert limiter.window_ms == 10

    def test_default_quotas(self):
        assert (GENERATION_LIMIT.max_calls, GENERATION_LIMIT.window_ms) == (15, 60_000)
        assert (RATING_LIMIT.max_calls, RATING_LIMIT.window_ms) == (20, 60_000)


class TestRateLimitHeaders:
    """X-RateLimit-* response headers."""

    def test_headers(self, clock):
        limiter = SlidingWindowRateLimiter(max_calls=2, window_ms=10_000, clock=clock)
        limiter.can_admit()
        limiter.can_admit()
        clock.now = 4000

        headers = get_rate_limit_headers(limiter)

        assert headers["X-RateLimit-Limit"] == "2"
        assert headers["X-RateLimit-Remaining"] == "0"
        assert headers["X-RateLimit-Reset"] == "6"
