"""
Rate Limiting Module (v3.0.0)
Sliding window admission control for outbound AI calls.

Each quota-bearing call site owns one limiter instance, built from a
RateLimitConfig and injected where it is used.
"""
import time
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from outfit_ai.core.errors import RateLimitExceeded

logger = logging.getLogger(__name__)


@dataclass
class RateLimitConfig:
    """Rate limit configuration for one call site."""
    max_calls: int = 15
    window_ms: int = 60_000


# Default quotas per call site
GENERATION_LIMIT = RateLimitConfig(max_calls=15, window_ms=60_000)
RATING_LIMIT = RateLimitConfig(max_calls=20, window_ms=60_000)


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class SlidingWindowRateLimiter:
    """
    Sliding window rate limiter over accepted call timestamps.

    A timestamp stays in the window while ``now - ts < window_ms``. Checks
    and appends are serialized so concurrent callers cannot overshoot
    ``max_calls``.
    """

    def __init__(
        self,
        max_calls: int = GENERATION_LIMIT.max_calls,
        window_ms: int = GENERATION_LIMIT.window_ms,
        clock: Optional[Callable[[], float]] = None,
        name: str = "default"
    ):
        if max_calls < 1:
            raise ValueError("max_calls must be at least 1")
        if window_ms <= 0:
            raise ValueError("window_ms must be positive")
        self.max_calls = max_calls
        self.window_ms = window_ms
        self.name = name
        self._clock = clock or _monotonic_ms
        self._calls: List[float] = []
        self._lock = threading.Lock()

    @classmethod
    def from_config(
        cls,
        config: RateLimitConfig,
        clock: Optional[Callable[[], float]] = None,
        name: str = "default"
    ) -> "SlidingWindowRateLimiter":
        return cls(config.max_calls, config.window_ms, clock=clock, name=name)

    def _cleanup_old_calls(self, now: float) -> None:
        """Remove calls older than window."""
        self._calls = [ts for ts in self._calls if now - ts < self.window_ms]

    def can_admit(self) -> bool:
        """
        Admit a call if the window has room, recording it on success.

        Returns:
            True if admitted; a denied check leaves the window untouched
        """
        with self._lock:
            now = self._clock()
            self._cleanup_old_calls(now)
            if len(self._calls) >= self.max_calls:
                logger.warning(f"Rate limit reached [{self.name}]: {len(self._calls)}/{self.max_calls}")
                return False
            self._calls.append(now)
            return True

    def time_until_next_slot(self) -> float:
        """Milliseconds until the oldest call leaves the window (0 if not full)."""
        with self._lock:
            now = self._clock()
            self._cleanup_old_calls(now)
            if len(self._calls) < self.max_calls:
                return 0.0
            oldest = min(self._calls)
            return max(0.0, self.window_ms - (now - oldest))

    def remaining(self) -> int:
        """Get remaining calls in current window."""
        with self._lock:
            self._cleanup_old_calls(self._clock())
            return max(0, self.max_calls - len(self._calls))

    def ensure_admitted(self) -> None:
        """
        Admit a call or fail.

        Raises:
            RateLimitExceeded: With the wait rounded up to whole seconds
        """
        if not self.can_admit():
            raise RateLimitExceeded.from_wait_ms(self.time_until_next_slot())


def get_rate_limit_headers(limiter: SlidingWindowRateLimiter) -> Dict[str, str]:
    """
    Generate rate limit headers for response.

    Returns:
        Dict with X-RateLimit-* headers
    """
    return {
        "X-RateLimit-Limit": str(limiter.max_calls),
        "X-RateLimit-Remaining": str(limiter.remaining()),
        "X-RateLimit-Reset": str(int(limiter.time_until_next_slot() / 1000)),
    }
