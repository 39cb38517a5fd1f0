"""
Bounded Retry Policy (v1.0.0)
Reusable attempt loop with backoff, a retryable-error predicate and
cooperative cancellation.

The loop never raises on behalf of the operation: it returns a RetryOutcome
describing what happened so callers can decide how to degrade.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

from outfit_ai.core.errors import ParseError, RetryableServiceError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def linear_backoff(base_seconds: float = 2.0) -> Callable[[int], float]:
    """Delay grows by ``base_seconds`` per attempt: 2s, 4s, 6s..."""
    def backoff(attempt: int) -> float:
        return base_seconds * attempt
    return backoff


def exponential_backoff(base_seconds: float = 2.0, cap_seconds: float = 30.0) -> Callable[[int], float]:
    """Delay doubles per attempt: 2s, 4s, 8s... capped."""
    def backoff(attempt: int) -> float:
        return min(cap_seconds, base_seconds * (2 ** (attempt - 1)))
    return backoff


BACKOFF_STRATEGIES = {
    "linear": linear_backoff,
    "exponential": exponential_backoff,
}


def backoff_for(strategy: str, base_seconds: float = 2.0) -> Callable[[int], float]:
    """
    Build the backoff function named by ``strategy``.

    Raises:
        ValueError: Unknown strategy name
    """
    try:
        factory = BACKOFF_STRATEGIES[strategy]
    except KeyError:
        raise ValueError(
            f"Unknown backoff strategy '{strategy}'. Valid options: {', '.join(BACKOFF_STRATEGIES)}"
        ) from None
    return factory(base_seconds)


def is_retryable_failure(error: BaseException) -> bool:
    """Far-end throttling and unparsable output are worth another attempt."""
    return isinstance(error, (RetryableServiceError, ParseError))


@dataclass
class RetryOutcome(Generic[T]):
    """Typed result of a retry loop."""
    value: Optional[T] = None
    error: Optional[BaseException] = None
    attempts: int = 0
    succeeded: bool = False
    cancelled: bool = False

    @property
    def failure_reason(self) -> str:
        if self.cancelled:
            return "cancelled"
        if self.error is None:
            return ""
        return f"{type(self.error).__name__}: {self.error}"


class RetryPolicy:
    """
    Run an async operation up to ``max_attempts`` times.

    Usage:
        policy = RetryPolicy(max_attempts=3, backoff=linear_backoff(2.0))
        outcome = await policy.execute(lambda attempt: call(attempt))
    """

    def __init__(
        self,
        max_attempts: int = 3,
        backoff: Optional[Callable[[int], float]] = None,
        retry_on: Callable[[BaseException], bool] = is_retryable_failure,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.backoff = backoff or linear_backoff(2.0)
        self.retry_on = retry_on
        self.sleep = sleep

    async def _pause(self, delay: float, cancel_event: Optional[asyncio.Event]) -> bool:
        """Sleep for ``delay`` seconds; True if cancelled meanwhile."""
        if cancel_event is None:
            await self.sleep(delay)
            return False
        sleeper = asyncio.ensure_future(self.sleep(delay))
        waiter = asyncio.ensure_future(cancel_event.wait())
        _, pending = await asyncio.wait({sleeper, waiter}, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        return cancel_event.is_set()

    async def execute(
        self,
        operation: Callable[[int], Awaitable[T]],
        cancel_event: Optional[asyncio.Event] = None
    ) -> RetryOutcome[T]:
        """
        Run ``operation(attempt)`` for attempt = 1..max_attempts.

        Args:
            operation: Coroutine factory receiving the 1-based attempt number
            cancel_event: Optional event; once set, no further attempt starts

        Returns:
            RetryOutcome with the value on success, else the last error
        """
        outcome: RetryOutcome[T] = RetryOutcome()

        for attempt in range(1, self.max_attempts + 1):
            if cancel_event is not None and cancel_event.is_set():
                logger.info(f"Retry loop cancelled before attempt {attempt}")
                outcome.cancelled = True
                return outcome

            outcome.attempts = attempt
            try:
                outcome.value = await operation(attempt)
                outcome.succeeded = True
                outcome.error = None
                return outcome
            except Exception as e:
                outcome.error = e
                if not self.retry_on(e):
                    logger.warning(f"Attempt {attempt} failed with non-retryable error: {e}")
                    return outcome

                if attempt == self.max_attempts:
                    logger.warning(f"Attempt {attempt} failed, no attempts left: {e}")
                    return outcome

                delay = self.backoff(attempt)
                logger.info(f"Attempt {attempt} failed ({e}), retrying in {delay:.1f}s")
                if await self._pause(delay, cancel_event):
                    logger.info("Retry loop cancelled during backoff")
                    outcome.cancelled = True
                    return outcome

        return outcome
