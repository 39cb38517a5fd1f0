"""
Tests for the bounded retry loop.
"""
import asyncio

import pytest

from outfit_ai.core.errors import ParseError, RetryableServiceError, ServiceError
from outfit_ai.core.retry import RetryPolicy, backoff_for, exponential_backoff, linear_backoff


def scripted(*results):
    """Operation that raises or returns the scripted results in turn."""
    calls = []

    async def operation(attempt):
        calls.append(attempt)
        result = results[len(calls) - 1]
        if isinstance(result, BaseException):
            raise result
        return result

    return operation, calls


class TestBackoff:
    def test_linear(self):
        backoff = linear_backoff(2.0)
        assert [backoff(n) for n in (1, 2, 3)] == [2.0, 4.0, 6.0]

    def test_exponential_is_capped(self):
        backoff = exponential_backoff(2.0, cap_seconds=10.0)
        assert [backoff(n) for n in (1, 2, 3, 4)] == [2.0, 4.0, 8.0, 10.0]

    @pytest.mark.parametrize("strategy,delays", [
        ("linear", [1.5, 3.0, 4.5]),
        ("exponential", [1.5, 3.0, 6.0]),
    ])
    def test_backoff_by_name(self, strategy, delays):
        backoff = backoff_for(strategy, 1.5)
        assert [backoff(n) for n in (1, 2, 3)] == delays

    def test_unknown_strategy(self):
        with pytest.raises(ValueError) as exc_info:
            backoff_for("fibonacci")
        assert "linear, exponential" in str(exc_info.value)


class TestRetryPolicy:
    """Attempt counting, retryable classification and backoff."""

    def test_first_attempt_success(self, sleep):
        operation, calls = scripted("ok")
        outcome = asyncio.run(RetryPolicy(sleep=sleep).execute(operation))

        assert outcome.succeeded
        assert outcome.value == "ok"
        assert outcome.attempts == 1
        assert calls == [1]
        assert sleep.delays == []

    def test_exhausts_three_attempts_with_linear_backoff(self, sleep):
        operation, calls = scripted(ParseError("bad"), ParseError("bad"), ParseError("bad"))
        outcome = asyncio.run(RetryPolicy(max_attempts=3, sleep=sleep).execute(operation))

        assert not outcome.succeeded
        assert outcome.attempts == 3
        assert calls == [1, 2, 3]
        assert sleep.delays == [2.0, 4.0]
        assert isinstance(outcome.error, ParseError)
        assert outcome.failure_reason.startswith("ParseError")

    def test_recovers_on_second_attempt(self, sleep):
        operation, calls = scripted(RetryableServiceError("503 overloaded"), "ok")
        outcome = asyncio.run(RetryPolicy(sleep=sleep).execute(operation))

        assert outcome.succeeded
        assert outcome.attempts == 2
        assert outcome.error is None
        assert sleep.delays == [2.0]

    def test_non_retryable_error_stops_immediately(self, sleep):
        operation, calls = scripted(ServiceError("invalid api key"), "never")
        outcome = asyncio.run(RetryPolicy(sleep=sleep).execute(operation))

        assert not outcome.succeeded
        assert outcome.attempts == 1
        assert calls == [1]
        assert sleep.delays == []

    def test_unexpected_exception_is_captured_not_raised(self, sleep):
        operation, _ = scripted(KeyError("boom"))
        outcome = asyncio.run(RetryPolicy(sleep=sleep).execute(operation))

        assert not outcome.succeeded
        assert isinstance(outcome.error, KeyError)

    def test_invalid_max_attempts(self):
        with pytest.raises(ValueError):
            RetryPolicy(max_attempts=0)


class TestCancellation:
    """A set cancel event stops further attempts."""

    def test_cancelled_before_first_attempt(self, sleep):
        operation, calls = scripted("ok")

        async def run():
            event = asyncio.Event()
            event.set()
            return await RetryPolicy(sleep=sleep).execute(operation, event)

        outcome = asyncio.run(run())

        assert outcome.cancelled
        assert outcome.attempts == 0
        assert calls == []
        assert outcome.failure_reason == "cancelled"

    def test_cancelled_during_backoff(self):
        operation, calls = scripted(ParseError("bad"), "ok")

        async def run():
            event = asyncio.Event()

            async def slow_sleep(delay):
                await asyncio.sleep(10)

            async def cancel_soon():
                await asyncio.sleep(0.01)
                event.set()

            policy = RetryPolicy(sleep=slow_sleep)
            canceller = asyncio.ensure_future(cancel_soon())
            outcome = await policy.execute(operation, event)
            await canceller
            return outcome

        outcome = asyncio.run(run())

        assert outcome.cancelled
        assert outcome.attempts == 1
        assert calls == [1]

    def test_event_not_set_runs_normally(self, sleep):
        operation, calls = scripted(ParseError("bad"), "ok")

        async def run():
            return await RetryPolicy(sleep=sleep).execute(operation, asyncio.Event())

        outcome = asyncio.run(run())

        assert outcome.succeeded
        assert sleep.delays == [2.0]
