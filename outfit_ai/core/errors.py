"""
Error Types (v1.0.0)
Failure kinds of the recommendation pipeline.

Only RateLimitExceeded ever reaches a caller of the orchestrator; the
others are absorbed by the retry loop and converted into fallback results.
"""
import math


class OutfitAIError(Exception):
    """Base error with an HTTP-friendly status code."""
    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class RateLimitExceeded(OutfitAIError):
    """Local admission control denied the call."""
    def __init__(self, wait_seconds: int):
        self.wait_seconds = max(0, int(wait_seconds))
        super().__init__(
            f"Rate limit exceeded. Please wait {self.wait_seconds} seconds before trying again.",
            status_code=429
        )

    @classmethod
    def from_wait_ms(cls, wait_ms: float) -> "RateLimitExceeded":
        return cls(math.ceil(wait_ms / 1000))


class RetryableServiceError(OutfitAIError):
    """The external AI service signaled overload or throttling."""
    def __init__(self, message: str):
        super().__init__(message, status_code=503)


class ServiceError(OutfitAIError):
    """Non-retryable failure of the external AI service."""
    def __init__(self, message: str):
        super().__init__(message, status_code=502)


class ParseError(OutfitAIError):
    """Structured data could not be extracted from a model response."""
    def __init__(self, message: str):
        super().__init__(message, status_code=502)
