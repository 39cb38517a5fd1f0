"""
LLM Error Classification (v1.0.0)
Map provider SDK exceptions onto the pipeline's retryable / terminal errors.
"""
import logging

import openai
from google.api_core import exceptions as google_exceptions

from outfit_ai.core.errors import OutfitAIError, RetryableServiceError, ServiceError

logger = logging.getLogger(__name__)

RETRYABLE_EXCEPTIONS = (
    google_exceptions.ResourceExhausted,
    google_exceptions.ServiceUnavailable,
    google_exceptions.TooManyRequests,
    google_exceptions.DeadlineExceeded,
    openai.RateLimitError,
    openai.InternalServerError,
    openai.APITimeoutError,
)

# Far-end overload signals that arrive as plain messages
RETRYABLE_MARKERS = ("overloaded", "429", "503", "rate limit", "quota", "unavailable", "try again")


def classify_error(error: BaseException) -> OutfitAIError:
    """
    Convert any provider failure into a pipeline error.

    Returns:
        RetryableServiceError for throttling/overload, ServiceError otherwise
    """
    if isinstance(error, OutfitAIError):
        return error

    if isinstance(error, RETRYABLE_EXCEPTIONS):
        return RetryableServiceError(f"{type(error).__name__}: {error}")

    message = str(error).lower()
    if any(marker in message for marker in RETRYABLE_MARKERS):
        return RetryableServiceError(f"{type(error).__name__}: {error}")

    return ServiceError(f"{type(error).__name__}: {error}")
