# Core module
from outfit_ai.core.errors import (
    OutfitAIError,
    RateLimitExceeded,
    RetryableServiceError,
    ServiceError,
    ParseError,
)
from outfit_ai.core.rate_limit import (
    RateLimitConfig,
    SlidingWindowRateLimiter,
    GENERATION_LIMIT,
    RATING_LIMIT,
    get_rate_limit_headers,
)
from outfit_ai.core.retry import RetryPolicy, RetryOutcome, backoff_for, linear_backoff, exponential_backoff
from outfit_ai.core.validation import ValidationError, validate_image_upload, validate_profile_fields
