# Observability module
from outfit_ai.observability.logger import log_request, is_logging_enabled
from outfit_ai.observability.metrics import (
    increment_attempt,
    record_outcome,
    record_rate_limited,
    get_metrics,
    reset_metrics,
)
