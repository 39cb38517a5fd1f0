"""
Request Logger (v2.0.0)
Structured logging for recommendation request tracking.
"""
import os
import json
import logging
from pathlib import Path
from datetime import datetime, timezone
from typing import Optional

from outfit_ai.config.settings import get_settings

REQUEST_LOG_FILE_NAME = "requests.log"

# Configure request logger
request_logger = logging.getLogger("outfit_ai.requests")
request_logger.setLevel(logging.INFO)

# Prevent propagation to root logger
request_logger.propagate = False


def _logs_dir() -> Path:
    return Path(os.getenv("OUTFIT_AI_LOG_DIR", "logs"))


def _ensure_handler():
    """Attach the file handler on first use."""
    if request_logger.handlers:
        return
    logs_dir = _logs_dir()
    logs_dir.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(logs_dir / REQUEST_LOG_FILE_NAME, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter("%(message)s"))
    request_logger.addHandler(file_handler)


def log_request(
    request_id: str,
    source: str,
    model: Optional[str],
    attempts: int,
    latency_ms: int,
    status: str,
    reason: Optional[str] = None
):
    """
    Log a structured request entry.

    Args:
        request_id: Unique request identifier
        source: "ai", "fallback" or "rate_limited"
        model: Model that produced the answer (None for fallback)
        attempts: Model attempts made
        latency_ms: Request latency in milliseconds
        status: success or fail
        reason: Fallback or failure reason
    """
    _ensure_handler()
    entry = {
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "request_id": request_id,
        "source": source,
        "model": model,
        "attempts": attempts,
        "latency_ms": latency_ms,
        "status": status
    }

    if reason:
        entry["reason"] = reason

    request_logger.info(json.dumps(entry))


def is_logging_enabled() -> bool:
    """Check if request logging is enabled (OUTFIT_AI_LOGGING_ENABLED)."""
    return get_settings().logging_enabled
