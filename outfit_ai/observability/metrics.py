"""
Metrics Module (v2.0.0)
Track recommendation requests, model attempts and fallback usage.
"""
import threading
from typing import Dict, Any


def _empty_metrics() -> Dict[str, Any]:
    return {
        "total_requests": 0,
        "ai_attempts": 0,
        "ai_successes": 0,
        "fallbacks": 0,
        "rate_limited": 0,
        "requests_by_model": {},
        "fallback_reasons": {},
        "errors": 0
    }


# Thread-safe metrics storage
_lock = threading.Lock()
_metrics = _empty_metrics()


def increment_attempt(model: str):
    """Record one admitted model attempt."""
    with _lock:
        _metrics["ai_attempts"] += 1
        if model:
            _metrics["requests_by_model"][model] = _metrics["requests_by_model"].get(model, 0) + 1


def record_outcome(source: str, reason: str = "", error: bool = False):
    """
    Record a finished request.

    Args:
        source: "ai" or "fallback"
        reason: Fallback reason (error class name, "cancelled" or "llm disabled")
        error: Whether the model path ended in an error
    """
    with _lock:
        _metrics["total_requests"] += 1
        if source == "ai":
            _metrics["ai_successes"] += 1
        else:
            _metrics["fallbacks"] += 1
            key = reason.split(":", 1)[0] if reason else "unknown"
            _metrics["fallback_reasons"][key] = _metrics["fallback_reasons"].get(key, 0) + 1
        if error:
            _metrics["errors"] += 1


def record_rate_limited():
    """Record a request denied by local admission control."""
    with _lock:
        _metrics["rate_limited"] += 1


def get_metrics() -> Dict[str, Any]:
    """Get current metrics snapshot."""
    with _lock:
        total = _metrics["total_requests"]
        return {
            "total_requests": total,
            "ai_attempts": _metrics["ai_attempts"],
            "ai_successes": _metrics["ai_successes"],
            "fallbacks": _metrics["fallbacks"],
            "fallback_ratio": round(_metrics["fallbacks"] / total, 3) if total > 0 else 0.0,
            "rate_limited": _metrics["rate_limited"],
            "requests_by_model": dict(_metrics["requests_by_model"]),
            "fallback_reasons": dict(_metrics["fallback_reasons"]),
            "errors": _metrics["errors"]
        }


def reset_metrics():
    """Reset all metrics (for testing)."""
    global _metrics
    with _lock:
        _metrics = _empty_metrics()
