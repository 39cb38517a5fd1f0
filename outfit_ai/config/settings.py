"""
Settings Module (v2.0.0)
Centralized configuration from environment variables.
"""
import os
import logging
from dataclasses import dataclass
from typing import Optional

from outfit_ai.core.rate_limit import GENERATION_LIMIT, RATING_LIMIT, RateLimitConfig

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: str = "true") -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class Settings:
    """Application settings from environment variables."""

    # API Keys
    openai_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None

    # LLM Configuration
    llm_enabled: bool = True

    # Quotas per call site
    generation_max_calls: int = GENERATION_LIMIT.max_calls
    generation_window_ms: int = GENERATION_LIMIT.window_ms
    rating_max_calls: int = RATING_LIMIT.max_calls
    rating_window_ms: int = RATING_LIMIT.window_ms

    # Retry
    max_attempts: int = 3
    backoff_base_ms: int = 2000
    backoff_strategy: str = "linear"

    # Catalog
    catalog_path: Optional[str] = None

    # Observability
    logging_enabled: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            # API Keys
            openai_api_key=os.getenv("OPENAI_API_KEY"),
            gemini_api_key=os.getenv("GEMINI_API_KEY"),

            # LLM Configuration
            llm_enabled=_env_bool("OUTFIT_AI_LLM_ENABLED"),

            # Quotas
            generation_max_calls=int(os.getenv("OUTFIT_AI_GENERATION_MAX_CALLS", str(GENERATION_LIMIT.max_calls))),
            generation_window_ms=int(os.getenv("OUTFIT_AI_GENERATION_WINDOW_MS", str(GENERATION_LIMIT.window_ms))),
            rating_max_calls=int(os.getenv("OUTFIT_AI_RATING_MAX_CALLS", str(RATING_LIMIT.max_calls))),
            rating_window_ms=int(os.getenv("OUTFIT_AI_RATING_WINDOW_MS", str(RATING_LIMIT.window_ms))),

            # Retry
            max_attempts=int(os.getenv("OUTFIT_AI_MAX_ATTEMPTS", "3")),
            backoff_base_ms=int(os.getenv("OUTFIT_AI_BACKOFF_BASE_MS", "2000")),
            backoff_strategy=os.getenv("OUTFIT_AI_BACKOFF_STRATEGY", "linear").strip().lower(),

            # Catalog
            catalog_path=os.getenv("OUTFIT_AI_CATALOG_PATH") or None,

            # Observability
            logging_enabled=_env_bool("OUTFIT_AI_LOGGING_ENABLED"),
        )

    def has_openai(self) -> bool:
        """Check if OpenAI API key is configured."""
        return bool(self.openai_api_key)

    def has_gemini(self) -> bool:
        """Check if Gemini API key is configured."""
        return bool(self.gemini_api_key)

    @property
    def generation_limit(self) -> RateLimitConfig:
        return RateLimitConfig(self.generation_max_calls, self.generation_window_ms)

    @property
    def rating_limit(self) -> RateLimitConfig:
        return RateLimitConfig(self.rating_max_calls, self.rating_window_ms)

    def to_dict(self) -> dict:
        """Export settings as dict (without sensitive keys)."""
        return {
            "llm_enabled": self.llm_enabled,
            "generation_limit": f"{self.generation_max_calls}/{self.generation_window_ms}ms",
            "rating_limit": f"{self.rating_max_calls}/{self.rating_window_ms}ms",
            "max_attempts": self.max_attempts,
            "backoff_base_ms": self.backoff_base_ms,
            "backoff_strategy": self.backoff_strategy,
            "catalog_path": self.catalog_path,
            "logging_enabled": self.logging_enabled,
            "openai_configured": self.has_openai(),
            "gemini_configured": self.has_gemini(),
        }


def get_settings() -> Settings:
    """Get application settings (cached singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
        logger.info(f"Settings loaded: {_settings.to_dict()}")
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from environment."""
    global _settings
    _settings = Settings.from_env()
    logger.info(f"Settings reloaded: {_settings.to_dict()}")
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next access re-reads the environment."""
    global _settings
    _settings = None


# Singleton instance
_settings: Optional[Settings] = None
