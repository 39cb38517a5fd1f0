"""
LLM Configuration Layer (v3.0.0)
Provider and model-tier config for the recommendation and rating calls.

Environment Variables:
  - OUTFIT_AI_LLM_PROVIDER: "gemini" | "openai" (default: gemini)
  - OUTFIT_AI_LLM_MODEL: Override the first-tier model (optional)
  - OUTFIT_AI_LLM_FALLBACK_MODELS: Comma-separated lower tiers (optional)
  - OUTFIT_AI_LLM_TEMPERATURE: Sampling temperature (default: 0.7)
  - OUTFIT_AI_LLM_MAX_TOKENS: Response token cap (default: 2500)

Attempt N uses tier N; later attempts reuse the last tier. Escalation is a
downgrade path that trades capability for availability.
"""
import os
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


# ==================== ENUMS ====================

class LLMProvider(Enum):
    """Supported LLM providers."""
    GEMINI = "gemini"
    OPENAI = "openai"


# ==================== PROVIDER CONFIGS ====================

@dataclass
class GeminiConfig:
    """Gemini model configuration."""
    model_tiers: Tuple[str, ...] = ("gemini-1.5-flash", "gemini-pro-vision", "gemini-pro")
    temperature: float = 0.7
    max_tokens: int = 2500


@dataclass
class OpenAIConfig:
    """OpenAI model configuration."""
    model_tiers: Tuple[str, ...] = ("gpt-4o", "gpt-4o-mini")
    temperature: float = 0.7
    max_tokens: int = 2500


def _split_models(value: Optional[str]) -> Tuple[str, ...]:
    return tuple(part.strip() for part in (value or "").split(",") if part.strip())


# ==================== ACTIVE CONFIG ====================

@dataclass
class ActiveLLMConfig:
    """Active LLM configuration."""
    provider: LLMProvider = LLMProvider.GEMINI
    model_tiers: Tuple[str, ...] = field(default_factory=lambda: GeminiConfig().model_tiers)
    temperature: float = 0.7
    max_tokens: int = 2500
    api_key: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ActiveLLMConfig":
        """Resolve configuration from environment variables."""
        provider_str = os.getenv("OUTFIT_AI_LLM_PROVIDER", "gemini").lower()

        if provider_str == "openai":
            provider = LLMProvider.OPENAI
            defaults = OpenAIConfig()
            api_key = os.getenv("OPENAI_API_KEY")
        else:
            provider = LLMProvider.GEMINI
            defaults = GeminiConfig()
            api_key = os.getenv("GEMINI_API_KEY")

        primary = os.getenv("OUTFIT_AI_LLM_MODEL")
        fallbacks = _split_models(os.getenv("OUTFIT_AI_LLM_FALLBACK_MODELS"))
        tiers = list(defaults.model_tiers)
        if primary:
            tiers[0] = primary
        if fallbacks:
            tiers = [tiers[0]] + list(fallbacks)

        config = cls(
            provider=provider,
            model_tiers=tuple(tiers),
            temperature=float(os.getenv("OUTFIT_AI_LLM_TEMPERATURE", str(defaults.temperature))),
            max_tokens=int(os.getenv("OUTFIT_AI_LLM_MAX_TOKENS", str(defaults.max_tokens))),
            api_key=api_key,
        )

        logger.info(f"LLM Config: provider={provider.value}, tiers={', '.join(config.model_tiers)}")
        return config

    @property
    def model(self) -> str:
        return self.model_tiers[0]

    def resolve_model(self, attempt: int = 1) -> str:
        """Model for a 1-based attempt number."""
        index = min(max(attempt, 1), len(self.model_tiers)) - 1
        return self.model_tiers[index]

    def is_openai(self) -> bool:
        return self.provider == LLMProvider.OPENAI

    def is_gemini(self) -> bool:
        return self.provider == LLMProvider.GEMINI

    def to_dict(self) -> dict:
        return {
            "provider": self.provider.value,
            "model_tiers": list(self.model_tiers),
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
            "api_key_configured": bool(self.api_key),
        }


# ==================== SINGLETON INSTANCE ====================

_llm_config: Optional[ActiveLLMConfig] = None


def get_llm_config() -> ActiveLLMConfig:
    """Get active LLM configuration."""
    global _llm_config
    if _llm_config is None:
        _llm_config = ActiveLLMConfig.from_env()
    return _llm_config


def reset_llm_config():
    """Reset config (for testing)."""
    global _llm_config
    _llm_config = None
