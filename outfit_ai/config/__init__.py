# Config module (v3.0.0)
from outfit_ai.config.settings import get_settings, reload_settings, reset_settings, Settings
from outfit_ai.config.llm_config import (
    LLMProvider,
    GeminiConfig,
    OpenAIConfig,
    ActiveLLMConfig,
    get_llm_config,
    reset_llm_config,
)
