"""
LLM Initialization Adapter (v3.0.0)
Unified async client for Gemini and OpenAI with text + optional image input.

The client makes exactly one call per generate(). Retries, model escalation
and fallback belong to the caller; every provider failure is re-raised as
RetryableServiceError or ServiceError (see llm/errors.py).
"""
import base64
import logging
from typing import Dict, List, Optional, Sequence

from outfit_ai.config.llm_config import ActiveLLMConfig, get_llm_config
from outfit_ai.core.errors import ServiceError
from outfit_ai.core.models import ImagePayload
from outfit_ai.llm.errors import classify_error

logger = logging.getLogger(__name__)


class LLMClient:
    """
    Unified LLM client interface for any provider/model.

    Usage:
        client = LLMClient(get_llm_config())
        text = await client.generate(prompt, image=payload, model="gemini-1.5-flash")
    """

    def __init__(self, config: Optional[ActiveLLMConfig] = None):
        self.config = config or get_llm_config()
        self._openai_client = None
        self._gemini_models: Dict[str, object] = {}
        self._gemini_configured = False

    @property
    def provider(self) -> str:
        return self.config.provider.value

    def _require_key(self) -> str:
        if not self.config.api_key:
            env = "OPENAI_API_KEY" if self.config.is_openai() else "GEMINI_API_KEY"
            raise ServiceError(f"{env} not set")
        return self.config.api_key

    def _get_openai(self):
        """Initialize OpenAI client."""
        if self._openai_client is None:
            from openai import AsyncOpenAI

            self._openai_client = AsyncOpenAI(api_key=self._require_key())
            logger.info("OpenAI client initialized")
        return self._openai_client

    def _get_gemini(self, model: str):
        """Initialize Gemini model handle (one per model name)."""
        import google.generativeai as genai

        if not self._gemini_configured:
            genai.configure(api_key=self._require_key())
            self._gemini_configured = True
        if model not in self._gemini_models:
            self._gemini_models[model] = genai.GenerativeModel(model)
            logger.info(f"Gemini model initialized: {model}")
        return self._gemini_models[model]

    async def generate(
        self,
        prompt: str,
        image: Optional[ImagePayload] = None,
        model: Optional[str] = None,
        extra_images: Sequence[ImagePayload] = ()
    ) -> str:
        """
        Run one generation call.

        Args:
            prompt: Prompt text
            image: Optional image sent alongside the prompt
            model: Model name; defaults to the first configured tier
            extra_images: Further images sent after ``image`` (e.g. a venue photo)

        Returns:
            Raw response text

        Raises:
            RetryableServiceError: Provider signaled overload/throttling
            ServiceError: Any other provider failure
        """
        model = model or self.config.model
        images = [img for img in [image, *extra_images] if img is not None]
        try:
            if self.config.is_openai():
                return await self._generate_openai(prompt, images, model)
            return await self._generate_gemini(prompt, images, model)
        except Exception as e:
            error = classify_error(e)
            logger.warning(f"{self.provider} call failed [{model}]: {error.message}")
            raise error from e

    async def _generate_gemini(self, prompt: str, images: List[ImagePayload], model: str) -> str:
        """Generate using Gemini."""
        import google.generativeai as genai

        handle = self._get_gemini(model)
        content = [prompt] + [{"mime_type": img.mime_type, "data": img.data} for img in images]

        response = await handle.generate_content_async(
            content,
            generation_config=genai.types.GenerationConfig(
                temperature=self.config.temperature,
                max_output_tokens=self.config.max_tokens,
            ),
        )
        return response.text or ""

    async def _generate_openai(self, prompt: str, images: List[ImagePayload], model: str) -> str:
        """Generate using OpenAI."""
        client = self._get_openai()
        if images:
            content = [{"type": "text", "text": prompt}]
            for img in images:
                encoded = base64.b64encode(img.data).decode("ascii")
                content.append({"type": "image_url", "image_url": {"url": f"data:{img.mime_type};base64,{encoded}"}})
        else:
            content = prompt

        response = await client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": content}],
            temperature=self.config.temperature,
            max_tokens=self.config.max_tokens,
        )
        return response.choices[0].message.content or ""

    def get_status(self) -> dict:
        """Get current client status."""
        return {
            "provider": self.provider,
            "model_tiers": list(self.config.model_tiers),
            "configured": bool(self.config.api_key),
        }
