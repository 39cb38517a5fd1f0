"""
Pipeline Orchestrator (v3.0.0)
Admission -> bounded model attempts -> extraction -> fallback.

Once a request is admitted the caller always gets a complete, render-ready
RecommendationSet; RateLimitExceeded is the only error that escapes.
"""
import time
import uuid
import asyncio
import logging
from typing import List, Optional, Sequence

from outfit_ai.config.llm_config import ActiveLLMConfig
from outfit_ai.core.errors import OutfitAIError, RateLimitExceeded
from outfit_ai.core.fallback_engine import FallbackRuleEngine
from outfit_ai.core.links import LinkBuilder
from outfit_ai.core.models import (
    AIResult,
    ImagePayload,
    ImageValidation,
    ImageValidationBatch,
    RecommendationRequest,
    RecommendationSet,
    string_list,
)
from outfit_ai.core.rate_limit import SlidingWindowRateLimiter
from outfit_ai.core.retry import RetryPolicy
from outfit_ai.llm import extractor, prompts
from outfit_ai.observability import increment_attempt, is_logging_enabled, log_request, record_outcome, record_rate_limited

logger = logging.getLogger(__name__)

VALIDATION_FIELDS = ("VALID_CLOTHING", "CONFIDENCE", "REASONING", "ITEMS")

# Fallback reasons that are not failures
NON_ERROR_REASONS = ("cancelled", "llm disabled")


class RecommendationOrchestrator:
    """
    Turn a RecommendationRequest into a RecommendationSet.

    Usage:
        orchestrator = RecommendationOrchestrator(llm_client, limiter)
        result = await orchestrator.generate(request)
    """

    def __init__(
        self,
        llm_client,
        rate_limiter: SlidingWindowRateLimiter,
        retry_policy: Optional[RetryPolicy] = None,
        fallback_engine: Optional[FallbackRuleEngine] = None,
        link_builder: Optional[LinkBuilder] = None,
        llm_config: Optional[ActiveLLMConfig] = None,
        llm_enabled: bool = True
    ):
        self.llm_client = llm_client
        self.rate_limiter = rate_limiter
        self.retry_policy = retry_policy or RetryPolicy()
        self.link_builder = link_builder or LinkBuilder()
        self.fallback_engine = fallback_engine or FallbackRuleEngine(self.link_builder)
        self.llm_config = llm_config or llm_client.config
        self.llm_enabled = llm_enabled

    def _admit(self) -> None:
        try:
            self.rate_limiter.ensure_admitted()
        except RateLimitExceeded:
            record_rate_limited()
            raise

    def _attach_links(self, result: RecommendationSet, prompt: str) -> RecommendationSet:
        for recommendation in result.recommendations:
            recommendation.shopping_links = self.link_builder.build_links(recommendation.outfit, prompt)
        return result

    # ==================== RECOMMENDATIONS ====================

    async def generate(
        self,
        request: RecommendationRequest,
        cancel_event: Optional[asyncio.Event] = None
    ) -> RecommendationSet:
        """
        Produce recommendations for one request.

        Args:
            request: Prompt, profile, optional image and context
            cancel_event: Optional event; once set, no further attempt starts

        Returns:
            AIResult when the model answered with a valid payload,
            FallbackResult otherwise

        Raises:
            RateLimitExceeded: Local admission denied (nothing else escapes)
        """
        request_id = uuid.uuid4().hex[:12]
        start_time = time.time()

        if not self.llm_enabled:
            result = self.fallback_engine.generate(
                request.prompt, request.profile, request.context, reason="llm disabled"
            )
            self._finish(request_id, start_time, result)
            return result

        self._admit()

        model_prompt = prompts.recommendation_prompt(
            request.prompt, request.profile, request.context, has_image=request.image is not None
        )

        async def attempt_call(attempt: int) -> AIResult:
            model = self.llm_config.resolve_model(attempt)
            increment_attempt(model)
            logger.info(f"[{request_id}] Attempt {attempt} with {model}")
            raw = await self.llm_client.generate(model_prompt, image=request.image, model=model)
            fields = RecommendationSet.parse_payload(extractor.extract(raw))
            return AIResult(model=model, attempts=attempt, **fields)

        outcome = await self.retry_policy.execute(attempt_call, cancel_event)

        if outcome.succeeded:
            result = self._attach_links(outcome.value, request.prompt)
        else:
            logger.warning(f"[{request_id}] Falling back after {outcome.attempts} attempt(s): {outcome.failure_reason}")
            result = self.fallback_engine.generate(
                request.prompt,
                request.profile,
                request.context,
                reason=outcome.failure_reason,
                attempts=outcome.attempts,
            )

        self._finish(request_id, start_time, result)
        return result

    def _finish(self, request_id: str, start_time: float, result: RecommendationSet) -> None:
        reason = getattr(result, "reason", "")
        record_outcome(result.source, reason=reason, error=bool(reason) and reason not in NON_ERROR_REASONS)
        if is_logging_enabled():
            log_request(
                request_id=request_id,
                source=result.source,
                model=getattr(result, "model", None),
                attempts=getattr(result, "attempts", 0),
                latency_ms=int((time.time() - start_time) * 1000),
                status="success",
                reason=reason or None,
            )

    # ==================== IMAGE VALIDATION ====================

    async def validate_image(self, image: ImagePayload) -> ImageValidation:
        """
        Check whether an image shows usable clothing.

        Raises:
            RateLimitExceeded: Local admission denied
        """
        self._admit()
        model = self.llm_config.resolve_model(1)
        increment_attempt(model)

        try:
            raw = await self.llm_client.generate(prompts.IMAGE_VALIDATION_PROMPT, image=image, model=model)
        except OutfitAIError as e:
            logger.warning(f"Image validation failed for {image.name!r}: {e.message}")
            return ImageValidation(
                is_valid=False,
                reasoning="Validation failed due to processing error",
                name=image.name,
            )

        return parse_validation(raw, image.name)

    async def validate_images(self, images: Sequence[ImagePayload]) -> ImageValidationBatch:
        """Validate images concurrently; results keep input order."""
        async def validate_one(image: ImagePayload) -> ImageValidation:
            try:
                return await self.validate_image(image)
            except RateLimitExceeded as e:
                return ImageValidation(is_valid=False, reasoning=e.message, name=image.name)

        results = await asyncio.gather(*(validate_one(image) for image in images))
        return ImageValidationBatch(results=list(results))


def parse_validation(raw: str, name: str = "") -> ImageValidation:
    """Parse the VALID_CLOTHING/CONFIDENCE/REASONING/ITEMS line format."""
    fields = extractor.extract_fields(raw, VALIDATION_FIELDS)

    is_valid = fields.get("VALID_CLOTHING", "").strip().lower().startswith("yes")
    digits = "".join(ch for ch in fields.get("CONFIDENCE", "") if ch.isdigit())
    confidence = min(100, int(digits)) if digits else 0
    reasoning = fields.get("REASONING") or "Unable to determine image content"

    items: List[str] = []
    raw_items = fields.get("ITEMS", "")
    if raw_items and raw_items.strip().lower() != "none":
        items = string_list(raw_items)

    return ImageValidation(
        is_valid=is_valid,
        confidence=confidence,
        reasoning=reasoning,
        suggested_items=items,
        name=name,
    )
