"""
Style Check Service (v1.0.0)
Rate an outfit photo on a 0-100 scale, optionally against a venue photo.

Runs on its own quota (20 calls / 60 s by default). Unusable model output
degrades to a neutral, profile-aware rating instead of an error.
"""
import asyncio
import logging
from typing import List, Optional

from outfit_ai.config.llm_config import ActiveLLMConfig
from outfit_ai.core import style_rules
from outfit_ai.core.errors import RateLimitExceeded
from outfit_ai.core.links import PURCHASE_PLATFORMS, sanitize_prompt
from outfit_ai.core.models import ImagePayload, ShoppingLink, StyleCheckResult, UserProfile
from outfit_ai.core.rate_limit import SlidingWindowRateLimiter
from outfit_ai.core.retry import RetryPolicy
from outfit_ai.llm import extractor, prompts
from outfit_ai.observability import increment_attempt, record_rate_limited

logger = logging.getLogger(__name__)

MAX_LINKED_ITEMS = 3

NEUTRAL_CATEGORY_RATINGS = {
    "color_harmony": 70.0,
    "fit_and_silhouette": 80.0,
    "occasion_appropriate": 75.0,
    "accessories_balance": 70.0,
    "style_coherence": 75.0,
}


def item_links(items: List[str]) -> List[ShoppingLink]:
    """Marketplace links for the first few missing items, one query per item."""
    links = []
    for item in items[:MAX_LINKED_ITEMS]:
        query = sanitize_prompt(item).lower()
        if query:
            links.extend(platform.link(query) for platform in PURCHASE_PLATFORMS)
    return links


def neutral_result(profile: Optional[UserProfile] = None) -> StyleCheckResult:
    """Deterministic rating used when the model cannot answer."""
    profile = profile or UserProfile()

    recommendations = [
        "Add a structured layer for polish",
        "Include a statement watch or necklace",
        "Choose shoes that complement the outfit color",
    ]
    body_tip = style_rules.BODY_TYPE_TIPS.get(profile.body_type_key)
    if body_tip:
        recommendations.insert(0, body_tip)

    color_suggestions = ["Deep blues for sophistication", "Classic neutrals for versatility"]
    if profile.skin_tone is not None:
        color_suggestions.insert(0, style_rules.SKIN_TONE_TIPS[profile.skin_tone])

    missing_items = ["Statement jewelry", "Structured outerwear", "Complementary footwear"]

    return StyleCheckResult(
        overall_rating=75.0,
        category_ratings=dict(NEUTRAL_CATEGORY_RATINGS),
        strengths=[
            "Good basic outfit foundation",
            "Well-coordinated overall look",
        ],
        improvements=[
            "Consider adding statement accessories",
            "Experiment with different textures",
            "Try layering for more visual interest",
        ],
        recommendations=recommendations,
        missing_items=missing_items,
        color_suggestions=color_suggestions,
        venue_feedback="Your outfit is versatile and can work for various occasions with minor adjustments.",
        shopping_links=item_links(missing_items),
        source="fallback",
    )


class StyleCheckService:
    """
    Outfit rating call.

    Usage:
        service = StyleCheckService(llm_client, rating_limiter)
        result = await service.rate_outfit(image, profile)
    """

    def __init__(
        self,
        llm_client,
        rate_limiter: SlidingWindowRateLimiter,
        retry_policy: Optional[RetryPolicy] = None,
        llm_config: Optional[ActiveLLMConfig] = None
    ):
        self.llm_client = llm_client
        self.rate_limiter = rate_limiter
        self.retry_policy = retry_policy or RetryPolicy()
        self.llm_config = llm_config or llm_client.config

    async def rate_outfit(
        self,
        image: ImagePayload,
        profile: Optional[UserProfile] = None,
        venue_image: Optional[ImagePayload] = None,
        cancel_event: Optional[asyncio.Event] = None
    ) -> StyleCheckResult:
        """
        Rate an outfit photo.

        Args:
            image: Outfit photo
            profile: Optional user profile
            venue_image: Optional venue photo for occasion matching
            cancel_event: Optional event; once set, no further attempt starts

        Returns:
            StyleCheckResult from the model, or the neutral result

        Raises:
            RateLimitExceeded: Local admission denied
        """
        try:
            self.rate_limiter.ensure_admitted()
        except RateLimitExceeded:
            record_rate_limited()
            raise

        prompt = prompts.style_check_prompt(profile, has_venue=venue_image is not None)
        extra_images = [venue_image] if venue_image is not None else []

        async def attempt_call(attempt: int) -> StyleCheckResult:
            model = self.llm_config.resolve_model(attempt)
            increment_attempt(model)
            raw = await self.llm_client.generate(prompt, image=image, model=model, extra_images=extra_images)
            return StyleCheckResult.from_dict(extractor.extract_object(raw, required_keys=("overallRating",)))

        outcome = await self.retry_policy.execute(attempt_call, cancel_event)
        if not outcome.succeeded:
            logger.warning(f"Style check falling back after {outcome.attempts} attempt(s): {outcome.failure_reason}")
            return neutral_result(profile)

        result = outcome.value
        result.shopping_links = item_links(result.missing_items)
        return result
