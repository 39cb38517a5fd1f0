"""
Tests for the outfit rating service.
"""
import asyncio
import json

import pytest

from outfit_ai.core.errors import ParseError, RateLimitExceeded
from outfit_ai.core.models import ImagePayload, SkinTone, StyleCheckResult, UserProfile
from outfit_ai.core.rate_limit import RATING_LIMIT, SlidingWindowRateLimiter
from outfit_ai.core.retry import RetryPolicy
from outfit_ai.core.style_check import StyleCheckService, item_links, neutral_result
from outfit_ai.core import style_rules

RATING_RESPONSE = json.dumps({
    "overallRating": 82,
    "categoryRatings": {
        "colorHarmony": 85,
        "fitAndSilhouette": 80,
        "occasionAppropriate": 78,
        "accessoriesBalance": 70,
        "styleCoherence": 88,
    },
    "analysis": {
        "strengths": ["Good color balance"],
        "improvements": ["Add a belt"],
        "recommendations": ["Try loafers"],
        "missingItems": ["Brown leather belt", "Silver watch"],
        "colorSuggestions": ["Olive"],
    },
    "venueMatch": {"score": 75, "feedback": "Fits a casual cafe"},
})


@pytest.fixture
def service_factory(clock, sleep):
    def factory(llm, max_calls=RATING_LIMIT.max_calls):
        limiter = SlidingWindowRateLimiter(max_calls=max_calls, window_ms=60_000, clock=clock, name="rating")
        return StyleCheckService(llm, limiter, retry_policy=RetryPolicy(sleep=sleep))
    return factory


class TestStyleCheckResult:
    def test_from_dict(self):
        result = StyleCheckResult.from_dict(json.loads(RATING_RESPONSE))

        assert result.overall_rating == 82
        assert result.category_ratings["fit_and_silhouette"] == 80
        assert result.missing_items == ["Brown leather belt", "Silver watch"]
        assert result.venue_feedback == "Fits a casual cafe"

    @pytest.mark.parametrize("payload", [
        {"overallRating": 120},
        {"overallRating": "great"},
        {"overallRating": 70, "categoryRatings": {"colorHarmony": -5}},
        {"overallRating": 70, "categoryRatings": [1, 2]},
    ])
    def test_invalid_ratings(self, payload):
        with pytest.raises(ParseError):
            StyleCheckResult.from_dict(payload)


class TestRateOutfit:
    def test_model_rating(self, service_factory, make_llm, image_payload):
        llm = make_llm("```json\n" + RATING_RESPONSE + "\n```")
        result = asyncio.run(service_factory(llm).rate_outfit(image_payload))

        assert result.source == "ai"
        assert result.overall_rating == 82
        # Two purchase links per missing item
        assert [link.search_query for link in result.shopping_links] == [
            "brown leather belt", "brown leather belt", "silver watch", "silver watch",
        ]

    def test_venue_image_is_sent_after_outfit(self, service_factory, make_llm, image_payload):
        llm = make_llm(RATING_RESPONSE)
        venue = ImagePayload(data=b"venue", name="venue.jpg")
        asyncio.run(service_factory(llm).rate_outfit(image_payload, venue_image=venue))

        call = llm.calls[0]
        assert call["image"] is image_payload
        assert call["extra_images"] == [venue]
        assert "venue photo" in call["prompt"]

    def test_unusable_output_gives_neutral_result(self, service_factory, make_llm, image_payload, sleep):
        llm = make_llm('{"score": "n/a"}')
        profile = UserProfile(body_type="Apple", skin_tone=SkinTone.DUSKY)
        result = asyncio.run(service_factory(llm).rate_outfit(image_payload, profile))

        assert result.source == "fallback"
        assert result.overall_rating == 75
        assert result.recommendations[0] == style_rules.BODY_TYPE_TIPS["apple"]
        assert result.color_suggestions[0] == style_rules.SKIN_TONE_TIPS[SkinTone.DUSKY]
        assert len(llm.calls) == 3
        assert sleep.delays == [2.0, 4.0]

    def test_own_quota(self, service_factory, make_llm, image_payload):
        service = service_factory(make_llm(RATING_RESPONSE), max_calls=1)
        asyncio.run(service.rate_outfit(image_payload))

        with pytest.raises(RateLimitExceeded):
            asyncio.run(service.rate_outfit(image_payload))


class TestNeutralResult:
    def test_without_profile(self):
        result = neutral_result()

        assert result.overall_rating == 75
        assert set(result.category_ratings) == {
            "color_harmony", "fit_and_silhouette", "occasion_appropriate", "accessories_balance", "style_coherence",
        }
        assert len(result.recommendations) == 3
        assert result.shopping_links

    def test_item_links_are_capped(self):
        links = item_links(["Belt", "Watch", "Scarf", "Hat"])
        assert {link.search_query for link in links} == {"belt", "watch", "scarf"}
        assert all(link.intent == "purchase" for link in links)
