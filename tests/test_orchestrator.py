"""
Tests for the recommendation pipeline: admission, attempts, fallback.
"""
import asyncio
import json

import pytest

from outfit_ai.config.llm_config import ActiveLLMConfig
from outfit_ai.core.errors import RateLimitExceeded, RetryableServiceError, ServiceError
from outfit_ai.core.models import (
    AIResult,
    FallbackResult,
    Gender,
    ImagePayload,
    RecommendationRequest,
    UserProfile,
)
from outfit_ai.core.orchestrator import RecommendationOrchestrator, parse_validation
from outfit_ai.core.rate_limit import SlidingWindowRateLimiter
from outfit_ai.core.retry import RetryPolicy
from outfit_ai.observability import get_metrics

VALID_RESPONSE = "Here are your looks:\n```json\n" + json.dumps({
    "venue": "Rooftop restaurant",
    "ambiance": "Warm evening",
    "dominantColors": ["Navy", "White"],
    "recommendations": [
        {
            "style": "Smart Casual",
            "colors": ["Navy", "White"],
            "outfit": "Navy blazer + White shirt + Beige chinos",
            "accessories": "Brown belt",
            "mood": "Relaxed",
            "reasoning": "Polished without being stiff.",
        },
        {
            "style": "Minimal",
            "colors": ["Black"],
            "outfit": "Black shirt + Black trousers",
            "reasoning": "Clean lines for the evening.",
        },
    ],
    "tips": ["Roll the sleeves once"],
}) + "\n```"


@pytest.fixture
def limiter(clock):
    return SlidingWindowRateLimiter(max_calls=15, window_ms=60_000, clock=clock)


@pytest.fixture
def build(limiter, sleep):
    def factory(llm, **kwargs):
        kwargs.setdefault("retry_policy", RetryPolicy(max_attempts=3, sleep=sleep))
        return RecommendationOrchestrator(llm, kwargs.pop("rate_limiter", limiter), **kwargs)
    return factory


def request(prompt="dinner on a rooftop", **kwargs):
    return RecommendationRequest(prompt=prompt, **kwargs)


class TestModelPath:
    def test_valid_response_gives_ai_result(self, build, make_llm):
        llm = make_llm(VALID_RESPONSE)
        result = asyncio.run(build(llm).generate(request()))

        assert isinstance(result, AIResult)
        assert result.source == "ai"
        assert result.model == "gemini-1.5-flash"
        assert result.attempts == 1
        assert result.venue == "Rooftop restaurant"
        assert [r.style for r in result.recommendations] == ["Smart Casual", "Minimal"]
        assert len(llm.calls) == 1

    def test_links_are_rebuilt_for_ai_results(self, build, make_llm):
        result = asyncio.run(build(make_llm(VALID_RESPONSE)).generate(request()))
        links = result.recommendations[0].shopping_links

        assert [link.platform for link in links] == ["Pinterest", "Google Images", "Amazon", "Myntra"]
        assert links[2].search_query == "navy blazer white shirt"

    def test_prompt_carries_profile_and_image_opener(self, build, make_llm, image_payload):
        llm = make_llm(VALID_RESPONSE)
        profile = UserProfile(gender=Gender.FEMALE, body_type="Hourglass")
        asyncio.run(build(llm).generate(request(profile=profile, image=image_payload)))

        call = llm.calls[0]
        assert call["image"] is image_payload
        assert call["prompt"].startswith("Analyze this image")
        assert "Body Type: Hourglass" in call["prompt"]
        assert "female users only" in call["prompt"]


class TestFallbackPath:
    def test_malformed_output_exhausts_three_attempts(self, build, make_llm, sleep):
        llm = make_llm("not json at all")
        result = asyncio.run(build(llm).generate(request()))

        assert isinstance(result, FallbackResult)
        assert result.attempts == 3
        assert result.reason.startswith("ParseError")
        assert len(llm.calls) == 3
        assert sleep.delays == [2.0, 4.0]
        assert len(result.recommendations) == 2

    def test_attempts_escalate_through_model_tiers(self, build, make_llm):
        llm = make_llm("{}")
        asyncio.run(build(llm).generate(request()))
        assert [call["model"] for call in llm.calls] == ["gemini-1.5-flash", "gemini-pro-vision", "gemini-pro"]

    def test_recovers_after_overload(self, build, make_llm, sleep):
        llm = make_llm(RetryableServiceError("503 overloaded"), VALID_RESPONSE)
        result = asyncio.run(build(llm).generate(request()))

        assert isinstance(result, AIResult)
        assert result.attempts == 2
        assert result.model == "gemini-pro-vision"
        assert sleep.delays == [2.0]

    def test_non_retryable_error_falls_back_after_one_attempt(self, build, make_llm, sleep):
        llm = make_llm(ServiceError("GEMINI_API_KEY not set"))
        result = asyncio.run(build(llm).generate(request()))

        assert isinstance(result, FallbackResult)
        assert result.attempts == 1
        assert "GEMINI_API_KEY" in result.reason
        assert sleep.delays == []

    def test_recommendation_missing_colors_is_rejected(self, build, make_llm):
        bad = json.dumps({"recommendations": [{"style": "X", "outfit": "Jeans", "reasoning": "Because"}]})
        result = asyncio.run(build(make_llm(bad)).generate(request()))
        assert isinstance(result, FallbackResult)

    def test_cancelled_request_falls_back_without_calls(self, build, make_llm):
        llm = make_llm(VALID_RESPONSE)

        async def run():
            event = asyncio.Event()
            event.set()
            return await build(llm).generate(request(), cancel_event=event)

        result = asyncio.run(run())

        assert isinstance(result, FallbackResult)
        assert result.reason == "cancelled"
        assert llm.calls == []

    def test_llm_disabled_skips_admission(self, build, make_llm, limiter):
        llm = make_llm(VALID_RESPONSE)
        result = asyncio.run(build(llm, llm_enabled=False).generate(request()))

        assert isinstance(result, FallbackResult)
        assert result.reason == "llm disabled"
        assert llm.calls == []
        assert limiter.remaining() == 15


class TestAdmission:
    def test_rate_limit_is_the_only_escaping_error(self, build, make_llm, clock):
        limiter = SlidingWindowRateLimiter(max_calls=1, window_ms=60_000, clock=clock)
        llm = make_llm(VALID_RESPONSE)
        orchestrator = build(llm, rate_limiter=limiter)

        asyncio.run(orchestrator.generate(request()))
        clock.now = 1000
        with pytest.raises(RateLimitExceeded) as exc_info:
            asyncio.run(orchestrator.generate(request()))

        assert exc_info.value.wait_seconds == 59
        assert len(llm.calls) == 1
        assert get_metrics()["rate_limited"] == 1

    def test_retries_use_a_single_admission(self, build, make_llm, limiter):
        asyncio.run(build(make_llm("garbage")).generate(request()))
        assert limiter.remaining() == 14


class TestMetrics:
    def test_outcomes_are_counted(self, build, make_llm):
        asyncio.run(build(make_llm(VALID_RESPONSE)).generate(request()))
        asyncio.run(build(make_llm("garbage")).generate(request()))

        metrics = get_metrics()
        assert metrics["total_requests"] == 2
        assert metrics["ai_successes"] == 1
        assert metrics["fallbacks"] == 1
        assert metrics["ai_attempts"] == 4
        assert metrics["fallback_ratio"] == 0.5
        assert metrics["errors"] == 1

    def test_disabled_model_is_not_an_error(self, build, make_llm):
        asyncio.run(build(make_llm(VALID_RESPONSE), llm_enabled=False).generate(request()))

        metrics = get_metrics()
        assert metrics["fallbacks"] == 1
        assert metrics["errors"] == 0


class TestImageValidation:
    def test_valid_clothing(self, build, make_llm, image_payload):
        llm = make_llm("VALID_CLOTHING: Yes\nCONFIDENCE: 95%\nREASONING: A shirt on a hanger\nITEMS: shirt, hanger")
        result = asyncio.run(build(llm).validate_image(image_payload))

        assert result.is_valid
        assert result.confidence == 95
        assert result.suggested_items == ["shirt", "hanger"]
        assert llm.calls[0]["model"] == "gemini-1.5-flash"

    def test_service_error_marks_invalid(self, build, make_llm, image_payload):
        result = asyncio.run(build(make_llm(ServiceError("boom"))).validate_image(image_payload))

        assert not result.is_valid
        assert result.reasoning == "Validation failed due to processing error"

    def test_results_keep_input_order(self, limiter):
        class SlowFirstClient:
            config = ActiveLLMConfig(api_key="test-key")

            async def generate(self, prompt, image=None, model=None, extra_images=()):
                # First image finishes last
                await asyncio.sleep({"a.jpg": 0.05, "b.jpg": 0.0, "c.jpg": 0.02}[image.name])
                verdict = "No" if image.name == "b.jpg" else "Yes"
                return f"VALID_CLOTHING: {verdict}\nCONFIDENCE: 80%\nREASONING: checked {image.name}\nITEMS: None"

        images = [ImagePayload(data=b"x", name=name) for name in ("a.jpg", "b.jpg", "c.jpg")]
        batch = asyncio.run(RecommendationOrchestrator(SlowFirstClient(), limiter).validate_images(images))

        assert [r.name for r in batch.results] == ["a.jpg", "b.jpg", "c.jpg"]
        assert batch.valid == ["a.jpg", "c.jpg"]
        assert batch.invalid == [{"name": "b.jpg", "reason": "checked b.jpg"}]

    def test_rate_limited_images_are_invalid(self, build, make_llm, clock):
        limiter = SlidingWindowRateLimiter(max_calls=2, window_ms=60_000, clock=clock)
        llm = make_llm("VALID_CLOTHING: Yes\nCONFIDENCE: 90%\nREASONING: ok\nITEMS: tee")
        images = [ImagePayload(data=b"x", name=f"{n}.jpg") for n in range(3)]

        batch = asyncio.run(build(llm, rate_limiter=limiter).validate_images(images))

        assert batch.valid == ["0.jpg", "1.jpg"]
        assert batch.invalid[0]["name"] == "2.jpg"
        assert "Rate limit exceeded" in batch.invalid[0]["reason"]


class TestParseValidation:
    def test_defaults(self):
        result = parse_validation("I am not sure", "x.jpg")

        assert not result.is_valid
        assert result.confidence == 0
        assert result.reasoning == "Unable to determine image content"
        assert result.suggested_items == []
        assert result.name == "x.jpg"

    def test_confidence_is_capped(self):
        assert parse_validation("VALID_CLOTHING: yes\nCONFIDENCE: 150").confidence == 100

    def test_none_items(self):
        assert parse_validation("VALID_CLOTHING: No\nITEMS: None").suggested_items == []
