"""
Integration Tests for Outfit AI Service v1.0.0
HTTP surface: recommendations, image validation, style check, catalog, health.
"""
import json

import pytest
from fastapi.testclient import TestClient

from outfit_ai.app.main import app
from outfit_ai.core.orchestrator import RecommendationOrchestrator
from outfit_ai.core.rate_limit import SlidingWindowRateLimiter
from outfit_ai.core.retry import RetryPolicy
from outfit_ai.core.style_check import StyleCheckService

RECOMMENDATION_RESPONSE = json.dumps({
    "venue": "Office",
    "recommendations": [{
        "style": "Business Casual",
        "colors": ["Navy", "White"],
        "outfit": "Navy blazer + White shirt + Gray trousers",
        "reasoning": "Sharp for a client meeting.",
    }],
})

VALIDATION_RESPONSE = "VALID_CLOTHING: Yes\nCONFIDENCE: 90%\nREASONING: A shirt\nITEMS: shirt"

RATING_RESPONSE = json.dumps({"overallRating": 77, "categoryRatings": {"colorHarmony": 80}})


@pytest.fixture
def install(clock, sleep):
    """Swap the app's services for ones backed by a fake model client."""
    def factory(llm, generation_max=15, rating_max=20):
        state = app.state
        state.llm_client = llm
        state.generation_limiter = SlidingWindowRateLimiter(generation_max, 60_000, clock=clock, name="generation")
        state.rating_limiter = SlidingWindowRateLimiter(rating_max, 60_000, clock=clock, name="rating")
        state.orchestrator = RecommendationOrchestrator(
            llm, state.generation_limiter, retry_policy=RetryPolicy(sleep=sleep)
        )
        state.style_check = StyleCheckService(llm, state.rating_limiter, retry_policy=RetryPolicy(sleep=sleep))
        state.catalog = None
        return state
    return factory


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


# ==================== HEALTH CHECK TESTS ====================

class TestHealthEndpoint:
    def test_health_returns_ok(self, client, install, make_llm):
        install(make_llm(RECOMMENDATION_RESPONSE))
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["rate_limits"]["generation"] == {"limit": 15, "remaining": 15}
        assert data["rate_limits"]["rating"]["limit"] == 20

    def test_metrics(self, client):
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "fallback_ratio" in response.json()


# ==================== RECOMMENDATION TESTS ====================

class TestRecommendations:
    def test_ai_result(self, client, install, make_llm):
        install(make_llm(RECOMMENDATION_RESPONSE))
        response = client.post("/ai/recommendations", data={"prompt": "client meeting", "gender": "male"})

        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "ai"
        assert data["recommendations"][0]["items"] == ["Navy blazer", "White shirt", "Gray trousers"]
        assert len(data["recommendations"][0]["shopping_links"]) == 4
        assert response.headers["X-RateLimit-Remaining"] == "14"

    def test_fallback_result(self, client, install, make_llm):
        install(make_llm("no json here"))
        response = client.post(
            "/ai/recommendations",
            data={
                "prompt": "wedding",
                "height_cm": "185",
                "weather": json.dumps({"temperature": 8, "condition": "Clear"}),
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "fallback"
        assert data["attempts"] == 3
        assert len(data["recommendations"]) == 2
        assert data["weather_considerations"]

    def test_rate_limited(self, client, install, make_llm):
        install(make_llm(RECOMMENDATION_RESPONSE), generation_max=1)
        first = client.post("/ai/recommendations", data={"prompt": "brunch"})
        second = client.post("/ai/recommendations", data={"prompt": "brunch"})

        assert first.status_code == 200
        assert second.status_code == 429
        assert second.headers["Retry-After"] == "60"
        assert "rate limit" in second.json()["detail"].lower()

    def test_empty_prompt(self, client, install, make_llm):
        install(make_llm(RECOMMENDATION_RESPONSE))
        response = client.post("/ai/recommendations", data={"prompt": "   "})
        assert response.status_code == 400

    def test_invalid_profile(self, client, install, make_llm):
        install(make_llm(RECOMMENDATION_RESPONSE))
        response = client.post("/ai/recommendations", data={"prompt": "party", "height_cm": "500"})

        assert response.status_code == 400
        assert "height_cm" in response.json()["detail"]

    def test_invalid_weather_json(self, client, install, make_llm):
        install(make_llm(RECOMMENDATION_RESPONSE))
        response = client.post("/ai/recommendations", data={"prompt": "party", "weather": "{oops"})
        assert response.status_code == 400


# ==================== IMAGE VALIDATION TESTS ====================

class TestImageValidation:
    def test_mixed_uploads(self, client, install, make_llm, jpeg_bytes):
        llm = make_llm(VALIDATION_RESPONSE)
        install(llm)
        response = client.post(
            "/ai/images/validate",
            files=[
                ("images", ("shirt.jpg", jpeg_bytes, "image/jpeg")),
                ("images", ("doc.pdf", b"%PDF-1.4 fake", "application/pdf")),
            ],
        )

        assert response.status_code == 200
        data = response.json()
        assert data["valid"] == ["shirt.jpg"]
        assert data["invalid"][0]["name"] == "doc.pdf"
        assert "unsupported" in data["invalid"][0]["reason"].lower()
        assert len(llm.calls) == 1

    def test_rejected_upload_keeps_its_position(self, client, install, make_llm, jpeg_bytes):
        llm = make_llm("VALID_CLOTHING: No\nCONFIDENCE: 85%\nREASONING: A cat\nITEMS: None")
        install(llm)
        response = client.post(
            "/ai/images/validate",
            files=[
                ("images", ("doc.pdf", b"%PDF-1.4 fake", "application/pdf")),
                ("images", ("cat.jpg", jpeg_bytes, "image/jpeg")),
            ],
        )

        assert response.status_code == 200
        data = response.json()
        assert data["valid"] == []
        assert [entry["name"] for entry in data["invalid"]] == ["doc.pdf", "cat.jpg"]
        assert [result["name"] for result in data["results"]] == ["doc.pdf", "cat.jpg"]
        assert "unsupported" in data["results"][0]["reasoning"].lower()
        assert data["results"][1]["reasoning"] == "A cat"
        assert len(llm.calls) == 1


# ==================== STYLE CHECK TESTS ====================

class TestStyleCheck:
    def test_rating(self, client, install, make_llm, jpeg_bytes):
        install(make_llm(RATING_RESPONSE))
        response = client.post(
            "/ai/style-check",
            files={"image": ("look.jpg", jpeg_bytes, "image/jpeg")},
            data={"skin_tone": "Wheatish"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "ai"
        assert data["overall_rating"] == 77
        assert data["category_ratings"] == {"color_harmony": 80}

    def test_rejects_large_file(self, client, install, make_llm):
        install(make_llm(RATING_RESPONSE))
        response = client.post(
            "/ai/style-check",
            files={"image": ("large.jpg", b"x" * (11 * 1024 * 1024), "image/jpeg")},
        )

        assert response.status_code == 413
        assert "too large" in response.json()["detail"].lower()


# ==================== CATALOG TESTS ====================

class TestCatalogFilter:
    def test_filter(self, client, install, make_llm):
        install(make_llm(RECOMMENDATION_RESPONSE))
        response = client.post(
            "/ai/catalog/filter",
            data={"category": "male-gym-wear", "height_cm": "170", "body_type": "Athletic"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["category"] == "gym-wear"
        assert data["gender"] == "male"
        assert [c["outfit"]["id"] for c in data["candidates"]] == ["gym-m-01"]

    def test_unknown_category(self, client, install, make_llm):
        install(make_llm(RECOMMENDATION_RESPONSE))
        response = client.post("/ai/catalog/filter", data={"category": "spacesuits"})
        assert response.status_code == 400
