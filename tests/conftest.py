"""
Shared fixtures: fake model client, controllable clock and sleep.
"""
import io

import pytest
from PIL import Image

from outfit_ai.config import reset_settings
from outfit_ai.config.llm_config import ActiveLLMConfig
from outfit_ai.core.models import ImagePayload
from outfit_ai.observability import reset_metrics


class FakeLLMClient:
    """Returns (or raises) scripted responses, recording every call."""

    def __init__(self, responses=None, config=None):
        self.config = config or ActiveLLMConfig(api_key="test-key")
        self.responses = list(responses or [])
        self.calls = []

    async def generate(self, prompt, image=None, model=None, extra_images=()):
        self.calls.append({"prompt": prompt, "image": image, "model": model, "extra_images": list(extra_images)})
        if not self.responses:
            raise AssertionError("FakeLLMClient ran out of scripted responses")
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, BaseException):
            raise response
        return response

    def get_status(self):
        return {"provider": "fake", "model_tiers": list(self.config.model_tiers), "api_key_configured": True}


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class RecordingSleep:
    """Async sleep replacement that records requested delays."""

    def __init__(self):
        self.delays = []

    async def __call__(self, delay: float):
        self.delays.append(delay)


@pytest.fixture(autouse=True)
def isolated_observability(monkeypatch, tmp_path):
    """Keep request logs out of the working tree and metrics per test."""
    monkeypatch.setenv("OUTFIT_AI_LOGGING_ENABLED", "false")
    monkeypatch.setenv("OUTFIT_AI_LOG_DIR", str(tmp_path / "logs"))
    reset_settings()
    reset_metrics()
    yield
    reset_settings()
    reset_metrics()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def jpeg_bytes():
    """A small valid JPEG."""
    img = Image.new("RGB", (64, 64), color="blue")
    buffer = io.BytesIO()
    img.save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def image_payload(jpeg_bytes):
    return ImagePayload(data=jpeg_bytes, mime_type="image/jpeg", name="outfit.jpg")


@pytest.fixture
def make_llm():
    """Factory for FakeLLMClient with scripted responses."""
    def factory(*responses, config=None):
        return FakeLLMClient(responses, config=config)
    return factory
