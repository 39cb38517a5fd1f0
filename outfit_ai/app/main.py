"""
Outfit AI Service v1.0.0
Resilient outfit recommendations: rate-limited model calls with a
deterministic rule-based fallback.

API ROUTES:
-----------
- /ai/recommendations   - Outfit recommendations (AI or fallback)
- /ai/images/validate   - Clothing image validation (parallel)
- /ai/style-check       - Outfit rating
- /ai/catalog/filter    - Static catalog matching
- /health, /metrics     - Health and monitoring
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from outfit_ai.app.routes import router
from outfit_ai.config import get_llm_config, get_settings
from outfit_ai.core.orchestrator import RecommendationOrchestrator
from outfit_ai.core.rate_limit import SlidingWindowRateLimiter
from outfit_ai.core.retry import RetryPolicy, backoff_for
from outfit_ai.core.style_check import StyleCheckService
from outfit_ai.llm import LLMClient
from outfit_ai.observability import is_logging_enabled

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def build_services(app: FastAPI) -> None:
    """Construct limiters, LLM client and services once per process."""
    settings = get_settings()
    llm_config = get_llm_config()

    llm_client = LLMClient(llm_config)
    generation_limiter = SlidingWindowRateLimiter.from_config(settings.generation_limit, name="generation")
    rating_limiter = SlidingWindowRateLimiter.from_config(settings.rating_limit, name="rating")

    def retry_policy() -> RetryPolicy:
        return RetryPolicy(
            max_attempts=settings.max_attempts,
            backoff=backoff_for(settings.backoff_strategy, settings.backoff_base_ms / 1000)
        )

    app.state.llm_client = llm_client
    app.state.generation_limiter = generation_limiter
    app.state.rating_limiter = rating_limiter
    app.state.orchestrator = RecommendationOrchestrator(
        llm_client,
        generation_limiter,
        retry_policy=retry_policy(),
        llm_config=llm_config,
        llm_enabled=settings.llm_enabled
    )
    app.state.style_check = StyleCheckService(
        llm_client,
        rating_limiter,
        retry_policy=retry_policy(),
        llm_config=llm_config
    )
    app.state.catalog = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("=" * 50)
    logger.info("Outfit AI Service v1.0.0 Starting...")
    logger.info("=" * 50)

    build_services(app)

    settings = get_settings()
    llm_status = app.state.llm_client.get_status()
    logger.info(f"LLM: {llm_status['provider']} ({', '.join(llm_status['model_tiers'])}), "
                f"{'enabled' if settings.llm_enabled else 'disabled'}")
    logger.info(f"Generation quota: {settings.generation_max_calls}/{settings.generation_window_ms}ms")
    logger.info(f"Rating quota: {settings.rating_max_calls}/{settings.rating_window_ms}ms")
    logger.info(f"Logging: {'enabled' if is_logging_enabled() else 'disabled'}")

    logger.info("✓ Service ready! http://localhost:8000")
    logger.info("✓ Metrics available at /metrics")
    logger.info("=" * 50)

    yield

    logger.info("Service shutting down...")


app = FastAPI(
    title="Outfit AI Service",
    description="Outfit recommendations with rate limiting, retries and rule-based fallback",
    version="1.0.0",
    lifespan=lifespan
)

# ============================================================================
# MIDDLEWARE
# ============================================================================
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

app.include_router(router)
