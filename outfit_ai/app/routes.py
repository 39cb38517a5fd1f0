"""
API Routes for Outfit AI Service v1.0.0
Recommendations, clothing-image validation, style check and catalog filtering.
"""
import logging
from typing import List, Optional
from fastapi import APIRouter, UploadFile, File, Form, HTTPException, Request
from fastapi.responses import JSONResponse

from outfit_ai.config import get_settings
from outfit_ai.core.errors import RateLimitExceeded
from outfit_ai.core.models import (
    ImageValidation,
    ImageValidationBatch,
    RecommendationRequest,
    SituationalContext,
)
from outfit_ai.core.outfit_scorer import filter_catalog, load_catalog, parse_category
from outfit_ai.core.rate_limit import get_rate_limit_headers
from outfit_ai.core.validation import (
    ValidationError,
    parse_json_field,
    validate_image_upload,
    validate_profile_fields,
)
from outfit_ai.observability import get_metrics, is_logging_enabled

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_VALIDATION_IMAGES = 10


def _rate_limited(error: RateLimitExceeded) -> HTTPException:
    return HTTPException(
        status_code=error.status_code,
        detail=error.message,
        headers={"Retry-After": str(error.wait_seconds)}
    )


def _profile_from_form(gender, height_cm, weight_kg, body_type, skin_tone, city):
    try:
        return validate_profile_fields(
            gender=gender,
            height_cm=height_cm,
            weight_kg=weight_kg,
            body_type=body_type,
            skin_tone=skin_tone,
            city=city
        )
    except ValidationError as ve:
        raise HTTPException(status_code=ve.status_code, detail=ve.message)


async def _read_image(upload: Optional[UploadFile]):
    if upload is None or not upload.filename:
        return None
    try:
        return await validate_image_upload(upload)
    except ValidationError as ve:
        raise HTTPException(status_code=ve.status_code, detail=ve.message)


# ==================== PUBLIC ENDPOINTS ====================

@router.get("/health")
async def health_check(request: Request):
    """Health check with observability info."""
    state = request.app.state
    metrics = get_metrics()

    return {
        "status": "ok",
        "version": "1.0.0",
        "settings": get_settings().to_dict(),
        "llm": state.llm_client.get_status(),
        "rate_limits": {
            "generation": {
                "limit": state.generation_limiter.max_calls,
                "remaining": state.generation_limiter.remaining(),
            },
            "rating": {
                "limit": state.rating_limiter.max_calls,
                "remaining": state.rating_limiter.remaining(),
            },
        },
        "observability": {
            "logging_enabled": is_logging_enabled(),
            "total_requests": metrics["total_requests"],
            "fallback_ratio": metrics["fallback_ratio"],
        },
    }


@router.get("/metrics")
async def get_metrics_endpoint():
    """Get detailed metrics for monitoring."""
    metrics = get_metrics()
    return JSONResponse(content=metrics)


# ==================== RECOMMENDATIONS ====================

@router.post("/ai/recommendations")
async def create_recommendations(
    request: Request,
    prompt: str = Form(..., description="What the outfit is for"),
    image: Optional[UploadFile] = File(None, description="Optional venue or outfit photo"),
    gender: Optional[str] = Form(None, description="male | female"),
    height_cm: Optional[float] = Form(None, description="Height in cm"),
    weight_kg: Optional[float] = Form(None, description="Weight in kg"),
    body_type: Optional[str] = Form(None, description="Slim, Athletic, Heavy, Hourglass, Pear, Apple, Rectangle"),
    skin_tone: Optional[str] = Form(None, description="Fair, Wheatish, Dusky, Dark"),
    city: Optional[str] = Form(None, description="User's city"),
    weather: Optional[str] = Form(None, description="Weather context as JSON"),
    location: Optional[str] = Form(None, description="Location context as JSON"),
):
    """
    POST /ai/recommendations

    Always returns a complete recommendation set; source is "ai" or
    "fallback". Responds 429 with Retry-After when the generation quota
    is exhausted.
    """
    if not prompt.strip():
        raise HTTPException(status_code=400, detail="prompt must not be empty")

    profile = _profile_from_form(gender, height_cm, weight_kg, body_type, skin_tone, city)
    try:
        context = SituationalContext.from_dict({
            "weather": parse_json_field("weather", weather),
            "location": parse_json_field("location", location),
        })
    except ValidationError as ve:
        raise HTTPException(status_code=ve.status_code, detail=ve.message)

    payload = await _read_image(image)
    orchestrator = request.app.state.orchestrator

    try:
        result = await orchestrator.generate(RecommendationRequest(
            prompt=prompt,
            profile=profile,
            image=payload,
            context=context
        ))
    except RateLimitExceeded as e:
        raise _rate_limited(e)

    headers = get_rate_limit_headers(request.app.state.generation_limiter)
    return JSONResponse(content=result.to_dict(), headers=headers)


# ==================== IMAGE VALIDATION ====================

@router.post("/ai/images/validate")
async def validate_images(
    request: Request,
    images: List[UploadFile] = File(..., description="Clothing photos to check")
):
    """
    Check which uploads show usable clothing.

    Files that fail upload validation are reported as invalid without a
    model call. Order of results matches the upload order.
    """
    if len(images) > MAX_VALIDATION_IMAGES:
        raise HTTPException(status_code=400, detail=f"At most {MAX_VALIDATION_IMAGES} images per request")

    orchestrator = request.app.state.orchestrator
    slots: List[Optional[ImageValidation]] = []
    pending = []
    for index, upload in enumerate(images):
        try:
            pending.append((index, await validate_image_upload(upload)))
            slots.append(None)
        except ValidationError as ve:
            slots.append(ImageValidation(
                is_valid=False,
                reasoning=ve.message,
                name=upload.filename or f"image_{index}"
            ))

    checked = await orchestrator.validate_images([payload for _, payload in pending])
    for (index, _), validation in zip(pending, checked.results):
        slots[index] = validation

    response = ImageValidationBatch(results=slots).to_dict()

    headers = get_rate_limit_headers(request.app.state.generation_limiter)
    return JSONResponse(content=response, headers=headers)


# ==================== STYLE CHECK ====================

@router.post("/ai/style-check")
async def style_check(
    request: Request,
    image: UploadFile = File(..., description="Outfit photo"),
    venue_image: Optional[UploadFile] = File(None, description="Optional venue photo"),
    gender: Optional[str] = Form(None),
    height_cm: Optional[float] = Form(None),
    weight_kg: Optional[float] = Form(None),
    body_type: Optional[str] = Form(None),
    skin_tone: Optional[str] = Form(None),
):
    """Rate an outfit photo (0-100) with strengths and improvements."""
    profile = _profile_from_form(gender, height_cm, weight_kg, body_type, skin_tone, None)
    outfit = await _read_image(image)
    if outfit is None:
        raise HTTPException(status_code=400, detail="image is required")
    venue = await _read_image(venue_image)

    try:
        result = await request.app.state.style_check.rate_outfit(outfit, profile, venue_image=venue)
    except RateLimitExceeded as e:
        raise _rate_limited(e)

    headers = get_rate_limit_headers(request.app.state.rating_limiter)
    return JSONResponse(content=result.to_dict(), headers=headers)


# ==================== CATALOG ====================

@router.post("/ai/catalog/filter")
async def filter_outfit_catalog(
    request: Request,
    category: str = Form(..., description="Category slug, e.g. male-gym-wear or todays-outfit"),
    gender: Optional[str] = Form(None),
    height_cm: Optional[float] = Form(None),
    body_type: Optional[str] = Form(None),
    skin_tone: Optional[str] = Form(None),
    city: Optional[str] = Form(None),
):
    """
    Filter the static outfit catalog for a profile.

    An empty list means no confident match.
    """
    try:
        selection = parse_category(category)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    profile = _profile_from_form(gender, height_cm, None, body_type, skin_tone, city)

    state = request.app.state
    if state.catalog is None:
        try:
            state.catalog = load_catalog(get_settings().catalog_path)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load catalog: {e}")
            raise HTTPException(status_code=500, detail="Catalog is unavailable")

    candidates = filter_catalog(state.catalog, profile, selection)
    return JSONResponse(content={
        "category": selection.category.value,
        "gender": selection.gender.value,
        "count": len(candidates),
        "candidates": [candidate.to_dict() for candidate in candidates],
    })
