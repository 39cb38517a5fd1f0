"""
Input Validation Module (v3.0.0)
Validates uploaded images and profile form fields at the HTTP boundary.
"""
import io
import json
import logging
from typing import Any, Dict, Optional

from PIL import Image

from outfit_ai.core.models import BODY_TYPES, Gender, ImagePayload, SkinTone, UserProfile

logger = logging.getLogger(__name__)

# Configuration
MAX_FILE_SIZE_MB = 10
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024
ALLOWED_MIME_TYPES = {"image/jpeg", "image/png", "image/webp"}

HEIGHT_RANGE_CM = (50, 272)
WEIGHT_RANGE_KG = (20, 400)


class ValidationError(Exception):
    """Custom exception for validation errors."""
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


def validate_file_size(content: bytes) -> None:
    """
    Check if file size is within limits.

    Raises:
        ValidationError: If file is empty or exceeds MAX_FILE_SIZE_MB
    """
    if not content:
        raise ValidationError("Empty file", status_code=400)
    size_mb = len(content) / (1024 * 1024)
    if len(content) > MAX_FILE_SIZE_BYTES:
        raise ValidationError(
            f"File too large: {size_mb:.1f}MB (max {MAX_FILE_SIZE_MB}MB)",
            status_code=413
        )
    logger.debug(f"File size OK: {size_mb:.2f}MB")


def validate_mime_type(content_type: Optional[str]) -> str:
    """
    Check if MIME type is allowed.

    Returns:
        Normalized MIME type

    Raises:
        ValidationError: If MIME type is not in ALLOWED_MIME_TYPES
    """
    if content_type is None:
        raise ValidationError("Missing Content-Type header", status_code=415)

    # Normalize content type (remove charset etc.)
    mime = content_type.split(";")[0].strip().lower()

    if mime not in ALLOWED_MIME_TYPES:
        raise ValidationError(
            f"Unsupported file type: {mime}. Allowed: {', '.join(sorted(ALLOWED_MIME_TYPES))}",
            status_code=415
        )
    logger.debug(f"MIME type OK: {mime}")
    return mime


def decode_image(content: bytes) -> Image.Image:
    """
    Decode image bytes to PIL Image.

    Raises:
        ValidationError: If image cannot be decoded
    """
    try:
        image = Image.open(io.BytesIO(content))
        image.load()  # Force load to catch truncated images
        return image
    except Exception as e:
        raise ValidationError(
            f"Cannot decode image: {str(e)}",
            status_code=400
        )


def validate_image_bytes(content: bytes, content_type: Optional[str], name: str = "") -> ImagePayload:
    """
    Validate raw image bytes into an ImagePayload.

    Raises:
        ValidationError: If any validation fails
    """
    validate_file_size(content)
    mime = validate_mime_type(content_type)
    image = decode_image(content)

    logger.info(f"Image validated: {name or 'upload'} {image.size[0]}x{image.size[1]}, {image.mode}")
    return ImagePayload(data=content, mime_type=mime, name=name)


async def validate_image_upload(file) -> ImagePayload:
    """
    Complete validation pipeline for an uploaded image.

    Args:
        file: FastAPI UploadFile

    Returns:
        ImagePayload with the validated bytes

    Raises:
        ValidationError: If any validation fails
    """
    content = await file.read()
    await file.seek(0)  # Reset for potential re-read
    return validate_image_bytes(content, file.content_type, name=file.filename or "")


# ==================== PROFILE VALIDATION ====================

ALLOWED_GENDERS = {"male", "female", "unknown"}


def _parse_number(value: Any, name: str, bounds: tuple, errors: list) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        errors.append(f"{name} must be a number")
        return None
    low, high = bounds
    if not low <= number <= high:
        errors.append(f"{name} must be between {low} and {high}")
        return None
    return number


def validate_profile_fields(
    gender: Optional[str] = None,
    height_cm: Any = None,
    weight_kg: Any = None,
    body_type: Optional[str] = None,
    skin_tone: Optional[str] = None,
    city: Optional[str] = None
) -> UserProfile:
    """
    Validate profile form fields into a UserProfile.

    All fields are optional; anything given must be valid.

    Raises:
        ValidationError: If any field is invalid (all problems reported at once)
    """
    errors = []

    if gender and gender.strip().lower() not in ALLOWED_GENDERS:
        errors.append(f"gender must be one of: {', '.join(sorted(ALLOWED_GENDERS))}")

    height = _parse_number(height_cm, "height_cm", HEIGHT_RANGE_CM, errors)
    weight = _parse_number(weight_kg, "weight_kg", WEIGHT_RANGE_KG, errors)

    if body_type and body_type.strip().lower() not in BODY_TYPES:
        errors.append(f"body_type must be one of: {', '.join(BODY_TYPES)}")

    tone = None
    if skin_tone:
        tone = SkinTone.parse(skin_tone)
        if tone is None:
            errors.append(f"skin_tone must be one of: {', '.join(t.value for t in SkinTone)}")

    if errors:
        raise ValidationError("; ".join(errors), status_code=400)

    return UserProfile(
        height_cm=height,
        weight_kg=weight,
        body_type=body_type.strip() if body_type else None,
        skin_tone=tone,
        gender=Gender.parse(gender),
        city=city.strip() if city and city.strip() else None,
    )


def parse_json_field(name: str, raw: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Parse an optional JSON object sent as a form field.

    Raises:
        ValidationError: If the value is not a JSON object
    """
    if raw is None or not raw.strip():
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        raise ValidationError(f"{name} must be valid JSON", status_code=400)
    if not isinstance(value, dict):
        raise ValidationError(f"{name} must be a JSON object", status_code=400)
    return value
