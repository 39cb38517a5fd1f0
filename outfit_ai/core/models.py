"""
Pipeline Data Model (v1.0.0)
Profiles, situational context, requests and recommendation results.

RecommendationSet has two concrete variants, AIResult and FallbackResult.
Both carry the same fields so downstream code never branches on shape.
"""
import re
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from outfit_ai.core.errors import ParseError

logger = logging.getLogger(__name__)


# ==================== ENUMS ====================

class Gender(Enum):
    """Gender vocabulary used to scope outfit templates."""
    MALE = "male"
    FEMALE = "female"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> "Gender":
        if isinstance(value, Gender):
            return value
        text = str(value or "").strip().lower()
        if text in ("male", "man", "men", "m"):
            return cls.MALE
        if text in ("female", "woman", "women", "f"):
            return cls.FEMALE
        return cls.UNKNOWN


class SkinTone(Enum):
    """Coarse skin tone classification."""
    FAIR = "Fair"
    WHEATISH = "Wheatish"
    DUSKY = "Dusky"
    DARK = "Dark"

    @classmethod
    def parse(cls, value: Any) -> Optional["SkinTone"]:
        if isinstance(value, SkinTone):
            return value
        text = str(value or "").strip().lower()
        for tone in cls:
            if tone.value.lower() == text:
                return tone
        return None


class Category(Enum):
    """Outfit catalog categories."""
    STREET_STYLE = "street-style"
    FORMAL_WEAR = "formal-wear"
    OFFICE_WEAR = "office-wear"
    GYM_WEAR = "gym-wear"
    DATE_NIGHT = "date-night"
    PARTY_WEAR = "party-wear"
    OLD_MONEY = "old-money"
    ELEGANT = "elegant"
    TWINNING = "twinning"
    TODAYS_OUTFIT = "todays-outfit"


# Recognized silhouettes; anything else is carried through but earns no clause
BODY_TYPES = ("slim", "athletic", "heavy", "hourglass", "pear", "apple", "rectangle", "average")


def _optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def string_list(value: Any) -> List[str]:
    """Coerce a JSON-ish value into a list of non-empty strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, (list, tuple)):
        return [str(part).strip() for part in value if part is not None and str(part).strip()]
    return [str(value).strip()]


# ==================== USER PROFILE ====================

@dataclass(frozen=True)
class UserProfile:
    """Physical attributes of the user, passed by value into the pipeline."""
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None
    body_type: Optional[str] = None
    skin_tone: Optional[SkinTone] = None
    gender: Gender = Gender.UNKNOWN
    city: Optional[str] = None

    @property
    def height_bucket(self) -> str:
        """short (<165), average (165-180) or tall (>180); empty when unknown."""
        if self.height_cm is None:
            return ""
        if self.height_cm < 165:
            return "short"
        if self.height_cm <= 180:
            return "average"
        return "tall"

    @property
    def body_type_key(self) -> str:
        return (self.body_type or "").strip().lower()

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "UserProfile":
        data = data or {}
        return cls(
            height_cm=_optional_float(data.get("height_cm", data.get("height"))),
            weight_kg=_optional_float(data.get("weight_kg", data.get("weight"))),
            body_type=(str(data.get("body_type") or data.get("bodyType") or "").strip() or None),
            skin_tone=SkinTone.parse(data.get("skin_tone", data.get("skinTone"))),
            gender=Gender.parse(data.get("gender")),
            city=(str(data.get("city") or "").strip() or None),
        )

    def to_dict(self) -> dict:
        return {
            "height_cm": self.height_cm,
            "weight_kg": self.weight_kg,
            "body_type": self.body_type,
            "skin_tone": self.skin_tone.value if self.skin_tone else None,
            "gender": self.gender.value,
            "city": self.city,
        }


# ==================== SITUATIONAL CONTEXT ====================

@dataclass
class WeatherContext:
    """Weather snapshot supplied by the caller's weather collaborator."""
    temperature_c: Optional[float] = None
    condition: str = ""
    description: str = ""
    humidity: Optional[float] = None
    wind_speed_kmh: Optional[float] = None
    location: str = ""
    forecast: Dict[str, float] = field(default_factory=dict)

    @property
    def is_rainy(self) -> bool:
        return "rain" in self.condition.lower() or "drizzle" in self.condition.lower()

    @property
    def is_cold(self) -> bool:
        return self.temperature_c is not None and self.temperature_c < 15

    @property
    def is_hot(self) -> bool:
        return self.temperature_c is not None and self.temperature_c > 30

    @property
    def is_humid(self) -> bool:
        return self.humidity is not None and self.humidity > 70

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WeatherContext":
        forecast = {}
        for slot, value in (data.get("forecast") or {}).items():
            temp = value.get("temp") if isinstance(value, dict) else value
            temp = _optional_float(temp)
            if temp is not None:
                forecast[slot] = temp
        return cls(
            temperature_c=_optional_float(data.get("temperature_c", data.get("temperature"))),
            condition=str(data.get("condition") or ""),
            description=str(data.get("description") or ""),
            humidity=_optional_float(data.get("humidity")),
            wind_speed_kmh=_optional_float(data.get("wind_speed_kmh", data.get("windSpeed"))),
            location=str(data.get("location") or ""),
            forecast=forecast,
        )

    def to_prompt_context(self) -> str:
        """Generate context string for LLM prompt."""
        parts = []
        if self.temperature_c is not None:
            parts.append(f"Temperature: {self.temperature_c:.0f}°C")
        if self.condition:
            parts.append(f"Weather: {self.condition}")
        if self.description:
            parts.append(f"Description: {self.description}")
        if self.humidity is not None:
            parts.append(f"Humidity: {self.humidity:.0f}%")
        if self.wind_speed_kmh is not None:
            parts.append(f"Wind Speed: {self.wind_speed_kmh:.0f} km/h")
        if self.location:
            parts.append(f"Location: {self.location}")
        for slot in ("morning", "afternoon", "evening"):
            if slot in self.forecast:
                parts.append(f"{slot.capitalize()}: {self.forecast[slot]:.0f}°C")
        return ", ".join(parts)


@dataclass
class LocationContext:
    """Topography of the user's location."""
    location: str = ""
    region: str = ""
    climate: str = ""
    terrain: str = ""
    cultural_style: str = ""
    seasonal_considerations: str = ""
    local_trends: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LocationContext":
        return cls(
            location=str(data.get("location") or ""),
            region=str(data.get("region") or ""),
            climate=str(data.get("climate") or ""),
            terrain=str(data.get("terrain") or ""),
            cultural_style=str(data.get("cultural_style", data.get("culturalStyle")) or ""),
            seasonal_considerations=str(
                data.get("seasonal_considerations", data.get("seasonalConsiderations")) or ""
            ),
            local_trends=string_list(data.get("local_trends", data.get("localFashionTrends"))),
        )

    def to_prompt_context(self) -> str:
        parts = []
        if self.location:
            parts.append(f"Location: {self.location}")
        if self.region:
            parts.append(f"Region: {self.region}")
        if self.climate:
            parts.append(f"Climate: {self.climate}")
        if self.terrain:
            parts.append(f"Terrain: {self.terrain}")
        if self.cultural_style:
            parts.append(f"Cultural Style: {self.cultural_style}")
        if self.seasonal_considerations:
            parts.append(f"Seasonal Notes: {self.seasonal_considerations}")
        if self.local_trends:
            parts.append(f"Local Trends: {', '.join(self.local_trends)}")
        return ", ".join(parts)


@dataclass
class SituationalContext:
    """Optional weather and/or location conditioning a request."""
    weather: Optional[WeatherContext] = None
    location: Optional[LocationContext] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["SituationalContext"]:
        if not data:
            return None
        weather = data.get("weather")
        location = data.get("location")
        return cls(
            weather=WeatherContext.from_dict(weather) if weather else None,
            location=LocationContext.from_dict(location) if location else None,
        )


# ==================== REQUEST ====================

@dataclass
class ImagePayload:
    """Image bytes read at the boundary."""
    data: bytes
    mime_type: str = "image/jpeg"
    name: str = ""


@dataclass
class RecommendationRequest:
    """Free-text prompt plus everything needed to personalize the answer."""
    prompt: str
    profile: UserProfile = field(default_factory=UserProfile)
    image: Optional[ImagePayload] = None
    context: Optional[SituationalContext] = None


# ==================== RESULTS ====================

@dataclass
class ShoppingLink:
    """A search link on an inspiration or marketplace platform."""
    platform: str
    search_query: str
    url: str
    description: str
    intent: str = "inspiration"

    def to_dict(self) -> dict:
        return {
            "platform": self.platform,
            "search_query": self.search_query,
            "url": self.url,
            "description": self.description,
            "intent": self.intent,
        }


_ITEM_SEPARATORS = re.compile(r"\s*\+\s*|\s*,\s*|\s+(?:paired with|with|and)\s+", re.IGNORECASE)


def split_outfit_items(outfit: str) -> List[str]:
    """Split 'Navy blazer + White shirt' style descriptions into items."""
    return [part.strip() for part in _ITEM_SEPARATORS.split(outfit or "") if part and part.strip()]


@dataclass
class OutfitRecommendation:
    """One complete look."""
    style: str
    colors: List[str]
    outfit: str
    accessories: str = ""
    mood: str = ""
    reasoning: str = ""
    shopping_links: List[ShoppingLink] = field(default_factory=list)

    @property
    def items(self) -> List[str]:
        return split_outfit_items(self.outfit)

    def validate(self) -> None:
        """
        Enforce the render contract.

        Raises:
            ParseError: If items, colors or reasoning are empty
        """
        if not self.items:
            raise ParseError(f"Recommendation '{self.style}' has no outfit items")
        if not self.colors:
            raise ParseError(f"Recommendation '{self.style}' has no colors")
        if not self.reasoning.strip():
            raise ParseError(f"Recommendation '{self.style}' has no reasoning")

    @classmethod
    def from_dict(cls, data: Any) -> "OutfitRecommendation":
        if not isinstance(data, dict):
            raise ParseError(f"Recommendation must be an object, got {type(data).__name__}")
        outfit = data.get("outfit")
        if isinstance(outfit, (list, tuple)):
            outfit = " + ".join(str(item) for item in outfit)
        recommendation = cls(
            style=str(data.get("style") or "Recommended Look").strip(),
            colors=string_list(data.get("colors")),
            outfit=str(outfit or "").strip(),
            accessories=", ".join(string_list(data.get("accessories"))),
            mood=str(data.get("mood") or "").strip(),
            reasoning=str(data.get("reasoning") or "").strip(),
        )
        recommendation.validate()
        return recommendation

    def to_dict(self) -> dict:
        return {
            "style": self.style,
            "colors": list(self.colors),
            "outfit": self.outfit,
            "items": self.items,
            "accessories": self.accessories,
            "mood": self.mood,
            "reasoning": self.reasoning,
            "shopping_links": [link.to_dict() for link in self.shopping_links],
        }


@dataclass
class RecommendationSet:
    """Render-ready answer handed back to the caller."""
    venue: str = ""
    ambiance: str = ""
    dominant_colors: List[str] = field(default_factory=list)
    recommendations: List[OutfitRecommendation] = field(default_factory=list)
    tips: List[str] = field(default_factory=list)
    weather_considerations: Optional[str] = None
    location_considerations: Optional[str] = None

    source = "unknown"

    @staticmethod
    def parse_payload(data: Any) -> Dict[str, Any]:
        """
        Validate an extracted model payload into constructor fields.

        Accepts either the full object or a bare list of recommendations.

        Raises:
            ParseError: If the payload does not satisfy the result contract
        """
        if isinstance(data, list):
            data = {"recommendations": data}
        if not isinstance(data, dict):
            raise ParseError(f"Expected a JSON object, got {type(data).__name__}")

        raw_recommendations = data.get("recommendations")
        if not isinstance(raw_recommendations, list) or not raw_recommendations:
            raise ParseError("Response has no recommendations")

        recommendations = [OutfitRecommendation.from_dict(item) for item in raw_recommendations]

        dominant_colors = string_list(data.get("dominantColors", data.get("dominant_colors")))
        if not dominant_colors:
            dominant_colors = unique_colors(recommendations)

        return {
            "venue": str(data.get("venue") or "Based on your description"),
            "ambiance": str(data.get("ambiance") or ""),
            "dominant_colors": dominant_colors,
            "recommendations": recommendations,
            "tips": string_list(data.get("tips")) if not isinstance(data.get("tips"), str) else [data["tips"]],
            "weather_considerations": data.get("weatherConsiderations") or data.get("weather_considerations"),
            "location_considerations": data.get("locationConsiderations") or data.get("location_considerations"),
        }

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "venue": self.venue,
            "ambiance": self.ambiance,
            "dominant_colors": list(self.dominant_colors),
            "recommendations": [rec.to_dict() for rec in self.recommendations],
            "tips": list(self.tips),
            "weather_considerations": self.weather_considerations,
            "location_considerations": self.location_considerations,
        }


@dataclass
class AIResult(RecommendationSet):
    """Recommendation set produced by the external model."""
    model: str = ""
    attempts: int = 1

    source = "ai"

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({"model": self.model, "attempts": self.attempts})
        return data


@dataclass
class FallbackResult(RecommendationSet):
    """Recommendation set produced by the rule engine."""
    reason: str = ""
    attempts: int = 0

    source = "fallback"

    def to_dict(self) -> dict:
        data = super().to_dict()
        data.update({"reason": self.reason, "attempts": self.attempts})
        return data


def unique_colors(recommendations: List[OutfitRecommendation], limit: int = 4) -> List[str]:
    """Union of recommendation colors in order of first appearance."""
    palette: List[str] = []
    for recommendation in recommendations:
        for color in recommendation.colors:
            if color not in palette:
                palette.append(color)
    return palette[:limit]


# ==================== CATALOG ====================

@dataclass
class CategorySelection:
    """Category and gender parsed from a slug such as 'male-gym-wear'."""
    category: Category
    gender: Gender = Gender.UNKNOWN


@dataclass
class Appearance:
    """Acceptable attribute values of a catalog entry; 'any' matches everyone."""
    height: List[str] = field(default_factory=list)
    body_type: List[str] = field(default_factory=list)
    skin_tone: List[str] = field(default_factory=list)

    def has_wildcard(self) -> bool:
        return any(
            value.lower() == "any"
            for values in (self.height, self.body_type, self.skin_tone)
            for value in values
        )


@dataclass
class CatalogEntry:
    """Static catalog record supplied by an external collaborator."""
    id: str
    category: Optional[Category] = None
    gender: Gender = Gender.UNKNOWN
    appearance: Appearance = field(default_factory=Appearance)
    city: Optional[str] = None
    zone: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        data = dict(self.extra)
        data.update({
            "id": self.id,
            "category": self.category.value if self.category else None,
            "gender": self.gender.value,
            "appearance": {
                "height": list(self.appearance.height),
                "body_type": list(self.appearance.body_type),
                "skin_tone": list(self.appearance.skin_tone),
            },
            "city": self.city,
            "zone": self.zone,
            "tags": list(self.tags),
        })
        return data


@dataclass
class OutfitCandidate:
    """Catalog entry with its score for one filtering pass."""
    entry: CatalogEntry
    score: int

    def to_dict(self) -> dict:
        return {"outfit": self.entry.to_dict(), "score": self.score}


# ==================== IMAGE VALIDATION ====================

@dataclass
class ImageValidation:
    """Whether an uploaded image shows usable clothing."""
    is_valid: bool
    confidence: int = 0
    reasoning: str = ""
    suggested_items: List[str] = field(default_factory=list)
    name: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "is_valid": self.is_valid,
            "confidence": self.confidence,
            "reasoning": self.reasoning,
            "suggested_items": list(self.suggested_items),
        }


@dataclass
class ImageValidationBatch:
    """Validation results in input order, plus the valid/invalid split."""
    results: List[ImageValidation] = field(default_factory=list)

    @property
    def valid(self) -> List[str]:
        return [result.name for result in self.results if result.is_valid]

    @property
    def invalid(self) -> List[Dict[str, str]]:
        return [
            {"name": result.name, "reason": result.reasoning}
            for result in self.results if not result.is_valid
        ]

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "invalid": self.invalid,
            "results": [result.to_dict() for result in self.results],
        }


# ==================== STYLE CHECK ====================

STYLE_CHECK_CATEGORIES = (
    "color_harmony",
    "fit_and_silhouette",
    "occasion_appropriate",
    "accessories_balance",
    "style_coherence",
)


@dataclass
class StyleCheckResult:
    """Rating of an outfit photo."""
    overall_rating: float
    category_ratings: Dict[str, float] = field(default_factory=dict)
    strengths: List[str] = field(default_factory=list)
    improvements: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    missing_items: List[str] = field(default_factory=list)
    color_suggestions: List[str] = field(default_factory=list)
    venue_feedback: Optional[str] = None
    shopping_links: List[ShoppingLink] = field(default_factory=list)
    source: str = "ai"

    @classmethod
    def from_dict(cls, data: Any) -> "StyleCheckResult":
        """
        Raises:
            ParseError: If ratings are missing or outside 0-100
        """
        if not isinstance(data, dict):
            raise ParseError("Style check response must be an object")

        overall = _optional_float(data.get("overallRating", data.get("overall_rating")))
        if overall is None or not 0 <= overall <= 100:
            raise ParseError(f"Invalid overall rating: {data.get('overallRating')!r}")

        raw_categories = data.get("categoryRatings", data.get("category_ratings")) or {}
        if not isinstance(raw_categories, dict):
            raise ParseError("categoryRatings must be an object")
        categories = {}
        for key, value in raw_categories.items():
            score = _optional_float(value)
            if score is None or not 0 <= score <= 100:
                raise ParseError(f"Invalid rating for {key}: {value!r}")
            snake = re.sub(r"(?<!^)(?=[A-Z])", "_", str(key)).lower()
            categories[snake] = score

        analysis = data.get("analysis") if isinstance(data.get("analysis"), dict) else data
        venue = data.get("venueMatch") or data.get("venue_match") or {}

        return cls(
            overall_rating=overall,
            category_ratings=categories,
            strengths=string_list(analysis.get("strengths")),
            improvements=string_list(analysis.get("improvements")),
            recommendations=string_list(analysis.get("recommendations")),
            missing_items=string_list(analysis.get("missingItems", analysis.get("missing_items"))),
            color_suggestions=string_list(
                analysis.get("colorSuggestions", analysis.get("color_suggestions"))
            ),
            venue_feedback=(venue.get("feedback") if isinstance(venue, dict) else None),
        )

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "overall_rating": self.overall_rating,
            "category_ratings": dict(self.category_ratings),
            "strengths": list(self.strengths),
            "improvements": list(self.improvements),
            "recommendations": list(self.recommendations),
            "missing_items": list(self.missing_items),
            "color_suggestions": list(self.color_suggestions),
            "venue_feedback": self.venue_feedback,
            "shopping_links": [link.to_dict() for link in self.shopping_links],
        }
