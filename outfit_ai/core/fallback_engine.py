"""
Fallback Rule Engine (v1.0.0)
Deterministic recommendation sets used whenever the model cannot answer.

Same inputs always produce the same FallbackResult. The engine never raises:
it is the last line of the pipeline.
"""
import re
import logging
from typing import List, Optional, Sequence, Tuple

from outfit_ai.core.links import LinkBuilder
from outfit_ai.core.models import (
    FallbackResult,
    Gender,
    LocationContext,
    OutfitRecommendation,
    SituationalContext,
    UserProfile,
    WeatherContext,
    unique_colors,
)
from outfit_ai.core import style_rules
from outfit_ai.core.style_rules import OutfitTemplate

logger = logging.getLogger(__name__)

_TEMPERATURE = re.compile(r"(-?\d+(?:\.\d+)?)\s*(?:°\s*c\b|°|degrees?\b|celsius\b)", re.IGNORECASE)

# Cities used to place a location in a region when none is given
REGION_CITIES = {
    "North India": ("delhi", "new delhi", "noida", "gurgaon", "gurugram", "chandigarh", "lucknow", "jaipur", "amritsar"),
    "South India": ("bangalore", "bengaluru", "chennai", "hyderabad", "kochi", "coimbatore", "mysore", "trivandrum"),
    "West India": ("mumbai", "pune", "ahmedabad", "goa", "surat", "nagpur", "vadodara"),
    "East India": ("kolkata", "bhubaneswar", "guwahati", "patna", "ranchi", "siliguri"),
}


def _contains_word(text: str, keyword: str) -> bool:
    return re.search(rf"\b{re.escape(keyword)}\b", text) is not None


def _match_family(text: str, families: Sequence[Tuple[str, Sequence[str]]]) -> Optional[str]:
    for theme, keywords in families:
        if any(_contains_word(text, keyword) for keyword in keywords):
            return theme
    return None


def _weather_theme(weather: WeatherContext) -> Optional[str]:
    if weather.is_rainy:
        return "rainy"
    if weather.is_cold:
        return "winter"
    if weather.is_hot:
        return "humid" if weather.is_humid else "summer"
    return None


def _prompt_temperature_theme(text: str) -> Optional[str]:
    match = _TEMPERATURE.search(text)
    if not match:
        return None
    temperature = float(match.group(1))
    if temperature < 15:
        return "winter"
    if temperature > 30:
        return "summer"
    return None


def classify_theme(prompt: str, context: Optional[SituationalContext] = None) -> str:
    """
    Choose the template family for a request.

    Weather beats occasion, occasion beats season; 'versatile' otherwise.
    """
    text = (prompt or "").lower()

    if context is not None and context.weather is not None:
        theme = _weather_theme(context.weather)
        if theme:
            return theme

    theme = _match_family(text, style_rules.WEATHER_KEYWORDS) or _prompt_temperature_theme(text)
    if theme:
        return theme

    theme = _match_family(text, style_rules.OCCASION_KEYWORDS)
    if theme:
        return theme

    return _match_family(text, style_rules.SEASON_KEYWORDS) or "versatile"


def resolve_region(location: LocationContext) -> str:
    """Map a location context onto a REGIONAL_TEMPLATES key."""
    region = location.region.lower()
    for key in ("North India", "South India", "West India", "East India"):
        if key.split()[0].lower() in region and "india" in region:
            return key

    place = location.location.lower()
    for key, cities in REGION_CITIES.items():
        if any(_contains_word(place, city) for city in cities):
            return key

    if "india" in region or "india" in place:
        return "India"
    return "International"


def infer_venue(prompt: str) -> Tuple[str, str]:
    text = (prompt or "").lower()
    for keywords, venue, ambiance in style_rules.VENUE_RULES:
        if any(_contains_word(text, keyword) for keyword in keywords):
            return venue, ambiance
    return style_rules.DEFAULT_VENUE


def enrichment_clauses(profile: UserProfile) -> List[str]:
    """Reasoning clauses conditioned on the profile, in a fixed order."""
    clauses = []
    body_clause = style_rules.BODY_TYPE_CLAUSES.get(profile.body_type_key)
    if body_clause:
        clauses.append(body_clause)
    if profile.height_cm is not None:
        if profile.height_cm < 160:
            clauses.append(style_rules.PETITE_CLAUSE)
        elif profile.height_cm > 175:
            clauses.append(style_rules.TALL_CLAUSE)
    if profile.skin_tone is not None:
        clauses.append(style_rules.SKIN_TONE_CLAUSES[profile.skin_tone])
    return clauses


def weather_tips(weather: WeatherContext) -> List[str]:
    """Weather baseline with its trailing tips swapped for condition tips."""
    conditions = []
    if weather.is_rainy:
        conditions.append("rainy")
    if weather.is_cold:
        conditions.append("cold")
    elif weather.is_hot:
        conditions.append("hot")
    if weather.is_humid:
        conditions.append("humid")

    condition_tips = [style_rules.WEATHER_CONDITION_TIPS[key] for key in conditions]
    keep = len(style_rules.WEATHER_BASE_TIPS) - len(condition_tips)
    return list(style_rules.WEATHER_BASE_TIPS[:keep]) + condition_tips


def build_tips(
    profile: UserProfile,
    has_location: bool = False,
    weather: Optional[WeatherContext] = None
) -> List[str]:
    """Baseline tips plus up to two profile tips. Location beats weather for the baseline."""
    if has_location:
        base = style_rules.LOCATION_BASE_TIPS
    elif weather is not None:
        base = weather_tips(weather)
    else:
        base = style_rules.BASE_TIPS
    profile_tips = []

    body_tip = style_rules.BODY_TYPE_TIPS.get(profile.body_type_key)
    if body_tip:
        profile_tips.append(body_tip)
    if profile.height_cm is not None:
        if profile.height_cm < 160:
            profile_tips.append(style_rules.PETITE_TIP)
        elif profile.height_cm > 175:
            profile_tips.append(style_rules.TALL_TIP)
    if profile.skin_tone is not None:
        profile_tips.append(style_rules.SKIN_TONE_TIPS[profile.skin_tone])

    tips = list(base) + profile_tips[:style_rules.MAX_PROFILE_TIPS]
    return tips[:style_rules.MAX_TIPS]


def weather_considerations(weather: WeatherContext) -> str:
    parts = []
    if weather.temperature_c is not None:
        if weather.is_cold:
            parts.append(f"At {weather.temperature_c:.0f}°C, layer up with warm fabrics")
        elif weather.is_hot:
            parts.append(f"At {weather.temperature_c:.0f}°C, choose light breathable fabrics")
        else:
            parts.append(f"At a mild {weather.temperature_c:.0f}°C, a light layer is enough")
    if weather.is_rainy:
        parts.append("carry an umbrella and pick water-resistant footwear")
    if weather.is_humid:
        parts.append("prefer cotton and linen to stay comfortable in the humidity")
    if weather.wind_speed_kmh is not None and weather.wind_speed_kmh > 25:
        parts.append("avoid loose, flowing pieces in the wind")
    if not parts:
        return "Dress in comfortable layers you can adjust through the day."
    sentence = "; ".join(parts)
    return sentence[0].upper() + sentence[1:] + "."


def location_considerations(location: LocationContext) -> str:
    place = location.location or "your area"
    parts = [f"Styled for {place}"]
    if location.climate:
        parts.append(f"suited to its {location.climate.lower()} climate")
    if location.terrain:
        parts.append(f"practical for {location.terrain.lower()} terrain")
    if location.cultural_style:
        parts.append(f"in step with the local {location.cultural_style.lower()} style")
    if location.local_trends:
        parts.append(f"nodding to the local trend for {location.local_trends[0].lower()}")
    return ", ".join(parts) + "."


class FallbackRuleEngine:
    """
    Build a complete FallbackResult from prompt, profile and context.

    Usage:
        engine = FallbackRuleEngine()
        result = engine.generate("office meeting", profile, reason="rate limited")
    """

    def __init__(self, link_builder: Optional[LinkBuilder] = None):
        self.link_builder = link_builder or LinkBuilder()

    def select_templates(
        self,
        prompt: str,
        profile: UserProfile,
        context: Optional[SituationalContext] = None
    ) -> Tuple[str, Sequence[OutfitTemplate]]:
        """Return (theme or region key, templates) for the request."""
        if context is not None and context.location is not None:
            region = resolve_region(context.location)
            return region, style_rules.REGIONAL_TEMPLATES[region][profile.gender]
        theme = classify_theme(prompt, context)
        return theme, style_rules.THEME_TEMPLATES[theme][profile.gender]

    def _recommendation(
        self,
        template: OutfitTemplate,
        clauses: List[str],
        prompt: str,
        place: str
    ) -> OutfitRecommendation:
        reasoning = template.reasoning.replace("{location}", place)
        if clauses:
            reasoning = " ".join([reasoning] + clauses)
        return OutfitRecommendation(
            style=template.style,
            colors=list(template.colors),
            outfit=template.outfit,
            accessories=template.accessories,
            mood=template.mood,
            reasoning=reasoning,
            shopping_links=self.link_builder.build_links(template.outfit, prompt),
        )

    def generate(
        self,
        prompt: str,
        profile: Optional[UserProfile] = None,
        context: Optional[SituationalContext] = None,
        reason: str = "",
        attempts: int = 0
    ) -> FallbackResult:
        """
        Generate a deterministic recommendation set.

        Args:
            prompt: Free-text request
            profile: User profile; unknown fields simply add nothing
            context: Optional weather/location context
            reason: Why the model path was not used (carried on the result)
            attempts: Model attempts made before falling back

        Returns:
            FallbackResult with two recommendations
        """
        profile = profile or UserProfile()
        key, templates = self.select_templates(prompt, profile, context)
        location = context.location if context is not None else None
        weather = context.weather if context is not None else None
        place = (location.location if location is not None else "") or "your area"

        clauses = enrichment_clauses(profile)
        recommendations = [
            self._recommendation(template, clauses, prompt, place) for template in templates
        ]
        venue, ambiance = infer_venue(prompt)

        logger.info(f"Fallback recommendations built: key={key}, gender={profile.gender.value}, reason={reason!r}")

        return FallbackResult(
            venue=venue,
            ambiance=ambiance,
            dominant_colors=unique_colors(recommendations, limit=style_rules.MAX_PALETTE),
            recommendations=recommendations,
            tips=build_tips(profile, has_location=location is not None, weather=weather),
            weather_considerations=weather_considerations(weather) if weather is not None else None,
            location_considerations=location_considerations(location) if location is not None else None,
            reason=reason,
            attempts=attempts,
        )
