"""
Outfit Scorer (v1.0.0)
Attribute-match scoring and filtering over a static outfit catalog.

Pure and synchronous; independent of the model path.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from outfit_ai.core.models import (
    Appearance,
    CatalogEntry,
    Category,
    CategorySelection,
    Gender,
    OutfitCandidate,
    UserProfile,
    string_list,
)

logger = logging.getLogger(__name__)

# Catalog path
CATALOG_PATH = Path(__file__).parent.parent / "catalog.json"

WILDCARD = "any"
WILDCARD_BONUS = 2
MIN_CONFIDENT_SCORE = 2


def parse_category(slug: str) -> CategorySelection:
    """
    Parse a category slug such as 'male-gym-wear' or 'todays-outfit'.

    Raises:
        ValueError: If the slug names no known category
    """
    text = (slug or "").strip().lower().replace("_", "-").replace(" ", "-")
    gender = Gender.UNKNOWN
    # 'female-' must be tested before 'male-'
    for prefix, value in (("female-", Gender.FEMALE), ("male-", Gender.MALE)):
        if text.startswith(prefix):
            gender = value
            text = text[len(prefix):]
            break
    try:
        return CategorySelection(category=Category(text), gender=gender)
    except ValueError:
        raise ValueError(f"Unknown outfit category: {slug!r}") from None


def entry_from_dict(data: Dict[str, Any]) -> CatalogEntry:
    """
    Build a CatalogEntry from a catalog record.

    Raises:
        ValueError: If the record has no id
    """
    if not isinstance(data, dict):
        raise ValueError(f"Catalog record must be an object, got {type(data).__name__}")
    entry_id = data.get("id")
    if entry_id is None or str(entry_id).strip() == "":
        raise ValueError("Catalog record has no id")

    category = None
    gender = Gender.parse(data.get("gender"))
    raw_category = data.get("category")
    if raw_category:
        try:
            selection = parse_category(str(raw_category))
            category = selection.category
            if gender == Gender.UNKNOWN:
                gender = selection.gender
        except ValueError:
            logger.debug(f"Catalog record {entry_id}: unknown category {raw_category!r}")

    appearance = data.get("appearance") or {}
    known = {"id", "category", "gender", "appearance", "city", "zone", "tags"}
    return CatalogEntry(
        id=str(entry_id),
        category=category,
        gender=gender,
        appearance=Appearance(
            height=string_list(appearance.get("height")),
            body_type=string_list(appearance.get("body_type", appearance.get("bodyType"))),
            skin_tone=string_list(appearance.get("skin_tone", appearance.get("skinTone"))),
        ),
        city=(str(data["city"]) if data.get("city") else None),
        zone=(str(data["zone"]) if data.get("zone") else None),
        tags=string_list(data.get("tags")),
        extra={key: value for key, value in data.items() if key not in known},
    )


def load_catalog(path: Optional[Union[str, Path]] = None) -> List[CatalogEntry]:
    """
    Load the outfit catalog.

    Accepts a bare list of records or an object with an 'outfits' list.
    Malformed records are skipped with a warning.

    Raises:
        FileNotFoundError: If the catalog file does not exist
    """
    catalog_path = Path(path) if path else CATALOG_PATH
    with open(catalog_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    records = data.get("outfits", []) if isinstance(data, dict) else data
    entries = []
    for index, record in enumerate(records or []):
        try:
            entries.append(entry_from_dict(record))
        except ValueError as e:
            logger.warning(f"Skipping catalog record #{index}: {e}")

    logger.info(f"Loaded {len(entries)} catalog entries from {catalog_path}")
    return entries


def _matches(values: Iterable[str], wanted: str) -> bool:
    wanted = (wanted or "").strip().lower()
    if not wanted:
        return False
    return any(value.strip().lower() == wanted for value in values)


def score_entry(entry: CatalogEntry, profile: UserProfile, selection: Optional[CategorySelection] = None) -> int:
    """
    Score one catalog entry against a profile.

    +1 each for height bucket, body type and skin tone; +1 once for a
    gender or category match; +1 for a city/zone match; +2 if any
    appearance set holds the 'any' wildcard.
    """
    score = 0
    appearance = entry.appearance

    if _matches(appearance.height, profile.height_bucket):
        score += 1
    if _matches(appearance.body_type, profile.body_type_key):
        score += 1
    if profile.skin_tone is not None and _matches(appearance.skin_tone, profile.skin_tone.value):
        score += 1

    gender_match = profile.gender != Gender.UNKNOWN and (
        entry.gender == profile.gender or _matches(entry.tags, profile.gender.value)
    )
    category_match = selection is not None and entry.category == selection.category
    if gender_match or category_match:
        score += 1

    if profile.city:
        place = entry.city or entry.zone
        if place and place.strip().lower() == profile.city.strip().lower():
            score += 1

    if appearance.has_wildcard():
        score += WILDCARD_BONUS

    return score


def filter_catalog(
    catalog: Iterable[CatalogEntry],
    profile: UserProfile,
    category: Optional[Union[str, CategorySelection]] = None
) -> List[OutfitCandidate]:
    """
    Keep the best-matching catalog entries for a profile.

    Args:
        catalog: Catalog entries
        profile: User profile
        category: Category slug or parsed selection; a gendered slug fills in
            an unknown profile gender

    Returns:
        Entries at the top score when it is at least 2; otherwise entries
        with a wildcard attribute; otherwise an empty list. Catalog order is kept.
    """
    selection = parse_category(category) if isinstance(category, str) else category
    if selection is not None and profile.gender == Gender.UNKNOWN and selection.gender != Gender.UNKNOWN:
        profile = UserProfile(
            height_cm=profile.height_cm,
            weight_kg=profile.weight_kg,
            body_type=profile.body_type,
            skin_tone=profile.skin_tone,
            gender=selection.gender,
            city=profile.city,
        )

    scored = [OutfitCandidate(entry=entry, score=score_entry(entry, profile, selection)) for entry in catalog]
    if not scored:
        return []

    max_score = max(candidate.score for candidate in scored)
    if max_score >= MIN_CONFIDENT_SCORE:
        best = [candidate for candidate in scored if candidate.score == max_score]
        logger.debug(f"Catalog filter: {len(best)} entries at score {max_score}")
        return best

    general = [candidate for candidate in scored if candidate.entry.appearance.has_wildcard()]
    logger.debug(f"Catalog filter: no confident match (max {max_score}), {len(general)} general entries")
    return general
