"""
Shopping Link Builder (v1.0.0)
Deterministic inspiration and marketplace search links for an outfit.

Inspiration platforms get the full outfit text; marketplaces only get the
1-2 key item phrases because multi-item queries return poor product results.
"""
import re
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence
from urllib.parse import quote

from outfit_ai.core.models import ShoppingLink

logger = logging.getLogger(__name__)

CLOTHING_ITEMS = frozenset({
    "shirt", "t-shirt", "tshirt", "blouse", "top", "dress", "pants", "jeans", "shorts", "skirt",
    "blazer", "jacket", "coat", "sweater", "hoodie", "cardigan", "suit", "trouser", "trousers",
    "chinos", "polo", "shoes", "sneakers", "boots", "heels", "flats", "sandals", "loafers",
    "oxfords", "gown", "jumpsuit", "romper", "playsuit", "bodysuit", "tank", "crop", "tunic",
    "kurti", "salwar", "lehenga", "sari", "saree", "dupatta", "kurta", "dhoti", "sherwani",
    "bandhgala", "joggers", "leggings", "palazzo", "sundress", "trench", "parka", "vest",
})

COLORS = frozenset({
    "black", "white", "red", "blue", "navy", "green", "yellow", "purple", "pink", "orange",
    "brown", "beige", "cream", "gray", "grey", "silver", "gold", "olive", "burgundy",
    "maroon", "coral", "teal", "turquoise", "lavender", "mint", "peach", "tan", "mustard",
    "rust", "sage", "indigo", "plum", "rose", "copper", "bronze", "champagne", "khaki",
    "charcoal", "ivory", "camel",
})

_CONNECTORS = re.compile(r"\b(?:paired with|with|and|combo|outfit)\b")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


@dataclass(frozen=True)
class Platform:
    """A search destination with a fixed URL template."""
    name: str
    url_template: str
    description: str
    intent: str

    def link(self, query: str) -> ShoppingLink:
        return ShoppingLink(
            platform=self.name,
            search_query=query,
            url=self.url_template.format(query=quote(query, safe="")),
            description=self.description,
            intent=self.intent,
        )


INSPIRATION_PLATFORMS = (
    Platform("Pinterest", "https://www.pinterest.com/search/pins/?q={query}",
             "Outfit inspiration and styling ideas", "inspiration"),
    Platform("Google Images", "https://www.google.com/search?tbm=isch&q={query}",
             "Visual outfit references", "inspiration"),
)

PURCHASE_PLATFORMS = (
    Platform("Amazon", "https://www.amazon.com/s?k={query}",
             "Shop similar items", "purchase"),
    Platform("Myntra", "https://www.myntra.com/search?rawQuery={query}",
             "Shop similar items on Myntra", "purchase"),
)


def normalize_outfit(outfit_text: str) -> str:
    """'Navy blazer with White shirt + jeans' -> 'navy blazer white shirt jeans'."""
    lowered = (outfit_text or "").lower()
    replaced = re.sub(r"[+/,]", " ", lowered)
    replaced = _CONNECTORS.sub(" ", replaced)
    return re.sub(r"\s+", " ", replaced).strip()


def sanitize_prompt(value: Optional[str]) -> str:
    """Make free user text safe to embed in quoted prompts and URLs."""
    if not value:
        return ""
    collapsed = re.sub(r"\s+", " ", value).strip()
    return _CONTROL_CHARS.sub("", collapsed).replace('"', "'")


def limit_terms(value: str, max_terms: int) -> str:
    return " ".join((value or "").split()[:max_terms])


def extract_key_items(normalized: str, max_items: int = 2) -> List[str]:
    """
    Pick the item phrases a shopper would actually search for.

    Order of preference: color+item pairs (either order), lone items,
    lone colors, and finally the first token.
    """
    tokens = normalized.split()
    if not tokens:
        return []

    phrases: List[str] = []

    def used(token: str) -> bool:
        return any(token in phrase.split() for phrase in phrases)

    for current, following in zip(tokens, tokens[1:]):
        if len(phrases) >= max_items:
            break
        if (current in COLORS and following in CLOTHING_ITEMS) or \
                (current in CLOTHING_ITEMS and following in COLORS):
            if not used(current) and not used(following):
                phrases.append(f"{current} {following}")

    for vocabulary in (CLOTHING_ITEMS, COLORS):
        for token in tokens:
            if len(phrases) >= max_items:
                break
            if token in vocabulary and not used(token):
                phrases.append(token)

    if not phrases:
        phrases.append(tokens[0])

    return phrases[:max_items]


class LinkBuilder:
    """Build search links for one outfit description."""

    def __init__(
        self,
        inspiration_platforms: Sequence[Platform] = INSPIRATION_PLATFORMS,
        purchase_platforms: Sequence[Platform] = PURCHASE_PLATFORMS,
        max_prompt_terms: int = 8,
        max_key_items: int = 2
    ):
        self.inspiration_platforms = tuple(inspiration_platforms)
        self.purchase_platforms = tuple(purchase_platforms)
        self.max_prompt_terms = max_prompt_terms
        self.max_key_items = max_key_items

    def inspiration_query(self, outfit_text: str, prompt_text: Optional[str] = None) -> str:
        core = normalize_outfit(outfit_text)
        prompt_terms = limit_terms(sanitize_prompt(prompt_text), self.max_prompt_terms)
        return " ".join(part for part in (core, "outfit", prompt_terms) if part)

    def purchase_query(self, outfit_text: str) -> str:
        key_items = extract_key_items(normalize_outfit(outfit_text), self.max_key_items)
        return " ".join(key_items) or "outfit"

    def build_links(self, outfit_text: str, prompt_text: Optional[str] = None) -> List[ShoppingLink]:
        """
        Build one link per platform.

        Args:
            outfit_text: Outfit description, e.g. "Black shirt + Beige shorts"
            prompt_text: Optional user prompt; up to 8 terms refine inspiration searches

        Returns:
            Inspiration links followed by purchase links
        """
        inspiration = self.inspiration_query(outfit_text, prompt_text)
        purchase = self.purchase_query(outfit_text)

        links = [platform.link(inspiration) for platform in self.inspiration_platforms]
        links.extend(platform.link(purchase) for platform in self.purchase_platforms)
        return links
