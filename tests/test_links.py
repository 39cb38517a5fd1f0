"""
Tests for shopping and inspiration link building.
"""
from urllib.parse import quote

from outfit_ai.core.links import (
    LinkBuilder,
    extract_key_items,
    normalize_outfit,
    sanitize_prompt,
)


class TestNormalization:
    def test_normalize_outfit(self):
        assert normalize_outfit("Navy blazer with White shirt + Jeans") == "navy blazer white shirt jeans"

    def test_sanitize_prompt(self):
        assert sanitize_prompt('  a "fancy"\n\tdinner  ') == "a 'fancy' dinner"
        assert sanitize_prompt(None) == ""


class TestKeyItems:
    """Marketplace queries carry at most two item phrases."""

    def test_color_item_pairs(self):
        assert extract_key_items("black shirt beige shorts white sneakers") == ["black shirt", "beige shorts"]

    def test_item_then_color(self):
        assert extract_key_items("shirt black") == ["shirt black"]

    def test_lone_items_then_colors(self):
        assert extract_key_items("linen kurta cotton") == ["kurta"]
        assert extract_key_items("something teal") == ["teal"]

    def test_first_token_as_last_resort(self):
        assert extract_key_items("ethnic ensemble") == ["ethnic"]

    def test_empty(self):
        assert extract_key_items("") == []


class TestLinkBuilder:
    def test_one_link_per_platform(self):
        links = LinkBuilder().build_links("Black shirt + Beige shorts + White sneakers", "beach dinner")

        assert [link.platform for link in links] == ["Pinterest", "Google Images", "Amazon", "Myntra"]
        assert [link.intent for link in links] == ["inspiration", "inspiration", "purchase", "purchase"]

    def test_inspiration_query_has_full_outfit(self):
        links = LinkBuilder().build_links("Black shirt + Beige shorts", "beach dinner")
        pinterest = links[0]

        assert pinterest.search_query == "black shirt beige shorts outfit beach dinner"
        assert pinterest.url == "https://www.pinterest.com/search/pins/?q=" + quote(pinterest.search_query, safe="")

    def test_purchase_query_is_short(self):
        links = LinkBuilder().build_links("Black shirt + Beige shorts + White sneakers + Brown belt")
        amazon = [link for link in links if link.platform == "Amazon"][0]

        assert amazon.search_query == "black shirt beige shorts"

    def test_prompt_terms_are_limited(self):
        prompt = "one two three four five six seven eight nine ten"
        query = LinkBuilder().inspiration_query("White tee", prompt)
        assert query == "white tee outfit one two three four five six seven eight"

    def test_deterministic(self):
        builder = LinkBuilder()
        first = [link.to_dict() for link in builder.build_links("Navy suit", "interview")]
        second = [link.to_dict() for link in builder.build_links("Navy suit", "interview")]
        assert first == second

    def test_empty_outfit_still_builds_links(self):
        links = LinkBuilder().build_links("")
        assert len(links) == 4
        assert links[2].search_query == "outfit"
