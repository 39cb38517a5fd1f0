"""
Response Extractor (v1.0.0)
Pull one JSON value out of free-form model text.

Models wrap JSON in markdown fences and prepend narrative ("Here are...").
Everything here is pure so it can be tested with literal strings.
"""
import re
import json
import logging
from typing import Any, Dict, Iterable, Sequence

from outfit_ai.core.errors import ParseError

logger = logging.getLogger(__name__)

# Openers the model prepends before the JSON payload
NARRATIVE_PREFIXES = (
    "I'll create",
    "I'll provide",
    "Here are",
    "Here's",
    "I can help",
    "I'll help",
    "Let me create",
    "Based on",
    "I understand",
    "Sure",
    "Certainly",
)

_FENCE = re.compile(r"```(?:json|JSON)?[ \t]*\n?|\n?```")


def strip_code_fences(text: str) -> str:
    """Remove markdown code fence markers."""
    return _FENCE.sub("", text or "").strip()


def _json_start(text: str) -> int:
    positions = [pos for pos in (text.find("["), text.find("{")) if pos != -1]
    return min(positions) if positions else -1


def strip_narrative(text: str) -> str:
    """
    Drop prose around the JSON value.

    Cuts everything before the first '[' or '{' and after the last ']' or '}'.
    """
    cleaned = text.strip()
    lowered = cleaned.lower()
    for prefix in NARRATIVE_PREFIXES:
        if lowered.startswith(prefix.lower()):
            logger.debug(f"Removing narrative prefix: {prefix!r}")
            cleaned = cleaned[len(prefix):]
            break

    start = _json_start(cleaned)
    if start > 0:
        cleaned = cleaned[start:]

    end = max(cleaned.rfind("]"), cleaned.rfind("}"))
    if end != -1 and end < len(cleaned) - 1:
        cleaned = cleaned[:end + 1]

    return cleaned


def extract(raw_text: str) -> Any:
    """
    Parse the JSON value embedded in a model response.

    Raises:
        ParseError: If nothing parseable remains after cleaning
    """
    if not raw_text or not raw_text.strip():
        raise ParseError("Empty model response")

    cleaned = strip_narrative(strip_code_fences(raw_text))
    if _json_start(cleaned) != 0:
        raise ParseError("No JSON value found in model response")

    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.debug(f"Unparsable response: {cleaned[:200]}")
        raise ParseError(f"Invalid JSON in model response: {e.msg} at position {e.pos}") from e


def extract_object(raw_text: str, required_keys: Iterable[str] = ()) -> Dict[str, Any]:
    """
    Parse a JSON object and require the given keys.

    Raises:
        ParseError: If the value is not an object or keys are missing
    """
    value = extract(raw_text)
    if not isinstance(value, dict):
        raise ParseError(f"Expected a JSON object, got {type(value).__name__}")
    missing = [key for key in required_keys if key not in value]
    if missing:
        raise ParseError(f"Missing keys in model response: {', '.join(missing)}")
    return value


def extract_fields(raw_text: str, names: Sequence[str]) -> Dict[str, str]:
    """
    Parse 'NAME: value' lines, e.g. the image validation format.

    Returns:
        Dict of the names that were found (upper-case keys)
    """
    fields: Dict[str, str] = {}
    for name in names:
        match = re.search(rf"^\s*{re.escape(name)}\s*:\s*(.+?)\s*$", raw_text or "", re.IGNORECASE | re.MULTILINE)
        if match:
            fields[name.upper()] = match.group(1).strip("[] ")
    return fields
