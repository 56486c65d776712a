"""Fast, type-safe JSON parsing with multiple backends."""

from typing import Any
import json

import msgspec
import orjson
from json_repair import repair_json


class JSONParseError(Exception):
    """JSON parsing failed."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code block, if any."""
    working_text = text.strip()

    if "```" in working_text:
        if "```json" in working_text:
            start_marker = working_text.find("```json") + 7
        else:
            start_marker = working_text.find("```") + 3

        end_marker = working_text.find("```", start_marker)
        if end_marker != -1:
            working_text = working_text[start_marker:end_marker].strip()

    return working_text


def extract_json_boundaries(text: str, opener: str = "{", closer: str = "}") -> tuple[str, int, int] | None:
    """
    Extract JSON string and boundaries from text.

    Args:
        text: Text potentially containing JSON
        opener: Opening bracket of the expected top-level value
        closer: Closing bracket of the expected top-level value

    Returns:
        (extracted_text, start, end) or None if not found
    """
    working_text = strip_code_fences(text)

    start = working_text.find(opener)
    end = working_text.rfind(closer)

    if start == -1 or end == -1 or end < start:
        return None

    return (working_text, start, end + 1)


def _decode(json_str: str, expected: type, repair: bool) -> Any:
    """Decode with msgspec, then stdlib, then json_repair."""
    try:
        result = msgspec.json.decode(json_str.encode("utf-8"))
        if not isinstance(result, expected):
            raise JSONParseError(f"Expected {expected.__name__}, got {type(result).__name__}")
        return result
    except msgspec.DecodeError as e:
        if not repair:
            raise JSONParseError(f"Invalid JSON: {e}", e)

    # Try standard library
    try:
        result = json.loads(json_str)
        if not isinstance(result, expected):
            raise JSONParseError(f"Expected {expected.__name__}, got {type(result).__name__}")
        return result
    except json.JSONDecodeError:
        pass

    # Last resort: try json_repair
    try:
        repaired = repair_json(json_str)
        result = json.loads(repaired)
    except Exception as repair_error:
        raise JSONParseError(f"JSON repair failed: {repair_error}", repair_error)
    if not isinstance(result, expected):
        raise JSONParseError(f"Expected {expected.__name__}, got {type(result).__name__}")
    return result


def extract_json(text: str, repair: bool = True) -> dict[str, Any]:
    """
    Extract and parse a JSON object from text with automatic extraction and fallbacks.

    Args:
        text: Text containing JSON
        repair: Attempt to repair invalid JSON with json_repair

    Returns:
        Parsed JSON dictionary

    Raises:
        JSONParseError: If parsing fails
    """
    boundaries = extract_json_boundaries(text)
    if boundaries is None:
        raise JSONParseError("No JSON object found in text")

    extracted_text, start, end = boundaries
    return _decode(extracted_text[start:end], dict, repair)


def extract_json_array(text: str, repair: bool = True) -> list[Any]:
    """
    Extract and parse a JSON array from text.

    Raises:
        JSONParseError: If no array is present or parsing fails
    """
    boundaries = extract_json_boundaries(text, "[", "]")
    if boundaries is None:
        raise JSONParseError("No JSON array found in text")

    extracted_text, start, end = boundaries
    return _decode(extracted_text[start:end], list, repair)


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string using fastest available library.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent, etc.)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)

    # Use orjson for compact output (fastest)
    if indent == 0:
        try:
            return orjson.dumps(obj).decode("utf-8")
        except (TypeError, ValueError):
            # Fallback for edge cases (e.g., integers outside 64-bit range)
            pass

    # Use stdlib for pretty-printed output or as fallback (most compatible)
    return json.dumps(obj, indent=indent if indent > 0 else None, default=str)
