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


def extract_json_boundaries(text: str) -> tuple[str, int, int] | None:
    """
    Extract JSON string and boundaries from text.

    Args:
        text: Text potentially containing JSON

    Returns:
        (extracted_text, start, end) or None if not found
    """
    working_text = text

    # Remove markdown code blocks
    if "```" in working_text:
        if "```json" in working_text:
            start_marker = working_text.find("```json") + 7
        else:
            start_marker = working_text.find("```") + 3

        end_marker = working_text.find("```", start_marker)
        if end_marker != -1:
            working_text = working_text[start_marker:end_marker].strip()

    # Find JSON object boundaries
    start = working_text.find("{")
    end = working_text.rfind("}")

    if start == -1 or end == -1:
        return None

    return (working_text, start, end + 1)


def extract_json(text: str, repair: bool = True) -> dict[str, Any]:
    """
    Extract and parse a JSON object from a blueprint document.

    Upstream documents sometimes arrive wrapped in markdown fences or with
    trailing commas; both are tolerated when ``repair`` is set.

    Args:
        text: Text containing JSON
        repair: Attempt to repair invalid JSON with json_repair

    Returns:
        Parsed JSON dictionary

    Raises:
        JSONParseError: If parsing fails
    """
    text = text.strip()

    boundaries = extract_json_boundaries(text)
    if boundaries is None:
        raise JSONParseError("No JSON object found in text")

    extracted_text, start, end = boundaries
    json_str = extracted_text[start:end]

    # Try msgspec first (fastest)
    try:
        result = msgspec.json.decode(json_str.encode("utf-8"))
    except msgspec.DecodeError as e:
        if not repair:
            raise JSONParseError(f"Invalid JSON: {e}", e) from e
    else:
        if not isinstance(result, dict):
            raise JSONParseError(f"Expected dict, got {type(result).__name__}")
        return result

    # Last resort: json_repair
    try:
        repaired = repair_json(json_str)
        result = json.loads(repaired)
    except (ValueError, TypeError) as repair_error:
        raise JSONParseError(f"JSON repair failed: {repair_error}", repair_error) from repair_error

    if not isinstance(result, dict):
        raise JSONParseError(f"Expected dict, got {type(result).__name__}")
    return result


def parse_config(value: Any, expected: type = list) -> Any:
    """
    Decode a view configuration payload.

    Payloads are JSON strings in the blueprint, but some producers embed the
    decoded structure directly; both forms are accepted. Empty strings decode
    to an empty ``expected`` instance.

    Args:
        value: Raw payload (str, list, dict or None)
        expected: Required top-level type (list or dict)

    Returns:
        Decoded payload of type ``expected``

    Raises:
        JSONParseError: If the payload is malformed or of the wrong shape
    """
    if value is None:
        return expected()

    if isinstance(value, (bytes, str)):
        raw = value.encode("utf-8") if isinstance(value, str) else value
        if not raw.strip():
            return expected()
        try:
            value = msgspec.json.decode(raw)
        except msgspec.DecodeError as e:
            raise JSONParseError(f"Invalid configuration JSON: {e}", e) from e

    if not isinstance(value, expected):
        raise JSONParseError(f"Expected {expected.__name__}, got {type(value).__name__}")
    return value


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string using fastest available library.

    Key order is preserved, so identical input always yields identical text.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent, etc.)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)

    if indent == 0:
        try:
            return orjson.dumps(obj).decode("utf-8")
        except (TypeError, ValueError):
            # Fallback for edge cases (e.g., integers outside 64-bit range)
            pass

        try:
            return msgspec.json.encode(obj).decode("utf-8")
        except (TypeError, ValueError):
            pass

    # Pretty-printed output or last fallback (most compatible)
    return json.dumps(obj, indent=indent if indent > 0 else None, ensure_ascii=False, default=str)
