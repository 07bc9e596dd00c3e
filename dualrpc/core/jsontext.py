"""JSON text parsing and printing for wire messages.

The stdlib json module is the generic value layer: objects become dicts, arrays
lists, and scalars their Python equivalents. On top of that:

- Objects are built as JsonObject, which remembers keys that appeared more than
  once. A plain dict keeps only the last occurrence, which would hide the
  duplicate members the envelope decoders must reject.
- NaN, Infinity and numbers that overflow a float are parse errors, as they
  are not JSON and could never be encoded back.
- Output is compact (no whitespace) and NaN/Infinity are refused, so encoded
  text is valid JSON that decodes back to the same envelope.
"""

from __future__ import annotations

import json
import math
from typing import Any

from dualrpc.core.errors import EncodeError, ParseError


class JsonObject(dict):
    """A decoded JSON object that records repeated keys.

    Attributes:
        duplicate_keys: Keys seen more than once, in order of first repeat.
            The dict itself holds the last value for each key.
    """

    duplicate_keys: tuple[str, ...] = ()


def _object_pairs_hook(pairs: list[tuple[str, Any]]) -> JsonObject:
    obj = JsonObject()
    repeated: list[str] = []
    for key, value in pairs:
        if key in obj and key not in repeated:
            repeated.append(key)
        obj[key] = value
    if repeated:
        obj.duplicate_keys = tuple(repeated)
    return obj


def _reject_constant(name: str) -> Any:
    raise ParseError(f"Invalid JSON: {name} is not a JSON value")


def _parse_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ParseError(f"Invalid JSON: {text} is out of range for a float")
    return value


def duplicate_keys(obj: dict[str, Any]) -> tuple[str, ...]:
    """Return the repeated keys of a decoded object (empty for plain dicts)."""
    return getattr(obj, "duplicate_keys", ())


def loads(text: str | bytes) -> Any:
    """Parse JSON text into a generic value.

    Args:
        text: UTF-8 JSON text, as str or bytes.

    Returns:
        The decoded value, with objects as JsonObject.

    Raises:
        ParseError: If the text is not valid JSON.
    """
    try:
        return json.loads(
            text,
            object_pairs_hook=_object_pairs_hook,
            parse_constant=_reject_constant,
            parse_float=_parse_float,
        )
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}") from e
    except UnicodeDecodeError as e:
        raise ParseError(f"Invalid UTF-8: {e}") from e


def dumps(value: Any, ensure_ascii: bool = False) -> str:
    """Render a generic value as compact JSON text.

    Raises:
        EncodeError: If the value holds something JSON cannot represent.
    """
    try:
        return json.dumps(
            value,
            separators=(",", ":"),
            ensure_ascii=ensure_ascii,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise EncodeError(f"Value is not JSON serializable: {e}") from e
