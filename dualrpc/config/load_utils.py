"""Reading config files.

Config files are parsed with the same JSON layer as wire messages, so they
follow the same rules: NaN and Infinity are errors, and a key repeated inside
any object is rejected rather than silently keeping the last value.

Use:
- load_json_file() for a file the user named (missing is an error)
- load_json_file_optional() for config layers that may not exist
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from dualrpc.core.errors import LoadError, ParseError
from dualrpc.core.jsontext import duplicate_keys, loads

logger = logging.getLogger(__name__)


def _find_repeated_key(value: Any, prefix: str = "") -> str | None:
    """Dotted path of the first key repeated in any nested object."""
    if isinstance(value, dict):
        repeated = duplicate_keys(value)
        if repeated:
            return prefix + repeated[0]
        for key, item in value.items():
            found = _find_repeated_key(item, f"{prefix}{key}.")
            if found:
                return found
    elif isinstance(value, list):
        for index, item in enumerate(value):
            found = _find_repeated_key(item, f"{prefix}{index}.")
            if found:
                return found
    return None


def load_json_file(path: Path, error_context: str = "") -> dict[str, Any]:
    """Read a config file into a dict.

    An empty or whitespace-only file reads as {}.

    Args:
        path: File to read. A UTF-8 byte order mark is tolerated.
        error_context: Prefix for error messages (e.g. "config").

    Raises:
        LoadError: If the file is missing or unreadable, is not valid JSON,
            repeats a key, or holds something other than an object.
    """
    prefix = f"{error_context}: " if error_context else ""

    try:
        text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as e:
        raise LoadError(f"{prefix}File not found: {path}") from e
    except OSError as e:
        raise LoadError(f"{prefix}Failed to read file {path}: {e}") from e

    if not text.strip():
        return {}

    try:
        data = loads(text)
    except ParseError as e:
        raise LoadError(f"{prefix}{e.message} ({path})") from e

    if not isinstance(data, dict):
        raise LoadError(f"{prefix}Expected object in {path}, got {type(data).__name__}")

    repeated = _find_repeated_key(data)
    if repeated:
        raise LoadError(f"{prefix}Duplicate key `{repeated}` in {path}")

    return data


def load_json_file_optional(path: Path, error_context: str = "") -> dict[str, Any] | None:
    """Like load_json_file, but None when there is no file at `path`."""
    if not path.is_file():
        logger.debug("Config file not found: %s", path)
        return None

    logger.debug("Loading config file: %s", path)
    return load_json_file(path, error_context)
