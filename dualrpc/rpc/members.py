"""Member scanning shared by the request and response codecs."""

from __future__ import annotations

from collections.abc import Collection
from typing import Any

from dualrpc.core.errors import (
    DuplicateFieldError,
    IncompatibleDialectError,
    UnknownFieldError,
)
from dualrpc.core.jsontext import duplicate_keys
from dualrpc.rpc.types import Dialect


def check_members(obj: dict[str, Any], fields: tuple[str, ...]) -> None:
    """Enforce a closed schema on an envelope object.

    Raises:
        UnknownFieldError: For the first member not in `fields`.
        DuplicateFieldError: For the first member that appeared twice.
    """
    for key in obj:
        if key not in fields:
            raise UnknownFieldError(key, fields)
    repeated = duplicate_keys(obj)
    if repeated:
        raise DuplicateFieldError(repeated[0])


def read_dialect(obj: dict[str, Any]) -> Dialect:
    """Infer the dialect from the `jsonrpc` member. Absent means 1.0."""
    if "jsonrpc" not in obj:
        return Dialect.V1
    return Dialect.from_tag(obj["jsonrpc"])


def require_dialect(dialect: Dialect, enabled: Collection[Dialect]) -> None:
    """Reject envelopes in a dialect the codec was configured without.

    Raises:
        IncompatibleDialectError: If `dialect` is not in `enabled`.
    """
    if dialect not in enabled:
        allowed = ", ".join(sorted(d.value for d in enabled))
        raise IncompatibleDialectError(
            f"JSON-RPC {dialect.value} is not enabled (accepting: {allowed})"
        )


def json_kind(value: Any) -> str:
    """Name the JSON shape of a generic value, for error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
