"""Leaf JSON-RPC value types shared by both dialects.

Dialect, Id, Params and Error are the building blocks of every envelope. Each
knows how to decode itself from a generic JSON value (raising a DecodeError
subclass on malformed input) and how to render itself back (to_json).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from dualrpc.core.errors import (
    DecodeError,
    IncompatibleDialectError,
    InvalidErrorShapeError,
    InvalidIdShapeError,
    InvalidParamsError,
    InvalidParamsShapeError,
)
from dualrpc.core.jsontext import duplicate_keys

T = TypeVar("T")


class Dialect(str, Enum):
    """JSON-RPC protocol dialect.

    1.0 envelopes carry no `jsonrpc` member; 2.0 envelopes carry the literal
    tag "2.0".
    """

    V1 = "1.0"
    V2 = "2.0"

    @property
    def tag(self) -> str | None:
        """Value of the `jsonrpc` member for this dialect (None means omitted)."""
        return None if self is Dialect.V1 else "2.0"

    @classmethod
    def from_tag(cls, tag: Any) -> Dialect:
        """Decode a present `jsonrpc` member.

        Only the literal "2.0" is valid. An absent member means 1.0 and is
        handled by the caller, so even "1.0" or null is rejected here.

        Raises:
            IncompatibleDialectError: For any other value.
        """
        if isinstance(tag, str) and tag == "2.0":
            return cls.V2
        raise IncompatibleDialectError(f"invalid jsonrpc version: {tag!r}")


ALL_DIALECTS: frozenset[Dialect] = frozenset(Dialect)

# Numeric ids are unsigned 64-bit on the wire
MAX_NUMERIC_ID = 2**64 - 1


# === Id ===


@dataclass(frozen=True)
class Id:
    """Request identifier correlating a call with its response.

    Attributes:
        value: An int in 0..2**64-1, a str, or None for the Null id. Null only
            appears in responses to requests whose id could not be read.
    """

    value: int | str | None

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, (int, str, type(None))):
            raise TypeError(f"id must be int, str or None, got: {type(self.value).__name__}")
        if isinstance(self.value, int) and not 0 <= self.value <= MAX_NUMERIC_ID:
            raise ValueError(f"numeric id must be in 0..2**64-1, got: {self.value}")

    @classmethod
    def null(cls) -> Id:
        return cls(None)

    @classmethod
    def coerce(cls, value: Id | int | str) -> Id:
        """Accept either an Id or a raw int/str."""
        return value if isinstance(value, Id) else cls(value)

    @classmethod
    def from_json(cls, value: Any, allow_null: bool = True) -> Id:
        """Decode an id member.

        Args:
            value: Generic JSON value of the `id` member.
            allow_null: Whether JSON null is accepted as the Null id.

        Raises:
            InvalidIdShapeError: For floats, numbers outside 0..2**64-1, booleans,
                structured values, or a disallowed null.
        """
        if value is None:
            if allow_null:
                return cls(None)
            raise InvalidIdShapeError("id must not be null")
        if isinstance(value, bool) or isinstance(value, float):
            raise InvalidIdShapeError(f"id must be a non-negative integer or string, got: {value!r}")
        if isinstance(value, int):
            if not 0 <= value <= MAX_NUMERIC_ID:
                raise InvalidIdShapeError(f"numeric id must be in 0..2**64-1, got: {value}")
            return cls(value)
        if isinstance(value, str):
            return cls(value)
        raise InvalidIdShapeError(
            f"id must be a non-negative integer or string, got: {type(value).__name__}"
        )

    @property
    def is_null(self) -> bool:
        return self.value is None

    @property
    def is_number(self) -> bool:
        return isinstance(self.value, int)

    @property
    def is_text(self) -> bool:
        return isinstance(self.value, str)

    def to_json(self) -> int | str | None:
        return self.value

    def __str__(self) -> str:
        return "null" if self.value is None else str(self.value)


# === Params ===


@dataclass
class Params:
    """Call parameters: positional (Array), named (Map), or Absent.

    Attributes:
        value: A list for Array, a dict for Map, None when the member is absent.
    """

    value: list[Any] | dict[str, Any] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.value, (list, dict, type(None))):
            raise TypeError(f"params must be list, dict or None, got: {type(self.value).__name__}")

    @classmethod
    def array(cls, values: list[Any] | None = None) -> Params:
        return cls(list(values) if values is not None else [])

    @classmethod
    def map(cls, values: dict[str, Any] | None = None) -> Params:
        return cls(dict(values) if values is not None else {})

    @classmethod
    def absent(cls) -> Params:
        return cls(None)

    @classmethod
    def coerce(cls, value: Params | list[Any] | dict[str, Any] | None) -> Params:
        """Accept either a Params or a raw list/dict/None."""
        return value if isinstance(value, Params) else cls(value)

    @classmethod
    def from_json(cls, value: Any) -> Params:
        """Decode a present `params` member by shape.

        Raises:
            InvalidParamsShapeError: If the value is not an array or object.
                A present null is rejected too; absence is expressed by
                leaving the member out.
        """
        if isinstance(value, (list, dict)):
            return cls(value)
        kind = "null" if value is None else type(value).__name__
        raise InvalidParamsShapeError(f"params must be an array or object, got: {kind}")

    @property
    def is_array(self) -> bool:
        return isinstance(self.value, list)

    @property
    def is_map(self) -> bool:
        return isinstance(self.value, dict)

    @property
    def is_absent(self) -> bool:
        return self.value is None

    def __len__(self) -> int:
        return 0 if self.value is None else len(self.value)

    def to_json(self) -> list[Any] | dict[str, Any] | None:
        return self.value

    def parse_as(self, target: type[T] | Any) -> T:
        """Convert params into an application type.

        Validation goes through pydantic, so any type a TypeAdapter accepts
        works: tuples for positional params, models or TypedDicts for named
        ones. Absent params are validated as None.

        Example:
            x, y = Params.array([1, 2]).parse_as(tuple[int, int])

        Raises:
            InvalidParamsError: If the params do not fit the target type.
        """
        try:
            return TypeAdapter(target).validate_python(self.value)
        except ValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(part) for part in err['loc']) or 'params'}: {err['msg']}"
                for err in e.errors()
            )
            raise InvalidParamsError(f"Invalid params: {details}.") from e

    def expect_empty(self) -> None:
        """Check that no parameters were passed.

        Absent params and an empty array pass; anything else, including an
        empty map, fails.

        Raises:
            InvalidParamsError: Naming the offending params in its data.
        """
        if self.value is None or self.value == []:
            return
        raise InvalidParamsError(
            "Invalid parameters: No parameters were expected",
            data=self.value,
        )


# === Error ===


class ErrorCode(IntEnum):
    """Reserved JSON-RPC error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
    SERVER_ERROR = -32000  # Server error range: -32000 to -32099

    @staticmethod
    def is_server_error(code: int) -> bool:
        return -32099 <= code <= -32000

    @classmethod
    def describe(cls, code: int) -> str:
        """Default message for a code. Unreserved codes read as server errors."""
        return _DESCRIPTIONS.get(code, "Server error")


_DESCRIPTIONS = {
    ErrorCode.PARSE_ERROR: "Parse error",
    ErrorCode.INVALID_REQUEST: "Invalid request",
    ErrorCode.METHOD_NOT_FOUND: "Method not found",
    ErrorCode.INVALID_PARAMS: "Invalid params",
    ErrorCode.INTERNAL_ERROR: "Internal error",
}

ERROR_FIELDS = ("code", "message", "data")


@dataclass(frozen=True)
class Error:
    """JSON-RPC error object.

    Attributes:
        code: Reserved or application-defined error code.
        message: Short human-readable description.
        data: Optional extra JSON value. None means the member is omitted.
    """

    code: int
    message: str
    data: Any = field(default=None)

    @classmethod
    def new(cls, code: int) -> Error:
        """Create an error with the default message for its code."""
        return cls(int(code), ErrorCode.describe(code))

    @classmethod
    def parse_error(cls) -> Error:
        return cls.new(ErrorCode.PARSE_ERROR)

    @classmethod
    def invalid_request(cls) -> Error:
        return cls.new(ErrorCode.INVALID_REQUEST)

    @classmethod
    def method_not_found(cls) -> Error:
        return cls.new(ErrorCode.METHOD_NOT_FOUND)

    @classmethod
    def invalid_params(cls, message: str) -> Error:
        return cls(int(ErrorCode.INVALID_PARAMS), message)

    @classmethod
    def invalid_params_with_details(cls, message: str, details: Any) -> Error:
        return cls(int(ErrorCode.INVALID_PARAMS), f"Invalid parameters: {message}", details)

    @classmethod
    def internal_error(cls) -> Error:
        return cls.new(ErrorCode.INTERNAL_ERROR)

    @classmethod
    def server_error(cls, code: int, message: str | None = None) -> Error:
        if not ErrorCode.is_server_error(code):
            raise ValueError(f"server error code must be in -32099..-32000, got: {code}")
        return cls(code, message or ErrorCode.describe(code))

    @classmethod
    def from_exception(cls, exc: DecodeError) -> Error:
        """Build the error a server answers with when decoding fails."""
        return cls(exc.rpc_code, exc.message, exc.data)

    @classmethod
    def from_json(cls, value: Any) -> Error:
        """Decode an `error` member.

        Raises:
            InvalidErrorShapeError: If the value is not an object with an
                integer code and string message, or carries other members.
        """
        if not isinstance(value, dict):
            kind = "null" if value is None else type(value).__name__
            raise InvalidErrorShapeError(f"error must be an object, got: {kind}")
        for key in value:
            if key not in ERROR_FIELDS:
                raise InvalidErrorShapeError(f"unknown error field `{key}`")
        repeated = duplicate_keys(value)
        if repeated:
            raise InvalidErrorShapeError(f"duplicate error field `{repeated[0]}`")
        code = value.get("code")
        if isinstance(code, bool) or not isinstance(code, int):
            raise InvalidErrorShapeError(f"error code must be an integer, got: {code!r}")
        message = value.get("message")
        if not isinstance(message, str):
            raise InvalidErrorShapeError(f"error message must be a string, got: {message!r}")
        return cls(code, message, value.get("data"))

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            data["data"] = self.data
        return data

    def __str__(self) -> str:
        return f"{self.message} ({self.code})"
