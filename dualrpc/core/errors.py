"""Typed exception hierarchy for dualrpc."""

from __future__ import annotations

from typing import Any

# JSON-RPC error codes carried by decode failures. Mirrored in
# dualrpc.rpc.types.ErrorCode; kept here so core has no rpc import.
_PARSE_ERROR = -32700
_INVALID_REQUEST = -32600
_INVALID_PARAMS = -32602


class DualRpcError(Exception):
    """Base class for all dualrpc errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(DualRpcError):
    """Raised for configuration issues (missing file, invalid JSON, validation failure)."""


class LoadError(DualRpcError):
    """Raised when a JSON file cannot be read or parsed."""


# === Protocol errors ===


class ProtocolError(DualRpcError):
    """Base class for wire-level encode/decode failures."""


class DecodeError(ProtocolError):
    """Raised when incoming JSON does not match either JSON-RPC dialect.

    Attributes:
        rpc_code: JSON-RPC error code a server should answer with.
        data: Optional JSON value with extra detail for the error response.
    """

    rpc_code: int = _INVALID_REQUEST

    def __init__(self, message: str, data: Any = None) -> None:
        super().__init__(message)
        self.data = data


class EncodeError(ProtocolError):
    """Raised when a typed envelope cannot be rendered to the wire."""


class ParseError(DecodeError):
    """Raised when the message text is not valid JSON."""

    rpc_code = _PARSE_ERROR


class DuplicateFieldError(DecodeError):
    """Raised when an envelope repeats a member."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"duplicate field `{field}`")


class UnknownFieldError(DecodeError):
    """Raised when an envelope carries a member outside its closed schema."""

    def __init__(self, field: str, expected: tuple[str, ...]) -> None:
        self.field = field
        self.expected = expected
        names = ", ".join(f"`{name}`" for name in expected)
        super().__init__(f"unknown field `{field}`, expected one of {names}")


class MissingFieldError(DecodeError):
    """Raised when a required envelope member is absent."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"missing field `{field}`")


class InvalidIdShapeError(DecodeError):
    """Raised when an id is not a non-negative integer or a string."""


class InvalidParamsShapeError(DecodeError):
    """Raised when params is neither an array nor an object."""


class InvalidMethodShapeError(DecodeError):
    """Raised when method is not a non-empty string."""


class InvalidErrorShapeError(DecodeError):
    """Raised when an error member is not a well-formed error object."""


class InvalidRequestShapeError(DecodeError):
    """Raised when a request is neither an object nor an array of objects."""


class InvalidResponseShapeError(DecodeError):
    """Raised when a response is neither an object nor an array of objects."""


class IncompatibleDialectError(DecodeError, EncodeError):
    """Raised when a field combination matches neither the 1.0 nor the 2.0 rules.

    Both directions raise it: decoding an envelope whose members fit no dialect,
    and encoding an envelope that cannot be expressed in its own dialect.
    """


class InvalidParamsError(DecodeError):
    """Raised when params cannot be converted into the type a method expects."""

    rpc_code = _INVALID_PARAMS


class RpcCallError(DualRpcError):
    """Raised when a failure output is unwrapped as a result.

    Attributes:
        error: The JSON-RPC error object returned by the remote side.
    """

    def __init__(self, error: Any) -> None:
        self.error = error
        super().__init__(f"RPC error {error.code}: {error.message}")
