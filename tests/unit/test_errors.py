"""Tests for the dualrpc exception hierarchy."""

import pytest

from dualrpc.core.errors import (
    ConfigError,
    DecodeError,
    DualRpcError,
    DuplicateFieldError,
    EncodeError,
    IncompatibleDialectError,
    InvalidParamsError,
    LoadError,
    MissingFieldError,
    ParseError,
    ProtocolError,
    RpcCallError,
    UnknownFieldError,
)
from dualrpc.rpc.types import Error


class TestHierarchy:
    """All errors share one base so callers can catch them together."""

    @pytest.mark.parametrize(
        "exc_class",
        [ConfigError, LoadError, ProtocolError, DecodeError, EncodeError, ParseError],
    )
    def test_subclass_of_base(self, exc_class):
        assert issubclass(exc_class, DualRpcError)

    def test_incompatible_dialect_is_both_directions(self):
        """Encoders and decoders both raise it, so it is caught as either."""
        assert issubclass(IncompatibleDialectError, DecodeError)
        assert issubclass(IncompatibleDialectError, EncodeError)

    def test_message_attribute(self):
        error = ConfigError("bad config")
        assert error.message == "bad config"
        assert str(error) == "bad config"


class TestDecodeErrors:
    """Tests for decode error details."""

    def test_default_rpc_code_is_invalid_request(self):
        assert DecodeError("x").rpc_code == -32600
        assert MissingFieldError("id").rpc_code == -32600

    def test_specific_rpc_codes(self):
        assert ParseError("x").rpc_code == -32700
        assert InvalidParamsError("x").rpc_code == -32602

    def test_field_errors_name_the_field(self):
        assert DuplicateFieldError("id").message == "duplicate field `id`"
        assert MissingFieldError("method").field == "method"

    def test_unknown_field_lists_expected(self):
        error = UnknownFieldError("foo", ("jsonrpc", "id"))
        assert error.field == "foo"
        assert error.message == "unknown field `foo`, expected one of `jsonrpc`, `id`"

    def test_data_defaults_to_none(self):
        assert DecodeError("x").data is None
        assert DecodeError("x", data=[1]).data == [1]


class TestRpcCallError:
    """Tests for RpcCallError."""

    def test_wraps_error(self):
        error = Error.method_not_found()
        exc = RpcCallError(error)

        assert exc.error is error
        assert exc.message == "RPC error -32601: Method not found"
