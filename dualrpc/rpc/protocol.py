"""JSON-RPC 1.0/2.0 message parsing and serialization.

A message is one envelope object or an array of envelopes (a batch). Decoding
tries the single-object shape first, then the array shape; any other top-level
JSON value is rejected. Batch order is preserved in both directions, and an
empty array is a valid empty batch.

Server-side:
    decode_request(text) -> Call | list[Call]
    encode_response(response) -> str

Client-side:
    encode_request(request) -> str
    decode_response(text) -> Output | list[Output]

The module-level functions use a Codec that accepts both dialects. Build a
Codec from a CodecConfig to restrict it to one dialect or to salvage invalid
calls by default.
"""

from __future__ import annotations

import logging
from typing import Any

from dualrpc.config.schema import CodecConfig
from dualrpc.core.errors import (
    DecodeError,
    EncodeError,
    InvalidRequestShapeError,
    InvalidResponseShapeError,
)
from dualrpc.core.jsontext import dumps, loads
from dualrpc.rpc.envelopes import Call, InvalidCall, Output, Request, Response
from dualrpc.rpc.members import json_kind
from dualrpc.rpc.request_codec import decode_call, encode_call, salvage_call
from dualrpc.rpc.response_codec import decode_output, encode_output
from dualrpc.rpc.types import Dialect, ErrorCode

logger = logging.getLogger(__name__)

# JSON-RPC error codes
PARSE_ERROR = int(ErrorCode.PARSE_ERROR)
INVALID_REQUEST = int(ErrorCode.INVALID_REQUEST)
METHOD_NOT_FOUND = int(ErrorCode.METHOD_NOT_FOUND)
INVALID_PARAMS = int(ErrorCode.INVALID_PARAMS)
INTERNAL_ERROR = int(ErrorCode.INTERNAL_ERROR)
SERVER_ERROR = int(ErrorCode.SERVER_ERROR)  # Server error range: -32000 to -32099


class Codec:
    """Encoder/decoder for JSON-RPC messages bound to a CodecConfig.

    Holds no mutable state, so one instance can be shared across threads.

    Example:
        codec = Codec(CodecConfig(dialects=["2.0"]))
        request = codec.decode_request('{"jsonrpc":"2.0","method":"ping","id":1}')
    """

    def __init__(self, config: CodecConfig | None = None) -> None:
        self._config = config or CodecConfig()
        self._dialects = frozenset(Dialect(name) for name in self._config.dialects)

    @property
    def config(self) -> CodecConfig:
        return self._config

    @property
    def dialects(self) -> frozenset[Dialect]:
        return self._dialects

    # === Requests ===

    def decode_request(self, text: str | bytes, salvage: bool | None = None) -> Request:
        """Parse a request message.

        Args:
            text: UTF-8 JSON text.
            salvage: Decode calls that fail validation to InvalidCall rather
                than raising. Defaults to the config's salvage_invalid_calls.

        Returns:
            A single Call, or a list of Calls for a batch.

        Raises:
            ParseError: If the text is not valid JSON.
            InvalidRequestShapeError: If the top level is neither object nor array.
            DecodeError: If a call fails validation and salvage is off.
        """
        if salvage is None:
            salvage = self._config.salvage_invalid_calls
        return self.decode_request_value(loads(text), salvage=salvage)

    def decode_request_value(self, value: Any, salvage: bool = False) -> Request:
        """Like decode_request, for an already parsed JSON value."""
        if isinstance(value, dict):
            return self._decode_one_call(value, salvage)
        if isinstance(value, list):
            return [self._decode_one_call(item, salvage) for item in value]
        raise InvalidRequestShapeError(
            f"Request must be a JSON object or array, got: {json_kind(value)}"
        )

    def _decode_one_call(self, value: Any, salvage: bool) -> Call:
        try:
            return decode_call(value, self._dialects)
        except DecodeError as e:
            if not salvage:
                logger.debug("Rejected call: %s", e.message)
                raise
            return salvage_call(value, e.message, self._dialects)

    def encode_request(self, request: Request) -> str:
        """Serialize a Call or a batch of Calls to JSON text.

        Raises:
            IncompatibleDialectError: If a call cannot be written in its dialect.
            EncodeError: For InvalidCall elements or non-Call values.
        """
        return dumps(self.encode_request_value(request), ensure_ascii=self._config.ensure_ascii)

    def encode_request_value(self, request: Request) -> dict[str, Any] | list[dict[str, Any]]:
        if isinstance(request, Call):
            return encode_call(request, self._dialects)
        if isinstance(request, (list, tuple)):
            return [encode_call(call, self._dialects) for call in request]
        raise EncodeError(
            f"Request must be a Call or a list of Calls, got: {type(request).__name__}"
        )

    # === Responses ===

    def decode_response(self, text: str | bytes) -> Response:
        """Parse a response message.

        Returns:
            A single Output, or a list of Outputs for a batch.

        Raises:
            ParseError: If the text is not valid JSON.
            InvalidResponseShapeError: If the top level is neither object nor array.
            DecodeError: If any output fails validation.
        """
        return self.decode_response_value(loads(text))

    def decode_response_value(self, value: Any) -> Response:
        """Like decode_response, for an already parsed JSON value."""
        try:
            if isinstance(value, dict):
                return decode_output(value, self._dialects)
            if isinstance(value, list):
                return [decode_output(item, self._dialects) for item in value]
        except DecodeError as e:
            logger.debug("Rejected response: %s", e.message)
            raise
        raise InvalidResponseShapeError(
            f"Response must be a JSON object or array, got: {json_kind(value)}"
        )

    def encode_response(self, response: Response) -> str:
        """Serialize an Output or a batch of Outputs to JSON text.

        Raises:
            IncompatibleDialectError: If an output cannot be written in its dialect.
            EncodeError: For non-Output values.
        """
        return dumps(self.encode_response_value(response), ensure_ascii=self._config.ensure_ascii)

    def encode_response_value(self, response: Response) -> dict[str, Any] | list[dict[str, Any]]:
        if isinstance(response, Output):
            return encode_output(response, self._dialects)
        if isinstance(response, (list, tuple)):
            return [encode_output(output, self._dialects) for output in response]
        raise EncodeError(
            f"Response must be an Output or a list of Outputs, got: {type(response).__name__}"
        )


def build_error_response(request: Request) -> Response | None:
    """Answer the invalid calls of a salvaged request.

    Each InvalidCall gets an "Invalid request" failure carrying its salvaged
    id and dialect. Valid calls are left to the dispatcher.

    Returns:
        A single Output for a single invalid call, a list for a batch with
        invalid elements, or None when there is nothing to answer.
    """
    if isinstance(request, InvalidCall):
        return Output.invalid_request(request.dialect, request.id)
    if isinstance(request, list):
        outputs = [
            Output.invalid_request(call.dialect, call.id)
            for call in request
            if isinstance(call, InvalidCall)
        ]
        return outputs or None
    return None


_default_codec = Codec()


def decode_request(text: str | bytes, salvage: bool = False) -> Request:
    """Parse a request message accepting both dialects. See Codec.decode_request."""
    return _default_codec.decode_request(text, salvage=salvage)


def encode_request(request: Request) -> str:
    """Serialize a request in the dialect of each call. See Codec.encode_request."""
    return _default_codec.encode_request(request)


def decode_response(text: str | bytes) -> Response:
    """Parse a response message accepting both dialects. See Codec.decode_response."""
    return _default_codec.decode_response(text)


def encode_response(response: Response) -> str:
    """Serialize a response in the dialect of each output. See Codec.encode_response."""
    return _default_codec.encode_response(response)
