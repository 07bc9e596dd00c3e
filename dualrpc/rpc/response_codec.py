"""Output envelope codec: field-presence dialect inference for responses.

Members are scanned against the closed set {jsonrpc, result, error, id}.

2.0 responses carry exactly one of result/error. 1.0 responses carry both,
the inactive one as an explicit null:

    {"jsonrpc":"2.0","result":true,"id":1}
    {"jsonrpc":"2.0","error":{"code":-32600,"message":"Invalid request"},"id":1}
    {"result":true,"error":null,"id":1}
    {"error":{"code":-32600,"message":"Invalid request"},"result":null,"id":1}

The id is required in both dialects and may be null.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Any

from dualrpc.core.errors import (
    EncodeError,
    IncompatibleDialectError,
    InvalidResponseShapeError,
    MissingFieldError,
)
from dualrpc.rpc.envelopes import Failure, Output, Success
from dualrpc.rpc.members import check_members, json_kind, read_dialect, require_dialect
from dualrpc.rpc.types import ALL_DIALECTS, Dialect, Error, Id

RESPONSE_FIELDS = ("jsonrpc", "result", "error", "id")


def decode_output(
    value: Any,
    dialects: Collection[Dialect] = ALL_DIALECTS,
) -> Output:
    """Decode one response envelope from a generic JSON value.

    Raises:
        InvalidResponseShapeError: If value is not an object.
        UnknownFieldError, DuplicateFieldError: On schema violations.
        IncompatibleDialectError: If result/error presence fits neither
            dialect, or the dialect is not accepted.
        InvalidErrorShapeError: If the error member is malformed.
        MissingFieldError: If id is absent.
        InvalidIdShapeError: If id is malformed.
    """
    if not isinstance(value, dict):
        raise InvalidResponseShapeError(
            f"Response must be a JSON object, got: {json_kind(value)}"
        )
    check_members(value, RESPONSE_FIELDS)

    dialect = read_dialect(value)
    has_result = "result" in value
    has_error = "error" in value

    if dialect is Dialect.V2:
        if has_result == has_error:
            raise IncompatibleDialectError(
                "JSON-RPC 2.0 response must carry exactly one of result and error"
            )
        outcome: Any = value["result"] if has_result else Error.from_json(value["error"])
    else:
        if not (has_result and has_error):
            raise IncompatibleDialectError(
                "JSON-RPC 1.0 response must carry both result and error"
            )
        result, error = value["result"], value["error"]
        if (result is None) == (error is None):
            raise IncompatibleDialectError(
                "JSON-RPC 1.0 response must have exactly one of result and error non-null"
            )
        outcome = result if error is None else Error.from_json(error)

    if "id" not in value:
        raise MissingFieldError("id")
    id = Id.from_json(value["id"])

    require_dialect(dialect, dialects)
    if isinstance(outcome, Error):
        return Failure(outcome, id, dialect)
    return Success(outcome, id, dialect)


def encode_output(
    output: Output,
    dialects: Collection[Dialect] = ALL_DIALECTS,
) -> dict[str, Any]:
    """Render a response envelope as a generic JSON value.

    Raises:
        IncompatibleDialectError: If a 1.0 success has a null result (it
            would read back as neither success nor failure), or the dialect
            is not accepted.
        EncodeError: For anything that is not a Success or Failure.
    """
    if not isinstance(output, (Success, Failure)):
        raise EncodeError(f"Expected Success or Failure, got: {type(output).__name__}")
    require_dialect(output.dialect, dialects)

    data: dict[str, Any] = {}
    if output.dialect is Dialect.V2:
        data["jsonrpc"] = "2.0"
        if isinstance(output, Success):
            data["result"] = output.result
        else:
            data["error"] = output.error.to_json()
    elif isinstance(output, Success):
        if output.result is None:
            raise IncompatibleDialectError("JSON-RPC 1.0 success result must not be null")
        data["result"] = output.result
        data["error"] = None
    else:
        data["error"] = output.error.to_json()
        data["result"] = None
    data["id"] = output.id.to_json()
    return data
