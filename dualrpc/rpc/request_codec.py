"""Call envelope codec: field-presence dialect inference for requests.

Decoding scans an object's members once against the closed set
{jsonrpc, method, params, id}, then decides the envelope kind by which of
jsonrpc/params/id are present:

    jsonrpc   params        id            ->  result
    "2.0"     any / absent  absent        ->  2.0 Notification
    "2.0"     any / absent  non-null      ->  2.0 MethodCall
    "2.0"     any / absent  null          ->  error
    absent    array         null          ->  1.0 Notification
    absent    array         non-null      ->  1.0 MethodCall
    absent    map / absent  any           ->  error
    absent    array         absent        ->  error

Encoding mirrors the table, emitting members in the fixed order
jsonrpc, method, params, id.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import Any

from dualrpc.core.errors import (
    EncodeError,
    IncompatibleDialectError,
    InvalidIdShapeError,
    InvalidMethodShapeError,
    InvalidRequestShapeError,
    MissingFieldError,
)
from dualrpc.rpc.envelopes import Call, InvalidCall, MethodCall, Notification
from dualrpc.rpc.members import check_members, json_kind, read_dialect, require_dialect
from dualrpc.rpc.types import ALL_DIALECTS, Dialect, Id, Params

logger = logging.getLogger(__name__)

REQUEST_FIELDS = ("jsonrpc", "method", "params", "id")


def decode_call(
    value: Any,
    dialects: Collection[Dialect] = ALL_DIALECTS,
) -> MethodCall | Notification:
    """Decode one call envelope from a generic JSON value.

    Args:
        value: The decoded JSON object.
        dialects: Dialects the caller accepts.

    Returns:
        A MethodCall or Notification in the inferred dialect.

    Raises:
        InvalidRequestShapeError: If value is not an object.
        UnknownFieldError, DuplicateFieldError: On schema violations.
        MissingFieldError: If method is absent.
        InvalidMethodShapeError, InvalidParamsShapeError, InvalidIdShapeError:
            On malformed members.
        IncompatibleDialectError: If the member combination fits neither
            dialect, or the dialect is not accepted.
    """
    if not isinstance(value, dict):
        raise InvalidRequestShapeError(
            f"Request must be a JSON object, got: {json_kind(value)}"
        )
    check_members(value, REQUEST_FIELDS)

    if "method" not in value:
        raise MissingFieldError("method")
    method = value["method"]
    if not isinstance(method, str) or not method:
        raise InvalidMethodShapeError(f"method must be a non-empty string, got: {method!r}")

    dialect = read_dialect(value)
    params = Params.from_json(value["params"]) if "params" in value else Params.absent()
    id = Id.from_json(value["id"]) if "id" in value else None

    if dialect is Dialect.V2:
        if id is None:
            call: MethodCall | Notification = Notification(method, params, dialect)
        elif id.is_null:
            raise IncompatibleDialectError(
                "JSON-RPC 2.0 call id must not be null; omit it for a notification"
            )
        else:
            call = MethodCall(method, params, id, dialect)
    else:
        if params.is_absent:
            raise IncompatibleDialectError("JSON-RPC 1.0 call must carry params")
        if not params.is_array:
            raise IncompatibleDialectError("JSON-RPC 1.0 params must be an array")
        if id is None:
            raise IncompatibleDialectError(
                "JSON-RPC 1.0 call must carry an id (null for a notification)"
            )
        if id.is_null:
            call = Notification(method, params, dialect)
        else:
            call = MethodCall(method, params, id, dialect)

    require_dialect(dialect, dialects)
    return call


def encode_call(
    call: Call,
    dialects: Collection[Dialect] = ALL_DIALECTS,
) -> dict[str, Any]:
    """Render a call envelope as a generic JSON value.

    Raises:
        IncompatibleDialectError: If a 1.0 call has absent or Map params, or
            its dialect is not accepted.
        EncodeError: For InvalidCall or anything that is not a Call.
    """
    if isinstance(call, InvalidCall):
        raise EncodeError("invalid calls are decode-only and cannot be encoded")
    if not isinstance(call, (MethodCall, Notification)):
        raise EncodeError(f"Expected MethodCall or Notification, got: {type(call).__name__}")
    require_dialect(call.dialect, dialects)

    data: dict[str, Any] = {}
    if call.dialect is Dialect.V2:
        data["jsonrpc"] = "2.0"
        data["method"] = call.method
        if not call.params.is_absent:
            data["params"] = call.params.to_json()
        if isinstance(call, MethodCall):
            data["id"] = call.id.to_json()
        return data

    if call.params.is_absent:
        raise IncompatibleDialectError("JSON-RPC 1.0 call must carry params")
    if not call.params.is_array:
        raise IncompatibleDialectError("JSON-RPC 1.0 params must be an array")
    data["method"] = call.method
    data["params"] = call.params.to_json()
    # 1.0 notifications spell out a null id
    data["id"] = call.id.to_json() if isinstance(call, MethodCall) else None
    return data


def salvage_call(
    value: Any,
    reason: str,
    dialects: Collection[Dialect] = ALL_DIALECTS,
) -> InvalidCall:
    """Capture what an error response needs from an element that failed decoding.

    The id is kept when it is a valid Id and Null otherwise. The dialect is
    2.0 when the element carried `"jsonrpc": "2.0"` or was not an object at
    all, 1.0 otherwise, narrowed to the accepted dialects.
    """
    id = Id.null()
    dialect = Dialect.V2
    if isinstance(value, dict):
        if value.get("jsonrpc") != "2.0":
            dialect = Dialect.V1
        if "id" in value:
            try:
                id = Id.from_json(value["id"])
            except InvalidIdShapeError:
                logger.debug("Unreadable id in invalid call: %r", value["id"])
    if dialects and dialect not in dialects:
        dialect = min(dialects, key=lambda d: d.value)
    logger.debug("Salvaged invalid call: id=%s, dialect=%s, reason=%s", id, dialect.value, reason)
    return InvalidCall(id, dialect, reason)

