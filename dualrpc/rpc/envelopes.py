"""Call and response envelopes for JSON-RPC 1.0 and 2.0.

One family of types covers both dialects; each envelope carries its Dialect
and the codecs pick the field layout from it.

Request side:
    Call -> MethodCall | Notification | InvalidCall

Response side:
    Output -> Success | Failure

A Request is a single Call or a list of Calls; a Response is a single Output
or a list of Outputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from dualrpc.core.errors import EncodeError, RpcCallError
from dualrpc.rpc.types import Dialect, Error, Id, Params


class Call:
    """Base class for request-side envelopes.

    Subclasses expose `method`, `params`, `id` and `dialect`, which is all a
    dispatcher needs to route a call.
    """

    method: str | None
    params: Params
    id: Id | None
    dialect: Dialect

    @property
    def is_notification(self) -> bool:
        return False

    def to_json(self) -> dict[str, Any]:
        """Render to the generic JSON value for this call's dialect."""
        # Import here to avoid circular imports
        from dualrpc.rpc.request_codec import encode_call

        return encode_call(self)

    def __str__(self) -> str:
        from dualrpc.core.jsontext import dumps

        return dumps(self.to_json())


def _check_method(method: Any) -> None:
    if not isinstance(method, str):
        raise TypeError(f"method must be a string, got: {type(method).__name__}")
    if not method:
        raise ValueError("method must not be empty")


def _require_array_v1(params: Params) -> None:
    if not params.is_array:
        raise ValueError("`params` must be an array for JSON-RPC 1.0")


@dataclass
class MethodCall(Call):
    """A call that expects a response.

    Attributes:
        method: Name of the method to invoke.
        params: Positional or named arguments. 1.0 calls require an Array.
        id: Correlation id echoed by the response. Never Null.
        dialect: Protocol dialect the call is written in.
    """

    method: str
    params: Params
    id: Id
    dialect: Dialect = Dialect.V2

    def __post_init__(self) -> None:
        _check_method(self.method)
        if not isinstance(self.params, Params):
            raise TypeError(f"params must be Params, got: {type(self.params).__name__}")
        if not isinstance(self.id, Id):
            raise TypeError(f"id must be Id, got: {type(self.id).__name__}")
        if self.id.is_null:
            raise ValueError("method call id must not be null; use a Notification instead")

    @classmethod
    def new_v1(cls, method: str, params: Params | list[Any], id: Id | int | str) -> MethodCall:
        """Create a JSON-RPC 1.0 method call.

        Raises:
            ValueError: If params is not an Array.
        """
        params = Params.coerce(params)
        _require_array_v1(params)
        return cls(method, params, Id.coerce(id), Dialect.V1)

    @classmethod
    def new_v2(
        cls,
        method: str,
        params: Params | list[Any] | dict[str, Any] | None,
        id: Id | int | str,
    ) -> MethodCall:
        """Create a JSON-RPC 2.0 method call. params may be None."""
        return cls(method, Params.coerce(params), Id.coerce(id), Dialect.V2)


@dataclass
class Notification(Call):
    """A call with no id. The server never answers it, not even inside a batch.

    1.0 notifications are written with an explicit `"id": null`; 2.0
    notifications leave the id member out.
    """

    method: str
    params: Params = field(default_factory=Params.absent)
    dialect: Dialect = Dialect.V2

    def __post_init__(self) -> None:
        _check_method(self.method)
        if not isinstance(self.params, Params):
            raise TypeError(f"params must be Params, got: {type(self.params).__name__}")

    @property
    def id(self) -> None:
        return None

    @property
    def is_notification(self) -> bool:
        return True

    @classmethod
    def new_v1(cls, method: str, params: Params | list[Any]) -> Notification:
        """Create a JSON-RPC 1.0 notification.

        Raises:
            ValueError: If params is not an Array.
        """
        params = Params.coerce(params)
        _require_array_v1(params)
        return cls(method, params, Dialect.V1)

    @classmethod
    def new_v2(
        cls,
        method: str,
        params: Params | list[Any] | dict[str, Any] | None = None,
    ) -> Notification:
        """Create a JSON-RPC 2.0 notification. params may be None."""
        return cls(method, Params.coerce(params), Dialect.V2)


@dataclass
class InvalidCall(Call):
    """A request element that parsed as JSON but failed envelope validation.

    Only the salvaging decoder produces these, so a server can still answer
    with an "Invalid request" failure that carries whatever id was readable.
    They are never encoded.

    Attributes:
        id: The salvaged id, or Null when none could be read.
        dialect: Best guess at the sender's dialect, for the error response.
        reason: Why validation failed.
    """

    id: Id = field(default_factory=Id.null)
    dialect: Dialect = Dialect.V2
    reason: str = ""

    @property
    def method(self) -> None:
        return None

    @property
    def params(self) -> Params:
        return Params.absent()

    def to_json(self) -> dict[str, Any]:
        raise EncodeError("invalid calls are decode-only and cannot be encoded")


# === Response side ===


class Output:
    """Base class for response-side envelopes."""

    id: Id
    dialect: Dialect

    @staticmethod
    def new(dialect: Dialect, id: Id | int | str | None, outcome: Any) -> Output:
        """Create the output for a call's outcome.

        Args:
            dialect: Dialect of the call being answered.
            id: Id of the call being answered.
            outcome: An Error for a failure, any other JSON value for a success.
        """
        id = Id.coerce(id) if id is not None else Id.null()
        if isinstance(outcome, Error):
            return Failure(outcome, id, dialect)
        return Success(outcome, id, dialect)

    @staticmethod
    def invalid_request(dialect: Dialect, id: Id | int | str | None) -> Output:
        """Create a failure output for a malformed request."""
        id = Id.coerce(id) if id is not None else Id.null()
        return Failure(Error.invalid_request(), id, dialect)

    @property
    def is_success(self) -> bool:
        return isinstance(self, Success)

    @property
    def version(self) -> str | None:
        """The `jsonrpc` tag this output is written with."""
        return self.dialect.tag

    def into_result(self) -> Any:
        """Return the result of a success.

        Raises:
            RpcCallError: If this is a failure, carrying its Error.
        """
        if isinstance(self, Failure):
            raise RpcCallError(self.error)
        return self.result  # type: ignore[attr-defined]

    def to_json(self) -> dict[str, Any]:
        """Render to the generic JSON value for this output's dialect."""
        # Import here to avoid circular imports
        from dualrpc.rpc.response_codec import encode_output

        return encode_output(self)

    def __str__(self) -> str:
        from dualrpc.core.jsontext import dumps

        return dumps(self.to_json())


def _check_output_id(id: Any) -> None:
    if not isinstance(id, Id):
        raise TypeError(f"id must be Id, got: {type(id).__name__}")


@dataclass
class Success(Output):
    """Successful response.

    Attributes:
        result: Any JSON value returned by the method.
        id: Id of the call this answers.
        dialect: Protocol dialect of the response.
    """

    result: Any
    id: Id
    dialect: Dialect = Dialect.V2

    def __post_init__(self) -> None:
        _check_output_id(self.id)

    @classmethod
    def new_v1(cls, result: Any, id: Id | int | str) -> Success:
        return cls(result, Id.coerce(id), Dialect.V1)

    @classmethod
    def new_v2(cls, result: Any, id: Id | int | str) -> Success:
        return cls(result, Id.coerce(id), Dialect.V2)


@dataclass
class Failure(Output):
    """Failed response.

    Attributes:
        error: The error object.
        id: Id of the call this answers, Null if it could not be read.
        dialect: Protocol dialect of the response.
    """

    error: Error
    id: Id
    dialect: Dialect = Dialect.V2

    def __post_init__(self) -> None:
        if not isinstance(self.error, Error):
            raise TypeError(f"error must be Error, got: {type(self.error).__name__}")
        _check_output_id(self.id)

    @classmethod
    def new_v1(cls, error: Error, id: Id | int | str | None) -> Failure:
        return cls(error, Id.coerce(id) if id is not None else Id.null(), Dialect.V1)

    @classmethod
    def new_v2(cls, error: Error, id: Id | int | str | None) -> Failure:
        return cls(error, Id.coerce(id) if id is not None else Id.null(), Dialect.V2)


Request = Union[Call, list[Call]]
Response = Union[Output, list[Output]]
