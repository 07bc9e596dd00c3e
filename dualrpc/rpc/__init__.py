"""JSON-RPC 1.0 and 2.0 wire types and codec.

Both dialects are handled by one set of types; the dialect of an incoming
envelope is inferred from which members it carries.

Example usage:
    from dualrpc.rpc import MethodCall, decode_request, encode_request

    encode_request(MethodCall.new_v1("foo", [], 1))
    # '{"method":"foo","params":[],"id":1}'
    decode_request('{"jsonrpc":"2.0","method":"foo","params":[]}')
    # Notification(method='foo', params=Params(value=[]), dialect=<Dialect.V2: '2.0'>)
"""

from dualrpc.rpc.envelopes import (
    Call,
    Failure,
    InvalidCall,
    MethodCall,
    Notification,
    Output,
    Request,
    Response,
    Success,
)
from dualrpc.rpc.protocol import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    SERVER_ERROR,
    Codec,
    build_error_response,
    decode_request,
    decode_response,
    encode_request,
    encode_response,
)
from dualrpc.rpc.request_codec import decode_call, encode_call
from dualrpc.rpc.response_codec import decode_output, encode_output
from dualrpc.rpc.types import Dialect, Error, ErrorCode, Id, Params

__all__ = [
    # Leaf types
    "Dialect",
    "Id",
    "Params",
    "Error",
    "ErrorCode",
    # Envelopes
    "Call",
    "MethodCall",
    "Notification",
    "InvalidCall",
    "Output",
    "Success",
    "Failure",
    "Request",
    "Response",
    # Codec
    "Codec",
    "decode_request",
    "encode_request",
    "decode_response",
    "encode_response",
    "decode_call",
    "encode_call",
    "decode_output",
    "encode_output",
    "build_error_response",
    # Error codes
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
    "SERVER_ERROR",
]
