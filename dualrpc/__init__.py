"""dualrpc: JSON-RPC 1.0 and 2.0 envelope codec."""

from dualrpc.core.errors import (
    DecodeError,
    DualRpcError,
    EncodeError,
    IncompatibleDialectError,
    InvalidParamsError,
    ParseError,
    RpcCallError,
)
from dualrpc.rpc import (
    Call,
    Codec,
    Dialect,
    Error,
    ErrorCode,
    Failure,
    Id,
    InvalidCall,
    MethodCall,
    Notification,
    Output,
    Params,
    Success,
    decode_request,
    decode_response,
    encode_request,
    encode_response,
)

__version__ = "0.1.0"

__all__ = [
    "Call",
    "Codec",
    "Dialect",
    "Error",
    "ErrorCode",
    "Failure",
    "Id",
    "InvalidCall",
    "MethodCall",
    "Notification",
    "Output",
    "Params",
    "Success",
    "decode_request",
    "decode_response",
    "encode_request",
    "encode_response",
    "DualRpcError",
    "DecodeError",
    "EncodeError",
    "IncompatibleDialectError",
    "InvalidParamsError",
    "ParseError",
    "RpcCallError",
]
