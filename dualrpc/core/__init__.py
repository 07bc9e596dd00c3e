"""Core errors and JSON text helpers."""

from dualrpc.core.errors import (
    ConfigError,
    DecodeError,
    DualRpcError,
    EncodeError,
    LoadError,
    ProtocolError,
)
from dualrpc.core.jsontext import JsonObject, dumps, loads

__all__ = [
    "DualRpcError",
    "ConfigError",
    "LoadError",
    "ProtocolError",
    "DecodeError",
    "EncodeError",
    "JsonObject",
    "dumps",
    "loads",
]
