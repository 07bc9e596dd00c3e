"""Configuration loading and validation."""

from dualrpc.config.loader import load_config
from dualrpc.config.schema import CodecConfig, Config

__all__ = [
    "CodecConfig",
    "Config",
    "load_config",
]
