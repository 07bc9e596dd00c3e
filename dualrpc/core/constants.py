"""Filesystem locations used by dualrpc."""

from pathlib import Path

DUALRPC_DIR_NAME = ".dualrpc"
CONFIG_FILE_NAME = "config.json"


def get_dualrpc_dir() -> Path:
    """Get ~/.dualrpc (global config directory)."""
    return Path.home() / DUALRPC_DIR_NAME
