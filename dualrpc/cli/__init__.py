"""Command-line interface."""

from dualrpc.cli.main import main

__all__ = ["main"]
