"""Argument parsing for the dualrpc CLI."""

import argparse
from pathlib import Path


def add_input_arg(parser: argparse.ArgumentParser) -> None:
    """Add the positional message file argument to a parser."""
    parser.add_argument(
        "file",
        nargs="?",
        type=Path,
        help="File holding one JSON-RPC message (reads stdin if omitted)",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="dualrpc",
        description="Validate and normalize JSON-RPC 1.0/2.0 messages",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Config file (default: ~/.dualrpc/config.json layered with ./.dualrpc/config.json)",
    )
    parser.add_argument(
        "--dialect",
        action="append",
        choices=["1.0", "2.0"],
        dest="dialects",
        help="Accept only this dialect (repeatable; overrides config)",
    )
    parser.add_argument(
        "--salvage",
        action="store_true",
        help="Report invalid calls instead of failing the whole request",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log decoder decisions to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    check_request = subparsers.add_parser(
        "check-request",
        help="Decode a request and summarize its calls",
    )
    add_input_arg(check_request)

    check_response = subparsers.add_parser(
        "check-response",
        help="Decode a response and summarize its outputs",
    )
    add_input_arg(check_response)

    normalize_request = subparsers.add_parser(
        "normalize-request",
        help="Decode a request and print its canonical encoding",
    )
    add_input_arg(normalize_request)

    normalize_response = subparsers.add_parser(
        "normalize-response",
        help="Decode a response and print its canonical encoding",
    )
    add_input_arg(normalize_response)

    return parser.parse_args(argv)
