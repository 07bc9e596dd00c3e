"""Entry point for the dualrpc command-line tool."""

from __future__ import annotations

import logging
import sys
from argparse import Namespace

from dualrpc.cli.arg_parser import parse_args
from dualrpc.cli.output import print_calls, print_error, print_outputs, print_text
from dualrpc.config import CodecConfig, load_config
from dualrpc.core.errors import DualRpcError
from dualrpc.rpc import Codec, build_error_response

logger = logging.getLogger(__name__)


def configure_logging(level: int) -> None:
    """Send dualrpc.* logs to stderr at the given level."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    ))

    dualrpc_logger = logging.getLogger("dualrpc")
    dualrpc_logger.setLevel(level)
    # Remove any existing handlers to avoid duplicates on reconfigure
    dualrpc_logger.handlers.clear()
    dualrpc_logger.addHandler(handler)
    dualrpc_logger.propagate = False


def _read_message(args: Namespace) -> str:
    if args.file is None:
        return sys.stdin.read()
    try:
        return args.file.read_text(encoding="utf-8")
    except OSError as e:
        raise DualRpcError(f"Failed to read {args.file}: {e}") from e


def _build_codec(args: Namespace) -> Codec:
    config = load_config(args.config)
    codec_config = config.codec
    overrides: dict[str, object] = {}
    if args.dialects:
        overrides["dialects"] = args.dialects
    if args.salvage:
        overrides["salvage_invalid_calls"] = True
    if overrides:
        codec_config = CodecConfig.model_validate(
            {**codec_config.model_dump(), **overrides}
        )
    level = logging.DEBUG if args.verbose else getattr(logging, config.log_level)
    configure_logging(level)
    return Codec(codec_config)


def run(args: Namespace) -> int:
    """Execute a parsed command. Returns the process exit code."""
    codec = _build_codec(args)
    text = _read_message(args)

    if args.command in ("check-request", "normalize-request"):
        request = codec.decode_request(text)
        batch = isinstance(request, list)
        calls = request if isinstance(request, list) else [request]
        logger.debug("Decoded %d call(s)", len(calls))
        if args.command == "check-request":
            print_calls(calls, batch)
            return 0
        error_response = build_error_response(request)
        if error_response is not None:
            # Invalid calls have no wire form; show the answer a server owes instead
            logger.debug("Request has invalid calls, printing the error response")
            print_text(codec.encode_response(error_response))
            return 1
        print_text(codec.encode_request(request))
        return 0

    response = codec.decode_response(text)
    batch = isinstance(response, list)
    outputs = response if isinstance(response, list) else [response]
    logger.debug("Decoded %d output(s)", len(outputs))
    if args.command == "check-response":
        print_outputs(outputs, batch)
    else:
        print_text(codec.encode_response(response))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return its exit code."""
    args = parse_args(argv)
    try:
        return run(args)
    except DualRpcError as e:
        print_error(f"{type(e).__name__}: {e.message}")
        return 1
