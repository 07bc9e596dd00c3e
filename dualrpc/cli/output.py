"""Rich-based output utilities for the dualrpc CLI."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dualrpc.core.jsontext import dumps
from dualrpc.rpc import Call, InvalidCall, Output, Success
from dualrpc.rpc.types import Error

_console: Console | None = None


def get_console() -> Console:
    """Get the shared Console instance."""
    global _console
    if _console is None:
        _console = Console(highlight=False)
    return _console


def set_console(console: Console) -> None:
    """Set a custom Console instance.

    Useful for testing or custom configurations.
    """
    global _console
    _console = console


def print_error(message: str) -> None:
    """Print an error message in red."""
    get_console().print(f"[bold red]Error:[/bold red] {escape(message)}")


def print_calls(calls: list[Call], batch: bool) -> None:
    """Print one row per call of a decoded request."""
    table = Table(title="Batch request" if batch else "Request")
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Dialect")
    table.add_column("Method")
    table.add_column("Id")

    for index, call in enumerate(calls):
        if isinstance(call, InvalidCall):
            kind = f"[red]invalid[/red] ({escape(call.reason)})"
        elif call.is_notification:
            kind = "notification"
        else:
            kind = "method call"
        table.add_row(
            str(index),
            kind,
            call.dialect.value,
            escape(call.method or "-"),
            "-" if call.id is None else escape(str(call.id)),
        )
    get_console().print(table)


def print_outputs(outputs: list[Output], batch: bool) -> None:
    """Print one row per output of a decoded response."""
    table = Table(title="Batch response" if batch else "Response")
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Dialect")
    table.add_column("Id")
    table.add_column("Outcome")

    for index, output in enumerate(outputs):
        if isinstance(output, Success):
            kind = "[green]success[/green]"
            outcome = dumps(output.result)
        else:
            kind = "[red]failure[/red]"
            error: Error = output.error  # type: ignore[attr-defined]
            outcome = str(error)
        table.add_row(
            str(index),
            kind,
            output.dialect.value,
            escape(str(output.id)),
            escape(outcome),
        )
    get_console().print(table)


def print_text(text: str) -> None:
    """Print raw text with no markup or wrapping."""
    get_console().print(text, markup=False, emoji=False, soft_wrap=True)
