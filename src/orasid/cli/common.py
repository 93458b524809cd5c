"""Shared console helpers for the orasid CLI."""

from __future__ import annotations

from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

#: Normal output (step list, summary).
console = Console()

#: Error channel, shared with the diagnostic trace.
err_console = Console(stderr=True)


def exit_error(message: str, output: str = "", code: int = 1) -> NoReturn:
    """Print an error on stderr and exit.

    Args:
        message: Error message.
        output: Captured diagnostic output, printed verbatim below it.
        code: Process exit status.

    Raises:
        typer.Exit: Always.
    """
    err_console.print(f"[bold red]Error:[/] {escape(message)}", highlight=False, soft_wrap=True)
    if output:
        err_console.print(output.rstrip(), markup=False, highlight=False, soft_wrap=True)
    raise typer.Exit(code=code)


__all__ = [
    "console",
    "err_console",
    "exit_error",
]
