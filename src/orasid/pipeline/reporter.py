"""Diagnostic reporter: the operator's progress trace.

Traces go to a Rich console on stderr so that the step list and the final
summary on stdout stay machine-readable. The trace is the audit trail of an
irreversible procedure: the section marker of a step is written before its
action starts and every command line is written before it is spawned, so
a hung run always shows what it is waiting on.

Trace formats::

    ### STEP_NAME          section start
    ## Skipping STEP_NAME  step before the resume point
    Running: <command>     external command about to run
    Editing: <path>        file about to be changed in place
"""

from __future__ import annotations

import logging

from rich.console import Console

logger = logging.getLogger(__name__)


class Reporter:
    """Write progress traces to the diagnostic channel.

    Args:
        console: Console to write to. Defaults to a stderr console.

    Examples:
        >>> import io
        >>> buffer = io.StringIO()
        >>> reporter = Reporter(Console(file=buffer, width=120))
        >>> reporter.section("STOP_DB")
        >>> buffer.getvalue()
        '### STOP_DB\\n'
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)

    @property
    def console(self) -> Console:
        """Return the diagnostic console."""
        return self._console

    def section(self, name: str) -> None:
        """Announce that a step is about to run."""
        self._emit(f"### {name}", style="bold cyan")

    def skipping(self, name: str) -> None:
        """Announce that a step is skipped before the resume point."""
        self._emit(f"## Skipping {name}", style="dim")

    def command(self, command: str) -> None:
        """Announce an external command before it is spawned."""
        self.operation("Running", command)

    def operation(self, verb: str, detail: str) -> None:
        """Announce a side effect performed in-process (file edit, move)."""
        self._emit(f"{verb}: {detail}")

    def note(self, text: str) -> None:
        """Write free text, such as the post-run checklist."""
        self._emit(text, style="yellow")

    def _emit(self, text: str, style: str | None = None) -> None:
        logger.debug("%s", text)
        self._console.print(text, style=style, markup=False, highlight=False, soft_wrap=True)


__all__ = [
    "Reporter",
]
