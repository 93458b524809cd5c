"""Tests for the orasid.pipeline.reporter module."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from orasid.pipeline.reporter import Reporter

if TYPE_CHECKING:
    import io

    import pytest


class TestReporter:
    """Tests for the trace formats."""

    def test_formats(self, reporter: Reporter, trace: io.StringIO) -> None:
        """Each trace kind has its own prefix."""
        reporter.section("STOP_DB")
        reporter.skipping("CHECK_HOSTNAME")
        reporter.command("srvctl stop database -d ORCL")
        reporter.operation("Editing", "/etc/hosts")
        reporter.operation("Moving", "a -> b")
        reporter.note("All done")
        assert trace.getvalue().splitlines() == [
            "### STOP_DB",
            "## Skipping CHECK_HOSTNAME",
            "Running: srvctl stop database -d ORCL",
            "Editing: /etc/hosts",
            "Moving: a -> b",
            "All done",
        ]

    def test_markup_not_interpreted(self, reporter: Reporter, trace: io.StringIO) -> None:
        """Square brackets in commands are printed verbatim."""
        reporter.command("echo [bold]x[/bold]")
        assert trace.getvalue() == "Running: echo [bold]x[/bold]\n"

    def test_long_lines_not_wrapped(self, reporter: Reporter, trace: io.StringIO) -> None:
        """Command lines are never wrapped."""
        command = "x" * 500
        reporter.command(command)
        assert trace.getvalue() == f"Running: {command}\n"

    def test_traces_logged(self, reporter: Reporter, caplog: pytest.LogCaptureFixture) -> None:
        """Traces are mirrored at DEBUG on the orasid logger."""
        with caplog.at_level(logging.DEBUG, logger="orasid"):
            reporter.section("STOP_DB")
        assert "### STOP_DB" in caplog.text

    def test_default_console_is_stderr(self) -> None:
        """The default console writes to stderr."""
        assert Reporter().console.stderr is True
