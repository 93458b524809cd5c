"""Tests for the orasid.pipeline.exceptions module."""

from __future__ import annotations

import pytest

from orasid.config.exceptions import OrasidError
from orasid.pipeline.exceptions import (
    FatalStepError,
    PipelineConfigError,
    PipelineError,
    PreconditionError,
)


class TestHierarchy:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize("exc_type", [PipelineError, PipelineConfigError, FatalStepError, PreconditionError])
    def test_all_are_orasid_errors(self, exc_type: type[Exception]) -> None:
        """Every pipeline error is an OrasidError."""
        assert issubclass(exc_type, OrasidError)

    def test_config_error_is_value_error(self) -> None:
        """PipelineConfigError doubles as ValueError."""
        assert issubclass(PipelineConfigError, ValueError)

    def test_precondition_is_fatal(self) -> None:
        """A failed precondition aborts like a failed step."""
        assert issubclass(PreconditionError, FatalStepError)


class TestFatalStepError:
    """Tests for FatalStepError formatting."""

    def test_trailing_whitespace_trimmed(self) -> None:
        """Output trailing newlines are dropped from the message."""
        exc = FatalStepError("X failed", "line 1\nline 2\n\n")
        assert str(exc) == "X failed:\nline 1\nline 2"

    def test_blank_output_ignored(self) -> None:
        """Whitespace-only output adds nothing."""
        assert str(FatalStepError("X failed", "\n")) == "X failed"
