"""Specialized exceptions raised by the orasid.pipeline module.

Exception hierarchy::

    OrasidError
        PipelineError (base for all pipeline errors)
            PipelineConfigError (invalid definition or resume target, also ValueError)
            FatalStepError (a step met an unacceptable external result)
                PreconditionError (an environment assertion failed before the run)

``FatalStepError`` is the only kind that aborts a run. It is never retried:
the operator fixes the cause by hand and resumes with ``--skip``.
"""

from __future__ import annotations

from orasid.config.exceptions import OrasidError


class PipelineError(OrasidError):
    """Base exception for all pipeline module errors."""


class PipelineConfigError(PipelineError, ValueError):
    """Pipeline definition or run request is invalid.

    Raised for malformed step names, duplicate names, empty pipelines and
    resume targets that do not name a step.
    """


class FatalStepError(PipelineError):
    """A step detected an unacceptable result and the whole run must stop.

    Attributes:
        message: What failed, in operator terms.
        output: Raw diagnostic output captured from the external command.

    Examples:
        >>> str(FatalStepError("Couldn't stop DB ORCL", "PRCD-1027: failed\\n"))
        "Couldn't stop DB ORCL:\\nPRCD-1027: failed"
        >>> str(FatalStepError("No pfile found"))
        'No pfile found'
    """

    def __init__(self, message: str, output: str = "") -> None:
        """Initialize FatalStepError.

        Args:
            message: What failed, in operator terms.
            output: Raw diagnostic output captured from the external command.
        """
        detail = output.rstrip()
        super().__init__(f"{message}:\n{detail}" if detail else message)
        self.message = message
        self.output = output


class PreconditionError(FatalStepError):
    """An environment assertion failed before any step ran."""


__all__ = [
    "FatalStepError",
    "PipelineConfigError",
    "PipelineError",
    "PreconditionError",
]
