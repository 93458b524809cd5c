"""Data models for the orasid.pipeline module.

This module defines the core data structures used by the pipeline module:

- StepStatus: Enum for the per-step state of a run (pending, executed, skipped)
- ExecutionResult: Frozen result of one external command
- Step: Frozen named action with its bound arguments
- Pipeline: Frozen ordered collection of steps
- StepResult: Record of one step in a completed run
- PipelineResult: Aggregate record of a completed run
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from orasid.pipeline.exceptions import PipelineConfigError
from orasid.pipeline.validators import validate_pipeline_steps, validate_step_name

if TYPE_CHECKING:
    from collections.abc import Iterator

    from orasid.pipeline.base import StepAction


class StepStatus(str, Enum):
    """State of a step within one run.

    Transitions only move forward: ``pending -> executed`` or
    ``pending -> skipped``.

    Attributes:
        PENDING: Not reached yet.
        EXECUTED: Action was invoked and returned.
        SKIPPED: Before the resume point, action not invoked.
    """

    PENDING = "pending"
    EXECUTED = "executed"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Outcome of one external command.

    Attributes:
        command: Command line as it was run (including any ``sudo`` prefix).
        return_code: Process exit status.
        output: Standard output and standard error, merged.

    Examples:
        >>> result = ExecutionResult(command="runlevel", return_code=0, output="N 3\\n")
        >>> result.failed
        False
        >>> result.lines
        ['N 3']
    """

    command: str
    return_code: int
    output: str = ""

    @property
    def failed(self) -> bool:
        """Whether the command exited non-zero."""
        return self.return_code != 0

    @property
    def lines(self) -> list[str]:
        """Output split into lines, without line terminators."""
        return self.output.splitlines()


@dataclass(frozen=True, slots=True)
class Step:
    """A named unit of work with its arguments captured at definition time.

    Attributes:
        name: Unique, stable identifier used by ``--list`` and ``--skip``.
        action: Callable invoked as ``action(*args)``.
        args: Arguments bound when the pipeline was defined.

    Examples:
        >>> step = Step("STOP_DB", print, ("ORCL",))
        >>> step.name
        'STOP_DB'
    """

    name: str
    action: StepAction
    args: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        """Validate the step.

        Raises:
            PipelineConfigError: If the name is invalid or action is not callable.
        """
        validate_step_name(self.name)
        if not callable(self.action):
            raise PipelineConfigError(f"Step '{self.name}': action must be callable")
        if not isinstance(self.args, tuple):
            object.__setattr__(self, "args", tuple(self.args))

    def invoke(self) -> object:
        """Call the action with the bound arguments."""
        return self.action(*self.args)


@dataclass(frozen=True, slots=True)
class Pipeline:
    """Ordered, read-only collection of steps.

    Order encodes real-world dependencies (the database must be stopped
    before its host is renamed) and never changes once built.

    Attributes:
        name: Pipeline name, for logs.
        steps: Steps in execution order.

    Examples:
        >>> pipeline = Pipeline("demo", (Step("A", print), Step("B", print)))
        >>> pipeline.names()
        ['A', 'B']
    """

    name: str
    steps: tuple[Step, ...]

    def __post_init__(self) -> None:
        """Validate the pipeline.

        Raises:
            PipelineConfigError: If empty, too long, or step names repeat.
        """
        if not isinstance(self.steps, tuple):
            object.__setattr__(self, "steps", tuple(self.steps))
        validate_pipeline_steps(len(self.steps))

        seen: set[str] = set()
        for step in self.steps:
            if step.name in seen:
                raise PipelineConfigError(f"Duplicate step name: {step.name!r}")
            seen.add(step.name)

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    def names(self) -> list[str]:
        """Return step names in execution order."""
        return [step.name for step in self.steps]

    def index(self, name: str) -> int:
        """Return the position of the named step.

        Args:
            name: Step name.

        Returns:
            Zero-based position.

        Raises:
            PipelineConfigError: If no step has that name.
        """
        for position, step in enumerate(self.steps):
            if step.name == name:
                return position
        raise PipelineConfigError(f"Unknown step {name!r} in pipeline '{self.name}'. Available: {', '.join(self.names())}")


@dataclass(slots=True)
class StepResult:
    """Record of one step in a completed run.

    Attributes:
        name: Step name.
        status: Final state of the step.
        duration: Time spent in the action, in seconds.
    """

    name: str
    status: StepStatus = StepStatus.PENDING
    duration: float = 0.0


@dataclass(slots=True)
class PipelineResult:
    """Aggregate record of a completed run.

    A failed run raises instead of returning, so every result describes a
    run in which all non-skipped steps were executed.

    Attributes:
        name: Pipeline name.
        results: Ordered step records.
        duration: Total run time in seconds.

    Examples:
        >>> result = PipelineResult(name="demo")
        >>> result.executed_steps
        []
    """

    name: str
    results: list[StepResult] = field(default_factory=list)
    duration: float = 0.0

    @property
    def executed_steps(self) -> list[str]:
        """Names of the steps whose action ran."""
        return [r.name for r in self.results if r.status == StepStatus.EXECUTED]

    @property
    def skipped_steps(self) -> list[str]:
        """Names of the steps skipped before the resume point."""
        return [r.name for r in self.results if r.status == StepStatus.SKIPPED]


__all__ = [
    "ExecutionResult",
    "Pipeline",
    "PipelineResult",
    "Step",
    "StepResult",
    "StepStatus",
]
