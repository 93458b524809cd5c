"""Resumable named pipelines for orasid.

A pipeline is an ordered tuple of named steps whose arguments are bound when
the pipeline is defined. The runner executes the steps in order, optionally
resuming at a named step, and stops at the first
:class:`FatalStepError`. Every step and every external command is traced on
a diagnostic channel separate from normal output.

Examples:
    >>> from orasid.pipeline import Pipeline, PipelineRunner, Step
    >>> pipeline = Pipeline(
    ...     name="demo",
    ...     steps=(
    ...         Step("GREET", print, ("hello",)),
    ...         Step("PART", print, ("bye",)),
    ...     ),
    ... )
    >>> PipelineRunner(pipeline).names()
    ['GREET', 'PART']
    >>> result = PipelineRunner(pipeline).run(start_at="PART")  # doctest: +SKIP
"""

from orasid.pipeline.base import StepAction
from orasid.pipeline.exceptions import (
    FatalStepError,
    PipelineConfigError,
    PipelineError,
    PreconditionError,
)
from orasid.pipeline.models import (
    ExecutionResult,
    Pipeline,
    PipelineResult,
    Step,
    StepResult,
    StepStatus,
)
from orasid.pipeline.policy import check, fail
from orasid.pipeline.reporter import Reporter
from orasid.pipeline.runner import PipelineRunner
from orasid.pipeline.shell import ShellExecutor

__all__ = [
    "ExecutionResult",
    "FatalStepError",
    "Pipeline",
    "PipelineConfigError",
    "PipelineError",
    "PipelineResult",
    "PipelineRunner",
    "PreconditionError",
    "Reporter",
    "ShellExecutor",
    "Step",
    "StepAction",
    "StepResult",
    "StepStatus",
    "check",
    "fail",
]
