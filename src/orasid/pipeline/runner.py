"""Pipeline runner for sequential, resumable step execution.

Provides the ``PipelineRunner`` class that executes the steps of a
:class:`~orasid.pipeline.models.Pipeline` in order, optionally resuming at a
named step. The runner never catches what a step raises: the first
:class:`~orasid.pipeline.exceptions.FatalStepError` ends the run, with no
cleanup and no rollback, and the operator resumes by hand with ``--skip``.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from orasid.pipeline.models import PipelineResult, StepResult, StepStatus
from orasid.pipeline.reporter import Reporter

if TYPE_CHECKING:
    from orasid.pipeline.models import Pipeline

logger = logging.getLogger(__name__)


class PipelineRunner:
    """Execute a pipeline of named steps.

    Args:
        pipeline: Steps to run, in order.
        reporter: Diagnostic reporter for section and skip traces.

    Examples:
        >>> from orasid.pipeline.models import Pipeline, Step
        >>> calls = []
        >>> pipeline = Pipeline("demo", (
        ...     Step("A", calls.append, ("a",)),
        ...     Step("B", calls.append, ("b",)),
        ... ))
        >>> runner = PipelineRunner(pipeline)
        >>> runner.names()
        ['A', 'B']
        >>> result = runner.run(start_at="B")  # doctest: +SKIP
        >>> calls  # doctest: +SKIP
        ['b']
    """

    def __init__(self, pipeline: Pipeline, reporter: Reporter | None = None) -> None:
        """Initialize PipelineRunner.

        Args:
            pipeline: Steps to run, in order.
            reporter: Diagnostic reporter; defaults to a stderr reporter.
        """
        self._pipeline = pipeline
        self._reporter = reporter or Reporter()

    @property
    def pipeline(self) -> Pipeline:
        """Return the pipeline."""
        return self._pipeline

    def names(self) -> list[str]:
        """Return the step names in execution order, without side effects."""
        return self._pipeline.names()

    def run(self, start_at: str | None = None) -> PipelineResult:
        """Execute the pipeline.

        Args:
            start_at: Name of the step to resume from (inclusive). Every
                earlier step is traced as skipped and not invoked.

        Returns:
            PipelineResult recording which steps were executed or skipped.

        Raises:
            PipelineConfigError: If ``start_at`` names no step; raised before
                anything is skipped or executed.
            FatalStepError: Propagated unchanged from the failing step.
        """
        start_index = 0 if start_at is None else self._pipeline.index(start_at)
        pipeline_result = PipelineResult(name=self._pipeline.name)
        start = time.monotonic()

        logger.info(
            "Pipeline '%s' started (%d steps%s)",
            self._pipeline.name,
            len(self._pipeline),
            f", resuming at {start_at}" if start_at else "",
        )

        for position, step in enumerate(self._pipeline):
            if position < start_index:
                self._reporter.skipping(step.name)
                pipeline_result.results.append(StepResult(name=step.name, status=StepStatus.SKIPPED))
                continue

            self._reporter.section(step.name)
            step_start = time.monotonic()
            step.invoke()
            duration = time.monotonic() - step_start

            pipeline_result.results.append(StepResult(name=step.name, status=StepStatus.EXECUTED, duration=duration))
            logger.info("Step '%s' -> %s (%.3fs)", step.name, StepStatus.EXECUTED.value, duration)

        pipeline_result.duration = time.monotonic() - start
        logger.info(
            "Pipeline '%s' completed in %.3fs (%d executed, %d skipped)",
            self._pipeline.name,
            pipeline_result.duration,
            len(pipeline_result.executed_steps),
            len(pipeline_result.skipped_steps),
        )
        return pipeline_result


__all__ = [
    "PipelineRunner",
]
