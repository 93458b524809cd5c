"""Failure policy shared by every step action.

After each external command a step classifies the result with :func:`check`:
exit status 0, or a status the step declares as "already in the desired
state", lets the step continue; anything else ends the whole run through
:func:`fail`. There is no retry: blind retries against a live clusterware
stack are unsafe, so recovery is a manual fix followed by ``--skip``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NoReturn

from orasid.pipeline.exceptions import FatalStepError

if TYPE_CHECKING:
    from collections.abc import Collection

    from orasid.pipeline.models import ExecutionResult

logger = logging.getLogger(__name__)


def fail(message: str, output: str = "") -> NoReturn:
    """Abort the run.

    Args:
        message: What failed, in operator terms.
        output: Diagnostic output captured from the external command.

    Raises:
        FatalStepError: Always.
    """
    raise FatalStepError(message, output)


def check(
    result: ExecutionResult,
    message: str,
    *,
    accept: Collection[int] = (),
) -> ExecutionResult:
    """Classify a command result.

    Args:
        result: Result returned by the shell executor.
        message: Failure message if the result is not acceptable.
        accept: Non-zero statuses meaning "already in the desired state".

    Returns:
        The result, unchanged, when acceptable.

    Raises:
        FatalStepError: If the status is non-zero and not in ``accept``.

    Examples:
        >>> from orasid.pipeline.models import ExecutionResult
        >>> check(ExecutionResult("srvctl stop asm -f", 2), "Couldn't stop ASM", accept={2}).return_code
        2
    """
    if result.return_code == 0:
        return result
    if result.return_code in accept:
        logger.info("Exit status %d accepted as already done: %s", result.return_code, result.command)
        return result
    logger.debug("Exit status %d rejected: %s", result.return_code, result.command)
    fail(message, result.output)


__all__ = [
    "check",
    "fail",
]
