"""Protocol for step actions.

A step action is any callable that accepts the arguments bound to the step
when the pipeline is defined. Its return value is ignored; failure is
signalled only by raising :class:`~orasid.pipeline.exceptions.FatalStepError`.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class StepAction(Protocol):
    """Protocol satisfied by every step action.

    Examples:
        >>> def stop_db(sid: str) -> None: ...
        >>> isinstance(stop_db, StepAction)
        True
    """

    def __call__(self, *args: Any) -> object:
        """Run the step with its bound arguments."""
        ...


__all__ = [
    "StepAction",
]
