"""orasid: resumable runbook that changes an Oracle host name and database SID.

The runbook is a :class:`~orasid.pipeline.Pipeline` of named steps built by
:func:`~orasid.runbooks.build_pipeline` for one Oracle release and executed
by a :class:`~orasid.pipeline.PipelineRunner`, which can resume from any
named step after a failure.
"""

from orasid.meta import __app_name__, __version__

__all__ = [
    "__app_name__",
    "__version__",
]
