"""Shell executor for runbook steps.

Runs one command line through ``subprocess.run(shell=True)``, optionally as
another account through ``sudo -u <user> -E``, with standard error merged
into standard output. The command line is traced on the diagnostic channel
before it is spawned, on success as well as on failure.

There is no timeout and no retry: the external tools being driven
(``srvctl``, ``nid``, ``roothas.pl``) must run to completion, and the
interpretation of the exit status belongs to the calling step.
"""

from __future__ import annotations

import logging
import subprocess
import time

from orasid.environment import OracleEnvironment
from orasid.pipeline.models import ExecutionResult
from orasid.pipeline.reporter import Reporter

logger = logging.getLogger(__name__)

#: Return code reported when the shell itself cannot be spawned.
SPAWN_FAILURE_CODE = 127


class ShellExecutor:
    """Execute command lines for pipeline steps.

    Args:
        reporter: Diagnostic reporter receiving the ``Running:`` traces.
        environment: Ambient Oracle environment for every command.

    Examples:
        >>> executor = ShellExecutor()
        >>> result = executor.execute("echo hello")  # doctest: +SKIP
        >>> result.output  # doctest: +SKIP
        'hello\\n'
    """

    def __init__(
        self,
        reporter: Reporter | None = None,
        environment: OracleEnvironment | None = None,
    ) -> None:
        self._reporter = reporter or Reporter()
        self._environment = environment or OracleEnvironment()

    @property
    def reporter(self) -> Reporter:
        """Return the diagnostic reporter."""
        return self._reporter

    @property
    def environment(self) -> OracleEnvironment:
        """Return the ambient Oracle environment."""
        return self._environment

    def execute(self, command: str, user: str | None = None) -> ExecutionResult:
        """Run a command line and capture its merged output.

        Args:
            command: Complete shell command line, not parsed here.
            user: Account to run as through ``sudo -u <user> -E``.

        Returns:
            ExecutionResult with the exit status and merged output. A
            non-zero status is never raised; callers classify it.
        """
        if user:
            command = f"sudo -u {user} -E {command}"

        self._reporter.command(command)
        start = time.monotonic()
        result = self._spawn(command)
        logger.debug(
            "Command finished (rc=%d, %.3fs): %s",
            result.return_code,
            time.monotonic() - start,
            command,
        )
        return result

    def _spawn(self, command: str) -> ExecutionResult:
        try:
            proc = subprocess.run(  # noqa: S602
                command,
                shell=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                check=False,
                env=self._environment.as_env(),
            )
        except OSError as exc:
            logger.exception("Cannot spawn shell for: %s", command)
            return ExecutionResult(command=command, return_code=SPAWN_FAILURE_CODE, output=str(exc))

        return ExecutionResult(command=command, return_code=proc.returncode, output=proc.stdout or "")


__all__ = [
    "SPAWN_FAILURE_CODE",
    "ShellExecutor",
]
