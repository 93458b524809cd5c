"""Scripted queries through ``sqlplus``.

The script body is written to a temporary ``.sql`` file readable by the
account ``sqlplus`` runs as, executed with ``sqlplus -S -L``, and removed
afterwards whatever the outcome.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from orasid.pipeline.models import ExecutionResult
    from orasid.pipeline.shell import ShellExecutor

logger = logging.getLogger(__name__)

#: Default connection for database instances.
SYSDBA = "/ as sysdba"

#: Connection for ASM instances.
SYSASM = "/ as sysasm"

#: Scripts are run by another account through sudo.
SCRIPT_MODE = 0o644


class SqlPlus:
    """Run SQL scripts as a given account.

    Args:
        executor: Shell executor.
        script_dir: Directory for temporary scripts (defaults to the system one).

    Examples:
        >>> from orasid.pipeline.shell import ShellExecutor
        >>> sqlplus = SqlPlus(ShellExecutor())
        >>> result = sqlplus.run("select 1 from dual;\\nexit;\\n", user="oracle")  # doctest: +SKIP
    """

    def __init__(self, executor: ShellExecutor, script_dir: str | Path | None = None) -> None:
        self._executor = executor
        self._script_dir = str(script_dir) if script_dir is not None else None

    def run(self, script: str, user: str, privilege: str = SYSDBA) -> ExecutionResult:
        """Execute a script body.

        Args:
            script: SQL*Plus script; it should end with ``exit;``.
            user: Account to run ``sqlplus`` as.
            privilege: Connection string, ``/ as sysdba`` by default.

        Returns:
            The ExecutionResult; callers classify it.
        """
        with tempfile.NamedTemporaryFile(
            "w",
            suffix=".sql",
            prefix="orasid-",
            dir=self._script_dir,
            delete=False,
            encoding="utf-8",
        ) as handle:
            handle.write(script)
        path = Path(handle.name)

        try:
            path.chmod(SCRIPT_MODE)
            logger.debug("SQL script %s:\n%s", path, script)
            return self._executor.execute(f"sqlplus -S -L '{privilege}' @{path}", user=user)
        finally:
            path.unlink(missing_ok=True)


__all__ = [
    "SCRIPT_MODE",
    "SYSASM",
    "SYSDBA",
    "SqlPlus",
]
