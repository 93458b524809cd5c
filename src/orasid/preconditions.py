"""Precondition gate evaluated before any runbook step.

The checks are cheap to run and expensive to discover late: starting the
procedure as the wrong user, on a host whose name is already inconsistent,
or in single-user mode leaves the clusterware half reconfigured. The gate
runs its checks in order and the first failure raises
:class:`~orasid.pipeline.exceptions.PreconditionError` before the first
section trace.

The individual ``check_*`` functions are reused by the runbooks as steps
(``CHECK_HOSTNAME``, ``CHECK_RUNLEVEL``...) so that they also appear in the
audit trail.
"""

from __future__ import annotations

import functools
import logging
import os
import pwd
import socket
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from orasid.parsers import parse_network_hostname, parse_runlevel
from orasid.pipeline.exceptions import PreconditionError
from orasid.pipeline.policy import check

if TYPE_CHECKING:
    from collections.abc import Callable, Collection, Mapping, Sequence

    from orasid.pipeline.shell import ShellExecutor

logger = logging.getLogger(__name__)

#: ``pgrep`` exit status when no process matched.
PGREP_NO_MATCH = 1


@dataclass(frozen=True, slots=True)
class Check:
    """One named precondition.

    Attributes:
        name: Label shown in logs and in the error.
        func: Callable raising PreconditionError when the condition fails.
    """

    name: str
    func: Callable[[], None]


class PreconditionGate:
    """Ordered set of environment assertions.

    Args:
        checks: Initial checks, in evaluation order.

    Examples:
        >>> gate = PreconditionGate()
        >>> gate.add("always-ok", lambda: None).names
        ['always-ok']
        >>> gate.verify()
    """

    def __init__(self, checks: Sequence[Check] = ()) -> None:
        self._checks: list[Check] = list(checks)

    @property
    def names(self) -> list[str]:
        """Return check names in evaluation order."""
        return [c.name for c in self._checks]

    def add(self, name: str, func: Callable[..., None], *args: Any) -> PreconditionGate:
        """Append a check with its arguments bound.

        Returns:
            The gate, for chaining.
        """
        self._checks.append(Check(name=name, func=functools.partial(func, *args)))
        return self

    def verify(self) -> None:
        """Run every check in order.

        Raises:
            PreconditionError: From the first failing check.
        """
        for item in self._checks:
            logger.info("Checking precondition '%s'", item.name)
            item.func()
        logger.info("All %d preconditions passed", len(self._checks))


# ============================================================================
# Introspection helpers
# ============================================================================


def current_user() -> str:
    """Return the name of the effective user."""
    try:
        return pwd.getpwuid(os.geteuid()).pw_name
    except KeyError:
        return str(os.geteuid())


def recorded_hostname(network_file: str | Path, environ: Mapping[str, str] | None = None) -> str:
    """Return the host name the system believes it has.

    Looked up in order: the ``HOSTNAME`` environment variable, the
    ``HOSTNAME=`` line of the network file, the kernel host name.

    Args:
        network_file: Path of ``/etc/sysconfig/network``.
        environ: Environment to read (defaults to ``os.environ``).
    """
    env = os.environ if environ is None else environ
    value = env.get("HOSTNAME")
    if value:
        return value
    try:
        value = parse_network_hostname(Path(network_file).read_text(encoding="utf-8"))
    except OSError:
        value = None
    return value or socket.gethostname()


# ============================================================================
# Checks
# ============================================================================


def check_root(required: str = "root", actual: str | None = None) -> None:
    """Fail unless the effective user is the privileged account.

    Raises:
        PreconditionError: If the user differs.
    """
    user = actual if actual is not None else current_user()
    if user != required:
        raise PreconditionError(f"orasid should be run as {required} (running as {user}); use --no-root to bypass")


def check_hostname(executor: ShellExecutor, expected: str, *alternatives: str) -> None:
    """Fail unless ``hostname`` reports the expected name (case-insensitive).

    Args:
        executor: Shell executor.
        expected: Recorded host name.
        *alternatives: Other names also accepted (the new name on resume).

    Raises:
        PreconditionError: On mismatch.
        FatalStepError: If ``hostname`` itself fails.
    """
    result = check(executor.execute("hostname"), "Couldn't discover hostname")
    actual = result.output.strip()
    accepted = {name.lower() for name in (expected, *alternatives) if name}
    if actual.lower() not in accepted:
        raise PreconditionError(f"HOSTNAME ({expected}) and output of hostname ({actual}) don't match. Fix it")


def check_runlevel(executor: ShellExecutor, accepted: Collection[int]) -> None:
    """Fail unless the current run level is in ``accepted``.

    Raises:
        PreconditionError: If the run level is not accepted.
        FatalStepError: If ``runlevel`` fails or prints something unexpected.
    """
    result = check(executor.execute("runlevel"), "Couldn't discover runlevel")
    _previous, current = parse_runlevel(result.output)
    if current not in accepted:
        levels = ", ".join(str(level) for level in sorted(accepted))
        raise PreconditionError(f"Not in runlevel {levels} (current: {current}), this procedure probably won't work")


def check_new_hostname_differs(executor: ShellExecutor, new_hostname: str, recorded: str) -> None:
    """Fail if the new host name is already the current one.

    Raises:
        PreconditionError: If nothing would change.
    """
    result = check(executor.execute("hostname"), "Couldn't discover hostname")
    current = {recorded.lower(), result.output.strip().lower()}
    if new_hostname.lower() in current:
        raise PreconditionError("--new-host is equal to current hostname")


def check_oracle_stopped(executor: ShellExecutor) -> None:
    """Fail if any Oracle background process (``pmon``) is running.

    Raises:
        PreconditionError: If ``pgrep`` finds a process or fails.
    """
    result = executor.execute("pgrep -f pmon")
    if result.return_code != PGREP_NO_MATCH:
        raise PreconditionError(
            "Oracle processes appear to be running, stop them before re-running orasid",
            result.output,
        )


def default_gate(
    executor: ShellExecutor,
    *,
    expected_hostname: str,
    runlevels: Collection[int],
    privileged_user: str | None = "root",
    alternative_hostnames: Sequence[str] = (),
) -> PreconditionGate:
    """Build the standard gate: identity, host name, run level.

    Args:
        executor: Shell executor for the introspection commands.
        expected_hostname: Recorded host name.
        runlevels: Accepted run levels.
        privileged_user: Required account, or None to skip the identity check.
        alternative_hostnames: Other names ``hostname`` may report.

    Returns:
        Gate ready to :meth:`~PreconditionGate.verify`.
    """
    gate = PreconditionGate()
    if privileged_user is not None:
        gate.add("identity", check_root, privileged_user)
    gate.add("hostname", check_hostname, executor, expected_hostname, *alternative_hostnames)
    gate.add("runlevel", check_runlevel, executor, tuple(runlevels))
    return gate


__all__ = [
    "PGREP_NO_MATCH",
    "Check",
    "PreconditionGate",
    "check_hostname",
    "check_new_hostname_differs",
    "check_oracle_stopped",
    "check_root",
    "check_runlevel",
    "current_user",
    "default_gate",
    "recorded_hostname",
]
