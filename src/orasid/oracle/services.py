"""Process control through ``srvctl``, ``crsctl`` and the HAS/CSS setup scripts.

Every method runs one or more commands through the shell executor and
classifies each result with :func:`~orasid.pipeline.policy.check`. Stop
operations treat exit status 2 as "already stopped".
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from orasid.parsers import parse_resource_names
from orasid.pipeline.policy import check

if TYPE_CHECKING:
    from collections.abc import Collection

    from orasid.config.settings import UserSettings
    from orasid.pipeline.models import ExecutionResult
    from orasid.pipeline.shell import ShellExecutor

logger = logging.getLogger(__name__)

#: ``srvctl``/``crsctl`` exit status for "already stopped".
ALREADY_STOPPED = 2


class ServiceControl:
    """Start, stop, register and configure clusterware resources.

    Args:
        executor: Shell executor.
        users: Accounts owning the database and Grid homes.

    Examples:
        >>> from orasid.config.settings import UserSettings
        >>> from orasid.pipeline.shell import ShellExecutor
        >>> control = ServiceControl(ShellExecutor(), UserSettings())
        >>> control.stop_database("ORCL")  # doctest: +SKIP
    """

    def __init__(self, executor: ShellExecutor, users: UserSettings) -> None:
        self._executor = executor
        self._users = users

    def _run(
        self,
        command: str,
        user: str | None,
        message: str,
        accept: Collection[int] = (),
    ) -> ExecutionResult:
        return check(self._executor.execute(command, user=user), message, accept=accept)

    # ------------------------------------------------------------------
    # Databases
    # ------------------------------------------------------------------

    def database_status(self, sid: str) -> ExecutionResult:
        """Fail unless clusterware knows a database named ``sid``."""
        return self._run(f"srvctl status database -d {sid}", self._users.oracle, f"No database known with name {sid}")

    def stop_database(self, sid: str) -> None:
        """Stop a database; already stopped is fine."""
        self._run(
            f"srvctl stop database -d {sid}",
            self._users.oracle,
            f"Couldn't stop DB {sid}",
            accept=(ALREADY_STOPPED,),
        )

    def start_database(self, sid: str) -> None:
        """Start a registered database."""
        self._run(f"srvctl start database -d {sid}", self._users.oracle, f"Couldn't start DB {sid}")

    def add_database(self, sid: str, oracle_home: str) -> None:
        """Register a database with HAS and mark it for automatic start."""
        self._run(
            f"srvctl add database -d {sid} -o {oracle_home}",
            self._users.oracle,
            f"Couldn't add DB {sid} to HAS",
        )
        self.set_auto_start(f"ora.{sid.lower()}.db", self._users.oracle)

    def remove_database(self, sid: str) -> None:
        """Unregister a database from HAS."""
        self._run(f"srvctl remove database -d {sid} -y", self._users.oracle, f"Couldn't remove DB {sid} from HAS")

    # ------------------------------------------------------------------
    # ASM and HAS
    # ------------------------------------------------------------------

    def stop_asm(self) -> None:
        """Force ASM down without relocating disk groups; already stopped is fine."""
        self._run("srvctl stop asm -f", self._users.oracle, "Couldn't stop ASM", accept=(ALREADY_STOPPED,))

    def start_asm(self) -> None:
        """Start the ASM instance."""
        self._run("srvctl start asm", self._users.oracle, "Couldn't start asm")

    def add_asm(self) -> None:
        """Register ASM with HAS."""
        self._run("srvctl add asm", self._users.grid, "Couldn't add ora.asm")

    def stop_has(self) -> None:
        """Stop Oracle High Availability Services; already stopped is fine."""
        self._run("crsctl stop has", self._users.grid, "Couldn't stop HAS", accept=(ALREADY_STOPPED,))

    def deconfigure_has(self, grid_home: str) -> None:
        """Remove the HAS configuration bound to the old host name (runs as root)."""
        self._run(f"{grid_home}/crs/install/roothas.pl -deconfig -force", None, "Couldn't deconfigure HAS")

    def configure_has(self, grid_home: str) -> None:
        """Configure HAS for the new host name (runs as root)."""
        self._run(f"{grid_home}/crs/install/roothas.pl", None, "Couldn't configure HAS")

    def localconfig(self, action: str) -> None:
        """Run ``localconfig add`` or ``localconfig delete`` (10g CSS setup, as root)."""
        if action not in ("add", "delete"):
            raise ValueError(f"localconfig action must be 'add' or 'delete', got {action!r}")
        self._run(f"localconfig {action}", None, f"localconfig {action} failed")

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def set_auto_start(self, resource: str, user: str | None = None) -> None:
        """Set ``AUTO_START=1`` on a clusterware resource."""
        self._run(
            f"crsctl modify resource {resource} -attr AUTO_START=1",
            user or self._users.grid,
            f"Couldn't configure {resource} to AUTO_START",
        )

    def list_resources(self, resource_type: str) -> list[str]:
        """Return the names of all resources of a clusterware type."""
        result = self._run(
            f"crsctl status resource -w 'TYPE = {resource_type}'",
            self._users.grid,
            f"Couldn't list resources of type {resource_type}",
        )
        names = parse_resource_names(result.output)
        logger.debug("Resources of type %s: %s", resource_type, names)
        return names

    # ------------------------------------------------------------------
    # Listener
    # ------------------------------------------------------------------

    def add_listener(self, resource: str) -> None:
        """Register and start the default listener, then mark it for automatic start."""
        self._run("srvctl add listener", self._users.grid, "Couldn't add listener")
        self._run("srvctl start listener", self._users.grid, "Couldn't start listener")
        self.set_auto_start(resource, self._users.grid)


__all__ = [
    "ALREADY_STOPPED",
    "ServiceControl",
]
