"""Parameters, collaborators and step bodies shared by both releases.

The step bodies take their collaborators and parameters as plain arguments
so that a pipeline binds everything it needs when it is built; nothing is
looked up while the procedure runs.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from orasid.oracle import FileEditor, ServiceControl, SqlPlus, make_owned_dirs, scripts
from orasid.parsers import parse_dump_dests, parse_oratab, spfile_missing
from orasid.pipeline.policy import check, fail

if TYPE_CHECKING:
    from orasid.config.settings import OrasidSettings
    from orasid.environment import OracleEnvironment
    from orasid.pipeline.reporter import Reporter
    from orasid.pipeline.shell import ShellExecutor

logger = logging.getLogger(__name__)

#: Log destination parameters whose value embeds the SID.
_DUMP_DEST_LINE = r"(?:audit_file|background_dump|core_dump|user_dump)_dest\s*="


@dataclass(frozen=True, slots=True)
class RunbookParams:
    """Values bound into the steps of one run.

    Attributes:
        new_hostname: Target host name.
        old_sid: Current SID of the database.
        new_sid: Target SID.
        old_hostname: Host name recorded before the change.
        oracle_home: Oracle home of the database.
        grid_home: Grid home (11g only).

    Examples:
        >>> params = RunbookParams("db02", "OLD", "NEW", oracle_home="/u01/db")
        >>> params.pfile("NEW")
        '/u01/db/dbs/initNEW.ora'
    """

    new_hostname: str
    old_sid: str
    new_sid: str
    old_hostname: str = ""
    oracle_home: str = ""
    grid_home: str = ""

    @property
    def dbs(self) -> str:
        """Return the ``dbs`` directory of the Oracle home."""
        return f"{self.oracle_home}/dbs"

    def pfile(self, sid: str) -> str:
        """Return the pfile path for a SID."""
        return f"{self.dbs}/init{sid}.ora"

    def password_file(self, sid: str) -> str:
        """Return the password file path for a SID."""
        return f"{self.dbs}/orapw{sid}"


@dataclass
class Services:
    """Collaborators every step body needs.

    Attributes:
        settings: Validated settings.
        executor: Shell executor (owns the scoped environment).
        control: Clusterware process control.
        sqlplus: Scripted queries.
        editor: In-place file edits.
    """

    settings: OrasidSettings
    executor: ShellExecutor
    control: ServiceControl
    sqlplus: SqlPlus
    editor: FileEditor

    @classmethod
    def create(cls, settings: OrasidSettings, executor: ShellExecutor) -> Services:
        """Wire the collaborators around one executor."""
        return cls(
            settings=settings,
            executor=executor,
            control=ServiceControl(executor, settings.users),
            sqlplus=SqlPlus(executor),
            editor=FileEditor(executor.reporter),
        )

    @property
    def environment(self) -> OracleEnvironment:
        """Return the executor's scoped environment."""
        return self.executor.environment

    @property
    def reporter(self) -> Reporter:
        """Return the diagnostic reporter."""
        return self.executor.reporter


def oracle_home_from_oratab(oratab: str | Path, sid: str) -> str:
    """Look up the Oracle home of a SID in ``/etc/oratab``.

    Raises:
        FatalStepError: If the file is unreadable or the SID has no single entry.
    """
    try:
        text = Path(oratab).read_text(encoding="utf-8")
    except OSError as exc:
        fail(f"Can't open {oratab}", str(exc))
    return parse_oratab(text, sid)


# ============================================================================
# Step bodies
# ============================================================================


def change_hostname(services: Services, params: RunbookParams) -> None:
    """Rename the host in the network file, the kernel and ``/etc/hosts``."""
    if not params.old_hostname:
        fail("Current host name is unknown, cannot update the hosts file")
    # On resume the network file may already carry the new name.
    if params.old_hostname.lower() == params.new_hostname.lower():
        fail(
            f"Old host name {params.old_hostname} is the new one, cannot update the hosts file. "
            "Export HOSTNAME=<old host name> or pass --old-host"
        )
    files = services.settings.files
    new = params.new_hostname

    if not services.editor.substitute(files.network, r"^HOSTNAME=.*$", lambda _m: f"HOSTNAME={new}", flags=re.M):
        logger.warning("No HOSTNAME= line in %s", files.network)

    check(services.executor.execute(f"hostname {new}"), "Couldn't set hostname")

    old = re.escape(params.old_hostname)
    replaced = services.editor.substitute(files.hosts, rf"(?<![\w.-]){old}(?![\w.-])", lambda _m: new)
    logger.info("Replaced %d occurrence(s) of %s in %s", replaced, params.old_hostname, files.hosts)


def create_pfile(services: Services, params: RunbookParams, start_instance: bool = False) -> None:
    """Write ``init<new>.ora`` from the spfile of the old SID, or copy the old pfile.

    Args:
        services: Collaborators.
        params: Run parameters.
        start_instance: Start the old instance ``nomount`` for the query.
    """
    oracle = services.settings.users.oracle
    with services.environment.scoped(oracle_home=params.oracle_home, oracle_sid=params.old_sid):
        script = scripts.create_pfile(params.new_sid, start_instance)
        result = check(services.sqlplus.run(script, oracle), "Couldn't create pfile")
        if spfile_missing(result.output):
            check(
                services.executor.execute(f"cp {params.pfile(params.old_sid)} {params.pfile(params.new_sid)}", user=oracle),
                "Couldn't copy pfile",
            )


def modify_pfile(services: Services, params: RunbookParams, rename_prefixes: bool = False) -> None:
    """Rename the database in the new pfile and create its log destinations.

    Args:
        services: Collaborators.
        params: Run parameters.
        rename_prefixes: Also rewrite ``<old>.`` parameter prefixes and the
            ``SERVICE=`` of ``dispatchers`` (spfile-generated 11g pfiles).
    """
    pfile = Path(params.pfile(params.new_sid))
    if not pfile.exists():
        fail(f"No pfile found at {pfile} for new SID")
    old, new = re.escape(params.old_sid), params.new_sid
    editor = services.editor

    editor.substitute(pfile, rf"db_name\s*=\s*['\"]?{old}['\"]?", lambda _m: f"db_name='{new}'")
    if rename_prefixes:
        editor.substitute(pfile, rf"^{old}\.", lambda _m: f"{new}.", flags=re.M)
        editor.substitute(
            pfile,
            rf"^(.*dispatchers\s*=.*?)SERVICE={old}",
            lambda m: f"{m.group(1)}SERVICE={new}",
            flags=re.M,
        )
    editor.substitute(
        pfile,
        rf"^(.*{_DUMP_DEST_LINE}.*?){old}",
        lambda m: f"{m.group(1)}{new}",
        flags=re.M,
    )

    make_owned_dirs(parse_dump_dests(editor.read(pfile)), services.settings.users.oracle)


def change_dbid(services: Services, params: RunbookParams, mount_script: str) -> None:
    """Mount the old database and rename it with ``nid``.

    Args:
        services: Collaborators.
        params: Run parameters.
        mount_script: SQL*Plus script leaving the database mounted.
    """
    oracle = services.settings.users.oracle
    with services.environment.scoped(oracle_home=params.oracle_home, oracle_sid=params.old_sid):
        check(services.sqlplus.run(mount_script, oracle), "Couldn't start the database")
        check(
            services.executor.execute(f"sh -c 'echo Y | nid target=/ setname=yes dbname={params.new_sid}'", user=oracle),
            "Couldn't change DBID with nid",
        )


def move_orapwd(services: Services, params: RunbookParams) -> None:
    """Rename the password file, or create one when the old SID had none."""
    source = Path(params.password_file(params.old_sid))
    destination = params.password_file(params.new_sid)
    if source.exists():
        services.editor.move(source, destination)
        return

    settings = services.settings
    with services.environment.scoped(oracle_home=params.oracle_home):
        check(
            services.executor.execute(
                f"orapwd file={destination} password={settings.password} entries={settings.password_entries}",
                user=settings.users.oracle,
            ),
            "Couldn't create a new Oracle password file",
        )


def create_spfile(services: Services, params: RunbookParams, script: str = scripts.CREATE_SPFILE) -> None:
    """Create the spfile of the new SID from its pfile."""
    with services.environment.scoped(oracle_home=params.oracle_home, oracle_sid=params.new_sid):
        check(
            services.sqlplus.run(script, services.settings.users.oracle),
            "Couldn't start the database and create spfile",
        )


def update_oratab(services: Services, params: RunbookParams) -> None:
    """Rename the SID's entry in ``/etc/oratab``."""
    oratab = services.settings.files.oratab
    new = params.new_sid
    if not services.editor.substitute(oratab, rf"^{re.escape(params.old_sid)}:", lambda _m: f"{new}:", flags=re.M):
        logger.warning("No entry for %s in %s", params.old_sid, oratab)


__all__ = [
    "RunbookParams",
    "Services",
    "change_dbid",
    "change_hostname",
    "create_pfile",
    "create_spfile",
    "modify_pfile",
    "move_orapwd",
    "oracle_home_from_oratab",
    "update_oratab",
]
