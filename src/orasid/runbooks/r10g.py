"""Host name and SID change for Oracle 10g with a local CSS daemon.

Requisites: the host name has not been changed yet, orasid runs as root and
every Oracle instance is stopped. The CSS configuration is removed and added
back around the rename, ASM is started from its oratab home, and the database
is renamed with ``nid`` before its oratab entry is updated.
"""

from __future__ import annotations

from orasid.oracle import make_owned_dirs, scripts
from orasid.parsers import parse_parameter_paths
from orasid.pipeline.models import Pipeline, Step
from orasid.pipeline.policy import check
from orasid.preconditions import check_new_hostname_differs, check_oracle_stopped, check_runlevel
from orasid.runbooks.common import (
    RunbookParams,
    Services,
    change_dbid,
    change_hostname,
    create_pfile,
    create_spfile,
    modify_pfile,
    move_orapwd,
    oracle_home_from_oratab,
    update_oratab,
)

#: SID of the ASM instance, also its oratab key.
ASM_SID = "+ASM"

#: ``localconfig add`` appends the CSS line at the end of inittab; it must
#: come right after the runlevel 2 line to start before the databases.
CSSD_LINE = r"^h1:.*cssd"
INITTAB_ANCHOR = r"^l2"

CHECKLIST = """Hostname/DBID change completed. You need to:
  1. Check /etc/profile.d/* and user profile files for ORACLE_SID definitions
  2. Check the DB restarts correctly when the machine is rebooted
  3. Update TNS names entries
  4. Check if other entries in /etc/hosts need to be changed
  5. Remove old pfiles, spfiles and old log directories"""


def _check_new_hostname(services: Services, params: RunbookParams) -> None:
    check_new_hostname_differs(services.executor, params.new_hostname, params.old_hostname)


def _check_oracle_stopped(services: Services, params: RunbookParams) -> None:
    check_oracle_stopped(services.executor)


def _check_runlevel(services: Services, params: RunbookParams) -> None:
    check_runlevel(services.executor, services.settings.runlevels)


def _remove_css_config(services: Services, params: RunbookParams) -> None:
    services.control.localconfig("delete")


def _add_css_config(services: Services, params: RunbookParams) -> None:
    services.control.localconfig("add")
    services.editor.move_line_after(services.settings.files.inittab, CSSD_LINE, INITTAB_ANCHOR)


def _start_asm(services: Services, params: RunbookParams) -> None:
    asm_home = oracle_home_from_oratab(services.settings.files.oratab, ASM_SID)
    with services.environment.scoped(oracle_home=asm_home, oracle_sid=ASM_SID):
        check(services.sqlplus.run(scripts.STARTUP, services.settings.users.oracle), "Couldn't start ASM")


def _create_dump_dests(services: Services, params: RunbookParams) -> None:
    # nid fails when a dump destination of the old instance is missing
    oracle = services.settings.users.oracle
    with services.environment.scoped(oracle_home=params.oracle_home, oracle_sid=params.old_sid):
        result = check(services.sqlplus.run(scripts.DUMP_DESTS_QUERY, oracle), "Couldn't find the log destinations")
    make_owned_dirs(parse_parameter_paths(result.output), oracle)


def _complete(services: Services, params: RunbookParams) -> None:
    services.reporter.note(CHECKLIST)


def build(params: RunbookParams, services: Services) -> Pipeline:
    """Return the 10g pipeline with every argument bound.

    Examples:
        >>> from orasid.config import OrasidSettings
        >>> from orasid.pipeline.shell import ShellExecutor
        >>> services = Services.create(OrasidSettings(), ShellExecutor())
        >>> build(RunbookParams("db02", "OLD", "NEW"), services).names()[-1]
        'COMPLETE'
    """
    bound = (services, params)
    return Pipeline(
        name="10g",
        steps=(
            Step("CHECK_NEW_HOSTNAME", _check_new_hostname, bound),
            Step("CHECK_ORACLE_STOPPED", _check_oracle_stopped, bound),
            Step("CHECK_RUNLEVEL", _check_runlevel, bound),
            Step("REMOVE_CSS_CONFIG", _remove_css_config, bound),
            Step("CHANGE_HOSTNAME", change_hostname, bound),
            Step("ADD_CSS_CONFIG", _add_css_config, bound),
            Step("START_ASM", _start_asm, bound),
            Step("CREATE_PFILE", create_pfile, (*bound, True)),
            Step("MODIFY_PFILE", modify_pfile, (*bound, False)),
            Step("CREATE_DUMP_DESTS", _create_dump_dests, bound),
            Step("CHANGE_DBID", change_dbid, (*bound, scripts.STARTUP_MOUNT)),
            Step("CREATE_SPFILE", create_spfile, (*bound, scripts.STARTUP_AND_CREATE_SPFILE)),
            Step("MOVE_ORAPWD", move_orapwd, bound),
            Step("UPDATE_ORATAB", update_oratab, bound),
            Step("COMPLETE", _complete, bound),
        ),
    )


__all__ = [
    "ASM_SID",
    "CHECKLIST",
    "build",
]
