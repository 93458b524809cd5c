"""Host name and SID change for Oracle 11g with Oracle Restart (HAS).

Requisites: the host name has not been changed yet (the HAS configuration is
bound to it), orasid runs as root and HAS is running. The database, ASM and
HAS are stopped, HAS is deconfigured, the host is renamed, HAS is configured
again for the new name, and the database is renamed with ``nid`` before being
registered again under its new SID.
"""

from __future__ import annotations

from orasid.oracle import SYSASM, scripts
from orasid.pipeline.models import Pipeline, Step
from orasid.pipeline.policy import check
from orasid.preconditions import check_hostname, check_runlevel
from orasid.runbooks.common import (
    RunbookParams,
    Services,
    change_dbid,
    change_hostname,
    create_pfile,
    create_spfile,
    modify_pfile,
    move_orapwd,
)

#: Resources whose automatic start is lost when HAS is configured again.
HAS_RESOURCES = ("ora.cssd", "ora.diskmon")

#: Clusterware type of ASM disk groups.
DISKGROUP_TYPE = "ora.diskgroup.type"

#: SID of the ASM instance.
ASM_SID = "+ASM"


def _check_hostname(services: Services, params: RunbookParams) -> None:
    check_hostname(services.executor, params.old_hostname)


def _check_runlevel(services: Services, params: RunbookParams) -> None:
    check_runlevel(services.executor, services.settings.runlevels)


def _check_db_exists(services: Services, params: RunbookParams) -> None:
    with services.environment.scoped(oracle_home=params.oracle_home):
        services.control.database_status(params.old_sid)


def _stop_db(services: Services, params: RunbookParams) -> None:
    with services.environment.scoped(oracle_home=params.oracle_home):
        services.control.stop_database(params.old_sid)


def _stop_asm(services: Services, params: RunbookParams) -> None:
    with services.environment.scoped(oracle_home=params.oracle_home):
        services.control.stop_asm()


def _stop_has(services: Services, params: RunbookParams) -> None:
    services.control.stop_has()


def _deconfig_has(services: Services, params: RunbookParams) -> None:
    services.control.deconfigure_has(params.grid_home)


def _config_has(services: Services, params: RunbookParams) -> None:
    services.control.configure_has(params.grid_home)


def _config_resources(services: Services, params: RunbookParams) -> None:
    with services.environment.scoped(oracle_home=params.grid_home):
        for resource in HAS_RESOURCES:
            services.control.set_auto_start(resource)
        services.control.add_asm()
        services.control.set_auto_start("ora.asm")


def _start_asm(services: Services, params: RunbookParams) -> None:
    with services.environment.scoped(oracle_home=params.oracle_home):
        services.control.start_asm()


def _online_diskgroups(services: Services, params: RunbookParams) -> None:
    grid = services.settings.users.grid
    with services.environment.scoped(oracle_home=params.grid_home, oracle_sid=ASM_SID):
        check(services.sqlplus.run(scripts.MOUNT_DISKGROUPS, grid, SYSASM), "Couldn't bring diskgroups online")
        for diskgroup in services.control.list_resources(DISKGROUP_TYPE):
            services.control.set_auto_start(diskgroup)


def _add_db(services: Services, params: RunbookParams, sid: str) -> None:
    with services.environment.scoped(oracle_home=params.oracle_home):
        services.control.add_database(sid, params.oracle_home)


def _start_db(services: Services, params: RunbookParams, sid: str) -> None:
    with services.environment.scoped(oracle_home=params.oracle_home):
        services.control.start_database(sid)


def _remove_db(services: Services, params: RunbookParams, sid: str) -> None:
    with services.environment.scoped(oracle_home=params.oracle_home):
        services.control.remove_database(sid)


def _config_listener(services: Services, params: RunbookParams) -> None:
    with services.environment.scoped(oracle_home=params.grid_home):
        services.control.add_listener(services.settings.listener_resource)


def build(params: RunbookParams, services: Services) -> Pipeline:
    """Return the 11g pipeline with every argument bound.

    Examples:
        >>> from orasid.config import OrasidSettings
        >>> from orasid.pipeline.shell import ShellExecutor
        >>> services = Services.create(OrasidSettings(), ShellExecutor())
        >>> build(RunbookParams("db02", "OLD", "NEW"), services).names()[:3]
        ['CHECK_HOSTNAME', 'CHECK_RUNLEVEL', 'CHECK_DB_EXISTS']
    """
    bound = (services, params)
    return Pipeline(
        name="11g",
        steps=(
            Step("CHECK_HOSTNAME", _check_hostname, bound),
            Step("CHECK_RUNLEVEL", _check_runlevel, bound),
            Step("CHECK_DB_EXISTS", _check_db_exists, bound),
            Step("STOP_DB", _stop_db, bound),
            Step("STOP_ASM", _stop_asm, bound),
            Step("STOP_HAS", _stop_has, bound),
            Step("DECONFIG_HAS", _deconfig_has, bound),
            Step("CHANGE_HOSTNAME", change_hostname, bound),
            Step("CONFIG_HAS", _config_has, bound),
            Step("CONFIG_RESOURCES", _config_resources, bound),
            Step("START_ASM", _start_asm, bound),
            Step("ONLINE_DISKGROUPS", _online_diskgroups, bound),
            Step("ADD_OLD_SID_TO_HAS", _add_db, (*bound, params.old_sid)),
            Step("START_OLD_SID_DB", _start_db, (*bound, params.old_sid)),
            Step("CREATE_PFILE", create_pfile, bound),
            Step("MODIFY_PFILE", modify_pfile, (*bound, True)),
            Step("CHANGE_DBID", change_dbid, (*bound, scripts.OPEN_AND_MOUNT)),
            Step("MOVE_ORAPWD", move_orapwd, bound),
            Step("CREATE_SPFILE", create_spfile, (*bound, scripts.CREATE_SPFILE)),
            Step("REMOVE_OLD_DB_FROM_HAS", _remove_db, (*bound, params.old_sid)),
            Step("ADD_NEW_SID_TO_HAS", _add_db, (*bound, params.new_sid)),
            Step("START_NEW_SID_DB", _start_db, (*bound, params.new_sid)),
            Step("CONFIG_LSNR", _config_listener, bound),
        ),
    )


__all__ = [
    "ASM_SID",
    "DISKGROUP_TYPE",
    "HAS_RESOURCES",
    "build",
]
