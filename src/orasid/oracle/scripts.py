"""SQL*Plus scripts used by the runbooks.

Scripts that must fail loudly start with ``whenever sqlerror exit failure``
so that an ORA- error turns into a non-zero exit status instead of being
buried in otherwise successful output.
"""

from __future__ import annotations

_ON_ERROR = "whenever sqlerror exit failure\n"

MOUNT_DISKGROUPS = (
    _ON_ERROR
    + """begin
  for dg in (select name from v$asm_diskgroup) loop
    execute immediate 'alter diskgroup ' || dg.name || ' mount';
  end loop;
end;
/
exit;
"""
)

OPEN_AND_MOUNT = (
    _ON_ERROR
    + """alter database open;
alter system switch logfile;
shutdown immediate;
startup mount;
exit;
"""
)

STARTUP_MOUNT = (
    _ON_ERROR
    + """startup mount;
exit;
"""
)

STARTUP = (
    _ON_ERROR
    + """startup;
exit;
"""
)

CREATE_SPFILE = (
    _ON_ERROR
    + """create spfile from pfile;
exit;
"""
)

STARTUP_AND_CREATE_SPFILE = (
    _ON_ERROR
    + """startup;
create spfile from pfile;
exit;
"""
)

# Only the query rows reach the output: the instance banners are hidden.
DUMP_DESTS_QUERY = (
    _ON_ERROR
    + """set termout off
startup nomount;
set termout on
set head off
set feedback off
set pagesize 0
set line 1000
column value format a1024
select value from v$parameter where name in ('background_dump_dest', 'user_dump_dest', 'core_dump_dest', 'audit_file_dest') and value is not null;
set termout off
shutdown abort;
exit;
"""
)


def create_pfile(new_sid: str, start_instance: bool = False) -> str:
    """Return the script writing ``init<new_sid>.ora`` from the running spfile.

    Prints ``No spfile`` instead when the instance was started from a pfile.
    With ``start_instance`` the instance is started ``nomount`` first and
    aborted afterwards, for procedures where every instance is down.
    """
    startup, shutdown = ("", "")
    if start_instance:
        startup, shutdown = ("set termout off\nstartup nomount;\nset termout on\n", "shutdown abort;\n")
    return (
        _ON_ERROR
        + startup
        + f"""set serveroutput on
DECLARE
  spfile v$parameter.value%type;
BEGIN
  select value into spfile from v$parameter where name = 'spfile';
  if spfile is not null then
    execute immediate 'create pfile=''init{new_sid}.ora'' from spfile';
  else
    dbms_output.put_line('No spfile');
  end if;
END;
/
{shutdown}exit;
"""
    )


__all__ = [
    "CREATE_SPFILE",
    "DUMP_DESTS_QUERY",
    "MOUNT_DISKGROUPS",
    "OPEN_AND_MOUNT",
    "STARTUP",
    "STARTUP_AND_CREATE_SPFILE",
    "STARTUP_MOUNT",
    "create_pfile",
]
