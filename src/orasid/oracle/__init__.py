"""Adapters for the Oracle administration tools and system files.

- ServiceControl: ``srvctl``/``crsctl``/``roothas.pl``/``localconfig``
- SqlPlus: scripted queries through ``sqlplus``
- FileEditor: in-place edits of configuration files
- make_owned_dirs: directories owned by the database account
"""

from orasid.oracle.files import FileEditor, make_owned_dirs
from orasid.oracle.services import ALREADY_STOPPED, ServiceControl
from orasid.oracle.sqlplus import SYSASM, SYSDBA, SqlPlus

__all__ = [
    "ALREADY_STOPPED",
    "SYSASM",
    "SYSDBA",
    "FileEditor",
    "ServiceControl",
    "SqlPlus",
    "make_owned_dirs",
]
