"""Parsers for the text printed by the administration tools.

Each parser documents the output shape it accepts and raises
:class:`~orasid.pipeline.exceptions.FatalStepError` on anything else, so an
unexpected tool version or an error banner stops the run instead of being
silently misread.
"""

from __future__ import annotations

import re

from orasid.pipeline.policy import fail

#: ``runlevel`` output: previous level (``N`` when none) and current level.
_RUNLEVEL_PATTERN = re.compile(r"^(N|S|[0-6])\s+([0-6])$")

#: Marker printed by the create-pfile script when the instance runs from a pfile.
NO_SPFILE_MARKER = "No spfile"

#: Marker printed by sqlplus after an anonymous block completes.
PLSQL_COMPLETED_MARKER = "PL/SQL procedure successfully completed"

#: ``crsctl status resource`` attribute lines.
_ATTRIBUTE_PATTERN = re.compile(r"^([A-Z_]+)=(.*)$")

#: pfile lines holding a per-SID log destination, e.g.
#: ``*.audit_file_dest='/u01/app/oracle/admin/ORCL/adump'``.
_DUMP_DEST_PATTERN = re.compile(
    r"^(?:[^=\s]+\.)?(?:audit_file|background_dump|core_dump|user_dump)_dest\s*=\s*(.+?)\s*$",
    re.IGNORECASE,
)

#: ``HOSTNAME=`` line of ``/etc/sysconfig/network``.
_NETWORK_HOSTNAME_PATTERN = re.compile(r"^\s*HOSTNAME\s*=\s*[\"']?([^\"'\s]+)[\"']?\s*$")


def _unquote(value: str) -> str:
    return value.strip().strip("\"'")


def parse_runlevel(output: str) -> tuple[str, int]:
    """Parse the output of ``runlevel``.

    Accepted shape: one line ``<previous> <current>`` where previous is
    ``N``, ``S`` or a digit and current is a digit, e.g. ``N 3``.

    Args:
        output: Command output.

    Returns:
        Tuple of (previous, current).

    Raises:
        FatalStepError: If the output has any other shape (``unknown`` included).

    Examples:
        >>> parse_runlevel("N 3\\n")
        ('N', 3)
    """
    lines = [line.strip() for line in output.splitlines() if line.strip()]
    match = _RUNLEVEL_PATTERN.match(lines[0]) if len(lines) == 1 else None
    if match is None:
        fail("Couldn't parse runlevel output", output)
    return match.group(1), int(match.group(2))


def spfile_missing(output: str) -> bool:
    """Tell whether the create-pfile script found no spfile.

    Accepted shapes: output containing ``No spfile`` (the instance runs from
    a pfile) or ``PL/SQL procedure successfully completed`` without it (a
    pfile was written from the spfile).

    Raises:
        FatalStepError: If neither marker is present.

    Examples:
        >>> spfile_missing("No spfile\\n\\nPL/SQL procedure successfully completed.\\n")
        True
        >>> spfile_missing("\\nPL/SQL procedure successfully completed.\\n")
        False
    """
    if NO_SPFILE_MARKER in output:
        return True
    if PLSQL_COMPLETED_MARKER in output:
        return False
    fail("Unexpected output while creating the pfile", output)


def parse_resource_names(output: str) -> list[str]:
    """Extract resource names from ``crsctl status resource`` output.

    Accepted shape: blocks of ``KEY=VALUE`` lines separated by blank lines;
    each ``NAME=`` line yields one resource.

    Raises:
        FatalStepError: If a non-blank line is not ``KEY=VALUE``.

    Examples:
        >>> parse_resource_names("NAME=ora.DATA.dg\\nTYPE=ora.diskgroup.type\\n\\nNAME=ora.FRA.dg\\n")
        ['ora.DATA.dg', 'ora.FRA.dg']
    """
    names: list[str] = []
    for line in output.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        match = _ATTRIBUTE_PATTERN.match(stripped)
        if match is None:
            fail("Unexpected line in crsctl output", output)
        if match.group(1) == "NAME" and match.group(2):
            names.append(match.group(2))
    return names


def parse_dump_dests(text: str) -> list[str]:
    """Extract the per-SID log destinations from a pfile.

    Recognised parameters: ``audit_file_dest``, ``background_dump_dest``,
    ``core_dump_dest`` and ``user_dump_dest``, with an optional ``<sid>.``
    or ``*.`` prefix and optional quotes around the value.

    Raises:
        FatalStepError: If a destination is not an absolute path.

    Examples:
        >>> parse_dump_dests("*.audit_file_dest='/u01/admin/NEW/adump'\\n*.db_name='NEW'\\n")
        ['/u01/admin/NEW/adump']
    """
    paths: list[str] = []
    for line in text.splitlines():
        match = _DUMP_DEST_PATTERN.match(line.strip())
        if match is None:
            continue
        path = _unquote(match.group(1))
        if not path.startswith("/"):
            fail(f"Log destination is not an absolute path: {path!r}", line)
        if path not in paths:
            paths.append(path)
    return paths


def parse_parameter_paths(output: str) -> list[str]:
    """Parse a headerless sqlplus listing of directory parameters.

    Accepted shape: one absolute path per non-blank line.

    Raises:
        FatalStepError: On any other line (an ``ORA-`` error, for instance).

    Examples:
        >>> parse_parameter_paths("/u01/admin/ORCL/bdump\\n\\n/u01/admin/ORCL/udump\\n")
        ['/u01/admin/ORCL/bdump', '/u01/admin/ORCL/udump']
    """
    paths: list[str] = []
    for line in output.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        if not stripped.startswith("/"):
            fail("Unexpected output while listing log destinations", output)
        if stripped not in paths:
            paths.append(stripped)
    return paths


def parse_oratab(text: str, sid: str) -> str:
    """Return the Oracle home registered for a SID in ``/etc/oratab``.

    Accepted shape: ``<sid>:<home>:<Y|N>`` lines; blank lines and ``#``
    comments are ignored.

    Raises:
        FatalStepError: If the SID has no entry or more than one.

    Examples:
        >>> parse_oratab("# comment\\n+ASM:/u01/asm:N\\nORCL:/u01/db:Y\\n", "ORCL")
        '/u01/db'
    """
    homes = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        parts = stripped.split(":")
        if len(parts) >= 2 and parts[0] == sid:
            homes.append(parts[1])
    if not homes:
        fail(f"No database found in oratab with SID {sid}")
    if len(homes) > 1:
        fail(f"More than one database found in oratab with SID {sid}", "\n".join(homes))
    return homes[0]


def parse_network_hostname(text: str) -> str | None:
    """Return the ``HOSTNAME=`` value of ``/etc/sysconfig/network``, if any.

    Examples:
        >>> parse_network_hostname("NETWORKING=yes\\nHOSTNAME=db01.example.com\\n")
        'db01.example.com'
    """
    for line in text.splitlines():
        match = _NETWORK_HOSTNAME_PATTERN.match(line)
        if match:
            return match.group(1)
    return None


__all__ = [
    "NO_SPFILE_MARKER",
    "PLSQL_COMPLETED_MARKER",
    "parse_dump_dests",
    "parse_network_hostname",
    "parse_oratab",
    "parse_parameter_paths",
    "parse_resource_names",
    "parse_runlevel",
    "spfile_missing",
]
