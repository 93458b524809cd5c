"""Extended manual shown by ``orasid --man``."""

from __future__ import annotations

from rich.markdown import Markdown

MANUAL = """\
# orasid

Changes the host name of a machine running an Oracle database and renames
the database instance (SID) to match.

## Requisites

* Oracle **11g** with Oracle Restart (`--release 11g`, the default) or
  Oracle **10g** with a local CSS daemon (`--release 10g`).
* The host name must **not** have been changed yet, otherwise changing the
  clusterware configuration fails.
* orasid should be run by root (`--no-root` bypasses the check).
* 11g: HAS must be running. 10g: every Oracle instance must be stopped.

## Recommended usage (RHEL)

1. Boot the machine into single user mode.
2. Prevent kudzu interruptions caused by new NIC MAC addresses
   (`service kudzu start`).
3. Configure the network interfaces under
   `/etc/sysconfig/network-scripts/ifcfg-eth*`.
4. Update `/etc/hosts`.
5. Change to your normal runlevel: `telinit 3`.
6. Run orasid.

## Sections

Every step is announced on standard error with the prefix `###`, e.g.

    ### CREATE_PFILE

`orasid --list` prints the step names of the selected release. After a
failure, fix the cause and resume with `--skip <NAME>`: the named step and
every later step run again. Resuming may not work when a step depends on an
earlier one having run (the database being started, for instance).
"""


def render_manual(release_sections: list[str]) -> Markdown:
    """Return the manual with the section list of a release appended."""
    listing = "\n".join(f"* `{name}`" for name in release_sections)
    return Markdown(f"{MANUAL}\n{listing}\n")


__all__ = [
    "MANUAL",
    "render_manual",
]
