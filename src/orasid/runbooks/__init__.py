"""Runbooks: the ordered step lists of each supported Oracle release.

Examples:
    >>> from orasid.config import OrasidSettings
    >>> from orasid.pipeline.shell import ShellExecutor
    >>> services = Services.create(OrasidSettings(), ShellExecutor())
    >>> pipeline = build_pipeline("10g", RunbookParams("db02", "OLD", "NEW"), services)
    >>> pipeline.names()[:2]
    ['CHECK_NEW_HOSTNAME', 'CHECK_ORACLE_STOPPED']
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from orasid.runbooks import r10g, r11g
from orasid.runbooks.common import RunbookParams, Services, oracle_home_from_oratab

if TYPE_CHECKING:
    from collections.abc import Callable

    from orasid.pipeline.models import Pipeline


class Release(str, Enum):
    """Supported Oracle releases.

    Attributes:
        R11G: 11g with Oracle Restart (HAS).
        R10G: 10g with a local CSS daemon.
    """

    R11G = "11g"
    R10G = "10g"


_BUILDERS: dict[Release, Callable[[RunbookParams, Services], Pipeline]] = {
    Release.R11G: r11g.build,
    Release.R10G: r10g.build,
}


def build_pipeline(release: Release | str, params: RunbookParams, services: Services) -> Pipeline:
    """Build the pipeline of a release with its arguments bound.

    Args:
        release: Release or its value (``"11g"``, ``"10g"``).
        params: Run parameters.
        services: Collaborators.

    Returns:
        The release pipeline.

    Raises:
        ValueError: If the release is unknown.
    """
    return _BUILDERS[Release(release)](params, services)


__all__ = [
    "Release",
    "RunbookParams",
    "Services",
    "build_pipeline",
    "oracle_home_from_oratab",
]
