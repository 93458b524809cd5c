"""Scoped Oracle environment for external commands.

Oracle tools read ``ORACLE_HOME`` and ``ORACLE_SID`` from their environment
and most steps need different values (database home with the old SID, Grid
home with ``+ASM``, database home with the new SID). Instead of mutating
``os.environ``, the values live on an :class:`OracleEnvironment` owned by the
shell executor, and each step overrides them for its own duration only::

    with environment.scoped(oracle_home=grid_home, oracle_sid="+ASM"):
        ...

The previous values are restored on every exit path, including a
:class:`~orasid.pipeline.exceptions.FatalStepError` escaping the block.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

logger = logging.getLogger(__name__)

#: Attributes that :meth:`OracleEnvironment.scoped` may override.
SCOPED_FIELDS = frozenset({"oracle_home", "oracle_sid"})


@dataclass
class OracleEnvironment:
    """Ambient configuration passed to every external command.

    Attributes:
        oracle_home: Value for ``ORACLE_HOME``, or None to leave it untouched.
        oracle_sid: Value for ``ORACLE_SID``, or None to leave it untouched.
        extra_path: Directories appended to ``PATH`` (Oracle and Grid ``bin``).
        base: Environment to start from; None means ``os.environ`` at call time.

    Examples:
        >>> env = OracleEnvironment(oracle_home="/u01/db", base={"PATH": "/bin"})
        >>> with env.scoped(oracle_sid="ORCL"):
        ...     env.as_env()["ORACLE_SID"]
        'ORCL'
        >>> "ORACLE_SID" in env.as_env()
        False
    """

    oracle_home: str | None = None
    oracle_sid: str | None = None
    extra_path: tuple[str, ...] = ()
    base: Mapping[str, str] | None = field(default=None, repr=False)

    @classmethod
    def for_homes(cls, *homes: str, oracle_home: str | None = None) -> OracleEnvironment:
        """Build an environment whose ``PATH`` includes each home's ``bin``.

        Args:
            *homes: Oracle and/or Grid homes; empty values are ignored.
            oracle_home: Ambient ``ORACLE_HOME``.
        """
        return cls(
            oracle_home=oracle_home,
            extra_path=tuple(f"{home.rstrip('/')}/bin" for home in homes if home),
        )

    def as_env(self) -> dict[str, str]:
        """Return the environment mapping for a subprocess."""
        env = dict(os.environ if self.base is None else self.base)
        if self.extra_path:
            parts = [part for part in env.get("PATH", "").split(os.pathsep) if part]
            parts.extend(path for path in self.extra_path if path not in parts)
            env["PATH"] = os.pathsep.join(parts)
        if self.oracle_home is not None:
            env["ORACLE_HOME"] = self.oracle_home
        if self.oracle_sid is not None:
            env["ORACLE_SID"] = self.oracle_sid
        return env

    @contextmanager
    def scoped(self, **overrides: str | None) -> Iterator[OracleEnvironment]:
        """Override ``oracle_home``/``oracle_sid`` for the duration of a block.

        Args:
            **overrides: New values; keys must be in :data:`SCOPED_FIELDS`.

        Yields:
            This environment, with the overrides applied.

        Raises:
            TypeError: If an unknown field is given.
        """
        unknown = set(overrides) - SCOPED_FIELDS
        if unknown:
            raise TypeError(f"Cannot scope unknown environment field(s): {', '.join(sorted(unknown))}")

        saved = {name: getattr(self, name) for name in overrides}
        for name, value in overrides.items():
            setattr(self, name, value)
        logger.debug("Environment scope entered: %s", overrides)
        try:
            yield self
        finally:
            for name, value in saved.items():
                setattr(self, name, value)
            logger.debug("Environment scope restored: %s", saved)


__all__ = [
    "SCOPED_FIELDS",
    "OracleEnvironment",
]
