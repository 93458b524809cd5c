"""Typed view over the loaded settings."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Any

from orasid.config.exceptions import ConfigError
from orasid.logging import PRESETS

if TYPE_CHECKING:
    from box import Box

#: Presets understood by :func:`orasid.logging.configure_logging`.
LOGGING_PRESETS = tuple(PRESETS)


@dataclass(frozen=True, slots=True)
class UserSettings:
    """Accounts commands run as.

    Attributes:
        privileged: Account the runbook must be started as.
        oracle: Owner of the database home.
        grid: Owner of the Grid home.
    """

    privileged: str = "root"
    oracle: str = "oracle"
    grid: str = "grid"


@dataclass(frozen=True, slots=True)
class FileSettings:
    """System files edited or read by the runbooks."""

    network: str = "/etc/sysconfig/network"
    hosts: str = "/etc/hosts"
    oratab: str = "/etc/oratab"
    inittab: str = "/etc/inittab"


@dataclass(frozen=True, slots=True)
class OrasidSettings:
    """Validated settings for one run.

    Attributes:
        users: Accounts commands run as.
        runlevels: Run levels in which the procedure may start.
        files: System file locations.
        password: Password for a freshly created password file.
        password_entries: ``entries=`` value for ``orapwd``.
        listener_resource: Clusterware resource name of the listener.
        logging_preset: Default logging preset.

    Examples:
        >>> settings = OrasidSettings()
        >>> settings.runlevels
        (2, 3, 4, 5)
    """

    users: UserSettings = UserSettings()
    runlevels: tuple[int, ...] = (2, 3, 4, 5)
    files: FileSettings = FileSettings()
    password: str = "manager"
    password_entries: int = 10
    listener_resource: str = "ora.LISTENER.lsnr"
    logging_preset: str = "dev"

    def __post_init__(self) -> None:
        """Validate settings values.

        Raises:
            ConfigError: If any value is out of range.
        """
        for role in ("privileged", "oracle", "grid"):
            if not getattr(self.users, role):
                raise ConfigError(f"users.{role} cannot be empty")
        if not self.runlevels:
            raise ConfigError("runlevels cannot be empty")
        for level in self.runlevels:
            if not 0 <= level <= 6:
                raise ConfigError(f"Invalid runlevel {level} (expected 0-6)")
        for key in ("network", "hosts", "oratab", "inittab"):
            value = getattr(self.files, key)
            if not PurePosixPath(value).is_absolute():
                raise ConfigError(f"files.{key} must be an absolute path, got {value!r}")
        if self.password_entries <= 0:
            raise ConfigError(f"password_file.entries must be positive, got {self.password_entries}")
        if self.logging_preset not in LOGGING_PRESETS:
            raise ConfigError(
                f"Invalid logging preset {self.logging_preset!r} (expected one of {', '.join(LOGGING_PRESETS)})"
            )

    @classmethod
    def from_config(cls, config: Box | dict[str, Any]) -> OrasidSettings:
        """Build settings from a loaded configuration mapping.

        Args:
            config: Result of :func:`orasid.config.loader.load_config`.

        Returns:
            Validated settings.

        Raises:
            ConfigError: If a value has the wrong type or range.
        """
        users = config.get("users") or {}
        files = config.get("files") or {}
        password_file = config.get("password_file") or {}
        listener = config.get("listener") or {}
        logging_section = config.get("logging") or {}

        try:
            runlevels = tuple(int(level) for level in config.get("runlevels", (2, 3, 4, 5)))
            entries = int(password_file.get("entries", 10))
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid numeric setting: {exc}") from exc

        return cls(
            users=UserSettings(
                privileged=str(users.get("privileged", "root")),
                oracle=str(users.get("oracle", "oracle")),
                grid=str(users.get("grid", "grid")),
            ),
            runlevels=runlevels,
            files=FileSettings(
                network=str(files.get("network", "/etc/sysconfig/network")),
                hosts=str(files.get("hosts", "/etc/hosts")),
                oratab=str(files.get("oratab", "/etc/oratab")),
                inittab=str(files.get("inittab", "/etc/inittab")),
            ),
            password=str(password_file.get("password", "manager")),
            password_entries=entries,
            listener_resource=str(listener.get("resource", "ora.LISTENER.lsnr")),
            logging_preset=str(logging_section.get("preset", "dev")),
        )


__all__ = [
    "LOGGING_PRESETS",
    "FileSettings",
    "OrasidSettings",
    "UserSettings",
]
