"""Settings for orasid.

Examples:
    >>> from orasid.config import get_settings
    >>> settings = get_settings()  # doctest: +SKIP
    >>> settings.users.oracle  # doctest: +SKIP
    'oracle'
"""

from __future__ import annotations

from pathlib import Path

from orasid.config.exceptions import (
    ConfigError,
    ConfigFileNotFoundError,
    ConfigFormatError,
    OrasidError,
)
from orasid.config.loader import CONFIG_FILENAME, find_config_file, load_config
from orasid.config.settings import FileSettings, OrasidSettings, UserSettings


def get_settings(path: str | Path | None = None) -> OrasidSettings:
    """Load and validate settings in one call.

    Args:
        path: Explicit settings file, or None to search the default locations.

    Returns:
        Validated settings.
    """
    return OrasidSettings.from_config(load_config(path))


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "FileSettings",
    "OrasidError",
    "OrasidSettings",
    "UserSettings",
    "find_config_file",
    "get_settings",
    "load_config",
]
