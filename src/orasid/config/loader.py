"""Settings file discovery and loading.

Settings are YAML mappings wrapped in :class:`box.Box` for attribute access.
The packaged ``orasid.conf.yml`` provides every default; the first user file
found in the search path is deep-merged over it.

Search order (first match wins):

1. The path passed explicitly (``--config``), which must exist
2. ``./orasid.conf.yml``
3. ``~/.config/orasid/orasid.conf.yml``
4. ``/etc/orasid/orasid.conf.yml``
"""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from box import Box

from orasid.config.exceptions import ConfigFileNotFoundError, ConfigFormatError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

log = logging.getLogger(__name__)

#: Name of the settings file looked up in each search directory.
CONFIG_FILENAME = "orasid.conf.yml"


def default_search_paths() -> list[Path]:
    """Return the settings search path, highest priority first."""
    return [
        Path.cwd() / CONFIG_FILENAME,
        Path.home() / ".config" / "orasid" / CONFIG_FILENAME,
        Path("/etc/orasid") / CONFIG_FILENAME,
    ]


def find_config_file(
    explicit: str | Path | None = None,
    search_paths: Sequence[Path] | None = None,
) -> Path | None:
    """Locate the user settings file.

    Args:
        explicit: Path given on the command line. When set it must exist.
        search_paths: Directories to search instead of the defaults.

    Returns:
        The first existing settings file, or None when only defaults apply.

    Raises:
        ConfigFileNotFoundError: If ``explicit`` does not exist.
    """
    if explicit is not None:
        path = Path(explicit).expanduser()
        if not path.is_file():
            raise ConfigFileNotFoundError(str(path))
        return path

    for candidate in search_paths if search_paths is not None else default_search_paths():
        if candidate.is_file():
            return candidate
    return None


def _read_yaml(text: str, source: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigFormatError(source, str(exc)) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigFormatError(source, f"top level must be a mapping, got {type(data).__name__}")
    return data


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``; nested mappings merge, other values replace.

    Examples:
        >>> _deep_merge({"a": {"x": 1, "y": 2}}, {"a": {"y": 3}, "b": 4})
        {'a': {'x': 1, 'y': 3}, 'b': 4}
    """
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_defaults() -> dict[str, Any]:
    """Return the packaged default settings as a plain dict."""
    text = resources.files("orasid").joinpath(CONFIG_FILENAME).read_text(encoding="utf-8")
    return _read_yaml(text, f"<package>/{CONFIG_FILENAME}")


def load_config(
    path: str | Path | None = None,
    search_paths: Sequence[Path] | None = None,
) -> Box:
    """Load settings: packaged defaults, deep-merged with the user file.

    Args:
        path: Explicit settings file (``--config``).
        search_paths: Override the default search path (tests).

    Returns:
        Box with the merged settings.

    Raises:
        ConfigFileNotFoundError: If ``path`` is given but missing.
        ConfigFormatError: If a settings file is not a YAML mapping.

    Examples:
        >>> config = load_config(search_paths=[])
        >>> config.users.oracle
        'oracle'
    """
    data = load_defaults()
    source = find_config_file(path, search_paths)
    if source is not None:
        log.debug("Loading settings from %s", source)
        try:
            text = source.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigFormatError(str(source), str(exc)) from exc
        data = _deep_merge(data, _read_yaml(text, str(source)))
    else:
        log.debug("No settings file found, using packaged defaults")
    return Box(data)


__all__ = [
    "CONFIG_FILENAME",
    "default_search_paths",
    "find_config_file",
    "load_config",
    "load_defaults",
]
