"""Exceptions raised by orasid and its configuration layer.

Exception hierarchy::

    OrasidError (base for everything raised on purpose by orasid)
        ConfigError (settings could not be loaded or are invalid)
            ConfigFileNotFoundError (explicit settings file missing)
            ConfigFormatError (settings file is not a YAML mapping)
"""

from __future__ import annotations


class OrasidError(Exception):
    """Base exception for all orasid errors.

    The CLI catches this class at the top level, prints the message on the
    error channel and exits with a non-zero status.
    """


class ConfigError(OrasidError):
    """Settings could not be loaded or contain invalid values."""


class ConfigFileNotFoundError(ConfigError):
    """An explicitly requested settings file does not exist.

    Attributes:
        path: The path that was requested.
    """

    def __init__(self, path: str) -> None:
        """Initialize ConfigFileNotFoundError.

        Args:
            path: The path that was requested.
        """
        super().__init__(f"Settings file not found: {path}")
        self.path = path


class ConfigFormatError(ConfigError):
    """A settings file could not be parsed as a YAML mapping.

    Attributes:
        path: The offending file.
        reason: Parser message or shape problem.
    """

    def __init__(self, path: str, reason: str) -> None:
        """Initialize ConfigFormatError.

        Args:
            path: The offending file.
            reason: Parser message or shape problem.
        """
        super().__init__(f"Invalid settings file {path}: {reason}")
        self.path = path
        self.reason = reason


__all__ = [
    "ConfigError",
    "ConfigFileNotFoundError",
    "ConfigFormatError",
    "OrasidError",
]
