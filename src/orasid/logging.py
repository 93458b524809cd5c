"""Logging setup for orasid.

Modules log through ``logging.getLogger(__name__)``; the CLI installs a
single :class:`rich.logging.RichHandler` on the ``orasid`` logger, writing
to stderr so that it never mixes with the step list or the final summary.

Presets:

- ``dev``: INFO, compact.
- ``debug``: DEBUG, file paths and rich tracebacks with locals.
- ``prod``: WARNING, tracebacks without locals.
"""

from __future__ import annotations

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

#: Name of the package logger every module logger descends from.
LOGGER_NAME = "orasid"

PRESETS: dict[str, dict[str, Any]] = {
    "dev": {"level": logging.INFO, "show_path": False, "tracebacks_show_locals": False},
    "debug": {"level": logging.DEBUG, "show_path": True, "tracebacks_show_locals": True},
    "prod": {"level": logging.WARNING, "show_path": False, "tracebacks_show_locals": False},
}


class OrasidHandler(RichHandler):
    """Rich handler owned by :func:`configure_logging`; at most one per logger."""


def configure_logging(
    preset: str = "dev",
    *,
    level: int | str | None = None,
    console: Console | None = None,
) -> logging.Logger:
    """Install the rich console handler on the package logger.

    Calling it again replaces the previous handler.

    Args:
        preset: One of ``dev``, ``debug``, ``prod``.
        level: Override the preset level.
        console: Console to log to (defaults to stderr).

    Returns:
        The configured ``orasid`` logger.

    Raises:
        ValueError: If the preset is unknown.

    Examples:
        >>> logger = configure_logging("prod")
        >>> logger.level == logging.WARNING
        True
    """
    try:
        options = PRESETS[preset]
    except KeyError:
        raise ValueError(f"Unknown logging preset {preset!r} (expected one of {', '.join(PRESETS)})") from None

    effective = options["level"] if level is None else level

    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, OrasidHandler):
            logger.removeHandler(handler)

    handler = OrasidHandler(
        console=console or Console(stderr=True),
        show_path=options["show_path"],
        rich_tracebacks=True,
        tracebacks_show_locals=options["tracebacks_show_locals"],
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(effective)
    return logger


__all__ = [
    "LOGGER_NAME",
    "OrasidHandler",
    "PRESETS",
    "configure_logging",
]
