"""Command line interface for orasid."""

from orasid.cli.app import app, main

__all__ = [
    "app",
    "main",
]
