"""In-place edits of configuration files and owned directory creation.

Edits are done in-process with :mod:`re` rather than through ``sed``, but are
announced on the diagnostic channel like commands (``Editing: <path>``), so
the audit trail still lists every change to the system.
"""

from __future__ import annotations

import logging
import os
import pwd
import re
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from orasid.pipeline.policy import fail

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from orasid.pipeline.reporter import Reporter

logger = logging.getLogger(__name__)

#: Mode of directories created for log destinations.
DIRECTORY_MODE = 0o755


class FileEditor:
    """Edit text files in place.

    Args:
        reporter: Diagnostic reporter receiving the ``Editing:`` traces.

    Examples:
        >>> from orasid.pipeline.reporter import Reporter
        >>> editor = FileEditor(Reporter())
        >>> editor.substitute("/etc/hosts", r"\\bolddb\\b", "newdb")  # doctest: +SKIP
        1
    """

    def __init__(self, reporter: Reporter) -> None:
        self._reporter = reporter

    def read(self, path: str | Path) -> str:
        """Return the text of a file.

        Raises:
            FatalStepError: If the file cannot be read.
        """
        path = Path(path)
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            fail(f"Couldn't read {path}", str(exc))

    def _write(self, path: Path, text: str) -> None:
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            fail(f"Couldn't write {path}", str(exc))

    def substitute(
        self,
        path: str | Path,
        pattern: str,
        replacement: str | Callable[[re.Match[str]], str],
        *,
        flags: int = 0,
        count: int = 0,
    ) -> int:
        """Replace matches of ``pattern`` in a file.

        Args:
            path: File to edit.
            pattern: Regular expression.
            replacement: Replacement string (``re`` syntax) or callable.
            flags: ``re`` flags, e.g. ``re.MULTILINE``.
            count: Maximum replacements, 0 for all.

        Returns:
            Number of replacements made. The file is rewritten only when
            it is non-zero.

        Raises:
            FatalStepError: If the file cannot be read or written.
        """
        target = Path(path)
        self._reporter.operation("Editing", f"{target} (s/{pattern}/)")
        text = self.read(target)
        new_text, replaced = re.subn(pattern, replacement, text, count=count, flags=flags)
        if replaced:
            self._write(target, new_text)
        logger.debug("%d substitution(s) of %r in %s", replaced, pattern, target)
        return replaced

    def move_line_after(self, path: str | Path, line_pattern: str, anchor_pattern: str) -> None:
        """Move the first line matching ``line_pattern`` after the first line matching ``anchor_pattern``.

        Raises:
            FatalStepError: If either line is missing.
        """
        target = Path(path)
        self._reporter.operation("Editing", f"{target} (move /{line_pattern}/ after /{anchor_pattern}/)")
        lines = self.read(target).splitlines(keepends=True)

        moved = next((i for i, line in enumerate(lines) if re.search(line_pattern, line)), None)
        if moved is None:
            fail(f"No line matching {line_pattern!r} in {target}")
        line = lines.pop(moved)
        anchor = next((i for i, candidate in enumerate(lines) if re.search(anchor_pattern, candidate)), None)
        if anchor is None:
            fail(f"No line matching {anchor_pattern!r} in {target}")
        if not line.endswith("\n"):
            line += "\n"
        lines.insert(anchor + 1, line)
        self._write(target, "".join(lines))

    def move(self, source: str | Path, destination: str | Path) -> None:
        """Rename a file, keeping its ownership and mode.

        Raises:
            FatalStepError: If the move fails.
        """
        self._reporter.operation("Moving", f"{source} -> {destination}")
        try:
            shutil.move(str(source), str(destination))
        except OSError as exc:
            fail(f"Can't move {source} to {destination}", str(exc))


def _owner_ids(user: str) -> tuple[int, int]:
    try:
        entry = pwd.getpwnam(user)
    except KeyError:
        fail(f"No such user {user}")
    return entry.pw_uid, entry.pw_gid


def make_owned_dirs(paths: Iterable[str | Path], user: str) -> list[Path]:
    """Create directories owned by ``user``.

    Missing directories are created with mode 0755, including missing
    parents; every created directory and every already existing target is
    chowned to the user's uid and gid.

    Args:
        paths: Directories to create.
        user: Owner account.

    Returns:
        Directories whose ownership was set, in order.

    Raises:
        FatalStepError: If a path exists but is not a directory, or on any
            filesystem error.
    """
    uid, gid = _owner_ids(user)
    owned: list[Path] = []

    for raw in paths:
        path = Path(raw)
        if path.exists() and not path.is_dir():
            fail(f"{path} exists but is not a directory")

        created: list[Path] = []
        if not path.exists():
            candidate = path
            while not candidate.exists():
                created.append(candidate)
                candidate = candidate.parent
            created.reverse()

        try:
            for directory in created:
                directory.mkdir(mode=DIRECTORY_MODE)
            for directory in created or [path]:
                os.chown(directory, uid, gid)
                owned.append(directory)
        except OSError as exc:
            fail(f"Couldn't create directory {path}", str(exc))
        logger.debug("Directory %s owned by %s (%d created)", path, user, len(created))

    return owned


__all__ = [
    "DIRECTORY_MODE",
    "FileEditor",
    "make_owned_dirs",
]
