"""Shared pytest fixtures for the orasid test suite."""

from __future__ import annotations

# Disable Rich colors and force a wide terminal before rich is imported
import os

os.environ["NO_COLOR"] = "1"
os.environ["TERM"] = "dumb"
os.environ["COLUMNS"] = "200"

import io
import pwd
import re
from pathlib import Path

import pytest
from rich.console import Console

from orasid.config import FileSettings, OrasidSettings, UserSettings
from orasid.environment import OracleEnvironment
from orasid.pipeline.models import ExecutionResult
from orasid.pipeline.reporter import Reporter
from orasid.pipeline.shell import ShellExecutor
from orasid.runbooks import RunbookParams, Services

# pylint: disable=redefined-outer-name


class FakeExecutor(ShellExecutor):
    """Shell executor recording commands instead of spawning them.

    Responses are matched by regular expression against the full command
    line (``sudo`` prefix included); the first match wins. Unmatched
    commands succeed with empty output.
    """

    def __init__(self, reporter: Reporter, environment: OracleEnvironment | None = None) -> None:
        super().__init__(reporter, environment)
        self.commands: list[str] = []
        self.environments: list[dict[str, str]] = []
        self._responses: list[tuple[re.Pattern[str], int, str]] = []

    def respond(self, pattern: str, return_code: int = 0, output: str = "") -> FakeExecutor:
        """Register the result of commands matching ``pattern``."""
        self._responses.append((re.compile(pattern), return_code, output))
        return self

    def _spawn(self, command: str) -> ExecutionResult:
        self.commands.append(command)
        self.environments.append(self.environment.as_env())
        for pattern, return_code, output in self._responses:
            if pattern.search(command):
                return ExecutionResult(command=command, return_code=return_code, output=output)
        return ExecutionResult(command=command, return_code=0)


@pytest.fixture
def trace() -> io.StringIO:
    """Return the buffer receiving the diagnostic trace."""
    return io.StringIO()


@pytest.fixture
def reporter(trace: io.StringIO) -> Reporter:
    """Return a reporter writing to the trace buffer."""
    return Reporter(Console(file=trace, width=200))


@pytest.fixture
def executor(reporter: Reporter) -> FakeExecutor:
    """Return a fake executor with an isolated environment."""
    return FakeExecutor(reporter, OracleEnvironment(base={"PATH": "/usr/bin:/bin"}))


@pytest.fixture
def system_files(tmp_path: Path) -> FileSettings:
    """Create the system files the runbooks edit, under tmp_path."""
    etc = tmp_path / "etc"
    etc.mkdir()
    (etc / "network").write_text("NETWORKING=yes\nHOSTNAME=db01.example.com\n", encoding="utf-8")
    (etc / "hosts").write_text(
        "127.0.0.1   localhost\n10.0.0.1    db01.example.com db01\n10.0.0.2    db010.example.com\n",
        encoding="utf-8",
    )
    (etc / "oratab").write_text(
        "# oratab\n+ASM:/u01/app/oracle/product/10.2.0/asm:N\nOLD:/u01/app/oracle/product/10.2.0/db_1:Y\n",
        encoding="utf-8",
    )
    (etc / "inittab").write_text(
        "id:3:initdefault:\nl2:2:wait:/etc/rc.d/rc 2\nl3:3:wait:/etc/rc.d/rc 3\n"
        "h1:35:respawn:/etc/init.d/init.cssd run >/dev/null 2>&1 </dev/null\n",
        encoding="utf-8",
    )
    return FileSettings(
        network=str(etc / "network"),
        hosts=str(etc / "hosts"),
        oratab=str(etc / "oratab"),
        inittab=str(etc / "inittab"),
    )


@pytest.fixture
def current_user() -> str:
    """Return the name of the user running the tests."""
    return pwd.getpwuid(os.getuid()).pw_name


@pytest.fixture
def settings(system_files: FileSettings, current_user: str) -> OrasidSettings:
    """Return settings pointing at the temporary system files."""
    return OrasidSettings(
        users=UserSettings(privileged="root", oracle=current_user, grid=current_user),
        files=system_files,
    )


@pytest.fixture
def oracle_home(tmp_path: Path) -> Path:
    """Create an Oracle home with an empty ``dbs`` directory."""
    home = tmp_path / "dbhome"
    (home / "dbs").mkdir(parents=True)
    return home


@pytest.fixture
def services(settings: OrasidSettings, executor: FakeExecutor) -> Services:
    """Return runbook collaborators around the fake executor."""
    return Services.create(settings, executor)


@pytest.fixture
def params(oracle_home: Path) -> RunbookParams:
    """Return run parameters for renaming OLD to NEW on db01 -> db02."""
    return RunbookParams(
        new_hostname="db02.example.com",
        old_sid="OLD",
        new_sid="NEW",
        old_hostname="db01.example.com",
        oracle_home=str(oracle_home),
        grid_home="/u01/app/grid",
    )
