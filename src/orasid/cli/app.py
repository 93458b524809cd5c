"""Command line entry point: ``orasid``.

One command drives the whole procedure::

    orasid --new-host db02.example.com --old-sid OLD --new-sid NEW \\
           --orahome /u01/app/oracle/product/11.2.0/dbhome_1 \\
           --gridhome /u01/app/grid/product/11.2.0/grid

Steps are announced on stderr (``### NAME``); the step list of ``--list``
and the final summary go to stdout.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

from orasid.cli.common import console, exit_error
from orasid.cli.manual import render_manual
from orasid.config import OrasidError, OrasidSettings, get_settings
from orasid.environment import OracleEnvironment
from orasid.logging import configure_logging
from orasid.meta import __app_name__, __description__, __version__
from orasid.pipeline import FatalStepError, PipelineConfigError, PipelineRunner, Reporter, ShellExecutor
from orasid.pipeline.validators import validate_home, validate_hostname, validate_sid
from orasid.preconditions import default_gate, recorded_hostname
from orasid.runbooks import Release, RunbookParams, Services, build_pipeline, oracle_home_from_oratab

if TYPE_CHECKING:
    from collections.abc import Callable

    from orasid.pipeline import Pipeline, PipelineResult

logger = logging.getLogger(__name__)

app = typer.Typer(
    name=__app_name__,
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich",
)


def _validated(validator: Callable[[str], str]) -> Callable[[str | None], str | None]:
    """Turn a validator into a Typer callback raising BadParameter."""

    def callback(value: str | None) -> str | None:
        if value is None:
            return None
        try:
            return validator(value)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc

    return callback


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"{__app_name__} {__version__}", highlight=False)
        raise typer.Exit()


def _require(**options: str | None) -> None:
    for flag, value in options.items():
        if not value:
            raise typer.BadParameter("required unless --list is given", param_hint=f"'--{flag.replace('_', '-')}'")


def _step_names(release: Release) -> list[str]:
    """Return the step names of a release without binding real values."""
    services = Services.create(OrasidSettings(), ShellExecutor())
    return build_pipeline(release, RunbookParams("", "", ""), services).names()


def _summary(pipeline: Pipeline, result: PipelineResult) -> str:
    skipped = f", {len(result.skipped_steps)} skipped" if result.skipped_steps else ""
    return (
        f"[green]Done:[/] {pipeline.name} runbook completed, "
        f"{len(result.executed_steps)} step(s) executed{skipped} in {result.duration:.1f}s"
    )


@app.command()
def main(
    new_host: Annotated[
        str | None,
        typer.Option("--new-host", "--newhostname", help="New host name.", callback=_validated(validate_hostname)),
    ] = None,
    old_host: Annotated[
        str | None,
        typer.Option(
            "--old-host",
            help="Current host name (default: HOSTNAME, then the network file).",
            callback=_validated(validate_hostname),
        ),
    ] = None,
    old_sid: Annotated[
        str | None,
        typer.Option("--old-sid", "--old-id", help="Current SID of the database.", callback=_validated(validate_sid)),
    ] = None,
    new_sid: Annotated[
        str | None,
        typer.Option("--new-sid", "--new-id", help="Target SID of the database.", callback=_validated(validate_sid)),
    ] = None,
    orahome: Annotated[
        str | None,
        typer.Option(
            "--orahome",
            help="Oracle home of the database (10g: read from oratab when omitted).",
            callback=_validated(validate_home),
        ),
    ] = None,
    gridhome: Annotated[
        str | None,
        typer.Option("--gridhome", help="Grid home (11g).", callback=_validated(validate_home)),
    ] = None,
    release: Annotated[
        Release,
        typer.Option("--release", case_sensitive=False, help="Oracle release of the host."),
    ] = Release.R11G,
    skip: Annotated[
        str | None,
        typer.Option("--skip", metavar="SECTION", help="Resume from this section (inclusive)."),
    ] = None,
    list_steps: Annotated[
        bool,
        typer.Option("--list", help="List the sections of the runbook and exit."),
    ] = False,
    no_root: Annotated[
        bool,
        typer.Option("--no-root", "--noroot", help="Do not require running as the privileged user."),
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option("--config", help="Settings file (orasid.conf.yml).", dir_okay=False),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Debug logging."),
    ] = False,
    man: Annotated[
        bool,
        typer.Option("--man", help="Show the manual and exit."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option("--version", help="Show version and exit.", callback=_version_callback, is_eager=True),
    ] = False,
) -> None:
    """Change the host name and the database SID of an Oracle host.

    Sections are announced on stderr with the prefix "###". After a failure,
    fix the cause and resume with --skip SECTION.
    """
    if man:
        console.print(render_manual(_step_names(release)))
        raise typer.Exit()

    if list_steps:
        for name in _step_names(release):
            console.print(name, markup=False, highlight=False)
        raise typer.Exit()

    try:
        settings = get_settings(config)
        configure_logging(settings.logging_preset, level=logging.DEBUG if verbose else None)
    except OrasidError as exc:
        exit_error(str(exc))

    _require(new_host=new_host, old_sid=old_sid, new_sid=new_sid)
    if release is Release.R11G:
        _require(orahome=orahome, gridhome=gridhome)
    if old_sid == new_sid:
        raise typer.BadParameter("--old-sid is the same as --new-sid, nothing to do", param_hint="'--new-sid'")

    reporter = Reporter()
    try:
        if release is Release.R10G and not orahome:
            orahome = oracle_home_from_oratab(settings.files.oratab, old_sid)
            logger.info("Oracle home of %s from %s: %s", old_sid, settings.files.oratab, orahome)

        environment = OracleEnvironment.for_homes(
            orahome,
            gridhome or "",
            oracle_home=orahome if release is Release.R10G else None,
        )
        executor = ShellExecutor(reporter, environment)
        params = RunbookParams(
            new_hostname=new_host,
            old_sid=old_sid,
            new_sid=new_sid,
            old_hostname=old_host or recorded_hostname(settings.files.network),
            oracle_home=orahome,
            grid_home=gridhome or "",
        )
        pipeline = build_pipeline(release, params, Services.create(settings, executor))

        if skip is not None:
            try:
                pipeline.index(skip)
            except PipelineConfigError as exc:
                raise typer.BadParameter(str(exc), param_hint="'--skip'") from exc

        default_gate(
            executor,
            expected_hostname=params.old_hostname,
            runlevels=settings.runlevels,
            privileged_user=None if no_root else settings.users.privileged,
            alternative_hostnames=(params.new_hostname,) if skip else (),
        ).verify()

        result = PipelineRunner(pipeline, reporter).run(start_at=skip)
    except FatalStepError as exc:
        exit_error(exc.message, exc.output)
    except OrasidError as exc:
        exit_error(str(exc))

    console.print(_summary(pipeline, result), highlight=False, soft_wrap=True)


__all__ = [
    "app",
    "main",
]
