from pathlib import Path
import json
import logging
import sys

import typer

from bob.application.reporting import render_report
from bob.application.result_serialization import serialize_run
from bob.application.run_command import run_command_file
from bob.application.settings import effective_strict, load_settings
from bob.domain.capture import CommandRun
from bob.domain.diagnostics import has_errors
from bob.domain.result import EXIT_USAGE, Result

USAGE = "usage: bob BOBFILE"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

app = typer.Typer(add_completion=False)


def _configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)


def _emit(result: Result[CommandRun], args: list[str], json_output: bool) -> None:
    if json_output:
        typer.echo(json.dumps(serialize_run(result, args=args)))
        return
    if result.value is not None:
        typer.echo(render_report(result.value.output), nl=False)
    for diag in result.diagnostics:
        typer.echo(diag.render(), err=True)


@app.command()
def run(
    bobfile: list[Path] = typer.Argument(None, metavar="BOBFILE", show_default=False),
    json_output: bool = typer.Option(False, "--json", help="Print a JSON report."),
    strict: bool | None = typer.Option(None, "--strict/--no-strict"),
    chunk_size: int | None = typer.Option(None, "--chunk-size", help="Bytes per read."),
    poll_interval: float | None = typer.Option(
        None, "--poll-interval", help="Seconds to yield after an idle pass."
    ),
    log_level: str = typer.Option("WARNING", "--log-level", envvar="BOB_LOG_LEVEL"),
):
    """Run the command line held in BOBFILE and report its stdout and stderr."""
    if not bobfile or len(bobfile) != 1:
        typer.echo(USAGE, err=True)
        raise typer.Exit(EXIT_USAGE)
    _configure_logging(log_level)
    path = bobfile[0]

    loaded = load_settings(chunk_size=chunk_size, poll_interval=poll_interval)
    if has_errors(loaded.diagnostics):
        failed: Result[CommandRun] = Result(diagnostics=loaded.diagnostics)
        _emit(failed, [str(path)], json_output)
        raise typer.Exit(failed.exit_code)

    settings = loaded.value
    result = run_command_file(
        path,
        settings=settings,
        strict=effective_strict(strict, settings),
    )
    result.diagnostics = [*loaded.diagnostics, *result.diagnostics]
    _emit(result, [str(path)], json_output)
    raise typer.Exit(result.exit_code)
