from __future__ import annotations

from pathlib import Path

from bob.adapters.command_source.filesystem import FilesystemCommandSource
from bob.adapters.errors import CommandFileReadError, CommandNotExecutable, LaunchError
from bob.adapters.launcher.subprocess_launcher import SubprocessLauncher
from bob.application.capture import capture
from bob.application.settings import Settings
from bob.domain.capture import CommandRun
from bob.domain.command import Command, tokenize
from bob.domain.diagnostics import Diagnostic, FileLocation, Severity, ValueLocation
from bob.domain.result import Result
from bob.domain.strictness import apply_strictness
from bob.ports.command_source import CommandSourcePort
from bob.ports.process_launcher import ProcessLauncherPort


def _launch_diagnostic(command: Command, error: LaunchError) -> Diagnostic:
    code = (
        "COMMAND_NOT_EXECUTABLE"
        if isinstance(error, CommandNotExecutable)
        else "COMMAND_NOT_FOUND"
    )
    return Diagnostic(
        code=code,
        rule="command.launch",
        severity=Severity.WARN,
        message=str(error),
        location=ValueLocation("program", command.program_name),
        hint=error.hint,
        details=error.details,
        is_execution=True,
        upgradeable=True,
    )


def run_command(
    command: Command,
    *,
    settings: Settings | None = None,
    strict: bool = False,
    launcher: ProcessLauncherPort | None = None,
) -> Result[CommandRun]:
    settings = settings or Settings()
    launcher_impl = launcher or SubprocessLauncher()
    diagnostics: list[Diagnostic] = []

    child = launcher_impl.launch(command)
    launch_error = getattr(child, "error", None)
    if isinstance(launch_error, LaunchError):
        diagnostics.append(_launch_diagnostic(command, launch_error))

    outcome = capture(
        child,
        chunk_size=settings.chunk_size,
        poll_interval=settings.poll_interval,
    )
    if outcome.read_errors:
        diagnostics.append(
            Diagnostic(
                code="STREAM_READ_FAILED",
                rule="capture.read",
                severity=Severity.WARN,
                message=(
                    f"{outcome.read_errors} read(s) from the child's output failed "
                    "and were treated as empty"
                ),
                details={"read_errors": outcome.read_errors},
                is_execution=True,
                upgradeable=True,
            )
        )
    return Result(
        value=CommandRun(command=command, outcome=outcome),
        diagnostics=apply_strictness(diagnostics, strict),
    )


def run_command_file(
    command_file: Path,
    *,
    settings: Settings | None = None,
    strict: bool = False,
    command_source: CommandSourcePort | None = None,
    launcher: ProcessLauncherPort | None = None,
) -> Result[CommandRun]:
    source = command_source or FilesystemCommandSource()
    try:
        text = source.read(command_file)
    except CommandFileReadError as exc:
        return Result(
            diagnostics=[
                Diagnostic(
                    code="COMMAND_FILE_UNREADABLE",
                    rule="command.file",
                    severity=Severity.ERROR,
                    message=str(exc),
                    location=FileLocation(str(command_file)),
                    details=exc.details,
                )
            ]
        )
    return run_command(
        tokenize(text),
        settings=settings,
        strict=strict,
        launcher=launcher,
    )
