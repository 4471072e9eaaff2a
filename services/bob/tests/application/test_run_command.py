import os
from pathlib import Path

from bob.application.run_command import run_command, run_command_file
from bob.application.settings import Settings
from bob.domain.command import Command, tokenize
from bob.domain.diagnostics import Severity
from bob.domain.result import EXIT_EXECUTION, EXIT_OK, EXIT_VALIDATION


class DirectoryReadChild:
    """Child whose stdout descriptor is a directory, so every read fails."""

    def __init__(self, directory: Path) -> None:
        self.pid = None
        self.stdout_fd = os.open(directory, os.O_RDONLY)
        self.stderr_fd, writer = os.pipe()
        os.close(writer)

    def poll(self):
        return 0

    def release(self) -> None:
        os.close(self.stdout_fd)
        os.close(self.stderr_fd)


class StubLauncher:
    def __init__(self, child) -> None:
        self.child = child
        self.launched: list[Command] = []

    def launch(self, command: Command):
        self.launched.append(command)
        return self.child


def test_runs_command_file_and_captures_stdout(tmp_path: Path):
    path = tmp_path / "hello.bob"
    path.write_text("printf hi\n")
    result = run_command_file(path)
    assert result.exit_code == EXIT_OK
    assert result.diagnostics == []
    assert result.value is not None
    assert result.value.command == tokenize("printf hi")
    assert result.value.output.stdout == b"hi"
    assert result.value.output.stderr == b""
    assert result.value.outcome.exit_status == 0


def test_missing_command_file_is_a_validation_error(tmp_path: Path):
    launcher = StubLauncher(child=None)
    result = run_command_file(tmp_path / "missing.bob", launcher=launcher)
    assert result.value is None
    assert result.exit_code == EXIT_VALIDATION
    assert [d.code for d in result.diagnostics] == ["COMMAND_FILE_UNREADABLE"]
    assert launcher.launched == []


def test_empty_command_file_reports_not_found_and_empty_output(tmp_path: Path):
    path = tmp_path / "empty.bob"
    path.write_text("  \n")
    result = run_command_file(path)
    assert result.exit_code == EXIT_OK
    assert [d.code for d in result.diagnostics] == ["COMMAND_NOT_FOUND"]
    assert result.value is not None
    assert result.value.output.stdout == b""
    assert result.value.outcome.exit_status == 127


def test_missing_program_warns_unless_strict():
    command = tokenize("definitely-not-a-real-program-bob --flag")
    lenient = run_command(command)
    assert lenient.exit_code == EXIT_OK
    assert lenient.diagnostics[0].code == "COMMAND_NOT_FOUND"
    assert lenient.diagnostics[0].severity == Severity.WARN
    assert lenient.value is not None
    assert lenient.value.output.stdout == b""
    assert lenient.value.output.stderr == b""

    strict = run_command(command, strict=True)
    assert strict.exit_code == EXIT_EXECUTION
    assert strict.diagnostics[0].severity == Severity.ERROR


def test_swallowed_read_errors_surface_as_diagnostic(tmp_path: Path):
    launcher = StubLauncher(DirectoryReadChild(tmp_path))
    result = run_command(
        tokenize("anything"),
        settings=Settings(poll_interval=0),
        launcher=launcher,
    )
    assert result.value is not None
    assert result.value.outcome.read_errors >= 1
    assert [d.code for d in result.diagnostics] == ["STREAM_READ_FAILED"]
    assert result.exit_code == EXIT_OK
    assert run_command(
        tokenize("anything"),
        settings=Settings(poll_interval=0),
        strict=True,
        launcher=StubLauncher(DirectoryReadChild(tmp_path)),
    ).exit_code == EXIT_EXECUTION


def test_settings_tune_the_capture_loop(tmp_path: Path):
    path = tmp_path / "echo.bob"
    path.write_text("echo one two three")
    result = run_command_file(path, settings=Settings(chunk_size=1, poll_interval=0))
    assert result.value is not None
    assert result.value.output.stdout == b"one two three\n"
    assert result.value.outcome.passes > len(b"one two three\n")
