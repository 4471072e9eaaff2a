from __future__ import annotations

from dataclasses import dataclass

from bob.domain.command import Command


@dataclass(frozen=True)
class CapturedOutput:
    stdout: bytes = b""
    stderr: bytes = b""


@dataclass(frozen=True)
class CaptureOutcome:
    output: CapturedOutput
    exit_status: int
    read_errors: int = 0
    passes: int = 0


@dataclass(frozen=True)
class CommandRun:
    command: Command
    outcome: CaptureOutcome

    @property
    def output(self) -> CapturedOutput:
        return self.outcome.output
