from __future__ import annotations

import logging
import os
import subprocess

from bob.adapters.errors import CommandNotExecutable, CommandNotFound, LaunchError
from bob.domain.command import Command
from bob.domain.json_types import as_json_dict

logger = logging.getLogger(__name__)


def _close_quietly(fd: int) -> None:
    try:
        os.close(fd)
    except OSError:
        pass


class PopenChild:
    """A running child whose stdout and stderr are private pipes."""

    def __init__(self, proc: subprocess.Popen[bytes]) -> None:
        if proc.stdout is None or proc.stderr is None:
            raise ValueError("child must be started with piped stdout and stderr")
        self._proc = proc
        self.pid: int | None = proc.pid
        self.stdout_fd = proc.stdout.fileno()
        self.stderr_fd = proc.stderr.fileno()

    def poll(self) -> int | None:
        return self._proc.poll()

    def release(self) -> None:
        for stream in (self._proc.stdout, self._proc.stderr):
            if stream is not None and not stream.closed:
                stream.close()


class FailedLaunch:
    """Stands in for a child that never started.

    Both channels are pipes whose write ends are already closed, so every read
    reports end-of-stream, and the exit status is available on the first poll.
    """

    def __init__(self, error: LaunchError) -> None:
        self.error = error
        self.pid: int | None = None
        self.exit_status = error.exit_status
        self.stdout_fd, stdout_write = os.pipe()
        self.stderr_fd, stderr_write = os.pipe()
        os.close(stdout_write)
        os.close(stderr_write)
        self._released = False

    def poll(self) -> int | None:
        return self.exit_status

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        _close_quietly(self.stdout_fd)
        _close_quietly(self.stderr_fd)


class SubprocessLauncher:
    def __init__(
        self,
        env: dict[str, str] | None = None,
        cwd: str | None = None,
    ) -> None:
        self.env = env
        self.cwd = cwd

    def launch(self, command: Command) -> PopenChild | FailedLaunch:
        if command.is_empty:
            return self._failed(
                CommandNotFound(
                    "Empty command: nothing to execute",
                    hint="Put a program name in the command file",
                )
            )
        try:
            proc = subprocess.Popen(
                command.argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                env=self.env,
                cwd=self.cwd,
            )
        except (FileNotFoundError, NotADirectoryError) as e:
            return self._failed(
                CommandNotFound(
                    f"Command not found: {command.program_name}",
                    details=as_json_dict({"program": command.program_name}),
                    hint="Check the program name and PATH",
                    cause=e,
                )
            )
        except (OSError, ValueError) as e:
            return self._failed(
                CommandNotExecutable(
                    f"Command not executable: {command.program_name}",
                    details=as_json_dict(
                        {"program": command.program_name, "reason": str(e)}
                    ),
                    cause=e,
                )
            )
        logger.debug("Launched pid=%s argv=%s", proc.pid, command.argv)
        return PopenChild(proc)

    def _failed(self, error: LaunchError) -> FailedLaunch:
        logger.info("Launch failed: %s", error)
        return FailedLaunch(error)
