from typing import Protocol

from bob.domain.command import Command


class ChildProcessPort(Protocol):
    pid: int | None
    stdout_fd: int
    stderr_fd: int

    def poll(self) -> int | None: ...

    def release(self) -> None: ...


class ProcessLauncherPort(Protocol):
    def launch(self, command: Command) -> ChildProcessPort: ...
