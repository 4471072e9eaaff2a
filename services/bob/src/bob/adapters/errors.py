from dataclasses import dataclass

from bob.domain.json_types import JsonDict


@dataclass
class AdapterError(Exception):
    message: str
    details: JsonDict | None = None
    hint: str | None = None
    cause: Exception | None = None

    def __str__(self) -> str:
        return self.message


class CommandFileReadError(AdapterError):
    pass


class LaunchError(AdapterError):
    exit_status = 1


class CommandNotFound(LaunchError):
    exit_status = 127


class CommandNotExecutable(LaunchError):
    exit_status = 126
