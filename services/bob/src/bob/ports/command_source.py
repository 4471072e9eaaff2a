from pathlib import Path
from typing import Protocol


class CommandSourcePort(Protocol):
    def read(self, path: Path) -> str: ...
