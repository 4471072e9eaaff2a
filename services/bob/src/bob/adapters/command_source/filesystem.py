from pathlib import Path

from bob.adapters.errors import CommandFileReadError
from bob.domain.json_types import as_json_dict


class FilesystemCommandSource:
    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def read(self, path: Path) -> str:
        try:
            return path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise CommandFileReadError(
                f"Cannot read command file: {path}",
                details=as_json_dict({"path": str(path), "reason": str(e)}),
                cause=e,
            )
