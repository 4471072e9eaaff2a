from __future__ import annotations

from dataclasses import dataclass
import re

DELIMITERS = " \t\n"
_DELIMITER_RUN = re.compile(f"[{re.escape(DELIMITERS)}]+")


@dataclass(frozen=True)
class Command:
    program_name: str
    arguments: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.program_name

    @property
    def argv(self) -> list[str]:
        return list(self.arguments)


def tokenize(source: str) -> Command:
    """Split a raw command line into a program name and its arguments.

    Only space, tab and newline delimit tokens. There is no quoting, so a
    delimiter always splits. The program name is repeated as the first
    argument, the way exec-style APIs expect it.
    """
    tokens = tuple(token for token in _DELIMITER_RUN.split(source) if token)
    if not tokens:
        return Command(program_name="")
    return Command(program_name=tokens[0], arguments=tokens)
