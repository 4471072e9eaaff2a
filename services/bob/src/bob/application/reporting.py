from __future__ import annotations

from bob.domain.capture import CapturedOutput

STDOUT_HEADER = b"====STDOUT===="
STDERR_HEADER = b"====STDERR===="


def render_report(output: CapturedOutput) -> bytes:
    return b"".join(
        [
            STDOUT_HEADER + b"\n",
            output.stdout,
            b"\n",
            STDERR_HEADER + b"\n",
            output.stderr,
            b"\n",
        ]
    )
