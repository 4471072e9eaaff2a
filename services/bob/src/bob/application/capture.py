from __future__ import annotations

import logging
import os
import time
from typing import Callable

from bob.domain.capture import CapturedOutput, CaptureOutcome
from bob.ports.process_launcher import ChildProcessPort

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 65536
DEFAULT_POLL_INTERVAL = 0.001

Reader = Callable[[int, int], bytes]


class _Channel:
    def __init__(self, name: str, fd: int) -> None:
        self.name = name
        self.fd = fd
        self.buffer = bytearray()
        self.errors = 0

    def read_once(self, chunk_size: int, read: Reader) -> bool:
        """Attempt one non-blocking read; return True only if bytes arrived."""
        try:
            data = read(self.fd, chunk_size)
        except BlockingIOError:
            return False
        except OSError as e:
            # Counted and treated as "no data this pass"; the loop keeps going.
            self.errors += 1
            logger.warning("Read from %s failed: %s", self.name, e)
            return False
        if not data:
            return False
        self.buffer += data
        return True


def capture(
    child: ChildProcessPort,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    read: Reader = os.read,
    sleep: Callable[[float], None] = time.sleep,
) -> CaptureOutcome:
    """Drain both of the child's channels until it has exited and both are empty.

    The loop stops only on a pass where the child was already known to have
    ended before the reads were attempted, and neither channel yielded data.
    Anything the child wrote before exiting is therefore still collected from
    the pipe after the exit is observed.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    if poll_interval < 0:
        raise ValueError(f"poll_interval must not be negative, got {poll_interval}")

    stdout = _Channel("stdout", child.stdout_fd)
    stderr = _Channel("stderr", child.stderr_fd)
    exit_status: int | None = None
    passes = 0
    try:
        for channel in (stdout, stderr):
            os.set_blocking(channel.fd, False)
        while True:
            passes += 1
            got_stdout = stdout.read_once(chunk_size, read)
            got_stderr = stderr.read_once(chunk_size, read)
            empty = not (got_stdout or got_stderr)
            if exit_status is not None and empty:
                return _finish(child, stdout, stderr, exit_status, passes)
            if exit_status is None:
                exit_status = child.poll()
            if empty and poll_interval:
                sleep(poll_interval)
    finally:
        child.release()


def _finish(
    child: ChildProcessPort,
    stdout: _Channel,
    stderr: _Channel,
    exit_status: int,
    passes: int,
) -> CaptureOutcome:
    logger.debug(
        "Capture finished pid=%s exit_status=%s passes=%d stdout=%d stderr=%d",
        child.pid,
        exit_status,
        passes,
        len(stdout.buffer),
        len(stderr.buffer),
    )
    return CaptureOutcome(
        output=CapturedOutput(stdout=bytes(stdout.buffer), stderr=bytes(stderr.buffer)),
        exit_status=exit_status,
        read_errors=stdout.errors + stderr.errors,
        passes=passes,
    )
