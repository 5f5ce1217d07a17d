"""Terminal capability queries."""

import logging
import os
import sys
from typing import TextIO

logger = logging.getLogger(__name__)


def terminal_columns(fd: int | None = None) -> int:
    """Return the column count of the terminal on *fd* (default: stdout).

    Redirected or closed descriptors report ``0`` instead of raising, so a
    progress bar written to a pipe or file degrades to a narrow bar.
    """
    if fd is None:
        stdout = sys.__stdout__
        if stdout is None:
            return 0
        try:
            fd = stdout.fileno()
        except (OSError, ValueError):
            return 0

    try:
        return os.get_terminal_size(fd).columns
    except (OSError, ValueError) as exc:
        logger.debug(f"Terminal size unavailable on fd {fd}: {exc}")
        return 0


def is_interactive(stream: TextIO) -> bool:
    """Return ``True`` only when *stream* is the process's standard output."""
    return stream is sys.stdout or stream is sys.__stdout__
