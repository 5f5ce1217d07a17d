"""Timestamped, severity-tagged log line prefixes.

A prefix looks like ``{14:03:27} [INFO]     {worker.py}   `` and is colored
only when the target stream is interactive.  Whether a stream is interactive
is decided once, when the :class:`StatusLog` or :class:`PrefixFormatter` is
created, so escape codes never leak into files or captured buffers.
"""

import inspect
import logging
import os
from datetime import datetime
from enum import IntEnum
from typing import TextIO

from .ansi import Color, colorize
from .terminal import is_interactive

# Width of the "[LEVEL]" tag column, including padding.
_TAG_WIDTH: int = 11

# Separator between the prefix and the message.
_PREFIX_TRAILER: str = "   "


class Level(IntEnum):
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL

    @property
    def tag(self) -> str:
        return f"[{self.name}]".ljust(_TAG_WIDTH)

    @property
    def color(self) -> Color:
        return _LEVEL_COLORS[self]

    @classmethod
    def from_logging(cls, levelno: int) -> "Level":
        """Map a stdlib level number to the closest level at or below it."""
        for level in sorted(cls, reverse=True):
            if levelno >= level:
                return level
        return cls.DEBUG


_LEVEL_COLORS: dict[Level, Color] = {
    Level.DEBUG: Color.GRN,
    Level.INFO: Color.BLU,
    Level.WARNING: Color.YEL,
    Level.ERROR: Color.HRED,
    Level.CRITICAL: Color.REDHB,
}


def format_clock(now: datetime, *, color: bool) -> str:
    """Return ``{HH:MM:SS} ``, magenta when *color* is set."""
    clock = "{" + now.strftime("%H:%M:%S") + "} "
    return colorize(clock, Color.MAG, enabled=color)


def format_prefix(
    level: Level,
    filename: str,
    *,
    color: bool,
    now: datetime | None = None,
) -> str:
    """Build the full line prefix for *level* logged from *filename*."""
    if now is None:
        now = datetime.now()
    label = level.tag + "{" + filename + "}"
    return (
        format_clock(now, color=color)
        + colorize(label, level.color, enabled=color)
        + _PREFIX_TRAILER
    )


def _caller_filename(depth: int) -> str:
    frame = inspect.currentframe()
    try:
        for _ in range(depth + 1):
            if frame is None:
                return "?"
            frame = frame.f_back
        if frame is None:
            return "?"
        return os.path.basename(frame.f_code.co_filename)
    finally:
        del frame


class StatusLog:
    """Write prefixed status lines to a single stream."""

    _stream: TextIO
    _interactive: bool
    _filename: str | None

    def __init__(
        self,
        stream: TextIO,
        *,
        interactive: bool | None = None,
        filename: str | None = None,
    ) -> None:
        self._stream = stream
        self._interactive = (
            is_interactive(stream) if interactive is None else interactive
        )
        self._filename = filename

    @property
    def interactive(self) -> bool:
        return self._interactive

    def prefix(self, level: Level, filename: str, now: datetime | None = None) -> str:
        return format_prefix(level, filename, color=self._interactive, now=now)

    def _write(self, level: Level, message: str, filename: str) -> None:
        _ = self._stream.write(f"{self.prefix(level, filename)}{message}\n")
        self._stream.flush()

    def log(self, level: Level, message: str) -> None:
        self._write(level, message, self._filename or _caller_filename(1))

    def debug(self, message: str) -> None:
        self._write(Level.DEBUG, message, self._filename or _caller_filename(1))

    def info(self, message: str) -> None:
        self._write(Level.INFO, message, self._filename or _caller_filename(1))

    def warning(self, message: str) -> None:
        self._write(Level.WARNING, message, self._filename or _caller_filename(1))

    def error(self, message: str) -> None:
        self._write(Level.ERROR, message, self._filename or _caller_filename(1))

    def critical(self, message: str) -> None:
        self._write(Level.CRITICAL, message, self._filename or _caller_filename(1))


class PrefixFormatter(logging.Formatter):
    """``logging`` formatter that renders records with the status prefix."""

    def __init__(self, *, color: bool = False) -> None:
        super().__init__()
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        prefix = format_prefix(
            Level.from_logging(record.levelno),
            record.filename,
            color=self.color,
            now=datetime.fromtimestamp(record.created),
        )
        message = prefix + record.getMessage()
        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)
        return message
