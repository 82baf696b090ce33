"""Debug loggers that count messages per level and optionally write them out."""

from __future__ import annotations

from collections import Counter
from enum import IntEnum
from typing import Optional, TextIO


class LogLevel(IntEnum):
    """Severity of a debug log message, in increasing order."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    FATAL = 4


_LEVEL_NAMES = {
    LogLevel.DEBUG: "Debug",
    LogLevel.INFO: "Info",
    LogLevel.WARNING: "Warning",
    LogLevel.ERROR: "Error",
    LogLevel.FATAL: "Fatal",
}


def log_level_to_string(level) -> str:
    """Return the display name of a log level, or "Unknown"."""
    try:
        return _LEVEL_NAMES.get(LogLevel(level), "Unknown")
    except ValueError:
        return "Unknown"


def _format(fmt: str, args: tuple) -> str:
    return fmt % args


class DefaultLogger:
    """Writes messages at or above ``level`` to ``writer``; counts every message."""

    def __init__(self, writer: Optional[TextIO] = None, level: LogLevel = LogLevel.DEBUG) -> None:
        self.writer = writer
        self.level = level
        self._counts: Counter = Counter()

    def log(self, level: LogLevel, fmt: str, *args) -> None:
        """Count the message and write it if a writer is set and the level passes."""
        self._counts[LogLevel(level)] += 1
        if self.writer is None or level < self.level:
            return
        self.writer.write(f"[{log_level_to_string(level)}] ")
        self.writer.write(_format(fmt, args))
        self.writer.write("\n")

    def count(self, level: LogLevel) -> int:
        """Number of messages logged at ``level``, written or not."""
        return self._counts[LogLevel(level)]


class DumbLogger:
    """Writes nothing, but still counts the messages it receives."""

    def __init__(self) -> None:
        self._counts: Counter = Counter()

    def log(self, level: LogLevel, fmt: str, *args) -> None:
        """Count the message without formatting or writing it."""
        self._counts[LogLevel(level)] += 1

    def count(self, level: LogLevel) -> int:
        """Number of messages logged at ``level``."""
        return self._counts[LogLevel(level)]