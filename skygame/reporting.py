"""Minimal logging to standard error."""

from __future__ import annotations

import enum
import sys


class LogLevel(enum.IntEnum):
    """Severity of a log message."""

    INFO = 0
    WARN = 1
    ERROR = 2
    TRACE = 3


def log(level: LogLevel, text: str) -> None:
    """Write ``text`` followed by a newline to standard error."""
    LogLevel(level)
    sys.stderr.write(text)
    sys.stderr.write("\n")
    sys.stderr.flush()


def logf(level: LogLevel, fmt: str, *args: object) -> None:
    """Format ``fmt`` printf-style with ``args`` and log the result."""
    log(level, fmt % args)