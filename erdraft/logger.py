"""Levelled console logging with printf-style messages and call tracing."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from enum import IntEnum
from typing import Any, Iterator, Optional, TextIO


class LogLevel(IntEnum):
    NONE = 0
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5


class Logger:
    """Writes a message when the configured level admits its severity."""

    def __init__(
        self, level: LogLevel = LogLevel.DEBUG, stream: Optional[TextIO] = None
    ) -> None:
        self.level = LogLevel(level)
        self.stream = stream

    def _out(self, severity: LogLevel, message: str, args: tuple) -> None:
        if self.level < severity:
            return
        text = message % args if args else message
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(text + "\n")
        stream.flush()

    def trace(self, message: str, *args: Any) -> None:
        self._out(LogLevel.TRACE, message, args)

    def debug(self, message: str, *args: Any) -> None:
        self._out(LogLevel.DEBUG, message, args)

    def info(self, message: str, *args: Any) -> None:
        self._out(LogLevel.INFO, message, args)

    def warn(self, message: str, *args: Any) -> None:
        self._out(LogLevel.WARN, message, args)

    def error(self, message: str, *args: Any) -> None:
        self._out(LogLevel.ERROR, message, args)


@contextmanager
def func_trace(logger: Logger, name: str) -> Iterator[None]:
    """Trace entry into and exit from the block named ``name``."""
    logger.trace("trace: %s -->", name)
    try:
        yield
    finally:
        logger.trace("trace: %s <--", name)