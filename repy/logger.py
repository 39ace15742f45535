"""
Logger collaborators for the parser.

The parser does not log on its own. It reports diagnostics through an object
with three methods:

    info(msg)     progress / ignored lines
    warning(msg)  skipped or partially parsed data
    flush()       called once after parsing is complete

Two implementations are provided:
- StdLogger: forwards to the standard logging module (default)
- WriterLogger: writes 'I ...' / 'W ...' lines to any text stream
"""

from __future__ import annotations

import logging
from typing import Protocol, TextIO


class Logger(Protocol):
    def info(self, msg: str) -> None: ...

    def warning(self, msg: str) -> None: ...

    def flush(self) -> None: ...


class StdLogger:
    """
    Logger that uses logging.getLogger(name).
    """

    def __init__(self, name: str = "repy") -> None:
        self.log = logging.getLogger(name)

    def info(self, msg: str) -> None:
        self.log.info(msg)

    def warning(self, msg: str) -> None:
        self.log.warning(msg)

    def flush(self) -> None:
        for handler in self.log.handlers:
            handler.flush()


class WriterLogger:
    """
    Logger that writes to a text stream, one diagnostic per line.
    """

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    def info(self, msg: str) -> None:
        self.stream.write(f"I {msg}\n")

    def warning(self, msg: str) -> None:
        self.stream.write(f"W {msg}\n")

    def flush(self) -> None:
        self.stream.flush()
