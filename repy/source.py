"""
Line source: REPY bytes -> numbered lines of text.

The parser looks at exactly one line at a time (current_line) and moves
forward with advance(). There is no look-ahead.
"""

from __future__ import annotations

import io
from typing import IO, Iterator, Optional, Union

from repy.config import MAX_EOF_HITS, REPY_ENCODING
from repy.errors import EOFExhaustion
from repy.logger import Logger


Input = Union[bytes, bytearray, str, IO[bytes], IO[str]]


def _open_text(data: Input, encoding: str) -> IO[str]:
    """
    Turn whatever we got into a text stream. Bytes are decoded with
    `encoding`; text is used as-is. Lines end at '\\n' only.
    """
    if isinstance(data, (bytes, bytearray)):
        return io.TextIOWrapper(io.BytesIO(bytes(data)), encoding=encoding, newline="\n")
    if isinstance(data, str):
        return io.StringIO(data, newline="\n")
    if isinstance(data, io.TextIOBase):
        return data
    return io.TextIOWrapper(data, encoding=encoding, newline="\n")


class LineSource:
    """
    Sequential reader over the lines of a REPY document.

    Before the first advance() and after the end of input, current_line()
    is the empty string. Calling advance() again after the end is allowed a
    few times (MAX_EOF_HITS); after that EOFExhaustion is raised, so a parser
    that keeps asking for lines cannot loop forever.
    """

    def __init__(
        self,
        data: Input,
        logger: Optional[Logger] = None,
        encoding: str = REPY_ENCODING,
        max_eof_hits: int = MAX_EOF_HITS,
    ) -> None:
        self._lines: Iterator[str] = iter(_open_text(data, encoding))
        self._logger = logger
        self._max_eof_hits = max_eof_hits
        self._text = ""
        self._line_number = 0
        self.eof_hits = 0
        self.eof = False

    @property
    def line_number(self) -> int:
        return self._line_number

    def current_line(self) -> str:
        return self._text

    def advance(self) -> bool:
        """
        Move to the next line. Returns False at the end of input.
        """
        if not self.eof:
            line = next(self._lines, None)
            if line is not None:
                self._line_number += 1
                self._text = line.rstrip("\r\n")
                return True

        self._text = ""
        if self._logger is not None:
            self._logger.info(f"Line {self._line_number}: Hit EOF, eof_hits is {self.eof_hits}")
        if self.eof_hits > self._max_eof_hits:
            raise EOFExhaustion("Hit EOF too many times", line=self._line_number)
        self.eof_hits += 1
        self.eof = True
        return False
