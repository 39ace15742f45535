"""
Error taxonomy for REPY parsing.

Every error raised by the parser is a RepyError subclass. Scopes add context
by wrapping an error (same class, longer message, original kept as __cause__)
so the caller gets one line-annotated chain, e.g.:

    failed to parse a faculty: failed to parse ID and name in ordinary course:
    Line 5: Line '...' doesn't match id-and-name pattern
"""

from __future__ import annotations

from typing import Optional


class RepyError(Exception):
    """
    Base class for all REPY errors. `line` is the 1-based line number the
    error was detected on, when known.
    """

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        super().__init__(message)
        self.line = line

    def wrap(self, context: str) -> "RepyError":
        """
        Return a new error of the same class with `context` prepended.
        """
        wrapped = type(self)(f"{context}: {self}", line=self.line)
        wrapped.__cause__ = self
        return wrapped


class StructuralMismatch(RepyError):
    """An expected separator line (or structural element) is missing."""


class FieldFormatError(RepyError):
    """A field line did not match its pattern."""


class UnknownToken(RepyError):
    """A weekday letter, hours code or group type word is not known."""


class EOFExhaustion(RepyError):
    """End of input was hit too many times."""


class InvariantViolation(RepyError):
    """Something the parser relies on did not hold."""


class ArchiveError(RepyError):
    """Downloading or extracting the REPY archive failed."""
