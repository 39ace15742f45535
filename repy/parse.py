"""
Parsing (REPY -> Catalog).

REPY is read line by line. The layout of an ordinary faculty is:

    +==========================================+   faculty separator
    |   <faculty name> - תועש תכרעמ            |
    |   <semester> רטסמס                        |
    +==========================================+
    +------------------------------------------+   course separator
    |   <course name>                  <id>    |
    |   <points> :קנ <hours>:עובשב הארוה תועש   |
    +------------------------------------------+
    |   test dates, lecturer in charge, ...    |   course head
    |               ++++++                  .סמ|   group separator (2 lines)
    |                                     םושיר|
    |   event lines and lecturer lines         |   groups
    +------------------------------------------+
    (more courses)
                                                   empty line ends the faculty

The sports faculty uses wider separators and a different body; only the
course head is read there, group details are skipped.

Error handling:
- a broken course is dropped with a warning, the rest of the faculty is kept
- a broken hours-and-points line is skipped with a warning
- anything else stops parsing and is raised as a RepyError
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, Optional, Type, TypeVar

from repy.builder import CatalogBuilder
from repy.config import REPY_ENCODING
from repy.errors import FieldFormatError, InvariantViolation, RepyError, StructuralMismatch
from repy.fields import (
    BLANK_LINE_1,
    BLANK_LINE_2,
    COURSE_SEP,
    FACULTY_SEP,
    GROUP_SEP_1,
    GROUP_SEP_2,
    SPORTS_COURSE_SEP,
    SPORTS_FACULTY_NAME,
    SPORTS_FACULTY_SEP,
    is_head_separator,
    match_event_line,
    match_faculty_name,
    match_faculty_semester,
    match_group_lecturer,
    match_hours_and_points,
    match_id_and_name,
    match_lecturer_in_charge,
    match_sports_semester,
    match_test_date,
)
from repy.logger import Logger, StdLogger
from repy.model import Catalog, Course, Faculty
from repy.source import Input, LineSource

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------


@dataclass
class ParseContext:
    """
    Everything one parse works with. Passed to every step below.
    """

    source: LineSource
    logger: Logger
    builder: CatalogBuilder = field(default_factory=CatalogBuilder)

    @property
    def line(self) -> int:
        return self.source.line_number

    def text(self) -> str:
        return self.source.current_line()

    def scan(self) -> bool:
        return self.source.advance()

    def info(self, msg: str) -> None:
        self.logger.info(f"Line {self.line}: {msg}")

    def warning(self, msg: str) -> None:
        self.logger.warning(f"Line {self.line}: {msg}")

    def error(self, cls: Type[RepyError], msg: str) -> RepyError:
        return cls(f"Line {self.line}: {msg}", line=self.line)

    def locate(self, err: RepyError) -> RepyError:
        """
        Same error, annotated with the current line number.
        """
        located = type(err)(f"Line {self.line}: {err}", line=self.line)
        located.__cause__ = err
        return located


@contextmanager
def _wrapping(context: str) -> Iterator[None]:
    try:
        yield
    except RepyError as err:
        raise err.wrap(context) from err


def _extract(ctx: ParseContext, matcher: Callable[[str], T]) -> T:
    try:
        return matcher(ctx.text())
    except RepyError as err:
        raise ctx.locate(err) from err


def expect_line(ctx: ParseContext, expected: str) -> None:
    if ctx.text() != expected:
        raise ctx.error(StructuralMismatch, f"Expected {expected!r}, got {ctx.text()!r}")
    ctx.scan()


# ---------------------------------------------------------------------------
# Course head
# ---------------------------------------------------------------------------


def parse_id_and_name(ctx: ParseContext) -> None:
    course_id, name = _extract(ctx, match_id_and_name)
    ctx.builder.set_id_and_name(course_id, name)
    ctx.scan()


def parse_hours_and_points(ctx: ParseContext) -> None:
    points, hours = _extract(ctx, match_hours_and_points)
    ctx.builder.set_hours_and_points(points, hours)
    ctx.scan()


def _parse_hours_or_skip(ctx: ParseContext, where: str = "") -> None:
    # A bad hours line loses the hours, not the course
    try:
        parse_hours_and_points(ctx)
    except FieldFormatError as err:
        ctx.warning(f"Invalid hours and points line{where}: {err}")
        ctx.scan()


def parse_course_head_info(ctx: ParseContext) -> None:
    """
    Read test dates and the lecturer in charge, up to the first group.
    """
    while True:
        text = ctx.text()
        if text == GROUP_SEP_1 or text == COURSE_SEP:
            return
        if ctx.source.eof:
            raise ctx.error(StructuralMismatch, "Reached EOF in course head")

        date = _extract(ctx, match_test_date)
        lecturer = _extract(ctx, match_lecturer_in_charge)

        if is_head_separator(text):
            pass
        elif date is not None:
            ctx.builder.add_test_date(date)
        elif lecturer is not None:
            ctx.builder.set_lecturer_in_charge(lecturer)
        else:
            ctx.info(f"Ignored course head line {text!r}")

        ctx.scan()


# ---------------------------------------------------------------------------
# Groups
# ---------------------------------------------------------------------------


def parse_event_line(ctx: ParseContext) -> bool:
    parsed = _extract(ctx, match_event_line)
    if parsed is None:
        return False

    try:
        if parsed.group_type is not None:
            ctx.builder.open_group(parsed.group_type, parsed.group_id)
        ctx.builder.add_event(parsed.event)
    except RepyError as err:
        raise ctx.locate(err) from err

    ctx.scan()
    return True


def parse_lecturer_line(ctx: ParseContext) -> bool:
    lecturer = _extract(ctx, match_group_lecturer)
    if lecturer is None:
        return False

    ctx.builder.add_teacher(lecturer)
    ctx.scan()
    return True


def parse_groups(ctx: ParseContext) -> None:
    if ctx.text() != GROUP_SEP_1:
        ctx.warning(f"Expected {GROUP_SEP_1!r}, got {ctx.text()!r}; course has no groups")
        return

    while True:
        text = ctx.text()
        if ctx.source.eof:
            raise ctx.error(StructuralMismatch, "Reached EOF in group section")

        if text == GROUP_SEP_1:
            ctx.scan()
            with _wrapping("didn't find 2nd expected group separator"):
                expect_line(ctx, GROUP_SEP_2)
            ctx.builder.cross_group_separator()
        elif text == COURSE_SEP:
            ctx.scan()
            return
        elif text == BLANK_LINE_1 or text == BLANK_LINE_2:
            ctx.scan()
        elif parse_event_line(ctx):
            pass
        elif parse_lecturer_line(ctx):
            pass
        else:
            ctx.warning(f"Ignored group line {text!r}")
            ctx.scan()


# ---------------------------------------------------------------------------
# Courses
# ---------------------------------------------------------------------------


def parse_course(ctx: ParseContext) -> Optional[Course]:
    """
    Parse one ordinary course. Returns None at the end of the faculty.
    """
    course = ctx.builder.start_course()

    while ctx.text() == COURSE_SEP:
        ctx.scan()

    if not ctx.text().strip():
        return None

    with _wrapping("failed to parse ID and name in ordinary course"):
        parse_id_and_name(ctx)

    _parse_hours_or_skip(ctx)

    with _wrapping("didn't find expected course separator when parsing course"):
        expect_line(ctx, COURSE_SEP)

    with _wrapping("failed to parse course head info"):
        parse_course_head_info(ctx)

    with _wrapping("failed to parse groups for course"):
        parse_groups(ctx)

    return course


def _skip_to_course_sep(ctx: ParseContext) -> None:
    while ctx.text() != COURSE_SEP:
        if not ctx.scan():
            return


def parse_sports_course(ctx: ParseContext) -> Optional[Course]:
    """
    Parse the head of one sports course and skip its groups.
    Returns None at the end of the faculty.
    """
    course = ctx.builder.start_course()

    while ctx.text() == SPORTS_COURSE_SEP:
        ctx.scan()

    if not ctx.text().strip():
        return None

    with _wrapping("failed to parse ID and name in sports course"):
        parse_id_and_name(ctx)

    _parse_hours_or_skip(ctx, " in sports course")

    with _wrapping("didn't find expected course separator when parsing sports course"):
        expect_line(ctx, SPORTS_COURSE_SEP)

    # TODO: collect sports groups and their events
    ctx.warning(f"Skipping sports course group information (not implemented) for {course.name}")

    while ctx.text() != SPORTS_COURSE_SEP:
        if not ctx.scan():
            raise ctx.error(StructuralMismatch, "End of file reached unexpectedly in sports course")

    return course


# ---------------------------------------------------------------------------
# Faculties
# ---------------------------------------------------------------------------


def parse_sports_faculty(ctx: ParseContext, faculty: Faculty) -> None:
    ctx.info("Started scanning sports faculty")

    with _wrapping("didn't find 1st faculty separator line in sports faculty"):
        expect_line(ctx, SPORTS_FACULTY_SEP)

    with _wrapping("failed to parse sports faculty semester"):
        faculty.semester = _extract(ctx, match_sports_semester)
        ctx.scan()
    faculty.name = SPORTS_FACULTY_NAME

    with _wrapping("didn't find 2nd faculty separator line in sports faculty"):
        expect_line(ctx, SPORTS_FACULTY_SEP)

    while True:
        with _wrapping("failed to scan a sports course"):
            course = parse_sports_course(ctx)
        if course is None:
            break
        faculty.courses.append(course)


def parse_faculty(ctx: ParseContext) -> bool:
    """
    Parse one faculty. Returns False if the input ended before one started.
    """
    while not ctx.text().strip():
        if not ctx.scan():
            return False

    faculty = ctx.builder.start_faculty()

    if ctx.text() == SPORTS_FACULTY_SEP:
        parse_sports_faculty(ctx, faculty)
        return True
    if ctx.text() != FACULTY_SEP:
        raise ctx.error(StructuralMismatch, f"Expected faculty separator, but got {ctx.text()!r}")

    with _wrapping("didn't find 1st faculty separator line in faculty"):
        expect_line(ctx, FACULTY_SEP)

    with _wrapping("failed to parse faculty name"):
        faculty.name = _extract(ctx, match_faculty_name)
        ctx.scan()

    with _wrapping("failed to parse faculty semester"):
        faculty.semester = _extract(ctx, match_faculty_semester)
        ctx.scan()

    with _wrapping("didn't find 2nd faculty separator line in faculty"):
        expect_line(ctx, FACULTY_SEP)

    while True:
        try:
            course = parse_course(ctx)
        except (StructuralMismatch, FieldFormatError) as err:
            ctx.warning(f"Failed to parse a course in faculty {faculty.name}: {err}; skipping to next course")
            _skip_to_course_sep(ctx)
            continue

        if course is None:
            break
        faculty.courses.append(course)

    ctx.info(f"Finished {faculty}")
    return True


def parse_catalog(ctx: ParseContext) -> Catalog:
    while True:
        with _wrapping("failed to parse a faculty"):
            more = parse_faculty(ctx)
        if not more:
            break
    return ctx.builder.build()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse(data: Input, logger: Optional[Logger] = None, encoding: str = REPY_ENCODING) -> Catalog:
    """
    Parse a REPY document and return its Catalog.

    `data` may be raw bytes (decoded from `encoding`, CP862 by default), an
    already decoded string, or a file object. Diagnostics go to `logger`
    (the 'repy' logging logger if None), which is flushed when done.

    Raises a RepyError subclass on failure. Unexpected exceptions are
    reported as InvariantViolation with the line they happened on.
    """
    if logger is None:
        logger = StdLogger()

    source: Optional[LineSource] = None
    try:
        source = LineSource(data, logger=logger, encoding=encoding)
        ctx = ParseContext(source=source, logger=logger)
        return parse_catalog(ctx)
    except RepyError:
        raise
    except Exception as exc:
        line = source.line_number if source is not None else 0
        raise InvariantViolation(f"Failed to read REPY: line {line}: {exc!r}", line=line) from exc
    finally:
        logger.flush()


def read_file(path: str | Path, logger: Optional[Logger] = None, encoding: str = REPY_ENCODING) -> Catalog:
    """
    Parse the REPY file at `path`.
    """
    with open(path, "rb") as f:
        return parse(f, logger=logger, encoding=encoding)
