"""
REPY parser: Technion timetable report -> faculties, courses, groups, events.

    from repy import read_file
    catalog = read_file("REPY")
"""

from repy.errors import (
    ArchiveError,
    EOFExhaustion,
    FieldFormatError,
    InvariantViolation,
    RepyError,
    StructuralMismatch,
    UnknownToken,
)
from repy.model import Catalog, Course, Date, Event, Faculty, Group, GroupType, MinutesSinceMidnight, WeeklyHours, Weekday
from repy.parse import parse, read_file

__all__ = [
    "ArchiveError",
    "Catalog",
    "Course",
    "Date",
    "EOFExhaustion",
    "Event",
    "Faculty",
    "FieldFormatError",
    "Group",
    "GroupType",
    "InvariantViolation",
    "MinutesSinceMidnight",
    "RepyError",
    "StructuralMismatch",
    "UnknownToken",
    "WeeklyHours",
    "Weekday",
    "parse",
    "read_file",
]
