"""
Field extractors: one pattern per kind of REPY line.

REPY lines are fixed-width table rows with Hebrew in visual order, so the
patterns below contain Hebrew words "backwards" (e.g. 'רטסמס' is 'סמסטר').
Every pattern is compiled once into PATTERNS.

The match_* functions take the text of one line and return typed values:
- required fields raise FieldFormatError when the line doesn't match
- optional probes return None
They never move through the input; the state machine in repy.parse does that.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Optional, Tuple

from repy import bidi
from repy.errors import FieldFormatError, UnknownToken
from repy.model import (
    Date,
    Event,
    GroupType,
    MinutesSinceMidnight,
    WeeklyHours,
    Weekday,
    normalize_year,
)


# ---------------------------------------------------------------------------
# Separator lines (compared literally)
# ---------------------------------------------------------------------------

FACULTY_SEP = "+==========================================+"
COURSE_SEP = "+------------------------------------------+"
GROUP_SEP_1 = "|               ++++++                  .סמ|"
GROUP_SEP_2 = "|                                     םושיר|"
BLANK_LINE_1 = "|                               -----      |"
BLANK_LINE_2 = "|                                          |"

SPORTS_FACULTY_SEP = "+===============================================================+"
SPORTS_COURSE_SEP = "+---------------------------------------------------------------+"

# Logical order; the report only shows it inside the semester line
SPORTS_FACULTY_NAME = "מקצועות ספורט"


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

PATTERNS = MappingProxyType(
    {
        "id_and_name": re.compile(r"\| *(?P<name>.*) +(?P<id>[0-9]{5,6}) +\|"),
        "hours_and_points": re.compile(
            r"\| *(?P<points>[0-9]+\.[0-9]+) *:קנ *(?P<hours>([0-9]+-[התפמ] *)+):עובשב הארוה תועש *\|"
        ),
        # The exam time at the (visual) start of the line is ignored
        "test_date": re.compile(
            r"\|.*(?P<day>[0-9]{2})/(?P<month>[0-9]{2})/(?P<year>[0-9]{2}) *'. +םוי *:.*דעומ +\|"
        ),
        "lecturer_in_charge": re.compile(r"\| *(?P<name>.*) : *יארחא *הרומ *\|"),
        "head_separator": re.compile(r"\| +-+ *\|"),
        "faculty_name": re.compile(r"\| *(?P<name>[א-ת\., ]+) *- *תועש תכרעמ *\|"),
        "faculty_semester": re.compile(r'\| *(?P<semester>[א-ת" ]+) +רטסמס *\|'),
        "sports_semester": re.compile(r'\| *(?P<semester>[א-ת" ]+) +רטסמס *- *טרופס תועוצקמ *\|'),
        "group_lecturer": re.compile(r"\| *(?P<name>.*) *: *(?P<role>הצרמ|לגרתמ) *\|"),
        "event": re.compile(
            r"\| *"
            r"(?P<location>.*) +"
            r"(?P<start_hour>[0-9]{1,2})\.(?P<start_minute>[0-9]{2})- *"
            r"(?P<end_hour>[0-9]{1,2})\.(?P<end_minute>[0-9]{2})'"
            r"(?P<weekday>[אבגדהוש]) "
            r"(:(?P<group_type>[א-ת]+))?"
            r" +(?P<group_id>[0-9]+)?"
            r" *\|"
        ),
        "location": re.compile(r"(?P<building>[א-ת]+) (?P<room>[0-9]+)"),
    }
)


# ---------------------------------------------------------------------------
# Lookup tables
# ---------------------------------------------------------------------------

WEEKDAYS: Dict[str, Weekday] = {
    "א": Weekday.SUNDAY,
    "ב": Weekday.MONDAY,
    "ג": Weekday.TUESDAY,
    "ד": Weekday.WEDNESDAY,
    "ה": Weekday.THURSDAY,
    "ו": Weekday.FRIDAY,
    "ש": Weekday.SATURDAY,
}

GROUP_TYPES: Dict[str, GroupType] = {
    "האצרה": GroupType.LECTURE,
    "לוגרת": GroupType.TUTORIAL,
    "ליגרת": GroupType.TUTORIAL,
    "הדבעמ": GroupType.LAB,
    "טרופס": GroupType.SPORT,
}

HOUR_CODES: Dict[str, str] = {
    "ה": "lecture",
    "ת": "tutorial",
    "מ": "lab",
    "פ": "project",
}


def weekday_from_letter(letter: str) -> Weekday:
    try:
        return WEEKDAYS[letter]
    except KeyError:
        raise UnknownToken(f"Invalid weekday letter {letter!r}") from None


def group_type_from_word(word: str) -> GroupType:
    try:
        return GROUP_TYPES[word]
    except KeyError:
        raise UnknownToken(f"Invalid group type {word!r}") from None


def collapse_spaces(s: str) -> str:
    return " ".join(s.split())


def _mismatch(kind: str, line: str) -> FieldFormatError:
    return FieldFormatError(f"Line {line!r} doesn't match {kind} pattern `{PATTERNS[kind].pattern}`")


# ---------------------------------------------------------------------------
# Course head
# ---------------------------------------------------------------------------


def match_id_and_name(line: str) -> Tuple[int, str]:
    """
    '|   <name>   <id> |' -> (id, name)
    """
    m = PATTERNS["id_and_name"].search(line)
    if m is None:
        raise _mismatch("id_and_name", line)
    return int(m["id"]), bidi.flip(m["name"])


def parse_weekly_hours(text: str) -> WeeklyHours:
    """
    Parse '2-ה 1-ת' style descriptors. Hours of the same kind add up.
    """
    hours = WeeklyHours()
    for desc in text.split():
        count, _, code = desc.partition("-")
        if code not in HOUR_CODES:
            raise UnknownToken(f"Invalid hour descriptor {code!r}")
        name = HOUR_CODES[code]
        setattr(hours, name, getattr(hours, name) + int(count))
    return hours


def match_hours_and_points(line: str) -> Tuple[float, WeeklyHours]:
    m = PATTERNS["hours_and_points"].search(line)
    if m is None:
        raise _mismatch("hours_and_points", line)
    return float(m["points"]), parse_weekly_hours(m["hours"])


def is_head_separator(line: str) -> bool:
    return PATTERNS["head_separator"].search(line) is not None


def match_test_date(line: str) -> Optional[Date]:
    m = PATTERNS["test_date"].search(line)
    if m is None:
        return None
    return Date(
        year=normalize_year(int(m["year"])),
        month=int(m["month"]),
        day=int(m["day"]),
    )


def match_lecturer_in_charge(line: str) -> Optional[str]:
    m = PATTERNS["lecturer_in_charge"].search(line)
    if m is None:
        return None
    return bidi.flip(collapse_spaces(m["name"]))


# ---------------------------------------------------------------------------
# Faculty head
# ---------------------------------------------------------------------------


def match_faculty_name(line: str) -> str:
    m = PATTERNS["faculty_name"].search(line)
    if m is None:
        raise _mismatch("faculty_name", line)
    return bidi.flip(m["name"])


def match_faculty_semester(line: str) -> str:
    m = PATTERNS["faculty_semester"].search(line)
    if m is None:
        raise _mismatch("faculty_semester", line)
    return bidi.flip(m["semester"])


def match_sports_semester(line: str) -> str:
    m = PATTERNS["sports_semester"].search(line)
    if m is None:
        raise _mismatch("sports_semester", line)
    return bidi.flip(m["semester"])


# ---------------------------------------------------------------------------
# Groups and events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EventLine:
    """
    Everything one event row carries. group_type is set when the row opens a
    new group; group_id only when the row states it explicitly.
    """

    event: Event
    group_type: Optional[GroupType] = None
    group_id: Optional[int] = None


def parse_location(text: str) -> str:
    """
    'בואט 009' -> 'טאוב 9'. Locations without a building + room shape are
    reversed as a whole.
    """
    m = PATTERNS["location"].search(text)
    if m is None:
        return bidi.flip(text)
    return f"{bidi.plain_reverse(m['building'])} {int(m['room'])}"


def _time_of_day(hours: str, minutes: str) -> MinutesSinceMidnight:
    return MinutesSinceMidnight(int(hours) * 60 + int(minutes))


def match_event_line(line: str) -> Optional[EventLine]:
    m = PATTERNS["event"].search(line)
    if m is None:
        return None

    event = Event(
        day=weekday_from_letter(m["weekday"]),
        start_minute=_time_of_day(m["start_hour"], m["start_minute"]),
        end_minute=_time_of_day(m["end_hour"], m["end_minute"]),
        location=parse_location(m["location"]),
    )

    group_type = group_type_from_word(m["group_type"]) if m["group_type"] else None
    group_id = int(m["group_id"]) if m["group_id"] else None
    return EventLine(event=event, group_type=group_type, group_id=group_id)


def match_group_lecturer(line: str) -> Optional[str]:
    m = PATTERNS["group_lecturer"].search(line)
    if m is None:
        return None
    return bidi.flip(collapse_spaces(m["name"]))
