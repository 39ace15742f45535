"""
Central data model definitions for a parsed REPY catalog.

The structure is:

    Catalog = list of Faculty
    Faculty -> Course -> Group -> Event

All Hebrew text stored here is already in logical (reading) order.

Each class knows how to turn itself into the JSON shape consumed downstream
(to_dict) and back (from_dict). Key names follow that shape, e.g.
"academicPoints" and "startMinute".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, List

from repy.errors import FieldFormatError


class MinutesSinceMidnight(int):
    """
    A time of day, as minutes since midnight. Prints as HH:MM.
    """

    def __str__(self) -> str:
        return f"{self // 60:02d}:{self % 60:02d}"

    def __repr__(self) -> str:
        return f"MinutesSinceMidnight({str(self)})"


def parse_time_of_day(text: str) -> MinutesSinceMidnight:
    """
    Parse the report's 'H.MM' notation, e.g. '16.30' -> 990.
    """
    sections = text.strip().split(".")
    if len(sections) != 2:
        raise FieldFormatError(f"Invalid time of day: {text!r}")

    result = 0
    for section in sections:
        if not section.isdigit():
            raise FieldFormatError(f"Invalid time of day: {text!r}")
        result = result * 60 + int(section)

    return MinutesSinceMidnight(result)


class Weekday(IntEnum):
    # Numbering starts at Sunday, as in the report
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6


class GroupType(Enum):
    """
    Type of the events in a registration group (applies to all of them).
    """

    LECTURE = "lecture"
    TUTORIAL = "tutorial"
    LAB = "lab"
    SPORT = "sport"

    def __str__(self) -> str:
        return self.value


def normalize_year(year: int) -> int:
    """
    Two-digit years belong to the 2000s; anything else is kept.
    """
    if year < 100:
        return 2000 + year
    return year


@dataclass
class Date:
    """
    A date without time zone.
    """

    year: int
    month: int
    day: int

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"

    def to_dict(self) -> Dict[str, int]:
        return {"year": self.year, "month": self.month, "day": self.day}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Date":
        return cls(year=int(data["year"]), month=int(data["month"]), day=int(data["day"]))


@dataclass
class WeeklyHours:
    """
    Weekly hours of a course, by kind.
    """

    lecture: int = 0
    tutorial: int = 0
    lab: int = 0
    project: int = 0

    def __str__(self) -> str:
        parts = [f"{name}={value}" for name, value in self.to_dict().items()]
        return "{" + " ".join(parts) + "}"

    def to_dict(self) -> Dict[str, int]:
        # Zero fields are omitted
        out: Dict[str, int] = {}
        for name in ("lecture", "tutorial", "lab", "project"):
            value = getattr(self, name)
            if value:
                out[name] = value
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WeeklyHours":
        return cls(
            lecture=int(data.get("lecture", 0)),
            tutorial=int(data.get("tutorial", 0)),
            lab=int(data.get("lab", 0)),
            project=int(data.get("project", 0)),
        )


@dataclass
class Event:
    """
    One weekly event of a group (a fixed weekday and time slot).
    """

    day: Weekday
    start_minute: MinutesSinceMidnight
    end_minute: MinutesSinceMidnight
    location: str = ""

    def __str__(self) -> str:
        return f"{self.day.name.title()} {self.start_minute}-{self.end_minute} {self.location}".rstrip()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day": int(self.day),
            "location": self.location,
            "startMinute": int(self.start_minute),
            "endMinute": int(self.end_minute),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        return cls(
            day=Weekday(int(data["day"])),
            start_minute=MinutesSinceMidnight(int(data["startMinute"])),
            end_minute=MinutesSinceMidnight(int(data["endMinute"])),
            location=str(data.get("location", "")),
        )


@dataclass
class Group:
    """
    A course's registration group and the events it entails.
    """

    id: int
    type: GroupType
    teachers: List[str] = field(default_factory=list)
    events: List[Event] = field(default_factory=list)
    description: str = ""

    def __str__(self) -> str:
        events = ", ".join(str(e) for e in self.events)
        return f"Group[{self.id} {self.type}]({events})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "teachers": list(self.teachers),
            "events": [e.to_dict() for e in self.events],
            "type": self.type.value,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Group":
        # GroupType() raises ValueError for unknown values
        return cls(
            id=int(data["id"]),
            type=GroupType(data["type"]),
            teachers=[str(t) for t in data.get("teachers") or []],
            events=[Event.from_dict(e) for e in data.get("events") or []],
            description=str(data.get("description") or ""),
        )


@dataclass
class Course:
    """
    Represents one course as listed in the REPY file.
    """

    id: int = 0
    name: str = ""
    academic_points: float = 0.0
    lecturer_in_charge: str = ""
    weekly_hours: WeeklyHours = field(default_factory=WeeklyHours)
    test_dates: List[Date] = field(default_factory=list)
    groups: List[Group] = field(default_factory=list)

    def __str__(self) -> str:
        dates = "[" + " ".join(str(d) for d in self.test_dates) + "]"
        groups = "[" + " ".join(str(g) for g in self.groups) + "]"
        return (
            f"{{Course[{self.id}] ({self.name!r}) AP:{self.academic_points:.1f} "
            f"Hours:{self.weekly_hours} lecturer:{self.lecturer_in_charge!r} "
            f"testDates:{dates} groups:{groups}}}"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "academicPoints": self.academic_points,
            "lecturerInCharge": self.lecturer_in_charge,
            "weeklyHours": self.weekly_hours.to_dict(),
            "testDates": [d.to_dict() for d in self.test_dates],
            "groups": [g.to_dict() for g in self.groups],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Course":
        return cls(
            id=int(data["id"]),
            name=str(data.get("name", "")),
            academic_points=float(data.get("academicPoints", 0.0)),
            lecturer_in_charge=str(data.get("lecturerInCharge") or ""),
            weekly_hours=WeeklyHours.from_dict(data.get("weeklyHours") or {}),
            test_dates=[Date.from_dict(d) for d in data.get("testDates") or []],
            groups=[Group.from_dict(g) for g in data.get("groups") or []],
        )


@dataclass
class Faculty:
    """
    A set of courses offered by one faculty in one semester.
    """

    name: str = ""
    semester: str = ""
    courses: List[Course] = field(default_factory=list)

    def __str__(self) -> str:
        return f"faculty({self.name}, {len(self.courses)})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "semester": self.semester,
            "courses": [c.to_dict() for c in self.courses],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Faculty":
        return cls(
            name=str(data.get("name", "")),
            semester=str(data.get("semester", "")),
            courses=[Course.from_dict(c) for c in data.get("courses") or []],
        )


# All of the information in a REPY file, in document order
Catalog = List[Faculty]
