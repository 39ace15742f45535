"""
Catalog builder.

Collects what the parser recognizes into model objects. The builder owns the
course currently being parsed and the running group-id counter.

Group ids: REPY usually omits the id of the first group and sometimes of the
following ones, so ids are assigned from a counter:
- the counter starts at 10 for each course
- crossing a group separator with counter > 10 moves it to the next ten
  (e.g. 12 -> 20)
- an explicit id on an event line wins and reseeds the counter to id + 1
"""

from __future__ import annotations

from typing import List, Optional

from repy.errors import StructuralMismatch
from repy.model import Catalog, Course, Date, Event, Faculty, Group, GroupType, WeeklyHours

FIRST_GROUP_ID = 10


class CatalogBuilder:
    def __init__(self) -> None:
        self.faculties: List[Faculty] = []
        self.course = Course()
        self.group_id = FIRST_GROUP_ID

    # -- faculties -----------------------------------------------------------

    def start_faculty(self) -> Faculty:
        faculty = Faculty()
        self.faculties.append(faculty)
        return faculty

    # -- courses -------------------------------------------------------------

    def start_course(self) -> Course:
        self.course = Course()
        self.group_id = FIRST_GROUP_ID
        return self.course

    def set_id_and_name(self, course_id: int, name: str) -> None:
        self.course.id = course_id
        self.course.name = name

    def set_hours_and_points(self, points: float, hours: WeeklyHours) -> None:
        self.course.academic_points = points
        self.course.weekly_hours = hours

    def add_test_date(self, date: Date) -> None:
        self.course.test_dates.append(date)

    def set_lecturer_in_charge(self, name: str) -> None:
        self.course.lecturer_in_charge = name

    # -- groups --------------------------------------------------------------

    def cross_group_separator(self) -> None:
        if self.group_id > FIRST_GROUP_ID:
            self.group_id = (self.group_id // 10) * 10 + 10

    def open_group(self, group_type: GroupType, group_id: Optional[int] = None) -> Group:
        if group_id is None:
            group_id = self.group_id
        self.group_id = group_id + 1

        group = Group(id=group_id, type=group_type)
        self.course.groups.append(group)
        return group

    def last_group(self) -> Optional[Group]:
        if not self.course.groups:
            return None
        return self.course.groups[-1]

    def add_event(self, event: Event) -> None:
        group = self.last_group()
        if group is None:
            raise StructuralMismatch(f"Event {event} appears before any group")
        group.events.append(event)

    def add_teacher(self, name: str) -> None:
        # A lecturer line before any event line opens a lecture group
        group = self.last_group() or self.open_group(GroupType.LECTURE)
        group.teachers.append(name)

    def build(self) -> Catalog:
        return list(self.faculties)
