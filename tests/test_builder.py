"""
Unit tests for group id assignment in the catalog builder.

Rules:
- the counter starts at 10 for every course
- an explicit id wins and reseeds the counter to id + 1
- crossing a group separator with counter > 10 jumps to the next ten
"""

import unittest

from repy.builder import CatalogBuilder
from repy.errors import StructuralMismatch
from repy.model import Event, GroupType, MinutesSinceMidnight, Weekday


def _event() -> Event:
    return Event(Weekday.SUNDAY, MinutesSinceMidnight(600), MinutesSinceMidnight(660))


class TestGroupIds(unittest.TestCase):
    def test_first_group_is_ten(self) -> None:
        b = CatalogBuilder()
        b.start_course()
        b.cross_group_separator()
        self.assertEqual(b.open_group(GroupType.LECTURE).id, 10)
        self.assertEqual(b.group_id, 11)

    def test_explicit_id_reseeds(self) -> None:
        b = CatalogBuilder()
        b.start_course()
        self.assertEqual(b.open_group(GroupType.TUTORIAL, 11).id, 11)
        self.assertEqual(b.group_id, 12)
        self.assertEqual(b.open_group(GroupType.TUTORIAL).id, 12)
        self.assertEqual(b.group_id, 13)

    def test_separator_snaps_to_next_ten(self) -> None:
        b = CatalogBuilder()
        b.start_course()
        b.open_group(GroupType.LECTURE)
        b.open_group(GroupType.LECTURE)
        self.assertEqual(b.group_id, 12)

        b.cross_group_separator()
        self.assertEqual(b.group_id, 20)
        self.assertEqual(b.open_group(GroupType.TUTORIAL).id, 20)

        b.cross_group_separator()
        self.assertEqual(b.group_id, 30)

    def test_new_course_resets_counter(self) -> None:
        b = CatalogBuilder()
        b.start_course()
        b.open_group(GroupType.LAB, 55)
        b.start_course()
        self.assertEqual(b.group_id, 10)
        self.assertEqual(b.course.groups, [])


class TestGroupContents(unittest.TestCase):
    def test_event_before_group_fails(self) -> None:
        b = CatalogBuilder()
        b.start_course()
        with self.assertRaises(StructuralMismatch):
            b.add_event(_event())

    def test_teacher_before_group_opens_lecture(self) -> None:
        b = CatalogBuilder()
        b.start_course()
        b.add_teacher("דני לוי")
        self.assertEqual(len(b.course.groups), 1)
        self.assertEqual(b.course.groups[0].type, GroupType.LECTURE)
        self.assertEqual(b.course.groups[0].id, 10)
        self.assertEqual(b.course.groups[0].teachers, ["דני לוי"])

    def test_events_go_to_last_group(self) -> None:
        b = CatalogBuilder()
        b.start_course()
        b.open_group(GroupType.LECTURE)
        b.open_group(GroupType.TUTORIAL)
        b.add_event(_event())
        self.assertEqual(len(b.course.groups[0].events), 0)
        self.assertEqual(len(b.course.groups[1].events), 1)


if __name__ == "__main__":
    unittest.main()
