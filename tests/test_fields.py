"""
Unit tests for the single-line field extractors.
"""

import unittest

from repy.errors import FieldFormatError, UnknownToken
from repy.fields import (
    match_event_line,
    match_faculty_name,
    match_faculty_semester,
    match_group_lecturer,
    match_hours_and_points,
    match_id_and_name,
    match_lecturer_in_charge,
    match_sports_semester,
    match_test_date,
    is_head_separator,
    parse_location,
    parse_weekly_hours,
    weekday_from_letter,
)
from repy.model import Date, GroupType, WeeklyHours, Weekday


class TestEventLine(unittest.TestCase):
    def test_tutorial_with_explicit_group(self) -> None:
        parsed = match_event_line("| 10.30-12.30'ב :ליגרת 11 |")
        self.assertIsNotNone(parsed)
        assert parsed is not None

        self.assertEqual(parsed.event.day, Weekday.MONDAY)
        self.assertEqual(str(parsed.event.start_minute), "10:30")
        self.assertEqual(str(parsed.event.end_minute), "12:30")
        self.assertEqual(parsed.event.location, "")
        self.assertEqual(parsed.group_type, GroupType.TUTORIAL)
        self.assertEqual(parsed.group_id, 11)

    def test_lecture_with_location(self) -> None:
        parsed = match_event_line("| ןמלוא 501  10.30-12.30'ב :האצרה        |")
        assert parsed is not None
        self.assertEqual(parsed.event.location, "אולמן 501")
        self.assertEqual(parsed.group_type, GroupType.LECTURE)
        self.assertIsNone(parsed.group_id)

    def test_continuation_event(self) -> None:
        parsed = match_event_line("| ןמלוא 501   9.30-11.30'ש                |")
        assert parsed is not None
        self.assertEqual(parsed.event.day, Weekday.SATURDAY)
        self.assertEqual(parsed.event.start_minute, 9 * 60 + 30)
        self.assertIsNone(parsed.group_type)

    def test_not_an_event(self) -> None:
        self.assertIsNone(match_event_line("|                  יול ינד : לגרתמ       |"))

    def test_unknown_group_type(self) -> None:
        with self.assertRaises(UnknownToken):
            match_event_line("| 10.30-12.30'ב :רועיש 11 |")


class TestLocation(unittest.TestCase):
    def test_building_and_room(self) -> None:
        self.assertEqual(parse_location("בואט 009"), "טאוב 9")
        self.assertEqual(parse_location("ןמלוא 501"), "אולמן 501")

    def test_free_form(self) -> None:
        self.assertEqual(parse_location("והשלכ רחא הנבמ"), "מבנה אחר כלשהו")


class TestCourseHead(unittest.TestCase):
    def test_id_and_name(self) -> None:
        self.assertEqual(
            match_id_and_name("|                 תיסדנה הקינכמ  034010 |"),
            (34010, "מכניקה הנדסית"),
        )

    def test_id_and_name_mismatch(self) -> None:
        with self.assertRaises(FieldFormatError):
            match_id_and_name("|            no id here            |")

    def test_hours_and_points(self) -> None:
        points, hours = match_hours_and_points("|3.5 :קנ   2-ת 3-ה:עובשב הארוה תועש     |")
        self.assertEqual(points, 3.5)
        self.assertEqual(hours, WeeklyHours(lecture=3, tutorial=2))

    def test_hours_add_up(self) -> None:
        self.assertEqual(parse_weekly_hours("1-ה 2-ה 1-פ"), WeeklyHours(lecture=3, project=1))

    def test_unknown_hour_code(self) -> None:
        with self.assertRaises(UnknownToken):
            parse_weekly_hours("2-ק")

    def test_test_date(self) -> None:
        self.assertEqual(
            match_test_date("| 09.00 העש  20/07/24 'ש םוי :'א דעומ     |"),
            Date(year=2024, month=7, day=20),
        )
        self.assertIsNone(match_test_date("|          ןהכ הנח 'פורפ : יארחא הרומ     |"))

    def test_lecturer_in_charge(self) -> None:
        self.assertEqual(
            match_lecturer_in_charge("|          ןהכ   הנח 'פורפ : יארחא הרומ     |"),
            "פרופ' חנה כהן",
        )

    def test_group_lecturer(self) -> None:
        self.assertEqual(match_group_lecturer("|                  יול ינד : לגרתמ       |"), "דני לוי")
        self.assertIsNone(match_group_lecturer("|               some other line          |"))

    def test_head_separator(self) -> None:
        self.assertTrue(is_head_separator("|                                -----     |"))
        self.assertFalse(is_head_separator("+------------------------------------------+"))


class TestFacultyHead(unittest.TestCase):
    def test_name(self) -> None:
        self.assertEqual(
            match_faculty_name("|   תונוכמ תסדנהל הטלוקפה - תועש תכרעמ     |"),
            "הפקולטה להנדסת מכונות",
        )

    def test_semester(self) -> None:
        self.assertEqual(match_faculty_semester('|            ד"פשת ףרוח רטסמס              |'), 'חורף תשפ"ד')

    def test_sports_semester(self) -> None:
        self.assertEqual(
            match_sports_semester('|          ד"פשת ףרוח רטסמס - טרופס תועוצקמ          |'),
            'חורף תשפ"ד',
        )

    def test_name_mismatch(self) -> None:
        with self.assertRaises(FieldFormatError):
            match_faculty_name('|            ד"פשת ףרוח רטסמס              |')


class TestLookups(unittest.TestCase):
    def test_weekdays(self) -> None:
        self.assertEqual(weekday_from_letter("א"), Weekday.SUNDAY)
        self.assertEqual(weekday_from_letter("ש"), Weekday.SATURDAY)
        with self.assertRaises(UnknownToken):
            weekday_from_letter("ז")


if __name__ == "__main__":
    unittest.main()
