"""
Course fixtures: every testdata/courses/<name>.repy must parse into exactly
the course described by <name>.json.
"""

import io
import json
import unittest
from pathlib import Path

from repy.logger import WriterLogger
from repy.model import Course
from repy.parse import ParseContext, parse_course
from repy.source import LineSource

COURSES_DIR = Path(__file__).resolve().parent / "testdata" / "courses"


def _context(text: str) -> ParseContext:
    logger = WriterLogger(io.StringIO())
    source = LineSource(text, logger=logger)
    # parse_course expects one line to be scanned already
    source.advance()
    return ParseContext(source=source, logger=logger)


class TestParseCourse(unittest.TestCase):
    def test_fixtures(self) -> None:
        repy_files = sorted(COURSES_DIR.glob("*.repy"))
        self.assertTrue(repy_files)

        for repy_path in repy_files:
            with self.subTest(fixture=repy_path.name):
                want = Course.from_dict(json.loads(repy_path.with_suffix(".json").read_text(encoding="utf-8")))

                ctx = _context(repy_path.read_text(encoding="utf-8").strip())
                got = parse_course(ctx)

                self.assertIsNotNone(got)
                self.assertEqual(got, want, json.dumps(got.to_dict() if got else None, ensure_ascii=False, indent=2))

    def test_group_types_and_ids(self) -> None:
        ctx = _context((COURSES_DIR / "mechanics.repy").read_text(encoding="utf-8"))
        course = parse_course(ctx)
        assert course is not None

        self.assertEqual([(g.id, g.type.value) for g in course.groups], [(10, "lecture"), (11, "tutorial"), (12, "tutorial")])
        # explicit 11 reseeded the counter
        self.assertEqual(ctx.builder.group_id, 13)

    def test_end_of_faculty(self) -> None:
        ctx = _context("\n+==========================================+\n")
        self.assertIsNone(parse_course(ctx))


if __name__ == "__main__":
    unittest.main()
