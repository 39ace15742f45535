"""
Tests for the CLI entry point.

Input and output go through temporary files so nothing in the repository
is touched.
"""

import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from repy.cli import main

TESTDATA = Path(__file__).resolve().parent / "testdata"


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.repy_path = Path(self.tmp.name) / "REPY"
        text = (TESTDATA / "sample.repy").read_text(encoding="utf-8")
        self.repy_path.write_bytes(text.encode("cp862"))

    def _run(self, argv: list) -> tuple:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            with self.assertRaises(SystemExit) as ctx:
                main(argv)
        return ctx.exception.code, out.getvalue(), err.getvalue()

    def test_requires_command(self) -> None:
        code, _, _ = self._run([])
        self.assertNotEqual(code, 0)

    def test_convert_to_file(self) -> None:
        out_path = Path(self.tmp.name) / "catalog.json"
        code, _, _ = self._run(["convert", "-i", str(self.repy_path), "-o", str(out_path)])
        self.assertEqual(code, 0)

        data = json.loads(out_path.read_text(encoding="utf-8"))
        self.assertEqual(len(data), 2)
        self.assertEqual(data[0]["courses"][0]["id"], 34010)

    def test_convert_invalid_input(self) -> None:
        bad = Path(self.tmp.name) / "BAD"
        bad.write_bytes(b"not a repy file\n")
        code, _, err = self._run(["convert", "-i", str(bad)])
        self.assertEqual(code, 1)
        self.assertIn("Failed to read REPY", err)

    def test_summary_from_json(self) -> None:
        out_path = Path(self.tmp.name) / "catalog.json"
        self._run(["convert", "-i", str(self.repy_path), "-o", str(out_path)])

        code, out, _ = self._run(["summary", "--json", str(out_path)])
        self.assertEqual(code, 0)
        self.assertIn("REPY catalog", out)


if __name__ == "__main__":
    unittest.main()
