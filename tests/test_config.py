import os
import unittest
from unittest import mock

from repy.config import HTTP_TIMEOUT_SECONDS, REPFILE_URL, get_settings


@mock.patch("repy.config.load_dotenv")
class TestSettings(unittest.TestCase):
    def test_defaults(self, _load_dotenv: mock.Mock) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            s = get_settings()
        self.assertEqual(s.repfile_url, REPFILE_URL)
        self.assertEqual(s.member_name, "REPY")
        self.assertEqual(s.http_timeout, HTTP_TIMEOUT_SECONDS)
        self.assertEqual(s.log_level, "WARNING")

    def test_from_environment(self, _load_dotenv: mock.Mock) -> None:
        env = {
            "REPY_URL": "http://mirror.invalid/REPFILE.zip",
            "REPY_HTTP_TIMEOUT": "5",
            "REPY_LOG_LEVEL": "info",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            s = get_settings()
        self.assertEqual(s.repfile_url, "http://mirror.invalid/REPFILE.zip")
        self.assertEqual(s.http_timeout, 5.0)
        self.assertEqual(s.log_level, "INFO")

    def test_bad_timeout_falls_back(self, _load_dotenv: mock.Mock) -> None:
        with mock.patch.dict(os.environ, {"REPY_HTTP_TIMEOUT": "soon"}, clear=True):
            with self.assertLogs(level="WARNING"):
                s = get_settings()
        self.assertEqual(s.http_timeout, HTTP_TIMEOUT_SECONDS)


if __name__ == "__main__":
    unittest.main()
