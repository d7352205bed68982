import io
import json
import logging
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from cookie_crawler import main as cli
from cookie_crawler.core import add_file_handler, logger
from cookie_crawler.errors import NavigationError
from cookie_crawler.models import Cookie


COOKIES = [
    Cookie(name="sid", value="abc", domain="example.com", source_url="https://example.com/", expiry="session"),
]


class TestCli(unittest.TestCase):

    @patch("cookie_crawler.main.CookieCrawler")
    def test_prints_cookie_report(self, mock_crawler_cls):
        crawler = mock_crawler_cls.return_value
        crawler.start_crawl.return_value = COOKIES
        crawler.visited_urls.return_value = ["https://example.com/"]

        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = cli.main(["https://example.com/", "--depth", "2", "--headful"])

        self.assertEqual(code, 0)
        mock_crawler_cls.assert_called_once_with("https://example.com/", 2)
        crawler.start_crawl.assert_called_once_with(headless=False)
        self.assertEqual(json.loads(out.getvalue()), [COOKIES[0].to_dict()])
        self.assertIn("COOKIE CRAWL SUMMARY", err.getvalue())

    @patch("cookie_crawler.main.CookieCrawler")
    def test_registers_logging_hooks(self, mock_crawler_cls):
        crawler = mock_crawler_cls.return_value
        crawler.start_crawl.return_value = []
        crawler.visited_urls.return_value = []

        with redirect_stdout(io.StringIO()), redirect_stderr(io.StringIO()):
            cli.main(["https://example.com/"])

        crawler.register_pre_visit_hook.assert_called_once()
        crawler.register_post_visit_hook.assert_called_once()

    @patch("cookie_crawler.main.CookieCrawler")
    def test_writes_report_to_output_file(self, mock_crawler_cls):
        crawler = mock_crawler_cls.return_value
        crawler.start_crawl.return_value = COOKIES
        crawler.visited_urls.return_value = ["https://example.com/"]

        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "cookies.json")
            out = io.StringIO()
            with redirect_stdout(out), redirect_stderr(io.StringIO()):
                code = cli.main(["https://example.com/", "--output", path])

            self.assertEqual(code, 0)
            self.assertEqual(out.getvalue(), "")
            with open(path, encoding="utf-8") as f:
                self.assertEqual(json.load(f)[0]["name"], "sid")

    @patch("cookie_crawler.main.CookieCrawler")
    def test_crawl_error_exits_with_one(self, mock_crawler_cls):
        mock_crawler_cls.return_value.start_crawl.side_effect = NavigationError("https://example.com/")

        with redirect_stdout(io.StringIO()), redirect_stderr(io.StringIO()):
            code = cli.main(["https://example.com/"])

        self.assertEqual(code, 1)

    @patch("cookie_crawler.main.CookieCrawler")
    def test_log_file_handler_is_detached_after_each_run(self, mock_crawler_cls):
        crawler = mock_crawler_cls.return_value
        crawler.start_crawl.return_value = []
        crawler.visited_urls.return_value = []

        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "crawl.log")
            with redirect_stdout(io.StringIO()), redirect_stderr(io.StringIO()):
                cli.main(["https://example.com/", "--log-file", path])
                cli.main(["https://example.com/", "--log-file", path])

            with open(path, encoding="utf-8") as f:
                started = [line for line in f if "Starting for:" in line]

            self.assertEqual(len(started), 2)
            self.assertFalse(any(
                isinstance(h, logging.FileHandler) and h.baseFilename == os.path.abspath(path)
                for h in logger.handlers
            ))

    @patch("cookie_crawler.main.CookieCrawler")
    def test_log_file_already_attached_is_not_duplicated(self, mock_crawler_cls):
        crawler = mock_crawler_cls.return_value
        crawler.start_crawl.return_value = []
        crawler.visited_urls.return_value = []

        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "crawl.log")
            existing = add_file_handler(logger, path)
            try:
                with redirect_stdout(io.StringIO()), redirect_stderr(io.StringIO()):
                    cli.main(["https://example.com/", "--log-file", path])
            finally:
                logger.removeHandler(existing)
                existing.close()

            with open(path, encoding="utf-8") as f:
                started = [line for line in f if "Starting for:" in line]

            self.assertEqual(len(started), 1)

    @patch("cookie_crawler.main.CookieCrawler")
    def test_verbose_enables_debug_for_the_run_only(self, mock_crawler_cls):
        crawler = mock_crawler_cls.return_value
        levels = []
        crawler.start_crawl.side_effect = lambda headless: levels.append(logger.level) or []
        crawler.visited_urls.return_value = []
        before = logger.level

        with redirect_stdout(io.StringIO()), redirect_stderr(io.StringIO()):
            cli.main(["https://example.com/", "--verbose"])

        self.assertEqual(levels, [logging.DEBUG])
        self.assertEqual(logger.level, before)

    def test_bad_start_url_exits_with_one(self):
        with redirect_stdout(io.StringIO()), redirect_stderr(io.StringIO()):
            self.assertEqual(cli.main(["ftp://example.com/"]), 1)

    def test_post_visit_hook_sleeps_for_delay(self):
        class Recorder:
            def register_pre_visit_hook(self, fn):
                self.pre = fn

            def register_post_visit_hook(self, fn):
                self.post = fn

        recorder = Recorder()
        cli.register_logging_hooks(recorder, delay=2.0)

        with patch("cookie_crawler.main.time.sleep") as mock_sleep:
            recorder.pre("https://example.com/", 0)
            recorder.post("https://example.com/", 0, COOKIES, None)

        mock_sleep.assert_called_once_with(2.0)


if __name__ == "__main__":
    unittest.main()
