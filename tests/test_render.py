import unittest
from unittest import mock

from playwright.sync_api import Error as PlaywrightError

from infostream.extraction.render import HeadlessRenderer


def _fake_playwright(html="<html><body><a href='/a'>x</a></body></html>"):
    pw = mock.MagicMock()
    manager = mock.MagicMock()
    manager.__enter__.return_value = pw
    manager.__exit__.return_value = False
    browser = pw.chromium.launch.return_value
    page = browser.new_context.return_value.new_page.return_value
    page.content.return_value = html
    return mock.MagicMock(return_value=manager), browser, page


class TestHeadlessRenderer(unittest.TestCase):
    def test_returns_markup_and_closes_browser(self):
        sync_pw, browser, page = _fake_playwright()
        with mock.patch("infostream.extraction.render.sync_playwright", sync_pw):
            html = HeadlessRenderer(timeout_ms=5000, settle_ms=1000).render("https://example.com/")
        self.assertIn("<a href", html)
        browser.close.assert_called_once()
        page.set_default_navigation_timeout.assert_called_with(5000)
        page.wait_for_timeout.assert_called_with(1000)
        kwargs = browser.new_context.call_args.kwargs
        self.assertFalse(kwargs["java_script_enabled"])

    def test_navigation_failure_is_unavailable_and_still_closes(self):
        sync_pw, browser, page = _fake_playwright()
        page.goto.side_effect = PlaywrightError("Timeout 5000ms exceeded")
        with mock.patch("infostream.extraction.render.sync_playwright", sync_pw):
            html = HeadlessRenderer().render("https://example.com/")
        self.assertIsNone(html)
        browser.close.assert_called_once()

    def test_launch_failure_is_unavailable(self):
        sync_pw, browser, _ = _fake_playwright()
        pw = sync_pw.return_value.__enter__.return_value
        pw.chromium.launch.side_effect = RuntimeError("Executable doesn't exist")
        with mock.patch("infostream.extraction.render.sync_playwright", sync_pw):
            self.assertIsNone(HeadlessRenderer().render("https://example.com/"))
        browser.close.assert_not_called()

    def test_empty_snapshot_is_unavailable(self):
        sync_pw, browser, _ = _fake_playwright(html="  ")
        with mock.patch("infostream.extraction.render.sync_playwright", sync_pw):
            self.assertIsNone(HeadlessRenderer().render("https://example.com/"))
        browser.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
