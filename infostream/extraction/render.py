"""Headless-browser snapshot used when static markup yields no groups.

Every call launches its own Chromium and closes it on the way out. Failures are
reported as None ("unavailable"), never raised to the caller.
"""

from __future__ import annotations

import logging
from typing import Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright


logger = logging.getLogger(__name__)

CHROMIUM_ARGS = [
    "--disable-images",
    "--disable-javascript",
    "--disable-web-security",
    "--disable-features=VizDisplayCompositor",
    "--window-size=1200,800",
]


class RenderError(Exception):
    """Headless browser could not produce markup."""


class HeadlessRenderer:
    def __init__(self, *, timeout_ms: int = 5000, settle_ms: int = 1000, user_agent: Optional[str] = None):
        self.timeout_ms = timeout_ms
        self.settle_ms = settle_ms
        self.user_agent = user_agent

    def _snapshot(self, url: str) -> str:
        with sync_playwright() as playwright:
            browser = playwright.chromium.launch(headless=True, args=CHROMIUM_ARGS)
            try:
                # Scripts stay off, matching the launch flags.
                context = browser.new_context(
                    java_script_enabled=False,
                    user_agent=self.user_agent,
                    viewport={"width": 1200, "height": 800},
                )
                page = context.new_page()
                page.set_default_timeout(self.timeout_ms)
                page.set_default_navigation_timeout(self.timeout_ms)
                response = page.goto(url, wait_until="domcontentloaded")
                if response is None:
                    raise RenderError("no document response")
                page.wait_for_timeout(self.settle_ms)
                html = page.content()
            finally:
                browser.close()
        if not html or not html.strip():
            raise RenderError("empty snapshot")
        return html

    def render(self, url: str) -> Optional[str]:
        try:
            return self._snapshot(url)
        except (PlaywrightError, RenderError) as e:
            logger.warning("render fallback unavailable for %s: %s", url, e)
            return None
        except Exception as e:
            # Missing browser binaries surface as plain exceptions from the driver.
            logger.warning("render fallback failed for %s: %s", url, e)
            return None
