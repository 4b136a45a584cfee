"""Browser session lifetime: one Chromium, one page, released on every path."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from playwright.sync_api import Browser, Page, sync_playwright
from playwright.sync_api import Error as PlaywrightError

from map_healthcheck.config import HealthCheckConfig
from map_healthcheck.errors import SessionError
from map_healthcheck.map_page import MapPage

log = logging.getLogger(__name__)


class BrowserSession:
    """Handle passed to the procedure; owns nothing it did not get from ``open_session``."""

    def __init__(self, browser: Browser, page: Page, config: HealthCheckConfig) -> None:
        self.browser = browser
        self.page = page
        self.config = config
        self.map_page = MapPage(page, timeout_ms=config.wait_timeout_ms)

    def navigate(self, url: str) -> None:
        try:
            self.page.goto(url, timeout=self.config.navigation_timeout_ms)
        except PlaywrightError as exc:
            raise SessionError(f"failed to load {url}: {exc}") from exc

    def screenshot(self) -> bytes:
        return self.page.screenshot(full_page=True)


@contextmanager
def open_session(config: HealthCheckConfig) -> Iterator[BrowserSession]:
    """Launch Chromium with a maximised window and yield a session for it."""
    with sync_playwright() as p:
        try:
            if config.headless:
                browser = p.chromium.launch(headless=True)
                context_args = {
                    "viewport": {
                        "width": config.viewport_width,
                        "height": config.viewport_height,
                    }
                }
            else:
                browser = p.chromium.launch(headless=False, args=["--start-maximized"])
                context_args = {"no_viewport": True}
        except PlaywrightError as exc:
            raise SessionError(f"browser failed to launch: {exc}") from exc

        try:
            page = browser.new_context(**context_args).new_page()
            yield BrowserSession(browser, page, config)
        finally:
            log.info("Closing browser...")
            browser.close()
            log.info("=== MONITORING SESSION CLOSED ===")
