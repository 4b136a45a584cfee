"""Page object for the map widget: wait for it, click it, read the popup."""

from __future__ import annotations

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, expect
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from map_healthcheck.config import WAIT_TIMEOUT_MS
from map_healthcheck.errors import DriverError, ElementNotFoundError, WaitTimeoutError


class MapPage:
    """Thin facade over a Playwright page hosting a Leaflet-style map.

    All waits rely on Playwright's auto-waiting and are bounded by an explicit
    timeout in milliseconds. Driver failures surface as ``HealthCheckError``s.
    """

    def __init__(self, page: Page, timeout_ms: float = WAIT_TIMEOUT_MS) -> None:
        self.page = page
        self.timeout_ms = timeout_ms

    def wait_until_visible(self, selector: str, timeout_ms: float | None = None) -> None:
        timeout_ms = self.timeout_ms if timeout_ms is None else timeout_ms
        try:
            expect(self.page.locator(selector).first).to_be_visible(timeout=timeout_ms)
        except AssertionError as exc:
            raise WaitTimeoutError(selector, timeout_ms) from exc
        except PlaywrightError as exc:
            raise DriverError(f"waiting for '{selector}' failed: {exc}") from exc

    def click(self, selector: str) -> None:
        """Dispatch a click; whatever the click triggers is not awaited."""
        try:
            locator = self.page.locator(selector)
            if locator.count() == 0:
                raise ElementNotFoundError(selector)
            locator.first.click(timeout=self.timeout_ms)
        except PlaywrightTimeoutError as exc:
            raise WaitTimeoutError(selector, self.timeout_ms) from exc
        except PlaywrightError as exc:
            raise DriverError(f"clicking '{selector}' failed: {exc}") from exc

    def read_popup_text(self, selector: str, timeout_ms: float | None = None) -> str:
        self.wait_until_visible(selector, timeout_ms)
        try:
            return self.page.locator(selector).first.inner_text()
        except PlaywrightError as exc:
            raise DriverError(f"reading '{selector}' failed: {exc}") from exc
