"""Shared fixtures: fake browser session for procedure tests, real Chromium for facade tests."""

from __future__ import annotations

from contextlib import contextmanager

import pytest

from map_healthcheck.errors import WaitTimeoutError


def _chromium_launchable() -> bool:
    """Check if Playwright can start headless Chromium here."""
    try:
        from playwright.sync_api import sync_playwright
        with sync_playwright() as p:
            p.chromium.launch(headless=True).close()
        return True
    except Exception:
        return False


_HAS_CHROMIUM = None


def pytest_collection_modifyitems(config, items):
    global _HAS_CHROMIUM
    browser_items = [item for item in items if "browser" in item.keywords]
    if not browser_items:
        return
    if _HAS_CHROMIUM is None:
        _HAS_CHROMIUM = _chromium_launchable()
    if not _HAS_CHROMIUM:
        for item in browser_items:
            item.add_marker(pytest.mark.skip(reason="headless Chromium not available"))


class FakeMapPage:
    """Scripted stand-in for MapPage."""

    def __init__(self, popup_text="A popup with coordinates (51.505, -0.09)",
                 map_error=None, click_error=None, popup_error=None, clock=None,
                 click_ms=0.0):
        self.popup_text = popup_text
        self.map_error = map_error
        self.click_error = click_error
        self.popup_error = popup_error
        self.clock = clock
        self.click_ms = click_ms
        self.calls = []

    def wait_until_visible(self, selector, timeout_ms=None):
        self.calls.append(("wait_until_visible", selector, timeout_ms))
        if self.map_error is not None:
            raise self.map_error

    def click(self, selector):
        self.calls.append(("click", selector))
        if self.click_error is not None:
            raise self.click_error
        if self.clock is not None:
            self.clock.advance(self.click_ms)

    def read_popup_text(self, selector, timeout_ms=None):
        self.calls.append(("read_popup_text", selector, timeout_ms))
        if self.popup_error is not None:
            raise self.popup_error
        return self.popup_text


class FakeSession:
    def __init__(self, map_page, navigate_error=None, screenshot_error=None):
        self.map_page = map_page
        self.navigate_error = navigate_error
        self.screenshot_error = screenshot_error
        self.visited = []
        self.screenshots = 0
        self.closed = 0

    def navigate(self, url):
        self.visited.append(url)
        if self.navigate_error is not None:
            raise self.navigate_error

    def screenshot(self):
        self.screenshots += 1
        if self.screenshot_error is not None:
            raise self.screenshot_error
        return b"\x89PNG fake"


class FakeClock:
    """Seconds-based clock advanced by hand."""

    def __init__(self):
        self.now = 100.0

    def advance(self, ms):
        self.now += ms / 1000.0

    def __call__(self):
        return self.now


def session_factory_for(session):
    @contextmanager
    def factory(config):
        try:
            yield session
        finally:
            session.closed += 1
    return factory


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def map_timeout():
    return WaitTimeoutError("#map", 10_000)
