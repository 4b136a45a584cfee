"""MapPage against inline pages in headless Chromium.

Usage:
    playwright install chromium
    python -m pytest tests/test_map_page.py -v
"""

from __future__ import annotations

import pytest

from map_healthcheck.errors import DriverError, ElementNotFoundError, WaitTimeoutError
from map_healthcheck.map_page import MapPage
from tests.pages import HIDDEN_MAP_HTML, SILENT_MAP_HTML, map_html

pytestmark = pytest.mark.browser


@pytest.fixture(scope="module")
def _browser():
    from playwright.sync_api import sync_playwright
    pw = sync_playwright().start()
    b = pw.chromium.launch(headless=True)
    yield b
    b.close()
    pw.stop()


@pytest.fixture
def page(_browser):
    ctx = _browser.new_context(viewport={"width": 800, "height": 600})
    p = ctx.new_page()
    yield p
    ctx.close()


class TestMapPage:
    def test_wait_click_and_read(self, page):
        page.set_content(map_html())
        map_page = MapPage(page, timeout_ms=2000)
        map_page.wait_until_visible("#map")
        map_page.click("#map")
        text = map_page.read_popup_text(".leaflet-popup-content")
        assert text == "You clicked the map at (51.505, -0.09)"

    def test_closed_page_is_a_driver_error(self, page):
        page.set_content(map_html())
        map_page = MapPage(page, timeout_ms=2000)
        page.close()
        with pytest.raises(DriverError):
            map_page.click("#map")

    def test_hidden_map_times_out(self, page):
        page.set_content(HIDDEN_MAP_HTML)
        with pytest.raises(WaitTimeoutError) as exc_info:
            MapPage(page).wait_until_visible("#map", timeout_ms=300)
        assert exc_info.value.selector == "#map"
        assert exc_info.value.timeout_ms == 300

    def test_click_missing_element(self, page):
        page.set_content(HIDDEN_MAP_HTML)
        with pytest.raises(ElementNotFoundError):
            MapPage(page).click("#no-such-map")

    def test_popup_never_appears(self, page):
        page.set_content(SILENT_MAP_HTML)
        map_page = MapPage(page, timeout_ms=2000)
        map_page.click("#map")
        with pytest.raises(WaitTimeoutError):
            map_page.read_popup_text(".leaflet-popup-content", timeout_ms=300)

