"""
Health check procedure.

One run walks the states

    INIT -> NAVIGATED -> MAP_VERIFIED -> INTERACTED -> VALIDATED
         -> PASSED | FAILED -> CLOSED

The browser session comes from an explicit ``session_factory`` (a context
manager factory, ``open_session`` by default), so tests can hand in a fake
session and clock. Fatal errors are recorded on the result rather than
raised; call ``HealthCheckResult.raise_for_status`` to turn a failed run into
an exception.
"""

from __future__ import annotations

import enum
import logging
import time

from map_healthcheck.checks import (
    HealthCheckResult,
    check_accuracy,
    check_latency,
    drift,
)
from map_healthcheck.config import HealthCheckConfig
from map_healthcheck.errors import DriverError, FormatError, HealthCheckError
from map_healthcheck.map_page import MapPage
from map_healthcheck.parsing import parse_coordinates, parse_latitude
from map_healthcheck.report import PNG, TEXT, MemoryReport
from map_healthcheck.session import open_session

log = logging.getLogger(__name__)


class HealthCheckState(enum.Enum):
    INIT = "init"
    NAVIGATED = "navigated"
    MAP_VERIFIED = "map_verified"
    INTERACTED = "interacted"
    VALIDATED = "validated"
    PASSED = "passed"
    FAILED = "failed"
    CLOSED = "closed"


class HealthCheckProcedure:
    def __init__(
        self,
        config: HealthCheckConfig | None = None,
        report=None,
        session_factory=open_session,
        clock=time.perf_counter,
    ) -> None:
        self.config = config or HealthCheckConfig()
        self.report = report if report is not None else MemoryReport()
        self.session_factory = session_factory
        self.clock = clock
        self.state = HealthCheckState.INIT
        self.history = [HealthCheckState.INIT]

    def _advance(self, state: HealthCheckState) -> None:
        log.debug("state %s -> %s", self.state.name, state.name)
        self.state = state
        self.history.append(state)

    def _attach(self, name: str, body, content_type: str = TEXT) -> None:
        """Sink failures are logged; the report never decides the verdict."""
        try:
            self.report.attach(name, body, content_type)
        except Exception:
            log.exception("Report attachment %r failed", name)

    def execute(self) -> HealthCheckResult:
        """Open a session, run the checks, tear down. The session is always closed."""
        result = HealthCheckResult(state=self.state)
        try:
            with self.session_factory(self.config) as session:
                try:
                    self.run(session, result)
                finally:
                    self.teardown(session, result)
        except HealthCheckError as exc:
            # Only reachable when the session itself could not be opened.
            log.error("Session setup failed: %s", exc)
            result.error = exc
            self._advance(HealthCheckState.FAILED)
            self._attach("Test Status", f"FAILED - {result.failure_message}")
        finally:
            self._advance(HealthCheckState.CLOSED)
            result.state = HealthCheckState.CLOSED
        return result

    def run(self, session, result: HealthCheckResult | None = None) -> HealthCheckResult:
        """Navigate, verify and validate against an already open session.

        The returned result holds the verdict state (PASSED or FAILED).
        Exceptions outside the HealthCheckError family are recorded as a
        DriverError and then re-raised.
        """
        result = result if result is not None else HealthCheckResult()
        log.info("=== MONITORING INITIALIZED: DISPATCH SYSTEM ===")
        try:
            self.setup(session)
            self.check_map_availability(session.map_page)
            self.validate_system_latency(session.map_page, result)
        except HealthCheckError as exc:
            log.error("CHECK ABORTED: %s", exc)
            result.error = exc
        except Exception as exc:
            result.error = DriverError(f"{type(exc).__name__}: {exc}")
            result.error.__cause__ = exc
            self._conclude(result)
            raise
        self._conclude(result)
        return result

    def _conclude(self, result: HealthCheckResult) -> None:
        verdict = HealthCheckState.PASSED if result.passed else HealthCheckState.FAILED
        result.state = verdict
        self._advance(verdict)
        if result.passed:
            log.info("=== HEALTH CHECK PASSED ===")
        else:
            log.error("=== HEALTH CHECK FAILED === %s", result.failure_message)

    def setup(self, session) -> None:
        session.navigate(self.config.url)
        self._advance(HealthCheckState.NAVIGATED)
        log.info("=== TEST SETUP COMPLETE ===")

    def check_map_availability(self, map_page: MapPage) -> None:
        log.info("CHECK: Verifying map visibility...")
        map_page.wait_until_visible(self.config.map_selector, self.config.wait_timeout_ms)
        log.info("HEALTH LOG: Map UI is visible and responsive.")
        self._attach("Map Status", "Map UI is visible and responsive")
        self._advance(HealthCheckState.MAP_VERIFIED)

    def measure_round_trip(self, map_page: MapPage) -> tuple[str, float]:
        """Click the map and wait for the popup; return its text and the elapsed ms."""
        start = self.clock()
        map_page.click(self.config.map_selector)
        text = map_page.read_popup_text(self.config.popup_selector, self.config.wait_timeout_ms)
        elapsed_ms = (self.clock() - start) * 1000.0
        self._advance(HealthCheckState.INTERACTED)
        return text, elapsed_ms

    def validate_system_latency(self, map_page: MapPage, result: HealthCheckResult) -> None:
        log.info("CHECK: Measuring system latency...")
        text, elapsed_ms = self.measure_round_trip(map_page)
        result.popup_text = text
        result.latency_ms = elapsed_ms

        self._attach("System Latency", f"{elapsed_ms:.0f}ms")
        self._attach("Raw UI Output", text)
        self._attach("Expected Latitude", str(self.config.expected_lat))
        self._attach("Tolerance", str(self.config.tolerance))
        log.info("METRIC: System Latency -> %.0fms", elapsed_ms)
        log.info("METRIC: Raw Popup Content -> %s", text)

        result.checks.append(check_latency(elapsed_ms, self.config.sla_threshold_ms))

        # FormatError propagates: a changed popup contract is not a drift.
        latitude = parse_latitude(text)
        result.latitude = latitude
        result.drift = drift(latitude, self.config.expected_lat)
        log.info("METRIC: GPS Precision Check -> Found Lat: %s", latitude)
        log.info("METRIC: GPS Drift -> %s", result.drift)
        result.checks.append(check_accuracy(result.drift, self.config.tolerance))

        try:
            result.longitude = parse_coordinates(text).lon
        except FormatError as exc:
            log.warning("METRIC: Longitude unavailable: %s", exc.reason)

        self._attach("Actual Latitude", str(latitude))
        if result.longitude is not None:
            self._attach("Actual Longitude", str(result.longitude))
        self._attach("GPS Drift", str(result.drift))
        self._advance(HealthCheckState.VALIDATED)

    def teardown(self, session, result: HealthCheckResult) -> None:
        log.info("=== TEARDOWN STARTING ===")
        if result.passed:
            self._attach("Status", "PASSED - Within tolerance")
            self._attach("Test Status", "PASSED")
            return
        log.warning("TEST FAILED: Capturing screenshot...")
        screenshot = capture_failure_screenshot(session)
        if screenshot is not None:
            self._attach("Failure Screenshot", screenshot, PNG)
        self._attach("Test Status", f"FAILED - {result.failure_message}")


def capture_failure_screenshot(session) -> bytes | None:
    """Best effort: a broken screenshot is logged and never replaces the real failure."""
    try:
        return session.screenshot()
    except Exception:
        log.exception("Screenshot capture failed")
        return None


def run_health_check(config: HealthCheckConfig | None = None, report=None) -> HealthCheckResult:
    return HealthCheckProcedure(config, report).execute()
