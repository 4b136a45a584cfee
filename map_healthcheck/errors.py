"""Failure taxonomy for a health check run."""

from __future__ import annotations


class HealthCheckError(Exception):
    """Base class for every fatal health check failure."""


class SessionError(HealthCheckError):
    """The browser could not be launched or the target page did not load."""


class WaitTimeoutError(HealthCheckError):
    """A bounded wait expired: the map or popup never became visible."""

    def __init__(self, selector: str, timeout_ms: float) -> None:
        self.selector = selector
        self.timeout_ms = timeout_ms
        super().__init__(f"'{selector}' not visible after {timeout_ms:.0f}ms")


class ElementNotFoundError(HealthCheckError):
    """A selector matched nothing when it was about to be interacted with."""

    def __init__(self, selector: str) -> None:
        self.selector = selector
        super().__init__(f"no element matches '{selector}'")


class FormatError(HealthCheckError, ValueError):
    """Popup text no longer carries a ``(lat, lon)`` pair."""

    def __init__(self, text: str, reason: str = "") -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"CRITICAL FAILURE: String format changed! Text was: {text}")


class AssertionFailure(HealthCheckError, AssertionError):
    """A measured regression: latency or drift out of bounds."""


class DriverError(HealthCheckError):
    """The browser driver failed mid-run (page closed, target crashed)."""
