"""
Latency and accuracy checks.

Each check returns a ``CheckOutcome`` instead of asserting, so a run's verdict
is a value that can be inspected, attached to a report, or turned into an
exception later with ``HealthCheckResult.raise_for_status``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from map_healthcheck.errors import AssertionFailure, HealthCheckError

if TYPE_CHECKING:
    from map_healthcheck.procedure import HealthCheckState

LATENCY = "latency"
ACCURACY = "accuracy"


@dataclass(frozen=True)
class CheckOutcome:
    name: str
    passed: bool
    measured: float
    limit: float
    message: str


def drift(latitude: float, expected: float) -> float:
    """Absolute distance between observed and expected latitude."""
    return abs(latitude - expected)


def check_latency(elapsed_ms: float, threshold_ms: float) -> CheckOutcome:
    """Pass when the round trip is strictly below the SLA threshold."""
    if elapsed_ms < threshold_ms:
        message = f"Latency {elapsed_ms:.0f}ms within {threshold_ms:.0f}ms SLA"
        return CheckOutcome(LATENCY, True, elapsed_ms, threshold_ms, message)
    message = (
        "PERFORMANCE ALERT: Latency exceeds safety threshold! "
        f"Expected < {threshold_ms:.0f}ms, but got {elapsed_ms:.0f}ms"
    )
    return CheckOutcome(LATENCY, False, elapsed_ms, threshold_ms, message)


def check_accuracy(observed_drift: float, tolerance: float) -> CheckOutcome:
    """Pass when drift is at most the tolerance (boundary inclusive)."""
    if observed_drift <= tolerance:
        message = f"GPS drift ({observed_drift}) within tolerance of {tolerance}"
        return CheckOutcome(ACCURACY, True, observed_drift, tolerance, message)
    message = (
        f"DATA INTEGRITY ALERT: GPS drift ({observed_drift}) "
        f"exceeds tolerance of {tolerance}!"
    )
    return CheckOutcome(ACCURACY, False, observed_drift, tolerance, message)


@dataclass
class HealthCheckResult:
    """Everything measured during one run."""

    state: HealthCheckState | None = None
    latency_ms: float | None = None
    popup_text: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    drift: float | None = None
    checks: list[CheckOutcome] = field(default_factory=list)
    error: HealthCheckError | None = None

    @property
    def failed_checks(self) -> list[CheckOutcome]:
        return [c for c in self.checks if not c.passed]

    @property
    def passed(self) -> bool:
        return self.error is None and bool(self.checks) and not self.failed_checks

    def outcome(self, name: str) -> CheckOutcome | None:
        for check in self.checks:
            if check.name == name:
                return check
        return None

    @property
    def failure_message(self) -> str | None:
        """Human-readable reason, or None for a passing run."""
        if self.passed:
            return None
        reasons = [c.message for c in self.failed_checks]
        if self.error is not None:
            reasons.append(str(self.error))
        if not reasons:
            return "no checks were evaluated"
        return "; ".join(reasons)

    def raise_for_status(self) -> None:
        """Re-raise the fatal error, or AssertionFailure for failed checks."""
        if self.passed:
            return
        if self.error is not None:
            raise self.error
        raise AssertionFailure(self.failure_message)
