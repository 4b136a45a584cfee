"""Browser-driven health check for an embedded map widget."""

from map_healthcheck.checks import CheckOutcome, HealthCheckResult
from map_healthcheck.config import HealthCheckConfig
from map_healthcheck.errors import (
    AssertionFailure,
    DriverError,
    ElementNotFoundError,
    FormatError,
    HealthCheckError,
    SessionError,
    WaitTimeoutError,
)
from map_healthcheck.parsing import parse_coordinates, parse_latitude
from map_healthcheck.procedure import HealthCheckProcedure, HealthCheckState

__all__ = [
    "AssertionFailure",
    "CheckOutcome",
    "DriverError",
    "ElementNotFoundError",
    "FormatError",
    "HealthCheckConfig",
    "HealthCheckError",
    "HealthCheckProcedure",
    "HealthCheckResult",
    "HealthCheckState",
    "SessionError",
    "WaitTimeoutError",
    "parse_coordinates",
    "parse_latitude",
]
