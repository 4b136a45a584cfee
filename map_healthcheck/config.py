"""
Health check constants and run configuration.

The module-level constants are the production defaults; ``HealthCheckConfig``
bundles them for a single run and can be overridden from the environment
(``MAP_HEALTH_*``) or from the command line.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path

# Leaflet quick-start page: a single popup bound to map clicks.
TARGET_URL = "https://leafletjs.com/examples/quick-start/example.html"

MAP_SELECTOR = "#map"
POPUP_SELECTOR = ".leaflet-popup-content"

# Expected dispatch latitude and the drift allowed around it.
EXPECTED_LAT = 51.505
TOLERANCE = 0.001

# Click-to-popup round trip must stay strictly below this.
SLA_THRESHOLD_MS = 2000

# Bound for every visibility wait (map container, popup).
WAIT_TIMEOUT_MS = 10_000

# Page load bound for the initial navigation.
NAVIGATION_TIMEOUT_MS = 30_000

VIEWPORT_WIDTH = 1920
VIEWPORT_HEIGHT = 1080

ARTIFACTS_DIR = Path("artifacts")

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class HealthCheckConfig:
    url: str = TARGET_URL
    map_selector: str = MAP_SELECTOR
    popup_selector: str = POPUP_SELECTOR
    expected_lat: float = EXPECTED_LAT
    tolerance: float = TOLERANCE
    sla_threshold_ms: float = SLA_THRESHOLD_MS
    wait_timeout_ms: float = WAIT_TIMEOUT_MS
    navigation_timeout_ms: float = NAVIGATION_TIMEOUT_MS
    headless: bool = True
    viewport_width: int = VIEWPORT_WIDTH
    viewport_height: int = VIEWPORT_HEIGHT
    artifacts_dir: Path = ARTIFACTS_DIR

    @classmethod
    def from_env(cls, environ=None) -> "HealthCheckConfig":
        """Build a config from ``MAP_HEALTH_*`` variables, defaulting the rest."""
        env = os.environ if environ is None else environ
        config = cls()
        overrides = {}
        if "MAP_HEALTH_URL" in env:
            overrides["url"] = env["MAP_HEALTH_URL"]
        if "MAP_HEALTH_EXPECTED_LAT" in env:
            overrides["expected_lat"] = float(env["MAP_HEALTH_EXPECTED_LAT"])
        if "MAP_HEALTH_TOLERANCE" in env:
            overrides["tolerance"] = float(env["MAP_HEALTH_TOLERANCE"])
        if "MAP_HEALTH_SLA_MS" in env:
            overrides["sla_threshold_ms"] = float(env["MAP_HEALTH_SLA_MS"])
        if "MAP_HEALTH_TIMEOUT_MS" in env:
            overrides["wait_timeout_ms"] = float(env["MAP_HEALTH_TIMEOUT_MS"])
        if "MAP_HEALTH_HEADLESS" in env:
            overrides["headless"] = env["MAP_HEALTH_HEADLESS"].strip().lower() in _TRUTHY
        if "MAP_HEALTH_ARTIFACTS" in env:
            overrides["artifacts_dir"] = Path(env["MAP_HEALTH_ARTIFACTS"])
        return replace(config, **overrides)

    def with_overrides(self, **changes) -> "HealthCheckConfig":
        """Copy of this config with every non-None keyword applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
