"""
Command-line entry point.

Usage:
    python -m map_healthcheck [--url URL] [--headed] [--artifacts DIR] [-v]

Exit status: 0 passed, 1 latency/drift regression, 2 map or browser
unavailable, 3 popup format changed.

Requires:
    pip install playwright
    playwright install chromium
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from map_healthcheck.config import HealthCheckConfig
from map_healthcheck.errors import FormatError
from map_healthcheck.procedure import run_health_check
from map_healthcheck.report import DirectoryReport

EXIT_PASSED = 0
EXIT_CHECK_FAILED = 1
EXIT_UNAVAILABLE = 2
EXIT_FORMAT_CHANGED = 3

log = logging.getLogger("map_healthcheck")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="map-healthcheck",
        description="Click the dispatch map and check popup latency and GPS drift.",
    )
    parser.add_argument("--url", help="page hosting the map widget")
    parser.add_argument("--headed", action="store_true", help="show the browser window")
    parser.add_argument("--artifacts", type=Path, help="directory for report attachments")
    parser.add_argument("--sla-ms", type=float, dest="sla_threshold_ms",
                        help="latency threshold in ms (strict)")
    parser.add_argument("--tolerance", type=float, help="maximum latitude drift")
    parser.add_argument("--expected-lat", type=float, dest="expected_lat",
                        help="latitude the popup should report")
    parser.add_argument("--timeout-ms", type=float, dest="wait_timeout_ms",
                        help="bound for map and popup visibility waits")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def exit_code(result) -> int:
    if result.passed:
        return EXIT_PASSED
    if isinstance(result.error, FormatError):
        return EXIT_FORMAT_CHANGED
    if result.error is not None:
        return EXIT_UNAVAILABLE
    return EXIT_CHECK_FAILED


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s  %(levelname)-8s  %(message)s",
    )

    try:
        env_config = HealthCheckConfig.from_env()
    except ValueError as exc:
        parser.error(f"invalid MAP_HEALTH_* setting: {exc}")

    config = env_config.with_overrides(
        url=args.url,
        artifacts_dir=args.artifacts,
        sla_threshold_ms=args.sla_threshold_ms,
        tolerance=args.tolerance,
        expected_lat=args.expected_lat,
        wait_timeout_ms=args.wait_timeout_ms,
        headless=False if args.headed else None,
    )
    report = DirectoryReport(config.artifacts_dir)
    result = run_health_check(config, report)

    if result.passed:
        log.info("Performance and Data are within Mission-Ready specs.")
    else:
        log.error("Health check failed: %s", result.failure_message)
    log.info("Attachments written to %s", report.directory)
    return exit_code(result)


if __name__ == "__main__":
    sys.exit(main())
