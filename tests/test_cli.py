from __future__ import annotations

import pytest

from map_healthcheck import cli
from map_healthcheck.checks import HealthCheckResult, check_accuracy, check_latency
from map_healthcheck.errors import DriverError, FormatError, SessionError, WaitTimeoutError


@pytest.mark.parametrize("result, code", [
    (HealthCheckResult(checks=[check_latency(500, 2000), check_accuracy(0, 0.001)]), cli.EXIT_PASSED),
    (HealthCheckResult(checks=[check_latency(2500, 2000)]), cli.EXIT_CHECK_FAILED),
    (HealthCheckResult(error=WaitTimeoutError("#map", 10_000)), cli.EXIT_UNAVAILABLE),
    (HealthCheckResult(error=SessionError("no browser")), cli.EXIT_UNAVAILABLE),
    (HealthCheckResult(error=DriverError("page closed")), cli.EXIT_UNAVAILABLE),
    (HealthCheckResult(error=FormatError("garbage")), cli.EXIT_FORMAT_CHANGED),
])
def test_exit_code(result, code):
    assert cli.exit_code(result) == code


def test_main_passes_flags_to_config(monkeypatch, tmp_path):
    seen = {}

    def fake_run(config, report):
        seen["config"] = config
        seen["report"] = report
        return HealthCheckResult(checks=[check_latency(10, 2000), check_accuracy(0, 0.001)])

    monkeypatch.setattr(cli, "run_health_check", fake_run)
    monkeypatch.delenv("MAP_HEALTH_URL", raising=False)
    code = cli.main([
        "--url", "http://localhost:8000",
        "--artifacts", str(tmp_path),
        "--sla-ms", "1500",
        "--tolerance", "0.01",
        "--timeout-ms", "3000",
        "--headed",
    ])

    assert code == cli.EXIT_PASSED
    config = seen["config"]
    assert config.url == "http://localhost:8000"
    assert config.sla_threshold_ms == 1500
    assert config.tolerance == 0.01
    assert config.wait_timeout_ms == 3000
    assert config.headless is False
    assert seen["report"].directory == tmp_path


def test_main_reports_failure(monkeypatch, tmp_path):
    monkeypatch.setattr(
        cli, "run_health_check",
        lambda config, report: HealthCheckResult(error=FormatError("no parens")),
    )
    assert cli.main(["--artifacts", str(tmp_path)]) == cli.EXIT_FORMAT_CHANGED


def test_malformed_env_number_is_a_usage_error(monkeypatch, capsys, tmp_path):
    monkeypatch.setenv("MAP_HEALTH_SLA_MS", "two seconds")
    monkeypatch.setattr(cli, "run_health_check", lambda config, report: pytest.fail("should not run"))
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--artifacts", str(tmp_path)])
    assert exc_info.value.code == 2
    assert "invalid MAP_HEALTH_* setting" in capsys.readouterr().err
