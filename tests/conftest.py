"""Root test configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

import pytest
import structlog

from prom2grafana.config.settings import get_settings

PROMETHEUS_YAML = """
groups:
- name: example
  rules:
  - alert: InstanceDown
    expr: up == 0
    for: 5m
    labels:
      severity: page
    annotations:
      summary: "Instance {{ $labels.instance }} down"
      description: "{{ $labels.instance }} of job {{ $labels.job }} has been down for more than 5 minutes."

  - alert: APIHighRequestLatency
    expr: api_http_request_latencies_second{quantile="0.5"} > 1
    for: 10m
    annotations:
      summary: "High request latency on {{ $labels.instance }}"
      description: "{{ $labels.instance }} has a median request latency above 1s (current value: {{ $value }}s)"

  - alert: AlwaysFiringAlert
    expr: vector(1) > 0
    for: 1m
    annotations:
      summary: "This alert is always firing"
      description: "This alert is always firing (current value: {{ $value }}s)"
"""

PROMETHEUS_YAML_WITH_RECORDING_RULES = """
groups:
- name: example
  rules:
  - record: job:request_duration_seconds:avg
    expr: avg(rate(api_http_request_duration_seconds_sum[5m])) by (job)
    labels:
      severity: low
    annotations:
      summary: "Average request duration for job {{ $labels.job }}"
      description: "Average request duration in seconds for job {{ $labels.job }} over the last 5 minutes."

  - record: job:cpu_usage:avg
    expr: avg(rate(cpu_usage_seconds_total[5m])) by (job)
    labels:
      severity: low
    annotations:
      summary: "Average CPU usage for job {{ $labels.job }}"
      description: "Average CPU usage in seconds for job {{ $labels.job }} over the last 5 minutes."
"""


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate tests from PROM2GRAFANA_* variables and the settings cache."""
    for var in (
        "PROM2GRAFANA_DATASOURCE_UID",
        "PROM2GRAFANA_RECEIVER",
        "PROM2GRAFANA_LOG_LEVEL",
        "PROM2GRAFANA_LOG_JSON",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def write_rules(tmp_path: Path) -> Callable[..., str]:
    """Write rules YAML to a file in tmp_path and return its path."""

    def _write(content: str, filename: str = "rules.yaml") -> str:
        path = tmp_path / filename
        path.write_text(content)
        return str(path)

    return _write


@pytest.fixture
def alerting_rules_file(write_rules) -> str:
    return write_rules(PROMETHEUS_YAML)


@pytest.fixture
def recording_rules_file(write_rules) -> str:
    return write_rules(PROMETHEUS_YAML_WITH_RECORDING_RULES)
