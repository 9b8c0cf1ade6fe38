"""
Prometheus rules file support: models, parsing, validation and durations.
"""

from prom2grafana.prometheus.duration import format_duration, parse_duration
from prom2grafana.prometheus.models import (
    PrometheusRule,
    PrometheusRuleGroup,
    PrometheusRulesFile,
)
from prom2grafana.prometheus.parser import read_prometheus_rules
from prom2grafana.prometheus.validator import (
    validate_prometheus_rule,
    validate_prometheus_rules,
)

__all__ = [
    "PrometheusRule",
    "PrometheusRuleGroup",
    "PrometheusRulesFile",
    "read_prometheus_rules",
    "validate_prometheus_rule",
    "validate_prometheus_rules",
    "parse_duration",
    "format_duration",
]
