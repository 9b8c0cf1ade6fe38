"""
Prometheus rule validation.

Rejects rules that use features Grafana-managed rules cannot express.
"""

from __future__ import annotations

from prom2grafana.core.errors import UnsupportedRuleError
from prom2grafana.prometheus.models import PrometheusRule, PrometheusRulesFile


def validate_prometheus_rule(rule: PrometheusRule) -> None:
    """
    Check a single rule for unsupported fields.

    Raises:
        UnsupportedRuleError: If the rule sets keep_firing_for
    """
    if rule.keep_firing_for:
        raise UnsupportedRuleError("keep_firing_for is not supported")


def validate_prometheus_rules(rules_file: PrometheusRulesFile) -> None:
    """Validate every rule in every group, stopping at the first failure."""
    for group in rules_file.groups:
        for rule in group.rules:
            try:
                validate_prometheus_rule(rule)
            except UnsupportedRuleError as e:
                raise e.with_context(
                    f"rule group '{group.name}': invalid Prometheus rule '{rule.name}'",
                    rule=rule.name,
                    group=group.name,
                ) from e
