"""
Prometheus Rule Models

Data models for the subset of the Prometheus rules file format that can be
converted to Grafana alert rules.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PrometheusRule:
    """
    A single Prometheus rule, either alerting or recording.

    A rule is a recording rule when ``record`` is set, otherwise it is an
    alerting rule. Both names are kept as read; setting both is not rejected.
    """

    alert: str = ""
    record: str = ""
    expr: str = ""
    for_: str = ""  # 'for' in YAML
    keep_firing_for: str = ""
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None

    @property
    def is_recording(self) -> bool:
        return self.record != ""

    @property
    def name(self) -> str:
        """Name used to identify the rule in errors and logs."""
        return self.alert or self.record


@dataclass(frozen=True)
class PrometheusRuleGroup:
    """A named, ordered group of rules."""

    name: str
    rules: list[PrometheusRule] = field(default_factory=list)


@dataclass(frozen=True)
class PrometheusRulesFile:
    """Top-level Prometheus rules document."""

    groups: list[PrometheusRuleGroup] = field(default_factory=list)

    @property
    def rule_count(self) -> int:
        return sum(len(group.rules) for group in self.groups)
