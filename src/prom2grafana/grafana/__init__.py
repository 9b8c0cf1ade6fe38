"""Grafana alert provisioning models."""

from prom2grafana.grafana.models import (
    AlertQuery,
    AlertRuleGroup,
    NotificationSettings,
    ProvisionedAlertRule,
    Record,
    RelativeTimeRange,
    SpecMapping,
    SpecValue,
)

__all__ = [
    "AlertQuery",
    "AlertRuleGroup",
    "NotificationSettings",
    "ProvisionedAlertRule",
    "Record",
    "RelativeTimeRange",
    "SpecMapping",
    "SpecValue",
]
