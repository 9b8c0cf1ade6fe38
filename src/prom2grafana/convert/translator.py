"""
Prometheus to Grafana rule translation.

Each Prometheus rule becomes a Grafana-managed rule with a small query
graph:

    A  - instant PromQL query against the Prometheus datasource
    B  - threshold expression firing when A > 0 (alerting rules only)

Recording rules keep only node A and write its result to ``record``.
"""

from __future__ import annotations

from datetime import timedelta
from typing import IO

import structlog

from prom2grafana.config.settings import DEFAULT_DATASOURCE_UID, DEFAULT_RECEIVER
from prom2grafana.core.errors import DurationError
from prom2grafana.grafana.models import (
    AlertQuery,
    AlertRuleGroup,
    NotificationSettings,
    ProvisionedAlertRule,
    Record,
    RelativeTimeRange,
)
from prom2grafana.prometheus.duration import parse_duration
from prom2grafana.prometheus.models import PrometheusRule, PrometheusRuleGroup
from prom2grafana.prometheus.parser import read_prometheus_rules
from prom2grafana.prometheus.validator import validate_prometheus_rules

logger = structlog.get_logger()

DEFAULT_TIME_RANGE = 600
DEFAULT_EXEC_ERR_STATE = "OK"
DEFAULT_NO_DATA_STATE = "NoData"
DEFAULT_INTERVAL = 60

EXPRESSION_DATASOURCE_UID = "__expr__"
QUERY_REF_ID = "A"
CONDITION_REF_ID = "B"
INTERVAL_MS = 1000
MAX_DATA_POINTS = 43200


def get_folder_uid(namespace: str) -> str:
    """Derive a folder UID from a file name: ``rules.yaml`` -> ``rules_yaml``."""
    return namespace.replace(".", "_")


def prometheus_rules_to_grafana(
    namespace: str,
    stream: IO[str] | IO[bytes] | str | bytes,
    *,
    datasource_uid: str = DEFAULT_DATASOURCE_UID,
    receiver: str = DEFAULT_RECEIVER,
) -> list[AlertRuleGroup]:
    """
    Convert a Prometheus rules document into Grafana alert rule groups.

    All rules are validated before any of them is translated.

    Args:
        namespace: Base name of the rules file, used to derive the folder UID
        stream: Rules document content
        datasource_uid: Prometheus datasource the queries run against
        receiver: Contact point for notifications

    Returns:
        One AlertRuleGroup per Prometheus group, in input order

    Raises:
        ParseError, UnsupportedRuleError, DurationError
    """
    rules_file = read_prometheus_rules(stream)
    validate_prometheus_rules(rules_file)

    folder_uid = get_folder_uid(namespace)
    grafana_groups = []
    for group in rules_file.groups:
        try:
            grafana_group = convert_rule_group(
                folder_uid, group, datasource_uid=datasource_uid, receiver=receiver
            )
        except DurationError as e:
            raise e.with_context(
                f"failed to convert rule group '{group.name}'", group=group.name
            ) from e
        grafana_groups.append(grafana_group)

    return grafana_groups


def convert_rule_group(
    folder_uid: str,
    group: PrometheusRuleGroup,
    *,
    datasource_uid: str = DEFAULT_DATASOURCE_UID,
    receiver: str = DEFAULT_RECEIVER,
) -> AlertRuleGroup:
    """Translate every rule of a group, keeping their order."""
    rules = []
    for rule in group.rules:
        try:
            grafana_rule = convert_rule(
                folder_uid, group.name, rule, datasource_uid=datasource_uid, receiver=receiver
            )
        except DurationError as e:
            raise e.with_context(
                f"failed to convert Prometheus rule '{rule.name}' to Grafana rule",
                rule=rule.name,
            ) from e
        rules.append(grafana_rule)

    logger.debug("rule_group_converted", group=group.name, rules=len(rules))

    return AlertRuleGroup(
        folder_uid=folder_uid,
        title=group.name,
        interval=DEFAULT_INTERVAL,
        rules=rules,
    )


def convert_rule(
    folder_uid: str,
    group_name: str,
    rule: PrometheusRule,
    *,
    datasource_uid: str = DEFAULT_DATASOURCE_UID,
    receiver: str = DEFAULT_RECEIVER,
) -> ProvisionedAlertRule:
    """
    Translate a single Prometheus rule.

    Alerting rules get the query node and a threshold condition node.
    Recording rules get only the query node plus a ``record`` target; they
    still carry condition "B" and the notification receiver so the output
    matches what Grafana has been provisioned with so far.

    Raises:
        DurationError: If ``for`` is set but is not a Prometheus duration
    """
    duration = parse_duration(rule.for_) if rule.for_ else timedelta(0)

    data = [alert_query_node(rule.expr, datasource_uid=datasource_uid)]
    record = None
    if rule.is_recording:
        record = Record(from_=QUERY_REF_ID, metric=rule.record)
    else:
        data.append(alert_condition_node())

    return ProvisionedAlertRule(
        folder_uid=folder_uid,
        title=rule.alert,
        rule_group=group_name,
        condition=CONDITION_REF_ID,
        data=data,
        exec_err_state=DEFAULT_EXEC_ERR_STATE,
        no_data_state=DEFAULT_NO_DATA_STATE,
        for_=duration,
        is_paused=False,
        labels=dict(rule.labels) if rule.labels is not None else None,
        annotations=dict(rule.annotations) if rule.annotations is not None else None,
        notification_settings=NotificationSettings(receiver=receiver),
        record=record,
    )


def alert_query_node(expr: str, *, datasource_uid: str = DEFAULT_DATASOURCE_UID) -> AlertQuery:
    """Instant PromQL query node (A)."""
    return AlertQuery(
        ref_id=QUERY_REF_ID,
        datasource_uid=datasource_uid,
        model={
            "datasource": {
                "type": "prometheus",
                "uid": datasource_uid,
            },
            "editorMode": "code",
            "expr": expr,
            "instant": True,
            "range": False,
            "intervalMs": INTERVAL_MS,
            "legendFormat": "__auto",
            "maxDataPoints": MAX_DATA_POINTS,
            "refId": QUERY_REF_ID,
        },
        relative_time_range=RelativeTimeRange(from_=DEFAULT_TIME_RANGE, to=0),
    )


def alert_condition_node() -> AlertQuery:
    """Threshold node (B) firing when the last value of A is above zero."""
    return AlertQuery(
        ref_id=CONDITION_REF_ID,
        datasource_uid=EXPRESSION_DATASOURCE_UID,
        model={
            "datasource": {
                "type": EXPRESSION_DATASOURCE_UID,
                "uid": EXPRESSION_DATASOURCE_UID,
            },
            "conditions": [
                {
                    "evaluator": {
                        "params": [0],
                        "type": "gt",
                    },
                    "operator": {
                        "type": "and",
                    },
                    "query": {
                        "params": [CONDITION_REF_ID],
                    },
                    "reducer": {
                        "params": [],
                        "type": "last",
                    },
                    "type": "query",
                },
            ],
            "intervalMs": INTERVAL_MS,
            "expression": QUERY_REF_ID,
            "legendFormat": "__auto",
            "maxDataPoints": MAX_DATA_POINTS,
            "refId": CONDITION_REF_ID,
            "type": "threshold",
        },
        relative_time_range=RelativeTimeRange(from_=DEFAULT_TIME_RANGE, to=0),
    )
