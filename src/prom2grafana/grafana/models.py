"""
Grafana alert provisioning models.

Mirrors the parts of Grafana's provisioning API model used for alert rules.
``to_dict()`` produces the JSON shape the API accepts: lower-camelCase field
names, optional fields left out when they were never set, and fields that
are always sent emitted even when they hold a zero value.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Union

from prom2grafana.prometheus.duration import format_duration

# Generic key/value tree used for query models and resource specs
SpecScalar = Union[str, int, float, bool, None]
SpecValue = Union[SpecScalar, list["SpecValue"], dict[str, "SpecValue"]]
SpecMapping = dict[str, SpecValue]


@dataclass(frozen=True)
class RelativeTimeRange:
    """Query time range, in seconds relative to evaluation time."""

    from_: int
    to: int = 0

    def to_dict(self) -> SpecMapping:
        # Zero bounds are left out, as the API client does
        result: SpecMapping = {}
        if self.from_:
            result["from"] = self.from_
        if self.to:
            result["to"] = self.to
        return result


@dataclass(frozen=True)
class AlertQuery:
    """A node in a rule's query graph."""

    ref_id: str
    datasource_uid: str
    model: SpecMapping
    relative_time_range: RelativeTimeRange | None = None
    query_type: str = ""

    def to_dict(self) -> SpecMapping:
        result: SpecMapping = {
            "datasourceUid": self.datasource_uid,
            "model": copy.deepcopy(self.model),
            "refId": self.ref_id,
        }
        if self.query_type:
            result["queryType"] = self.query_type
        if self.relative_time_range is not None:
            result["relativeTimeRange"] = self.relative_time_range.to_dict()
        return result


@dataclass(frozen=True)
class Record:
    """Marks a rule as a recording rule writing ``metric`` from query ``from_``."""

    from_: str
    metric: str

    def to_dict(self) -> SpecMapping:
        return {"from": self.from_, "metric": self.metric}


@dataclass(frozen=True)
class NotificationSettings:
    receiver: str

    def to_dict(self) -> SpecMapping:
        return {"receiver": self.receiver}


@dataclass(frozen=True)
class ProvisionedAlertRule:
    """A Grafana-managed alert or recording rule."""

    folder_uid: str
    title: str
    rule_group: str
    condition: str
    data: list[AlertQuery]
    exec_err_state: str
    no_data_state: str
    for_: timedelta = timedelta(0)
    is_paused: bool = False
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None
    notification_settings: NotificationSettings | None = None
    record: Record | None = None
    org_id: int | None = None
    provenance: str = ""

    def to_dict(self) -> SpecMapping:
        result: SpecMapping = {
            "condition": self.condition,
            "data": [query.to_dict() for query in self.data],
            "execErrState": self.exec_err_state,
            "folderUID": self.folder_uid,
            "for": format_duration(self.for_),
            "isPaused": self.is_paused,
            "noDataState": self.no_data_state,
            "orgID": self.org_id,
            "provenance": self.provenance,
            "ruleGroup": self.rule_group,
            "title": self.title,
        }
        if self.labels:
            result["labels"] = dict(self.labels)
        if self.annotations:
            result["annotations"] = dict(self.annotations)
        if self.notification_settings is not None:
            result["notification_settings"] = self.notification_settings.to_dict()
        if self.record is not None:
            result["record"] = self.record.to_dict()
        return result


@dataclass(frozen=True)
class AlertRuleGroup:
    """A folder-scoped group of rules evaluated on a shared interval."""

    folder_uid: str
    title: str
    interval: int
    rules: list[ProvisionedAlertRule] = field(default_factory=list)

    def to_dict(self) -> SpecMapping:
        result: SpecMapping = {
            "interval": self.interval,
            "rules": [rule.to_dict() for rule in self.rules],
        }
        if self.folder_uid:
            result["folderUid"] = self.folder_uid
        if self.title:
            result["title"] = self.title
        return result
