"""
Prometheus rules file parser.

Reads a single YAML document with a top-level ``groups`` list. Unknown keys
are ignored at every level so rule files written for newer Prometheus
versions still load.
"""

from __future__ import annotations

from typing import IO, Any

import structlog
import yaml

from prom2grafana.core.errors import ParseError
from prom2grafana.prometheus.models import (
    PrometheusRule,
    PrometheusRuleGroup,
    PrometheusRulesFile,
)

logger = structlog.get_logger()

# YAML key -> PrometheusRule attribute
RULE_STRING_FIELDS = {
    "alert": "alert",
    "record": "record",
    "expr": "expr",
    "for": "for_",
    "keep_firing_for": "keep_firing_for",
}
RULE_MAP_FIELDS = ("labels", "annotations")

MERGE_TAG = "tag:yaml.org,2002:merge"


class UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that rejects a mapping key appearing twice in the same mapping."""

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            seen = set()
            for key_node, _ in node.value:
                # Keys pulled in through "<<" may be overridden
                if key_node.tag == MERGE_TAG:
                    continue
                key = self.construct_object(key_node, deep=deep)
                try:
                    duplicate = key in seen
                except TypeError:
                    continue
                if duplicate:
                    raise yaml.constructor.ConstructorError(
                        "while constructing a mapping",
                        node.start_mark,
                        f"found duplicate key '{key}'",
                        key_node.start_mark,
                    )
                seen.add(key)
        return super().construct_mapping(node, deep=deep)


def read_prometheus_rules(stream: IO[str] | IO[bytes] | str | bytes) -> PrometheusRulesFile:
    """
    Decode a Prometheus rules document.

    Args:
        stream: File object or raw YAML content

    Returns:
        Parsed rules file; empty when the document or its groups are empty

    Raises:
        ParseError: If the YAML is malformed or has an unexpected shape
    """
    try:
        data = yaml.load(stream, Loader=UniqueKeyLoader)  # noqa: S506
    except yaml.YAMLError as e:
        raise ParseError(f"failed to decode YAML: {e}") from e

    if data is None:
        return PrometheusRulesFile()
    if not isinstance(data, dict):
        raise ParseError(
            f"failed to decode YAML: expected a mapping at the top level, got {_type_name(data)}"
        )

    raw_groups = _as_list(data.get("groups"), "groups")
    groups = [_parse_group(raw, index) for index, raw in enumerate(raw_groups)]

    rules_file = PrometheusRulesFile(groups=groups)
    logger.debug("prometheus_rules_parsed", groups=len(groups), rules=rules_file.rule_count)
    return rules_file


def _parse_group(raw: Any, index: int) -> PrometheusRuleGroup:
    where = f"groups[{index}]"
    if not isinstance(raw, dict):
        raise ParseError(f"failed to decode YAML: {where} must be a mapping, got {_type_name(raw)}")

    name = _as_string(raw.get("name"), f"{where}.name")
    raw_rules = _as_list(raw.get("rules"), f"{where}.rules")
    rules = [_parse_rule(rule, f"{where}.rules[{i}]") for i, rule in enumerate(raw_rules)]

    return PrometheusRuleGroup(name=name, rules=rules)


def _parse_rule(raw: Any, where: str) -> PrometheusRule:
    if not isinstance(raw, dict):
        raise ParseError(f"failed to decode YAML: {where} must be a mapping, got {_type_name(raw)}")

    fields: dict[str, Any] = {}
    for key, attr in RULE_STRING_FIELDS.items():
        fields[attr] = _as_string(raw.get(key), f"{where}.{key}")
    for key in RULE_MAP_FIELDS:
        fields[key] = _as_string_map(raw.get(key), f"{where}.{key}")

    return PrometheusRule(**fields)


def _as_list(value: Any, where: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ParseError(f"failed to decode YAML: {where} must be a list, got {_type_name(value)}")
    return value


def _as_string(value: Any, where: str) -> str:
    """Read a scalar as its string form; null reads as empty."""
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise ParseError(f"failed to decode YAML: {where} must be a string, got {_type_name(value)}")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _as_string_map(value: Any, where: str) -> dict[str, str] | None:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ParseError(f"failed to decode YAML: {where} must be a mapping, got {_type_name(value)}")
    return {str(k): _as_string(v, f"{where}.{k}") for k, v in value.items()}


def _type_name(value: Any) -> str:
    if isinstance(value, dict):
        return "mapping"
    if isinstance(value, list):
        return "list"
    return type(value).__name__
