"""
Conversion of Prometheus rule files into Grizzly resources.
"""

from prom2grafana.convert.resources import (
    API_VERSION,
    FOLDER_KIND,
    KIND,
    Resource,
    convert_grafana_to_grizzly,
    prometheus_to_grafana_resources,
)
from prom2grafana.convert.translator import (
    convert_rule,
    convert_rule_group,
    get_folder_uid,
    prometheus_rules_to_grafana,
)

convert = prometheus_to_grafana_resources

__all__ = [
    "API_VERSION",
    "FOLDER_KIND",
    "KIND",
    "Resource",
    "convert",
    "convert_grafana_to_grizzly",
    "convert_rule",
    "convert_rule_group",
    "get_folder_uid",
    "prometheus_rules_to_grafana",
    "prometheus_to_grafana_resources",
]
