"""
Grizzly resource envelopes.

Wraps converted rule groups, plus the folder that holds them, into the
``{apiVersion, kind, metadata.name, spec}`` documents Grizzly applies to
Grafana.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from typing import Any

from prom2grafana.config.settings import get_settings
from prom2grafana.convert.translator import prometheus_rules_to_grafana
from prom2grafana.core.errors import EmptyInputError, EnvelopeError, InputError
from prom2grafana.grafana.models import AlertRuleGroup, SpecMapping
from prom2grafana.logging import bind_context

API_VERSION = "grizzly.grafana.com/v1alpha1"
KIND = "AlertRuleGroup"
FOLDER_KIND = "DashboardFolder"


@dataclass(frozen=True)
class Resource:
    """A Grizzly resource document."""

    api_version: str
    kind: str
    name: str
    spec: SpecMapping

    def __post_init__(self) -> None:
        """Validate required fields."""
        if not self.api_version:
            raise EnvelopeError("resource apiVersion is required", details={"name": self.name})
        if not self.kind:
            raise EnvelopeError("resource kind is required", details={"name": self.name})
        if not self.name:
            raise EnvelopeError("resource name is required", details={"kind": self.kind})
        if not isinstance(self.spec, dict):
            raise EnvelopeError(
                "resource spec must be a mapping",
                details={"kind": self.kind, "name": self.name},
            )

    @property
    def body(self) -> dict[str, Any]:
        """The document as it is written to disk."""
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": {"name": self.name},
            "spec": copy.deepcopy(self.spec),
        }

    def __str__(self) -> str:
        return f"{self.kind}.{self.name}"


def prometheus_to_grafana_resources(filename: str) -> list[Resource]:
    """
    Convert a Prometheus rules file into Grizzly resources.

    The first resource is the folder, followed by one AlertRuleGroup per
    Prometheus group in file order.

    Raises:
        InputError: If the file cannot be opened
        ConversionError: For any parse, validation or conversion failure
    """
    settings = get_settings()
    namespace = os.path.basename(filename)
    log = bind_context(filename=filename)

    try:
        f = open(filename, "rb")
    except OSError as e:
        raise InputError(f"failed to open file: {e}", details={"filename": filename}) from e

    with f:
        grafana_groups = prometheus_rules_to_grafana(
            namespace,
            f,
            datasource_uid=settings.datasource_uid,
            receiver=settings.receiver,
        )

    resources = convert_grafana_to_grizzly(grafana_groups)
    log.info("prometheus_rules_converted", groups=len(grafana_groups), resources=len(resources))
    return resources


def convert_grafana_to_grizzly(grafana_groups: list[AlertRuleGroup]) -> list[Resource]:
    """Wrap rule groups into resources, preceded by their folder."""
    folder_uid, folder_resource = create_folder_resource(grafana_groups)
    resources = [folder_resource]

    for grafana_group in grafana_groups:
        # Grizzly names AlertRuleGroup resources <folderUID>.<groupTitle>
        name = f"{folder_uid}.{grafana_group.title}"
        resources.append(Resource(API_VERSION, KIND, name, grafana_group.to_dict()))

    return resources


def create_folder_resource(grafana_groups: list[AlertRuleGroup]) -> tuple[str, Resource]:
    if not grafana_groups:
        raise EmptyInputError("no Grafana groups provided")

    folder_uid = grafana_groups[0].folder_uid
    spec: SpecMapping = {
        "uid": folder_uid,
        "title": folder_uid,
    }
    return folder_uid, Resource(API_VERSION, FOLDER_KIND, folder_uid, spec)
