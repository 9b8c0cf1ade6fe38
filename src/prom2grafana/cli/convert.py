"""CLI command for converting Prometheus rules into Grizzly resources."""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml
from rich.markup import escape

from prom2grafana.cli.ux import console, error, header, info, success, warning
from prom2grafana.convert.resources import Resource, prometheus_to_grafana_resources
from prom2grafana.core.errors import (
    ExitCode,
    Prom2GrafanaError,
    format_error_message,
    main_with_error_handling,
)

logger = structlog.get_logger()


def resource_to_yaml(resource: Resource) -> str:
    """Render a resource document with stable key order."""
    return yaml.safe_dump(resource.body, default_flow_style=False, sort_keys=True, allow_unicode=True)


def resource_path(output_folder: str | Path, resource: Resource) -> Path:
    """Path a resource is written to: ``<output>/<Kind>.<name>.yaml``."""
    return Path(output_folder) / f"{resource}.yaml"


def write_resources(resources: list[Resource], output_folder: str | Path) -> list[Path]:
    """
    Write each resource to its own YAML file.

    Args:
        resources: Converted resources
        output_folder: Directory to write to; created if missing

    Returns:
        Paths written, in resource order

    Raises:
        OSError: If the folder or a file cannot be written
    """
    Path(output_folder).mkdir(parents=True, exist_ok=True)

    written = []
    for resource in resources:
        path = resource_path(output_folder, resource)
        if path.exists():
            warning(f"Overwriting {escape(str(path))}")
        path.write_text(resource_to_yaml(resource), encoding="utf-8")
        logger.debug("resource_written", kind=resource.kind, name=resource.name, path=str(path))
        info(f"Resource {resource.kind} is written to {escape(str(path))}")
        written.append(path)

    return written


@main_with_error_handling()
def convert_command(
    filename: str,
    output_folder: str,
    dry_run: bool = False,
) -> int:
    """Convert a Prometheus rules file into Grizzly resource files.

    Args:
        filename: Path to the Prometheus rules YAML file
        output_folder: Directory to write resource files into
        dry_run: If True, print YAML to stdout instead of writing files

    Returns:
        Exit code (0 for success)
    """
    try:
        resources = prometheus_to_grafana_resources(filename)
    except Prom2GrafanaError as e:
        error(format_error_message(e))
        raise

    if dry_run:
        print("---\n".join(resource_to_yaml(resource) for resource in resources), end="")
        return ExitCode.SUCCESS

    header("Convert Prometheus Rules")
    console.print(f"[cyan]Rules file:[/cyan] {escape(filename)}")
    console.print(f"[cyan]Output:[/cyan] {escape(output_folder)}")
    console.print()

    try:
        write_resources(resources, output_folder)
    except OSError as e:
        error(f"Failed to write resource to file: {e}")
        logger.error("resource_write_failed", output=output_folder, error=str(e))
        return ExitCode.CONFIG_ERROR

    console.print()
    success(f"Successfully converted {escape(filename)} to Grafana resources")
    console.print(
        f"To apply the resources, use the `grr apply {escape(output_folder)}` command, "
        f"or `grr show {escape(output_folder)}` to preview the resources"
    )

    return ExitCode.SUCCESS
