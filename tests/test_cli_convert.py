"""Tests for the convert CLI command."""

from __future__ import annotations

import pytest
import yaml

from prom2grafana.cli.convert import convert_command, resource_path, write_resources
from prom2grafana.convert import prometheus_to_grafana_resources
from prom2grafana.core.errors import ExitCode
from prom2grafana.main import build_parser, main


def test_convert_writes_one_file_per_resource(alerting_rules_file, tmp_path):
    output = tmp_path / "out" / "nested"

    exit_code = convert_command(alerting_rules_file, str(output))

    assert exit_code == ExitCode.SUCCESS
    assert sorted(p.name for p in output.iterdir()) == [
        "AlertRuleGroup.rules_yaml.example.yaml",
        "DashboardFolder.rules_yaml.yaml",
    ]

    folder = yaml.safe_load((output / "DashboardFolder.rules_yaml.yaml").read_text())
    assert folder == {
        "apiVersion": "grizzly.grafana.com/v1alpha1",
        "kind": "DashboardFolder",
        "metadata": {"name": "rules_yaml"},
        "spec": {"title": "rules_yaml", "uid": "rules_yaml"},
    }

    group = yaml.safe_load((output / "AlertRuleGroup.rules_yaml.example.yaml").read_text())
    assert group["metadata"]["name"] == "rules_yaml.example"
    assert len(group["spec"]["rules"]) == 3


def test_convert_output_is_stable(recording_rules_file, tmp_path):
    convert_command(recording_rules_file, str(tmp_path / "first"))
    convert_command(recording_rules_file, str(tmp_path / "second"))

    for path in (tmp_path / "first").iterdir():
        assert path.read_bytes() == (tmp_path / "second" / path.name).read_bytes()


def test_convert_error_writes_nothing(write_rules, tmp_path):
    path = write_rules("groups:\n- name: g\n  rules:\n  - alert: X\n    expr: up\n    keep_firing_for: 1m\n")
    output = tmp_path / "out"

    exit_code = convert_command(path, str(output))

    assert exit_code == ExitCode.VALIDATION_ERROR
    assert not output.exists()


def test_convert_missing_input(tmp_path):
    exit_code = convert_command(str(tmp_path / "nope.yaml"), str(tmp_path / "out"))

    assert exit_code == ExitCode.CONFIG_ERROR


def test_convert_unwritable_output(alerting_rules_file, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")

    exit_code = convert_command(alerting_rules_file, str(blocker))

    assert exit_code == ExitCode.CONFIG_ERROR


def test_convert_dry_run_prints_yaml(alerting_rules_file, tmp_path, capsys):
    output = tmp_path / "out"

    exit_code = convert_command(alerting_rules_file, str(output), dry_run=True)

    assert exit_code == ExitCode.SUCCESS
    assert not output.exists()
    documents = list(yaml.safe_load_all(capsys.readouterr().out))
    assert [d["kind"] for d in documents] == ["DashboardFolder", "AlertRuleGroup"]


def test_write_resources_returns_paths(alerting_rules_file, tmp_path):
    resources = prometheus_to_grafana_resources(alerting_rules_file)

    written = write_resources(resources, tmp_path)

    assert written == [resource_path(tmp_path, r) for r in resources]
    assert all(p.exists() for p in written)


def test_build_parser():
    args = build_parser().parse_args(["convert", "rules.yaml", "out", "--dry-run"])

    assert args.command == "convert"
    assert args.filename == "rules.yaml"
    assert args.output_folder == "out"
    assert args.dry_run is True


@pytest.fixture
def logging_levels(monkeypatch):
    """Record configure_logging calls instead of reconfiguring structlog."""
    levels = []
    monkeypatch.setattr(
        "prom2grafana.main.configure_logging",
        lambda level, **kwargs: levels.append(level),
    )
    return levels


def test_main_without_command_exits_with_help(capsys, logging_levels):
    with pytest.raises(SystemExit) as exc_info:
        main([])

    assert exc_info.value.code == 1
    assert "convert" in capsys.readouterr().out


def test_main_convert(alerting_rules_file, tmp_path, logging_levels):
    with pytest.raises(SystemExit) as exc_info:
        main(["--log-level", "WARNING", "convert", alerting_rules_file, str(tmp_path / "out")])

    assert exc_info.value.code == 0
    assert (tmp_path / "out" / "DashboardFolder.rules_yaml.yaml").exists()
    assert logging_levels == ["WARNING"]


def test_main_log_level_defaults_to_settings(monkeypatch, capsys, logging_levels):
    monkeypatch.setenv("PROM2GRAFANA_LOG_LEVEL", "DEBUG")

    with pytest.raises(SystemExit):
        main([])

    assert logging_levels == ["DEBUG"]
