"""
CLI commands for prom2grafana.
"""

from prom2grafana.cli.convert import convert_command

__all__ = [
    "convert_command",
]
