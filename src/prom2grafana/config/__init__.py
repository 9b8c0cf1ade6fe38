"""
prom2grafana configuration.

Pydantic-based settings read from environment variables and .env files.
"""

from prom2grafana.config.settings import (
    DEFAULT_DATASOURCE_UID,
    DEFAULT_RECEIVER,
    Settings,
    get_settings,
)

__all__ = [
    "DEFAULT_DATASOURCE_UID",
    "DEFAULT_RECEIVER",
    "Settings",
    "get_settings",
]
