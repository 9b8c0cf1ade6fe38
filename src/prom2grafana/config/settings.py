"""
Application settings using Pydantic.

Provides environment-based configuration loading with PROM2GRAFANA_ prefix.
The defaults are the values downstream Grafana expects; override them only
when provisioning against a stack with a different datasource or receiver.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings

DEFAULT_DATASOURCE_UID = "grafanacloud-prom"
DEFAULT_RECEIVER = "grafana-default-email"


class Settings(BaseSettings):
    """Application settings."""

    # Grafana
    datasource_uid: str = DEFAULT_DATASOURCE_UID
    receiver: str = DEFAULT_RECEIVER

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "PROM2GRAFANA_"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
