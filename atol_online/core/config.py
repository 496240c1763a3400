"""
ATOL Online Core Configuration
Service hosts, API paths and client settings.
"""

from enum import Enum
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class AtolEnvironment(str, Enum):
    TEST = "test"
    PRODUCTION = "production"


class AtolSettings(BaseSettings):
    """
    Immutable client configuration.

    Values come from keyword arguments first, then ATOL_* environment
    variables, then an optional .env file.
    """
    login: str
    password: str
    group_code: str
    environment: AtolEnvironment = AtolEnvironment.PRODUCTION
    host: Optional[str] = None
    api_version: str = "v4"
    timeout: float = 30.0
    token_ttl_seconds: int = 3600 * 24

    model_config = SettingsConfigDict(
        env_prefix="ATOL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @property
    def base_url(self) -> str:
        """Service host, honoring an explicit host override."""
        if self.host:
            return self.host.rstrip("/")
        return ATOL_HOSTS[self.environment]


# ─────────────────────────────────────────────────────────────
# ATOL API REGISTRY
# Source: "ATOL Online. Протокол обмена v4"
# ─────────────────────────────────────────────────────────────

ATOL_HOSTS = {
    AtolEnvironment.TEST:       "https://testonline.atol.ru",
    AtolEnvironment.PRODUCTION: "https://online.atol.ru",
}

API_PATHS = {
    "get_token": "possystem/{api_version}/getToken",
    "operation": "possystem/{api_version}/{group_code}/{operation}",
    "report":    "possystem/{api_version}/{group_code}/report/{uuid}",
}


def get_api_path(settings: AtolSettings, service: str, **params: str) -> str:
    """Render the API path of a service for the given settings."""
    template = API_PATHS.get(service)
    if not template:
        raise ValueError(f"Unknown ATOL service: {service}")
    return template.format(
        api_version=settings.api_version,
        group_code=settings.group_code,
        **params,
    )


def get_api_url(settings: AtolSettings, service: str, **params: str) -> str:
    """Absolute URL of a service on the configured host."""
    return f"{settings.base_url}/{get_api_path(settings, service, **params)}"
