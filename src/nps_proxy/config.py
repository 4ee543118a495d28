"""Application configuration."""

import os
from collections import ChainMap
from collections.abc import Mapping

from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")
_ENV_FILES = (f".env.{_ENVIRONMENT}", ".env")

DEFAULT_CREDENTIAL_ENV_NAMES = [
    "NPS_API_KEY",
    "NATIONALPARKSERVICEAPIKEY",
    "API_KEY",
    "api_key",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3000
    upstream_base_url: str = "https://developer.nps.gov/api/v1"
    credential_param: str = "api_key"
    credential_env_names: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CREDENTIAL_ENV_NAMES)
    )
    cache_ttl_seconds: int = 300
    upstream_timeout_seconds: float = 15.0
    user_agent: str = "nps-proxy/1.0"
    log_level: str = "INFO"
    rate_limit_window_seconds: int = 60
    rate_limit_max_requests: int = 120
    data_dir: str = "data"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=_ENV_FILES,
        extra="ignore",
    )


def environment_lookup() -> Mapping[str, str | None]:
    """Return the process environment layered over values from .env files."""
    file_values: dict[str, str | None] = {}
    for env_file in reversed(_ENV_FILES):
        file_values.update(dotenv_values(env_file))
    return ChainMap(dict(os.environ), file_values)
