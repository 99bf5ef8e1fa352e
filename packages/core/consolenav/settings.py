"""Deployment settings read alongside the navigation catalog.

The navigation catalog and the deployment options share one YAML file. The
file is named by ``CONSOLENAV_CONFIG`` (default ``navigation.yaml``);
``CONSOLENAV_LOG_LEVEL`` overrides ``logLevel``.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from consolenav.config import NavigationConfig, load_navigation, read_config_file
from consolenav.errors import ConfigurationError
from consolenav.urls import is_absolute_url

DEFAULT_CONFIG_PATH = "navigation.yaml"
CONFIG_ENV = "CONSOLENAV_CONFIG"
LOG_LEVEL_ENV = "CONSOLENAV_LOG_LEVEL"


class _Options(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class CloudApiSettings(_Options):
    url: str = "http://localhost"
    timeout: float = Field(default=30, gt=0)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not is_absolute_url(v):
            raise ValueError(f"cloudapi url {v!r} is not an absolute http(s) URL")
        return v


class AuthSettings(_Options):
    # When true, /graphql refuses unauthenticated requests outright
    required: bool = False
    sso_url: str | None = None
    identity_header: str = "X-Auth-Login"
    token_header: str = "X-Auth-Token"
    # Identity assumed when no SSO header is present (development only)
    dev_login: str | None = None
    dev_token: str | None = None


class Settings(_Options):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True, extra="ignore")

    cloudapi: CloudApiSettings = Field(default_factory=CloudApiSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    log_level: str = "INFO"
    config_path: str | None = None


def resolve_config_path(path: str | Path | None = None) -> Path:
    return Path(path or os.environ.get(CONFIG_ENV) or DEFAULT_CONFIG_PATH)


def settings_from_mapping(data: dict[str, Any], config_path: str | None = None) -> Settings:
    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
    updates: dict[str, Any] = {"config_path": config_path}
    if os.environ.get(LOG_LEVEL_ENV):
        updates["log_level"] = os.environ[LOG_LEVEL_ENV]
    return settings.model_copy(update=updates)


def load_config(path: str | Path | None = None) -> tuple[Settings, NavigationConfig]:
    """Load settings and navigation from one file."""
    config_path = resolve_config_path(path)
    data = read_config_file(config_path)
    return settings_from_mapping(data, str(config_path)), load_navigation(data)
