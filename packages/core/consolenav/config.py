"""Navigation configuration: regions, datacenters, categories and services.

The configuration is validated once at startup into frozen models. Keys follow
the deployment options' camelCase (``baseUrl``, ``dcName``, ``accountServices``)
and snake_case is accepted as well.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, ClassVar

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from consolenav.errors import ConfigurationError
from consolenav.urls import UrlSpec, is_absolute_url, parse_url_spec

log = logging.getLogger(__name__)

_SLUG_PATTERN = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9_.-]*$")


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class Datacenter(_Frozen):
    name: str = Field(..., min_length=1)
    url: str

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not is_absolute_url(v):
            raise ValueError(f"Datacenter url {v!r} is not an absolute http(s) URL")
        return v


class Region(_Frozen):
    name: str = Field(..., min_length=1)
    datacenters: tuple[Datacenter, ...] = ()

    @model_validator(mode="after")
    def validate_datacenters(self) -> Region:
        if not self.datacenters:
            raise ValueError(f"Region {self.name!r} has no datacenters")
        names = [dc.name for dc in self.datacenters]
        if len(names) != len(set(names)):
            raise ValueError(f"Region {self.name!r} has duplicate datacenter names")
        return self


class Service(_Frozen):
    name: str = Field(..., min_length=1)
    slug: str
    url: UrlSpec

    allow_template: ClassVar[bool] = False

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        if not _SLUG_PATTERN.match(v):
            raise ValueError(f"Service slug {v!r} is not URL-safe (must match [a-zA-Z0-9][a-zA-Z0-9_.-]*)")
        return v

    @field_validator("url", mode="before")
    @classmethod
    def parse_url(cls, v: Any) -> UrlSpec:
        return parse_url_spec(v, allow_template=cls.allow_template)


class AccountService(Service):
    """A service scoped to the signed-in account; its url may carry ``{id}``."""

    allow_template: ClassVar[bool] = True


class Category(_Frozen):
    name: str = Field(..., min_length=1)
    services: tuple[Service, ...] = ()


class NavigationConfig(BaseModel):
    """The whole navigation catalog plus the deployment's base URL and datacenter."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True, extra="ignore")

    base_url: str
    dc_name: str
    regions: tuple[Region, ...] = ()
    categories: tuple[Category, ...] = ()
    account_services: tuple[AccountService, ...] = ()

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not is_absolute_url(v):
            raise ValueError(f"baseUrl {v!r} is not an absolute http(s) URL")
        return v

    @model_validator(mode="after")
    def validate_references(self) -> NavigationConfig:
        if self.find_datacenter(self.dc_name) is None:
            known = ", ".join(dc.name for region in self.regions for dc in region.datacenters) or "none"
            raise ValueError(f"dcName {self.dc_name!r} matches no configured datacenter (known: {known})")

        seen: set[str] = set()
        for svc in self.services():
            if svc.slug in seen:
                raise ValueError(f"Duplicate service slug: {svc.slug!r}")
            seen.add(svc.slug)
        return self

    def services(self) -> list[Service]:
        """All catalog and account services, in configuration order."""
        result: list[Service] = [svc for cat in self.categories for svc in cat.services]
        result.extend(self.account_services)
        return result

    def find_datacenter(self, name: str) -> Datacenter | None:
        for region in self.regions:
            for dc in region.datacenters:
                if dc.name == name:
                    return dc
        return None


def load_navigation(data: Mapping[str, Any]) -> NavigationConfig:
    """Validate raw configuration into a NavigationConfig."""
    try:
        config = NavigationConfig.model_validate(dict(data))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid navigation configuration: {e}") from e
    log.info(
        "Loaded navigation: %d regions, %d categories, %d account services, datacenter %s",
        len(config.regions),
        len(config.categories),
        len(config.account_services),
        config.dc_name,
    )
    return config


def read_config_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML (or JSON) configuration file into a mapping."""
    p = Path(path)
    try:
        text = p.read_text()
    except FileNotFoundError as e:
        raise ConfigurationError(f"Configuration file not found: {p}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {p}: {e}") from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {p}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {p} must contain a mapping")
    return data


def load_navigation_file(path: str | Path) -> NavigationConfig:
    return load_navigation(read_config_file(path))
