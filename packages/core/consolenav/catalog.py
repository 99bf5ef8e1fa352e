"""Catalog accessor: read-only lookups over the navigation configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from consolenav.config import Datacenter, NavigationConfig, Region, Service
from consolenav.errors import MissingContextError, NotFoundError
from consolenav.urls import resolve


class ResolvedService(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    slug: str
    url: str


class ResolvedCategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    services: list[ResolvedService]


class Catalog:
    """Navigation catalog for one deployment.

    Holds the frozen configuration and an O(1) slug index over the catalog
    services. Every URL handed out has been resolved against ``base_url``.
    """

    def __init__(self, config: NavigationConfig):
        self._config = config
        self._by_slug: dict[str, Service] = {}
        for category in config.categories:
            for svc in category.services:
                self._by_slug[svc.slug] = svc
        dc = config.find_datacenter(config.dc_name)
        if dc is None:
            # NavigationConfig validation already guarantees this
            raise ValueError(f"Unknown datacenter: {config.dc_name}")
        self._current = dc

    @property
    def config(self) -> NavigationConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    def list_regions(self) -> tuple[Region, ...]:
        return self._config.regions

    def current_datacenter(self) -> Datacenter:
        return self._current

    def list_categories(self) -> list[ResolvedCategory]:
        return [
            ResolvedCategory(name=category.name, services=[self._resolve(svc) for svc in category.services])
            for category in self._config.categories
        ]

    def find_service(self, slug: str) -> ResolvedService:
        """Return the catalog service with ``slug``; raises NotFoundError if none."""
        svc = self._by_slug.get(slug)
        if svc is None:
            raise NotFoundError(slug)
        return self._resolve(svc)

    def list_account_services(self, account_id: str | None) -> list[ResolvedService]:
        """Account services with templated URLs filled in for ``account_id``."""
        if not account_id:
            raise MissingContextError("Account services require an account id")
        return [self._resolve(svc, account_id) for svc in self._config.account_services]

    def _resolve(self, svc: Service, account_id: str | None = None) -> ResolvedService:
        return ResolvedService(name=svc.name, slug=svc.slug, url=resolve(svc.url, self.base_url, account_id))
