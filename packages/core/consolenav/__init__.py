"""consolenav: navigation and service catalog for the cloud console."""

from consolenav.config import (
    AccountService,
    Category,
    Datacenter,
    NavigationConfig,
    Region,
    Service,
    load_navigation,
    load_navigation_file,
)
from consolenav.errors import (
    ConfigurationError,
    MissingContextError,
    NavigationError,
    NotFoundError,
    UnauthenticatedError,
    UpstreamError,
)
from consolenav.urls import AbsoluteUrl, RelativeUrl, RootUrl, TemplatedUrl, UrlSpec, resolve

__version__ = "0.1.0"

__all__ = [
    "AbsoluteUrl",
    "Account",
    "AccountProvider",
    "AccountService",
    "Catalog",
    "Category",
    "ConfigurationError",
    "Datacenter",
    "Identity",
    "MissingContextError",
    "NavigationConfig",
    "NavigationError",
    "NotFoundError",
    "Region",
    "RelativeUrl",
    "RootUrl",
    "Service",
    "TemplatedUrl",
    "UnauthenticatedError",
    "UpstreamError",
    "UrlSpec",
    "build_schema",
    "load_navigation",
    "load_navigation_file",
    "resolve",
]


def __getattr__(name: str):
    # Lazy imports for modules that pull in graphql-core or the HTTP client
    if name == "Catalog":
        from consolenav.catalog import Catalog

        return Catalog
    if name in ("Account", "AccountProvider", "Identity"):
        from consolenav import account

        return getattr(account, name)
    if name == "build_schema":
        from consolenav.resolvers import build_schema

        return build_schema
    raise AttributeError(f"module 'consolenav' has no attribute {name!r}")
