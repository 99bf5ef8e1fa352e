"""URL specs and their resolution against the active base URL.

Every configured URL is classified once, at load time, into one of four kinds.
Resolution then dispatches on the kind and never inspects the raw string again.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field

from consolenav.errors import MissingContextError

ACCOUNT_PLACEHOLDER = "{id}"


class AbsoluteUrl(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["absolute"] = "absolute"
    value: str


class RelativeUrl(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["relative"] = "relative"
    value: str


class RootUrl(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["root"] = "root"
    value: str = "/"


class TemplatedUrl(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["templated"] = "templated"
    value: str


UrlSpec = Annotated[Union[AbsoluteUrl, RelativeUrl, RootUrl, TemplatedUrl], Field(discriminator="kind")]

_KINDS: dict[str, type[BaseModel]] = {
    "absolute": AbsoluteUrl,
    "relative": RelativeUrl,
    "root": RootUrl,
    "templated": TemplatedUrl,
}


def is_absolute_url(value: str) -> bool:
    """True for http(s) URLs with a host."""
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def parse_url_spec(value: Any, allow_template: bool = False) -> UrlSpec:
    """Classify a configured URL into its spec kind.

    ``value`` is either a string or a mapping ``{kind, value}`` naming the kind
    explicitly. Raises ValueError for empty values, unknown kinds, and templates
    where they are not allowed.
    """
    if isinstance(value, (AbsoluteUrl, RelativeUrl, RootUrl, TemplatedUrl)):
        spec = value
    elif isinstance(value, dict):
        kind = value.get("kind")
        if kind not in _KINDS:
            raise ValueError(f"Unknown url kind {kind!r} (expected one of: {', '.join(_KINDS)})")
        spec = _KINDS[kind].model_validate(value)
    elif isinstance(value, str):
        spec = _classify(value)
    else:
        raise ValueError(f"url must be a string or a mapping, got {type(value).__name__}")

    if not spec.value:
        raise ValueError("url must not be empty")
    if isinstance(spec, TemplatedUrl):
        if not allow_template:
            raise ValueError(f"{spec.value!r}: the {ACCOUNT_PLACEHOLDER} placeholder is only allowed in account services")
        if ACCOUNT_PLACEHOLDER not in spec.value:
            raise ValueError(f"{spec.value!r}: templated url has no {ACCOUNT_PLACEHOLDER} placeholder")
    return spec


def _classify(value: str) -> UrlSpec:
    value = value.strip()
    if ACCOUNT_PLACEHOLDER in value:
        return TemplatedUrl(value=value)
    if value == "/":
        return RootUrl()
    if is_absolute_url(value):
        return AbsoluteUrl(value=value)
    return RelativeUrl(value=value)


def join_url(base_url: str, path: str) -> str:
    """Join with exactly one ``/`` between base and path."""
    return base_url.rstrip("/") + "/" + path.lstrip("/")


def resolve(url_spec: UrlSpec, base_url: str, account_id: str | None = None) -> str:
    """Compute the final URL for ``url_spec``.

    Templated specs need ``account_id`` and raise MissingContextError without
    one. A substituted template that is not absolute is joined to ``base_url``.
    """
    if isinstance(url_spec, AbsoluteUrl):
        return url_spec.value
    if isinstance(url_spec, RootUrl):
        return base_url
    if isinstance(url_spec, RelativeUrl):
        return join_url(base_url, url_spec.value)
    if isinstance(url_spec, TemplatedUrl):
        if not account_id:
            raise MissingContextError(f"Cannot resolve {url_spec.value!r} without an account id")
        url = url_spec.value.replace(ACCOUNT_PLACEHOLDER, account_id)
        if is_absolute_url(url):
            return url
        return join_url(base_url, url)
    raise TypeError(f"Unsupported url spec: {url_spec!r}")
