"""Account context: the signed-in account's identity and profile."""

from __future__ import annotations

import asyncio
import hashlib
import logging
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from consolenav.cloudapi import AccountFetcher
from consolenav.errors import UnauthenticatedError, UpstreamError

log = logging.getLogger(__name__)

ACCOUNT_PATH = "/my"


def email_hash(email: str) -> str:
    """MD5 hex digest of the trimmed, lowercased email (Gravatar convention)."""
    return hashlib.md5(email.strip().lower().encode("utf-8"), usedforsecurity=False).hexdigest()


@dataclass(frozen=True)
class Identity:
    """Authenticated identity handed over by the SSO layer."""

    login: str
    token: str | None = None


class Account(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True, extra="ignore")

    id: str
    login: str
    email: str = ""
    email_hash: str = ""
    company_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    created: str | None = None
    updated: str | None = None

    @model_validator(mode="before")
    @classmethod
    def derive_email_hash(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = {k: v for k, v in data.items() if k not in ("emailHash", "email_hash")}
            data["email"] = data.get("email") or ""
            data["email_hash"] = email_hash(data["email"])
        return data

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class AccountProvider:
    """Fetches the current account through an injected AccountFetcher.

    No retries and no caching: one call to the fetcher per invocation.
    """

    def __init__(self, fetcher: AccountFetcher, path: str = ACCOUNT_PATH):
        self.fetcher = fetcher
        self.path = path

    async def current_account(self, identity: Identity | None) -> Account:
        if identity is None:
            raise UnauthenticatedError()

        options: dict[str, Any] = {}
        if identity.token:
            options["headers"] = {"Authorization": f"Bearer {identity.token}"}

        log.debug("Fetching account %s for %s", self.path, identity.login)
        try:
            record = await asyncio.to_thread(self.fetcher.fetch, self.path, options)
        except Exception as e:
            log.warning("Account fetch failed for %s: %s", identity.login, e)
            raise UpstreamError(f"Account service request failed: {e}") from e

        try:
            return Account.model_validate(record)
        except ValidationError as e:
            log.warning("Account service returned an invalid record for %s: %s", identity.login, e)
            raise UpstreamError("Account service returned an invalid account record") from e
