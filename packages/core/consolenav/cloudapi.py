"""Clients that read account records from the remote account service."""

from __future__ import annotations

import json
import ssl
import urllib.parse
import urllib.request
from abc import ABC, abstractmethod
from typing import Any

import certifi

_TIMEOUT = 30  # seconds


def _ssl_context() -> ssl.SSLContext:
    """SSL context using the certifi CA bundle."""
    return ssl.create_default_context(cafile=certifi.where())


def urlopen_safe(req: urllib.request.Request, timeout: float = _TIMEOUT) -> bytes:
    """urlopen with the certifi CA bundle."""
    ctx = _ssl_context()
    with urllib.request.urlopen(req, timeout=timeout, context=ctx) as resp:
        return resp.read()


class AccountFetcher(ABC):
    """Capability for reading records from the account service.

    Implementations are blocking; callers on the event loop run them in a
    worker thread.
    """

    @abstractmethod
    def fetch(self, path: str, options: dict[str, Any] | None = None) -> dict[str, Any]:
        """Return the decoded JSON record at ``path``.

        ``options`` may carry ``headers`` (dict) and ``query`` (dict).
        """


class CloudApiClient(AccountFetcher):
    """HTTP client for the CloudAPI account endpoints."""

    def __init__(self, url: str, timeout: float = _TIMEOUT):
        self.url = url.rstrip("/")
        self._timeout = timeout

    def fetch(self, path: str, options: dict[str, Any] | None = None) -> dict[str, Any]:
        options = options or {}
        url = self.url + "/" + path.lstrip("/")
        query = options.get("query")
        if query:
            url += "?" + urllib.parse.urlencode(query)
        headers = {"Accept": "application/json"}
        headers.update(options.get("headers") or {})
        data = json.loads(self._get(url, headers))
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object from {path}, got {type(data).__name__}")
        return data

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    def _get(self, url: str, headers: dict[str, str]) -> bytes:
        req = urllib.request.Request(url, headers=headers)
        return urlopen_safe(req, timeout=self._timeout)


class StaticAccountFetcher(AccountFetcher):
    """Serves one fixed account record, whatever the path."""

    def __init__(self, record: dict[str, Any]):
        self.record = dict(record)
        self.calls: list[str] = []

    def fetch(self, path: str, options: dict[str, Any] | None = None) -> dict[str, Any]:
        self.calls.append(path)
        return dict(self.record)
