"""Shared fixtures for core tests."""

from __future__ import annotations

import copy
from typing import Any

import pytest
from consolenav.account import AccountProvider
from consolenav.catalog import Catalog
from consolenav.cloudapi import AccountFetcher
from consolenav.config import NavigationConfig, load_navigation

BASE_URL = "http://us-east-1.test.com"
ACCOUNT_ID = "4fc13ac6-1e7d-cd79-f3d2-96276af0d638"

NAVIGATION_DATA: dict[str, Any] = {
    "baseUrl": BASE_URL,
    "dcName": "us-east-1",
    "regions": [
        {
            "name": "North America",
            "datacenters": [
                {"name": "us-east-1", "url": "http://localhost"},
                {"name": "us-west-1", "url": "https://us-west-1.test.com"},
            ],
        },
        {
            "name": "Europe",
            "datacenters": [{"name": "eu-ams-1", "url": "https://eu-ams-1.test.com"}],
        },
    ],
    "categories": [
        {
            "name": "Compute",
            "services": [
                {"name": "VMs & Containers", "slug": "instances", "url": "/instances"},
                {"name": "Images", "slug": "images", "url": "images"},
            ],
        },
        {
            "name": "Overview",
            "services": [
                {"name": "Firewall Rules", "slug": "firewall", "url": "/firewall"},
                {"name": "Dashboard", "slug": "dashboard", "url": "/"},
            ],
        },
        {
            "name": "Networking",
            "services": [{"name": "Networks", "slug": "networks", "url": "/networks/"}],
        },
        {
            "name": "Storage",
            "services": [{"name": "Object Storage", "slug": "manta", "url": "https://manta.test.com/storage"}],
        },
        {
            "name": "Help & Support",
            "services": [
                {"name": "Service Status", "slug": "service-status", "url": "https://joyent.com/support"},
                {"name": "Contact Support", "slug": "contact-support", "url": "https://help.joyent.com/contact"},
            ],
        },
    ],
    "accountServices": [
        {"name": "Logout", "slug": "logout", "url": "/logout"},
        {
            "name": "Change Password",
            "slug": "change-password",
            "url": "https://sso.joyent.com/changepassword/{id}",
        },
        {"name": "SSH Keys", "slug": "ssh-keys", "url": "/accounts/{id}/keys"},
    ],
}

USER: dict[str, Any] = {
    "id": ACCOUNT_ID,
    "login": "barbar",
    "email": "barbar@example.com",
    "companyName": "Example",
    "firstName": "BarBar",
    "lastName": "Jinks",
    "phone": "(123)457-6890",
    "updated": "2015-12-23T06:41:11.032Z",
    "created": "2015-12-23T06:41:11.032Z",
}


class FakeFetcher(AccountFetcher):
    """Records calls and returns a canned record, or raises ``error``."""

    def __init__(self, record: dict[str, Any] | None = None, error: Exception | None = None):
        self.record = record if record is not None else dict(USER)
        self.error = error
        self.calls: list[tuple[str, dict[str, Any] | None]] = []

    def fetch(self, path: str, options: dict[str, Any] | None = None) -> dict[str, Any]:
        self.calls.append((path, options))
        if self.error is not None:
            raise self.error
        return dict(self.record)


@pytest.fixture
def navigation_data() -> dict[str, Any]:
    """A deep copy of the raw navigation config, safe to mutate."""
    return copy.deepcopy(NAVIGATION_DATA)


@pytest.fixture
def navigation(navigation_data) -> NavigationConfig:
    return load_navigation(navigation_data)


@pytest.fixture
def catalog(navigation) -> Catalog:
    return Catalog(navigation)


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def accounts(fetcher) -> AccountProvider:
    return AccountProvider(fetcher)
