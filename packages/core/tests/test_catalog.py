"""Tests for the catalog accessor."""

import pytest
from consolenav.catalog import Catalog, ResolvedService
from consolenav.errors import MissingContextError, NotFoundError
from consolenav.urls import AbsoluteUrl, RelativeUrl, RootUrl

BASE_URL = "http://us-east-1.test.com"
ACCOUNT_ID = "4fc13ac6-1e7d-cd79-f3d2-96276af0d638"


class TestRegions:
    def test_list_regions_in_order(self, catalog):
        regions = catalog.list_regions()
        assert [r.name for r in regions] == ["North America", "Europe"]
        assert regions[0].datacenters[0].name == "us-east-1"

    def test_current_datacenter(self, catalog):
        dc = catalog.current_datacenter()
        assert dc.name == "us-east-1"
        assert dc.url == "http://localhost"

    def test_current_datacenter_in_other_region(self, navigation_data):
        from consolenav.config import load_navigation

        navigation_data["dcName"] = "eu-ams-1"
        dc = Catalog(load_navigation(navigation_data)).current_datacenter()
        assert dc.url == "https://eu-ams-1.test.com"


class TestCategories:
    def test_order_and_names(self, catalog, navigation_data):
        categories = catalog.list_categories()
        assert [c.name for c in categories] == [c["name"] for c in navigation_data["categories"]]
        assert [s.slug for s in categories[0].services] == ["instances", "images"]

    def test_urls_resolved(self, catalog):
        categories = catalog.list_categories()
        assert categories[0].services[0].name == "VMs & Containers"
        assert categories[0].services[0].url == BASE_URL + "/instances"
        assert categories[0].services[1].url == BASE_URL + "/images"
        assert categories[1].services[1].url == BASE_URL
        assert categories[4].services[0].name == "Service Status"
        assert categories[4].services[0].url == "https://joyent.com/support"

    def test_every_service_resolves_by_kind(self, catalog, navigation):
        for category in navigation.categories:
            for svc in category.services:
                found = catalog.find_service(svc.slug)
                assert found.slug == svc.slug
                if isinstance(svc.url, AbsoluteUrl):
                    assert found.url == svc.url.value
                elif isinstance(svc.url, RootUrl):
                    assert found.url == BASE_URL
                elif isinstance(svc.url, RelativeUrl):
                    assert found.url == BASE_URL + "/" + svc.url.value.lstrip("/")
                assert "//" not in found.url.split("://", 1)[1]

    def test_listing_does_not_mutate_config(self, catalog, navigation):
        before = navigation.model_dump()
        catalog.list_categories()
        catalog.list_account_services(ACCOUNT_ID)
        assert navigation.model_dump() == before


class TestFindService:
    def test_found(self, catalog):
        svc = catalog.find_service("contact-support")
        assert svc == ResolvedService(
            name="Contact Support", slug="contact-support", url="https://help.joyent.com/contact"
        )

    def test_unknown_slug(self, catalog):
        with pytest.raises(NotFoundError) as exc_info:
            catalog.find_service("nope")
        assert exc_info.value.slug == "nope"

    def test_account_services_not_in_catalog_lookup(self, catalog):
        with pytest.raises(NotFoundError):
            catalog.find_service("change-password")


class TestAccountServices:
    def test_templated_urls_filled(self, catalog):
        services = catalog.list_account_services(ACCOUNT_ID)
        assert [s.slug for s in services] == ["logout", "change-password", "ssh-keys"]
        assert services[0].url == BASE_URL + "/logout"
        assert services[1].url == f"https://sso.joyent.com/changepassword/{ACCOUNT_ID}"
        assert services[2].url == f"{BASE_URL}/accounts/{ACCOUNT_ID}/keys"

    @pytest.mark.parametrize("account_id", [None, ""])
    def test_requires_account(self, catalog, account_id):
        with pytest.raises(MissingContextError):
            catalog.list_account_services(account_id)

    def test_different_accounts_do_not_interfere(self, catalog):
        a = catalog.list_account_services("aaa")
        b = catalog.list_account_services("bbb")
        assert a[1].url.endswith("/aaa")
        assert b[1].url.endswith("/bbb")
