"""Tests for URL spec classification and resolution."""

import pytest
from consolenav.errors import MissingContextError
from consolenav.urls import (
    AbsoluteUrl,
    RelativeUrl,
    RootUrl,
    TemplatedUrl,
    is_absolute_url,
    join_url,
    parse_url_spec,
    resolve,
)

BASE = "http://us-east-1.test.com"


class TestClassification:
    def test_absolute(self):
        assert parse_url_spec("https://joyent.com/support") == AbsoluteUrl(value="https://joyent.com/support")

    def test_root(self):
        assert isinstance(parse_url_spec("/"), RootUrl)

    def test_relative_with_and_without_slash(self):
        assert parse_url_spec("/instances") == RelativeUrl(value="/instances")
        assert parse_url_spec("instances") == RelativeUrl(value="instances")

    def test_templated_allowed_for_account_services(self):
        spec = parse_url_spec("https://sso.test.com/changepassword/{id}", allow_template=True)
        assert isinstance(spec, TemplatedUrl)

    def test_templated_rejected_by_default(self):
        with pytest.raises(ValueError, match="only allowed in account services"):
            parse_url_spec("/accounts/{id}")

    def test_explicit_kind_mapping(self):
        spec = parse_url_spec({"kind": "relative", "value": "https://not-really-absolute"})
        assert isinstance(spec, RelativeUrl)

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown url kind"):
            parse_url_spec({"kind": "magic", "value": "/x"})

    def test_templated_kind_without_placeholder(self):
        with pytest.raises(ValueError, match="no \\{id\\} placeholder"):
            parse_url_spec({"kind": "templated", "value": "/accounts"}, allow_template=True)

    @pytest.mark.parametrize("value", ["", "   "])
    def test_empty_rejected(self, value):
        with pytest.raises(ValueError, match="must not be empty"):
            parse_url_spec(value)

    def test_non_string_rejected(self):
        with pytest.raises(ValueError):
            parse_url_spec(42)

    def test_is_absolute_url(self):
        assert is_absolute_url("http://localhost")
        assert is_absolute_url("https://a.b/c")
        assert not is_absolute_url("/instances")
        assert not is_absolute_url("ftp://files.test.com")
        assert not is_absolute_url("http://")


class TestResolve:
    def test_absolute_is_verbatim(self):
        url = "https://joyent.com/support?x=1"
        assert resolve(AbsoluteUrl(value=url), BASE) == url

    @pytest.mark.parametrize("base", [BASE, BASE + "/"])
    @pytest.mark.parametrize("path", ["instances", "/instances", "//instances"])
    def test_relative_has_single_separator(self, base, path):
        assert resolve(RelativeUrl(value=path), base) == BASE + "/instances"

    def test_relative_keeps_trailing_slash_of_path(self):
        assert resolve(RelativeUrl(value="/networks/"), BASE) == BASE + "/networks/"

    def test_relative_onto_base_with_path(self):
        assert resolve(RelativeUrl(value="keys"), "https://console.test.com/dc/") == "https://console.test.com/dc/keys"

    @pytest.mark.parametrize("base", [BASE, BASE + "/"])
    def test_root_returns_base_unchanged(self, base):
        assert resolve(RootUrl(), base) == base

    def test_templated_substitutes_every_placeholder(self):
        spec = TemplatedUrl(value="https://sso.test.com/{id}/changepassword/{id}")
        assert resolve(spec, BASE, "abc") == "https://sso.test.com/abc/changepassword/abc"

    def test_templated_relative_is_joined_to_base(self):
        assert resolve(TemplatedUrl(value="/accounts/{id}/keys"), BASE, "abc") == BASE + "/accounts/abc/keys"

    @pytest.mark.parametrize("account_id", [None, ""])
    def test_templated_without_account(self, account_id):
        with pytest.raises(MissingContextError):
            resolve(TemplatedUrl(value="/accounts/{id}"), BASE, account_id)

    def test_account_id_ignored_for_plain_specs(self):
        assert resolve(RelativeUrl(value="/instances"), BASE, "abc") == BASE + "/instances"

    def test_deterministic(self):
        spec = TemplatedUrl(value="/accounts/{id}")
        assert resolve(spec, BASE, "x") == resolve(spec, BASE, "x")


def test_join_url():
    assert join_url("http://a/", "/b") == "http://a/b"
    assert join_url("http://a", "b") == "http://a/b"
