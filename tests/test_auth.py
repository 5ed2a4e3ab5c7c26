"""Tests for the credential schemes and their derivation from settings."""

from __future__ import annotations

import pytest

from typedrest import AuthScheme, BasicAuth, BearerAuth, ClientSettings, HTTPMethod, HeaderAuth, Request
from typedrest.adapters.auth import auth_from_settings


@pytest.fixture
def request_():
    return Request(method=HTTPMethod.GET, url="http://x/users", headers={"Accept": "application/json"})


def test_basic_auth_header(request_):
    authed = BasicAuth("Aladdin", "open sesame").apply(request_)

    assert authed.header("Authorization") == "Basic QWxhZGRpbjpvcGVuIHNlc2FtZQ=="
    assert authed.header("Accept") == "application/json"


def test_apply_returns_a_copy(request_):
    BearerAuth("abc").apply(request_)

    assert request_.header("Authorization") is None


def test_apply_replaces_existing_header_case_insensitively():
    request = Request(method=HTTPMethod.GET, url="http://x", headers={"authorization": "old"})

    authed = BearerAuth("new").apply(request)

    assert authed.header("Authorization") == "Bearer new"
    assert len(authed.headers) == 1


def test_header_auth(request_):
    assert HeaderAuth("X-API-Key", "k").apply(request_).header("x-api-key") == "k"


def test_secrets_stay_out_of_repr():
    assert "open sesame" not in repr(BasicAuth("Aladdin", "open sesame"))
    assert "abc" not in repr(BearerAuth("abc"))


def test_redacted_headers_hide_credentials(request_):
    authed = BasicAuth("u", "p").apply(request_)

    assert authed.redacted_headers()["Authorization"] == "***"


@pytest.mark.parametrize("scheme", [BasicAuth("u", "p"), BearerAuth("t"), HeaderAuth("X-K", "v")])
def test_schemes_satisfy_protocol(scheme):
    assert isinstance(scheme, AuthScheme)


class TestFromSettings:
    def test_none_configured(self):
        assert auth_from_settings(ClientSettings(_env_file=None)) is None

    def test_basic(self):
        settings = ClientSettings(username="John", password="12345", _env_file=None)

        assert auth_from_settings(settings) == BasicAuth("John", "12345")

    def test_username_without_password_is_ignored(self):
        assert auth_from_settings(ClientSettings(username="John", _env_file=None)) is None

    def test_bearer_wins(self):
        settings = ClientSettings(username="John", password="12345", bearer_token="t", _env_file=None)

        assert auth_from_settings(settings) == BearerAuth("t")
