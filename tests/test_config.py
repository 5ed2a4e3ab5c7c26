"""Tests for ClientSettings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from conftest import StubTransport, UserServer
from typedrest import BasicAuth, ClientSettings, RestClient


def test_defaults(monkeypatch):
    for name in ("BASE_URL", "TIMEOUT_SECONDS", "USERNAME", "PASSWORD", "BEARER_TOKEN"):
        monkeypatch.delenv(f"TYPEDREST_{name}", raising=False)

    settings = ClientSettings(_env_file=None)

    assert settings.base_url == "http://localhost:8080"
    assert settings.timeout_seconds == 20.0
    assert settings.follow_redirects is True
    assert settings.log_level == "WARNING"


def test_reads_prefixed_environment(monkeypatch):
    monkeypatch.setenv("TYPEDREST_BASE_URL", "https://api.example.com/")
    monkeypatch.setenv("TYPEDREST_TIMEOUT_SECONDS", "3.5")
    monkeypatch.setenv("TYPEDREST_PASSWORD", "hunter2")

    settings = ClientSettings(_env_file=None)

    assert settings.base_url == "https://api.example.com"
    assert settings.timeout_seconds == 3.5
    assert settings.password.get_secret_value() == "hunter2"
    assert "hunter2" not in repr(settings)


def test_reads_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("TYPEDREST_USER_AGENT=from-file/1.0\n", encoding="utf-8")

    assert ClientSettings(_env_file=env_file).user_agent == "from-file/1.0"


@pytest.mark.parametrize("field,value", [("timeout_seconds", 0), ("log_level", "LOUD"), ("base_url", "")])
def test_invalid_values(field, value):
    with pytest.raises(ValidationError):
        ClientSettings(**{field: value}, _env_file=None)


def test_log_level_is_normalized():
    assert ClientSettings(log_level="debug", _env_file=None).log_level == "DEBUG"


def test_client_from_settings_seeds_credentials():
    settings = ClientSettings(base_url="http://svc", username="John", password="12345", _env_file=None)

    client = RestClient.from_settings(settings, transport=StubTransport(UserServer()))

    assert client.base_url == "http://svc"
    assert client.auth == BasicAuth("John", "12345")


def test_default_client_reads_environment(monkeypatch):
    monkeypatch.setenv("TYPEDREST_BASE_URL", "http://from-env:9000")
    monkeypatch.setenv("TYPEDREST_BEARER_TOKEN", "tok")

    client = RestClient.default()

    assert client.base_url == "http://from-env:9000"
    assert client.auth is not None
