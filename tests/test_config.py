"""Tests for environment configuration."""

import pytest

from maasapi.config import MAASConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("MAAS_URL", "MAAS_API_VERSION", "VERIFY_SSL", "MAAS_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    monkeypatch.setenv("MAAS_URL", "http://maas.example.com:5240/MAAS")
    config = MAASConfig()
    assert config.maas_url == "http://maas.example.com:5240/MAAS"
    assert config.api_version is None
    assert config.api_versions == ["2.0"]
    assert config.verify_ssl is True
    assert config.timeout == 30


def test_overrides(monkeypatch):
    monkeypatch.setenv("MAAS_URL", "https://maas.example.com/MAAS")
    monkeypatch.setenv("MAAS_API_VERSION", "2.0")
    monkeypatch.setenv("VERIFY_SSL", "False")
    monkeypatch.setenv("MAAS_TIMEOUT", "2.5")
    config = MAASConfig()
    assert config.api_versions == ["2.0"]
    assert config.verify_ssl is False
    assert config.timeout == 2.5


def test_url_required():
    with pytest.raises(ValueError, match="MAAS_URL is required"):
        MAASConfig()


@pytest.mark.parametrize("name, value, message", [
    ("MAAS_TIMEOUT", "soon", "MAAS_TIMEOUT must be a number"),
    ("MAAS_TIMEOUT", "0", "MAAS_TIMEOUT must be positive"),
    ("MAAS_API_VERSION", "1.0", "MAAS_API_VERSION 1.0 is not supported"),
])
def test_invalid_settings(monkeypatch, name, value, message):
    monkeypatch.setenv("MAAS_URL", "http://maas.example.com:5240/MAAS")
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=message):
        MAASConfig()
