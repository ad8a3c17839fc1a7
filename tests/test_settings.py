# tests/test_settings.py

"""Tests for environment-driven settings."""

from listing_attributes.config import Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("ATTRIBUTE_SERVICE_URL", raising=False)
    monkeypatch.delenv("DEGRADE_MODE", raising=False)

    settings = Settings(_env_file=None)

    assert settings.attribute_service_url == "http://localhost:8000"
    assert settings.degrade_mode == "atomic"
    assert settings.store_timeout_seconds > 0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("ATTRIBUTE_SERVICE_URL", "http://attributes.internal:9000")
    monkeypatch.setenv("DEGRADE_MODE", "partial")

    settings = Settings(_env_file=None)

    assert settings.attribute_service_url == "http://attributes.internal:9000"
    assert settings.degrade_mode == "partial"


def test_api_keys_from_environment(monkeypatch):
    monkeypatch.setenv("API_KEY_SELLER", "abc123")

    assert Settings(_env_file=None).get_api_keys()["abc123"] == "seller"
