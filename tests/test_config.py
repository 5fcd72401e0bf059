"""Tests for the pydantic-settings configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from geoipmap.config import AppConfig, MapConfig, get_config, reset_config


def test_defaults():
    config = get_config()
    assert config.locator.providers == ["maxmind", "ipinfodb", "freegeoip"]
    assert config.locator.throttle_seconds == 0.3
    assert config.cache.enabled
    assert config.cache.path == Path("geolocation.cache")
    assert config.map.kind == "miller"
    assert config.map.image_path is None
    assert config.trace.drop_unroutable


def test_config_is_cached():
    assert get_config() is get_config()


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("GEOIPMAP_MAP_KIND", "robinson")
    monkeypatch.setenv("GEOIPMAP_CACHE_ENABLED", "false")
    monkeypatch.setenv("GEOIPMAP_LOCATOR_PROVIDERS", '["freegeoip"]')
    monkeypatch.setenv("GEOIPMAP_LOCATOR_IPINFODB_API_KEY", "secret")
    reset_config()

    config = get_config()

    assert config.map.kind == "robinson"
    assert not config.cache.enabled
    assert config.locator.providers == ["freegeoip"]
    assert config.locator.ipinfodb_api_key == "secret"


def test_unknown_map_kind_rejected():
    with pytest.raises(ValidationError):
        MapConfig(kind="mercator")


def test_unknown_provider_rejected(monkeypatch):
    monkeypatch.setenv("GEOIPMAP_LOCATOR_PROVIDERS", '["geoplugin"]')
    with pytest.raises(ValidationError):
        AppConfig()
