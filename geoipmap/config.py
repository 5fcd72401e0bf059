"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for all configuration:
provider order and endpoints, the throttle window, cache location, map
calibration preset and logging.

Configuration can be overridden via environment variables:
- GEOIPMAP_LOCATOR_PROVIDERS='["maxmind","freegeoip"]'
- GEOIPMAP_LOCATOR_IPINFODB_API_KEY=...
- GEOIPMAP_CACHE_PATH=/tmp/geolocation.cache
- GEOIPMAP_MAP_KIND=robinson
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ProviderName = Literal["freegeoip", "ipinfodb", "maxmind"]


class LocatorConfig(BaseSettings):
    """Geo-location provider configuration.

    Environment variables prefixed with GEOIPMAP_LOCATOR_.
    """

    model_config = SettingsConfigDict(env_prefix="GEOIPMAP_LOCATOR_")

    # First available provider in this order wins
    providers: List[ProviderName] = Field(
        default_factory=lambda: ["maxmind", "ipinfodb", "freegeoip"]
    )

    freegeoip_url: str = "https://freegeoip.app/json/"
    ipinfodb_url: str = "https://api.ipinfodb.com/v3/ip-city/"
    ipinfodb_api_key: Optional[str] = None
    ipinfodb_api_key_file: Path = Path("ipinfo.apikey")
    maxmind_db_path: Path = Path("GeoLite2-City.mmdb")

    throttle_seconds: float = Field(default=0.3, ge=0.0)
    timeout_seconds: float = 10.0
    user_agent: str = "geoipmap"


class CacheConfig(BaseSettings):
    """Persistent geo-location cache configuration.

    Environment variables prefixed with GEOIPMAP_CACHE_.
    """

    model_config = SettingsConfigDict(env_prefix="GEOIPMAP_CACHE_")

    enabled: bool = True
    path: Path = Path("geolocation.cache")


class MapConfig(BaseSettings):
    """World map image and rendering configuration.

    Environment variables prefixed with GEOIPMAP_MAP_.
    """

    model_config = SettingsConfigDict(env_prefix="GEOIPMAP_MAP_")

    kind: Literal["miller", "robinson"] = "miller"
    image_path: Optional[Path] = None
    view_width: int = 1024
    view_height: int = 768
    min_zoom_size: int = 10
    point_radius: int = 3
    curve_min_distance: float = 40.0


class TraceConfig(BaseSettings):
    """Path tracing configuration.

    Environment variables prefixed with GEOIPMAP_TRACE_.
    """

    model_config = SettingsConfigDict(env_prefix="GEOIPMAP_TRACE_")

    traceroute_path: Path = Path("/usr/bin/traceroute.db")
    tracepath_path: Path = Path("/usr/bin/tracepath")
    drop_unroutable: bool = True


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with GEOIPMAP_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="GEOIPMAP_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.locator.providers)
        print(config.cache.path)

    Environment variables prefixed with GEOIPMAP_.
    """

    model_config = SettingsConfigDict(env_prefix="GEOIPMAP_")

    locator: LocatorConfig = Field(default_factory=LocatorConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    map: MapConfig = Field(default_factory=MapConfig)
    trace: TraceConfig = Field(default_factory=TraceConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
