"""Tests for the dependency injection container."""

import pytest

from geoipmap.adapters.cache import FileCacheStore, NullCacheStore
from geoipmap.adapters.geolocation import (
    CachingGeoLocator,
    DelegatingGeoLocator,
    FreeGeoIPLocator,
    MaxMindGeoLocator,
)
from geoipmap.adapters.rendering import PillowMapRenderer
from geoipmap.config import AppConfig, CacheConfig, LocatorConfig, MapConfig
from geoipmap.container import Container, get_container, reset_container
from geoipmap.domain.errors import ConfigurationError
from geoipmap.mapping import MapImage
from geoipmap.ports.cache import CacheStorePort
from geoipmap.ports.geolocation import GeoLocatorPort
from geoipmap.services import GeoMapService


@pytest.fixture
def config(tmp_path):
    return AppConfig(
        cache=CacheConfig(path=tmp_path / "geolocation.cache"),
        locator=LocatorConfig(providers=["maxmind", "freegeoip"]),
    )


class TestRegistration:
    """Registering and resolving factories."""

    def test_singleton(self):
        container = Container()
        container.register(list, list)
        assert container.resolve(list) is container.resolve(list)

    def test_transient(self):
        container = Container()
        container.register(list, list, singleton=False)
        assert container.resolve(list) is not container.resolve(list)

    def test_reregister_replaces_singleton(self):
        container = Container()
        container.register(str, lambda: "first")
        assert container.resolve(str) == "first"
        container.register(str, lambda: "second")
        assert container.resolve(str) == "second"

    def test_unregistered(self):
        with pytest.raises(KeyError):
            Container().resolve(dict)

    def test_clear_all(self):
        container = Container()
        container.register(list, list)
        container.clear_all()
        assert not container.is_registered(list)


class TestDefaultBindings:
    """Production wiring built from configuration."""

    def test_caching_chain(self, config):
        container = Container.create_default(config)
        locator = container.resolve(GeoLocatorPort)

        assert isinstance(locator, CachingGeoLocator)
        assert isinstance(locator.delegate, DelegatingGeoLocator)
        assert [type(c) for c in locator.delegate.candidates] == [
            MaxMindGeoLocator,
            FreeGeoIPLocator,
        ]
        assert isinstance(container.resolve(CacheStorePort), FileCacheStore)

    def test_cache_disabled(self, config):
        config = config.model_copy(update={"cache": CacheConfig(enabled=False)})
        container = Container.create_default(config)

        assert isinstance(container.resolve(GeoLocatorPort), DelegatingGeoLocator)
        assert isinstance(container.resolve(CacheStorePort), NullCacheStore)

    def test_service_without_map_image(self, config):
        container = Container.create_default(config)
        service = container.resolve(GeoMapService)

        assert service.map_renderer is None
        assert service.html_renderer is not None
        assert service.tracer is not None
        with pytest.raises(ConfigurationError):
            container.resolve(MapImage)

    def test_service_with_map_image(self, config, world_image, tmp_path):
        image_path = tmp_path / "world.png"
        world_image.save(image_path)
        config = config.model_copy(
            update={"map": MapConfig(image_path=image_path, kind="robinson")}
        )

        service = Container.create_default(config).resolve(GeoMapService)

        assert isinstance(service.map_renderer, PillowMapRenderer)
        assert service.map_renderer.map_image.projection.name == "Robinson"


def test_default_container_is_shared():
    first = get_container()
    assert get_container() is first
    reset_container()
    assert get_container() is not first
