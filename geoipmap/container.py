"""Dependency injection container.

This module provides a simple DI container without external frameworks.
It allows registering and resolving dependencies for the application.

Design principles:
1. No magic - explicit registration and resolution
2. Testable - easy to swap implementations
3. Lazy loading - adapters instantiated on first use
4. Thread-safe - locators may be shared between worker threads
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set, Type, TypeVar

from .config import AppConfig, get_config

T = TypeVar("T")


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        service = container.resolve(GeoMapService)

        # Testing
        container = Container()
        container.register(GeoLocatorPort, lambda: FakeLocator())
        locator = container.resolve(GeoLocatorPort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[Any, Callable[[], Any]] = field(default_factory=dict, repr=False)
    _singletons: Dict[Any, Any] = field(default_factory=dict, repr=False)
    _singleton_types: Set[Any] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: Any,
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            self._singletons.pop(port_type, None)
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)

    def resolve(self, port_type: Type[T]) -> T:
        """Resolve an instance of a port type.

        Args:
            port_type: The type to resolve.

        Returns:
            An instance of the requested type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    def is_registered(self, port_type: Any) -> bool:
        return port_type in self._factories

    def clear_singletons(self) -> None:
        """Clear all cached singletons.

        Call this in tests to ensure fresh instances.
        """
        with self._lock:
            self._singletons.clear()

    def clear_all(self) -> None:
        """Clear all registrations and singletons."""
        with self._lock:
            self._factories.clear()
            self._singletons.clear()
            self._singleton_types.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        The geo-locator chain is a DelegatingGeoLocator over the configured
        providers, wrapped in a CachingGeoLocator unless caching is
        disabled. The raster renderer is only wired when a world map
        image is configured.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.
        """
        from .adapters.cache import FileCacheStore, NullCacheStore
        from .adapters.geolocation import (
            CachingGeoLocator,
            DelegatingGeoLocator,
            FreeGeoIPLocator,
            IPInfoDbLocator,
            MaxMindGeoLocator,
        )
        from .adapters.rendering import FoliumMapRenderer, PillowMapRenderer
        from .adapters.tracing import TracePathTracer
        from .domain.errors import ConfigurationError
        from .domain.models import StringSubject
        from .mapping import MapImage
        from .ports.cache import CacheStorePort
        from .ports.geolocation import GeoLocatorPort
        from .ports.rendering import MapRendererPort
        from .ports.tracing import PathTracerPort
        from .services import GeoMapService

        config = config or get_config()
        container = cls(config=config)

        # Cache persistence
        def create_store() -> CacheStorePort:
            if config.cache.enabled:
                return FileCacheStore(config.cache.path)
            return NullCacheStore()

        container.register(CacheStorePort, create_store)

        # Geo-location providers, in configured order
        provider_factories: Dict[str, Callable[[], GeoLocatorPort]] = {
            "maxmind": lambda: MaxMindGeoLocator(config.locator),
            "ipinfodb": lambda: IPInfoDbLocator(config.locator),
            "freegeoip": lambda: FreeGeoIPLocator(config.locator),
        }

        def create_locator() -> GeoLocatorPort:
            providers: List[GeoLocatorPort] = [
                provider_factories[name]() for name in config.locator.providers
            ]
            delegating = DelegatingGeoLocator(providers)
            if not config.cache.enabled:
                return delegating
            return CachingGeoLocator(
                delegating,
                container.resolve(CacheStorePort),
                StringSubject.from_json,
            )

        container.register(GeoLocatorPort, create_locator)

        # Tracing
        container.register(PathTracerPort, lambda: TracePathTracer(config.trace))

        # Map image and rendering
        def create_map_image() -> MapImage:
            if config.map.image_path is None:
                raise ConfigurationError(
                    "No world map image configured",
                    setting_name="map.image_path",
                    expected_type="path to a Miller or Robinson world map",
                )
            return MapImage.load(config.map.image_path, config.map.kind)

        container.register(MapImage, create_map_image)
        container.register(
            MapRendererPort,
            lambda: PillowMapRenderer(container.resolve(MapImage), config.map),
        )
        container.register(FoliumMapRenderer, lambda: FoliumMapRenderer())

        # Main service
        def create_service() -> GeoMapService:
            map_renderer = (
                container.resolve(MapRendererPort)
                if config.map.image_path is not None
                else None
            )
            return GeoMapService(
                locator=container.resolve(GeoLocatorPort),
                tracer=container.resolve(PathTracerPort),
                map_renderer=map_renderer,
                html_renderer=container.resolve(FoliumMapRenderer),
                cache_store=container.resolve(CacheStorePort),
            )

        container.register(GeoMapService, create_service)

        return container


# Global default container (lazy initialized)
_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get the default application container.

    Returns:
        The default Container instance (creates one if needed).
    """
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Reset the default container.

    Call this in tests to ensure a fresh container.
    """
    global _default_container
    with _container_lock:
        if _default_container is not None:
            _default_container.clear_all()
        _default_container = None
