"""Caching geo-locator decorator.

Keeps every looked-up location in memory, keyed by subject, and persists
the whole map through a CacheStorePort when disposed. The persisted
cache is read lazily on first use; a missing, unreadable or malformed
cache is logged and treated as empty.

Concurrent misses for the same subject may both hit the delegate, but
only the first result to reach the cache is kept and returned to every
caller.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, TypeVar

from ...domain.errors import CacheFormatError
from ...domain.models import GeoLocation, StringSubject
from ...ports.cache import CacheStorePort
from ...ports.geolocation import GeoLocatorPort
from ..cache.codec import decode_cache, encode_cache
from .base import GeoLocatorBase

S = TypeVar("S")


@dataclass
class CachingGeoLocator(GeoLocatorBase[S]):
    """GeoLocatorPort decorator with a persistent cache.

    Attributes:
        delegate: Locator consulted on cache misses
        store: Where the cache is persisted
        subject_decoder: Rebuilds a subject from its JSON form
    """

    delegate: GeoLocatorPort[S]
    store: CacheStorePort
    subject_decoder: Callable[[Mapping[str, Any]], S] = StringSubject.from_json  # type: ignore[assignment]

    _cache: Dict[S, GeoLocation[S]] = field(default_factory=dict, init=False, repr=False)
    _loaded: bool = field(default=False, init=False, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    _hits: int = field(default=0, init=False, repr=False)
    _misses: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _read_store(self) -> Dict[S, GeoLocation[S]]:
        if not self.store.exists():
            return {}
        try:
            locations = decode_cache(self.store.read(), self.subject_decoder)
        except (OSError, CacheFormatError) as e:
            self._logger.warning(
                "Failed to load geo-location cache, starting empty",
                extra={"error": str(e)},
            )
            return {}
        self._logger.info("Geo-location cache loaded", extra={"entries": len(locations)})
        return {location.subject: location for location in locations}

    def _ensure_loaded(self) -> None:
        with self._lock:
            if self._loaded:
                return
        # Read outside the lock; the first finished load is kept
        entries = self._read_store()
        with self._lock:
            if not self._loaded:
                self._cache = entries
                self._loaded = True

    def _lookup(self, subject: S) -> Optional[GeoLocation[S]]:
        self._ensure_loaded()
        with self._lock:
            cached = self._cache.get(subject)
            if cached is None:
                self._misses += 1
                return None
            self._hits += 1
            return cached.shallow_copy()

    def locate(self, subject: S) -> GeoLocation[S]:
        """Return the cached location, or ask the delegate and cache its answer.

        Raises:
            GeoLocatorError: If the delegate fails; nothing is cached then.
        """
        cached = self._lookup(subject)
        if cached is not None:
            self._logger.debug("Cache hit", extra={"subject": str(subject)})
            return cached

        self._logger.debug("Cache miss", extra={"subject": str(subject)})
        result = self.delegate.locate(subject)

        self._ensure_loaded()
        with self._lock:
            if not self._loaded:
                # Flushed while the delegate was busy
                return result
            existing = self._cache.get(subject)
            if existing is None:
                self._cache[subject] = result.shallow_copy()
                self._logger.debug(
                    "Cache updated",
                    extra={"subject": str(subject), "size": len(self._cache)},
                )
                return result
            return existing.shallow_copy()

    def is_available(self) -> bool:
        return self.delegate.is_available()

    def flush_caches(self) -> None:
        """Drop the in-memory cache so the next lookup reloads it, then flush the delegate."""
        try:
            with self._lock:
                if self._loaded:
                    self._cache = {}
                    self._loaded = False
                    self._logger.info("Geo-location cache flushed")
        finally:
            self.delegate.flush_caches()

    def dispose(self) -> None:
        """Persist the cache if it was ever loaded, then dispose the delegate.

        Raises:
            CachePersistError: If writing the cache failed.
        """
        try:
            with self._lock:
                if not self._loaded:
                    return
                self.store.write(encode_cache(self._cache.values()))
                self._logger.info(
                    "Geo-location cache persisted", extra={"entries": len(self._cache)}
                )
        finally:
            self.delegate.dispose()

    def stats(self) -> Dict[str, int]:
        """Return cache statistics.

        Returns:
            Dictionary with size and hit/miss counts.
        """
        with self._lock:
            return {"size": len(self._cache), "hits": self._hits, "misses": self._misses}
