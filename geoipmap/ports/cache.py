"""Cache store port - Where the geo-location cache is persisted.

The caching geo-locator keeps its entries in memory and only talks to
the store on first use (read) and on disposal (write). Swapping the
store keeps tests off the filesystem.
"""

from __future__ import annotations

from typing import Protocol


class CacheStorePort(Protocol):
    """Port for persisting the serialized geo-location cache.

    Implementations:
    - adapters/cache/file_store.py (FileCacheStore) - Production
    - adapters/cache/memory_store.py (InMemoryCacheStore) - Testing
    - adapters/cache/null_store.py (NullCacheStore) - Caching disabled
    """

    def exists(self) -> bool:
        """Return whether anything has been persisted yet."""
        ...

    def read(self) -> str:
        """Return the persisted text.

        Raises:
            OSError: If the store cannot be read.
        """
        ...

    def write(self, text: str) -> None:
        """Replace the persisted text.

        Raises:
            CachePersistError: If the store cannot be written.
        """
        ...

    def clear(self) -> None:
        """Remove the persisted text, if any."""
        ...
