"""Cache adapters - Implementations of CacheStorePort, plus the cache file codec.

Available implementations:
- FileCacheStore: Production, single JSON file replaced atomically
- InMemoryCacheStore: Testing
- NullCacheStore: Persistent cache disabled
"""

from .codec import decode_cache, encode_cache
from .file_store import FileCacheStore
from .memory_store import InMemoryCacheStore
from .null_store import NullCacheStore

__all__ = [
    "FileCacheStore",
    "InMemoryCacheStore",
    "NullCacheStore",
    "encode_cache",
    "decode_cache",
]
