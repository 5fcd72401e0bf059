"""Null cache store - persists nothing.

Used when the persistent cache is disabled in configuration. Entries are
still cached in memory for the lifetime of the locator.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class NullCacheStore:
    """A store that is always empty and discards writes."""

    def exists(self) -> bool:
        return False

    def read(self) -> str:
        return "[]"

    def write(self, text: str) -> None:
        pass

    def clear(self) -> None:
        pass
