"""In-memory cache store.

Useful for testing and for runs where the cache must not outlive the
process.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class InMemoryCacheStore:
    """Cache store keeping the serialized text in memory.

    Attributes:
        text: Currently stored text, None when nothing was written
        writes: Every text written, oldest first
    """

    text: Optional[str] = None
    writes: List[str] = field(default_factory=list)

    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def exists(self) -> bool:
        with self._lock:
            return self.text is not None

    def read(self) -> str:
        with self._lock:
            if self.text is None:
                raise FileNotFoundError("nothing stored")
            return self.text

    def write(self, text: str) -> None:
        with self._lock:
            self.text = text
            self.writes.append(text)

    def clear(self) -> None:
        with self._lock:
            self.text = None
