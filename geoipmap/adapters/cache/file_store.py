"""File-backed cache store.

Writes go to a temporary file in the target directory which then
replaces the cache file, so a crash mid-write leaves either the old file
or the new one, never a truncated mix.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from ...domain.errors import CachePersistError


@dataclass
class FileCacheStore:
    """Cache store backed by a single file.

    Attributes:
        path: Location of the cache file
        encoding: Text encoding of the file
    """

    path: Path
    encoding: str = "utf-8"

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self._logger = logging.getLogger(__name__)

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> str:
        return self.path.read_text(encoding=self.encoding)

    def write(self, text: str) -> None:
        """Atomically replace the cache file with ``text``.

        Raises:
            CachePersistError: If the file cannot be written.
        """
        directory = self.path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
            )
            with os.fdopen(fd, "w", encoding=self.encoding) as handle:
                handle.write(text)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            raise CachePersistError(
                f"Failed to write cache file {self.path}", path=str(self.path), cause=e
            )
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)

        self._logger.debug(
            "Cache file written", extra={"path": str(self.path), "chars": len(text)}
        )

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()
            self._logger.info("Cache file removed", extra={"path": str(self.path)})
