"""Shared behaviour for geo-locators.

GeoLocatorBase implements the batch ``locate_all`` on top of ``locate``
with cooperative cancellation, plus no-op ``flush_caches``/``dispose``.
Concrete locators only implement ``locate`` and ``is_available``.
"""

from __future__ import annotations

import logging
from typing import Generic, List, Optional, Sequence, TypeVar

from ...domain.models import GeoLocation
from ...ports.geolocation import ProgressListener, no_progress

S = TypeVar("S")

_logger = logging.getLogger(__name__)


class GeoLocatorBase(Generic[S]):
    """Base class for GeoLocatorPort implementations."""

    def locate(self, subject: S) -> GeoLocation[S]:
        raise NotImplementedError

    def is_available(self) -> bool:
        raise NotImplementedError

    def locate_all(
        self,
        subjects: Sequence[S],
        progress_listener: Optional[ProgressListener] = None,
    ) -> List[GeoLocation[S]]:
        """Locate subjects one by one.

        The listener sees ``(0, n)`` first, ``(i, n)`` after every item
        but the last and ``(n, n)`` at the end. When it returns False the
        results gathered so far are discarded and an empty list comes back.
        """
        listener = progress_listener or no_progress
        total = len(subjects)
        results: List[GeoLocation[S]] = []

        listener(0, total)
        for index, subject in enumerate(subjects, start=1):
            results.append(self.locate(subject))
            if index < total and not listener(index, total):
                _logger.info(
                    "Batch lookup cancelled",
                    extra={"completed": index, "total": total},
                )
                results.clear()
                break
        listener(total, total)
        return results

    def flush_caches(self) -> None:
        pass

    def dispose(self) -> None:
        pass
