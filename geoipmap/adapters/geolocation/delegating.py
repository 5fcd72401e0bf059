"""Delegating geo-locator - first available provider wins.

Availability is re-checked on every call, so a provider that goes away
(or appears, e.g. a database file being installed) is picked up on the
next request. There is no fallback within a request: whichever locator
is selected answers it, errors included.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, TypeVar

from ...domain.errors import NoLocatorAvailableError
from ...domain.models import GeoLocation
from ...ports.geolocation import GeoLocatorPort, ProgressListener

S = TypeVar("S")


@dataclass
class DelegatingGeoLocator:
    """Routes every call to the first available candidate.

    Attributes:
        candidates: Locators in order of preference
    """

    candidates: Sequence[GeoLocatorPort] = field(default_factory=list)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.candidates = list(self.candidates)
        self._logger = logging.getLogger(__name__)

    def _candidate_names(self) -> List[str]:
        return [type(candidate).__name__ for candidate in self.candidates]

    def _first_available(self) -> Optional[GeoLocatorPort]:
        for candidate in self.candidates:
            if candidate.is_available():
                return candidate
        return None

    def _require_available(self) -> GeoLocatorPort:
        candidate = self._first_available()
        if candidate is None:
            raise NoLocatorAvailableError(
                "No geo locators available", candidates=self._candidate_names()
            )
        self._logger.debug(
            "Delegating to locator", extra={"locator": type(candidate).__name__}
        )
        return candidate

    def locate(self, subject: S) -> GeoLocation[S]:
        """Locate through the first available candidate.

        Raises:
            NoLocatorAvailableError: If no candidate is available.
        """
        return self._require_available().locate(subject)

    def locate_all(
        self,
        subjects: Sequence[S],
        progress_listener: Optional[ProgressListener] = None,
    ) -> List[GeoLocation[S]]:
        """Batch-locate through the first available candidate.

        Raises:
            NoLocatorAvailableError: If no candidate is available.
        """
        return self._require_available().locate_all(subjects, progress_listener)

    def is_available(self) -> bool:
        return self._first_available() is not None

    def flush_caches(self) -> None:
        candidate = self._first_available()
        if candidate is None:
            self._logger.info("No available locator to flush")
            return
        candidate.flush_caches()

    def dispose(self) -> None:
        candidate = self._first_available()
        if candidate is None:
            self._logger.info("No available locator to dispose")
            return
        candidate.dispose()
