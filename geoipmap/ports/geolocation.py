"""Geo-location port - Abstraction for resolving subjects to locations.

This protocol defines the contract for geo-IP services, allowing
different implementations (FreeGeoIP, IPInfoDB, MaxMind, ...) to be
stacked behind caching and delegation decorators.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, List, Optional, Protocol, Sequence, TypeVar

if TYPE_CHECKING:
    from ..domain.models import GeoLocation

S = TypeVar("S")

ProgressListener = Callable[[int, int], bool]
"""Called as ``listener(current, total)``; returning False cancels a batch."""


def no_progress(current: int, total: int) -> bool:
    """Progress listener that never cancels."""
    return True


class GeoLocatorPort(Protocol[S]):
    """Port for geo-location services.

    Implementations:
    - adapters/geolocation/freegeoip_adapter.py (FreeGeoIPLocator)
    - adapters/geolocation/ipinfodb_adapter.py (IPInfoDbLocator)
    - adapters/geolocation/maxmind_adapter.py (MaxMindGeoLocator)
    - adapters/geolocation/caching.py (CachingGeoLocator) - decorator
    - adapters/geolocation/delegating.py (DelegatingGeoLocator) - decorator

    Unlocatable subjects are not an error: implementations return a
    GeoLocation with ``is_valid`` set to False.
    """

    def locate(self, subject: S) -> GeoLocation[S]:
        """Locate a single subject.

        Args:
            subject: The subject to locate.

        Returns:
            The subject's location, possibly marked invalid.

        Raises:
            GeoLocatorError: If the provider failed to answer.
        """
        ...

    def locate_all(
        self,
        subjects: Sequence[S],
        progress_listener: Optional[ProgressListener] = None,
    ) -> List[GeoLocation[S]]:
        """Locate several subjects, one after the other.

        Args:
            subjects: The subjects to locate.
            progress_listener: Receives ``(current, total)`` between items;
                returning False cancels the batch and discards all results.

        Returns:
            One location per subject, in order, or an empty list if cancelled.
        """
        ...

    def is_available(self) -> bool:
        """Return whether this locator can currently answer requests."""
        ...

    def flush_caches(self) -> None:
        """Discard any internal caches."""
        ...

    def dispose(self) -> None:
        """Release resources. The instance is not used afterwards.

        Raises:
            CachePersistError: If persisting state failed.
        """
        ...
