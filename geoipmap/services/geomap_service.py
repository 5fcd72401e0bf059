"""Geo-IP map service - Main orchestrator.

Ties the geo-locator chain, the path tracer and the map renderers
together for the command line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..domain.errors import RenderingError, TraceError
from ..domain.models import GeoLocation, StringSubject
from ..ports.cache import CacheStorePort
from ..ports.geolocation import GeoLocatorPort, ProgressListener
from ..ports.rendering import MapRendererPort
from ..ports.tracing import PathTracerPort


@dataclass
class GeoMapService:
    """Locates subjects and traced paths and puts them on a map.

    Attributes:
        locator: Geo-locator chain (usually caching over delegating)
        tracer: Optional path tracer
        map_renderer: Optional raster renderer
        html_renderer: Optional HTML renderer
        cache_store: Where the geo-location cache is persisted, if anywhere
    """

    locator: GeoLocatorPort[StringSubject]
    tracer: Optional[PathTracerPort] = None
    map_renderer: Optional[MapRendererPort] = None
    html_renderer: Optional[MapRendererPort] = None
    cache_store: Optional[CacheStorePort] = None

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def locate(
        self,
        subjects: Sequence[str],
        progress_listener: Optional[ProgressListener] = None,
    ) -> List[GeoLocation[StringSubject]]:
        """Locate IP addresses or hostnames.

        Args:
            subjects: Addresses to locate.
            progress_listener: Receives ``(current, total)``; returning
                False cancels the batch.

        Returns:
            One location per subject, or an empty list if cancelled.

        Raises:
            GeoLocatorError: If a provider failed.
            NoLocatorAvailableError: If no provider is available.
        """
        wrapped = [StringSubject(subject) for subject in subjects]
        locations = self.locator.locate_all(wrapped, progress_listener)
        self._logger.info(
            "Subjects located",
            extra={
                "requested": len(wrapped),
                "located": sum(1 for location in locations if location.is_valid),
            },
        )
        return locations

    def trace(
        self,
        host: str,
        on_hop: Optional[Callable[[str], None]] = None,
        progress_listener: Optional[ProgressListener] = None,
    ) -> List[GeoLocation[StringSubject]]:
        """Trace the path to ``host`` and locate every hop.

        Raises:
            TraceError: If no tracer is configured or tracing failed.
            GeoLocatorError: If a provider failed.
        """
        if self.tracer is None:
            raise TraceError("No path tracer configured", address=host)
        hops = self.tracer.trace(host, on_hop)
        return self.locate(hops, progress_listener)

    def render(
        self,
        locations: Sequence[GeoLocation],
        output_path: Path,
        connect: bool = False,
        html: bool = False,
    ) -> Path:
        """Render locations with the raster or the HTML renderer.

        Raises:
            RenderingError: If the requested renderer is not configured
                or rendering failed.
        """
        renderer = self.html_renderer if html else self.map_renderer
        if renderer is None:
            raise RenderingError(
                "No renderer configured",
                output_path=str(output_path),
                renderer_type="html" if html else "raster",
            )
        return renderer.render(locations, output_path, connect=connect)

    def flush_cache(self, persistent: bool = True) -> None:
        """Discard cached locations, on disk too unless ``persistent`` is False."""
        self.locator.flush_caches()
        if persistent and self.cache_store is not None:
            self.cache_store.clear()
        self._logger.info("Geo-location caches flushed", extra={"persistent": persistent})

    def dispose(self) -> None:
        """Release the locator chain, persisting the cache.

        Raises:
            CachePersistError: If the cache could not be written.
        """
        self.locator.dispose()
