"""Folium map renderer adapter.

Exports located subjects to an interactive HTML map: one marker per
valid location and, for traced paths, a polyline through them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from ...domain.errors import RenderingError
from ...domain.models import GeoLocation
from ...mapping.elements import element_label


@dataclass
class FoliumMapRenderer:
    """Folium-based interactive map renderer.

    This adapter implements MapRendererPort using Folium for
    generating interactive HTML maps.

    Attributes:
        zoom_start: Initial zoom level of the map
    """

    zoom_start: int = 2

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def render(
        self,
        locations: Sequence[GeoLocation],
        output_path: Path,
        connect: bool = False,
    ) -> Path:
        """Render locations on a map and save to file.

        Args:
            locations: Locations to draw; invalid ones are skipped.
            output_path: Where to save the HTML file.
            connect: Draw a line through consecutive locations.

        Returns:
            Path to the generated map file.

        Raises:
            RenderingError: If there is nothing to draw or rendering fails.
        """
        valid = [location for location in locations if location.is_valid]
        if not valid:
            raise RenderingError(
                "Cannot render a map without valid locations",
                output_path=str(output_path),
                renderer_type="folium",
            )

        self._logger.info(
            "Rendering HTML map",
            extra={"locations": len(valid), "output_path": str(output_path)},
        )

        try:
            import folium
        except ImportError as e:
            raise RenderingError(
                "Folium not installed",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            )

        try:
            center_lat = sum(location.latitude for location in valid) / len(valid)
            center_lon = sum(location.longitude for location in valid) / len(valid)
            m = folium.Map(location=[center_lat, center_lon], zoom_start=self.zoom_start)

            last = len(valid) - 1
            for i, location in enumerate(valid):
                if connect:
                    icon_color = "green" if i == 0 else "red" if i == last else "blue"
                else:
                    icon_color = "blue"
                folium.Marker(
                    location=[location.latitude, location.longitude],
                    popup=element_label(location),
                    tooltip=str(location.subject),
                    icon=folium.Icon(color=icon_color),
                ).add_to(m)

            if connect and len(valid) >= 2:
                folium.PolyLine(
                    [[location.latitude, location.longitude] for location in valid],
                    weight=2,
                    color="red",
                    opacity=0.8,
                ).add_to(m)

            output_path.parent.mkdir(parents=True, exist_ok=True)
            m.save(str(output_path))
        except Exception as e:
            self._logger.error(
                "Map rendering failed",
                extra={"error": str(e), "output_path": str(output_path)},
            )
            raise RenderingError(
                f"Map rendering failed: {e}",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            )

        self._logger.info("Map rendered successfully", extra={"output_path": str(output_path)})
        return output_path
