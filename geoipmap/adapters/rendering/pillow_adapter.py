"""Pillow map renderer adapter.

Draws located subjects onto the world map raster and saves the result
as an image file (format chosen by Pillow from the file extension).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from ...config import MapConfig, get_config
from ...domain.errors import RenderingError
from ...domain.models import GeoLocation
from ...mapping import MapImage, MapViewport, SimpleMapRenderer, build_elements


@dataclass
class PillowMapRenderer:
    """Raster map renderer.

    This adapter implements MapRendererPort on top of SimpleMapRenderer.
    The area drawn is the viewport's current region, so callers can zoom
    or pan the viewport before rendering.

    Attributes:
        map_image: Calibrated world map
        config: Map configuration (view size, marker radius, ...)
        viewport: Visible region; the full map when not given
    """

    map_image: MapImage
    config: MapConfig = field(default_factory=lambda: get_config().map)
    viewport: Optional[MapViewport] = None

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        if self.viewport is None:
            self.viewport = MapViewport(
                self.map_image,
                self.config.view_width,
                self.config.view_height,
                self.config.min_zoom_size,
            )

    def render(
        self,
        locations: Sequence[GeoLocation],
        output_path: Path,
        connect: bool = False,
    ) -> Path:
        """Render locations on the map and save to file.

        Args:
            locations: Locations to draw; invalid ones are skipped.
            output_path: Where to save the image.
            connect: Join consecutive locations with curved lines.

        Returns:
            Path to the generated image.

        Raises:
            RenderingError: If the image cannot be written.
        """
        assert self.viewport is not None
        elements = build_elements(locations, connect=connect)
        renderer = SimpleMapRenderer(
            self.map_image,
            point_radius=self.config.point_radius,
            curve_min_distance=self.config.curve_min_distance,
        )
        renderer.add_elements(elements)

        self._logger.info(
            "Rendering map image",
            extra={
                "locations": len(locations),
                "elements": len(elements),
                "region": str(self.viewport.current_region),
                "output_path": str(output_path),
            },
        )

        image = renderer.render_map(
            self.viewport.current_region,
            self.viewport.view_width,
            self.viewport.view_height,
        )
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            image.save(output_path)
        except (OSError, ValueError) as e:
            raise RenderingError(
                f"Failed to save map image: {e}",
                output_path=str(output_path),
                renderer_type="pillow",
                cause=e,
            )
        return output_path
