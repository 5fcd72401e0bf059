"""Zoom and pan over a MapImage.

MapViewport holds the region currently shown and the view size, and
implements the drag-to-zoom-in, zoom-out and pan protocol. Every change
produces a new ImageRegion; out-of-bounds results go through
``MapImage.limit`` and may reset to the full image.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from .image_projection import ImageProjection
from .map_image import MapImage
from .region import ImageRegion, round_half_up


@dataclass
class MapViewport:
    """The visible part of a map image and the size it is shown at.

    Attributes:
        map_image: The map being viewed
        view_width: View width in pixels
        view_height: View height in pixels
        min_zoom_size: Zoom-in rectangles narrower or shorter than this
            (in source pixels) are rejected
    """

    map_image: MapImage
    view_width: int
    view_height: int
    min_zoom_size: int = 10
    region: Optional[ImageRegion] = None

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        if self.region is None:
            self.region = self.map_image.full_region()

    @property
    def current_region(self) -> ImageRegion:
        assert self.region is not None
        return self.region

    def _height_to_width(self) -> float:
        return self.view_height / float(self.view_width)

    def image_projection(self) -> ImageProjection:
        return ImageProjection(
            self.map_image, self.current_region, self.view_width, self.view_height
        )

    def resize(self, view_width: int, view_height: int) -> None:
        self.view_width = view_width
        self.view_height = view_height

    def reset(self) -> ImageRegion:
        self.region = self.map_image.full_region()
        return self.region

    def zoom_in(self, x0: int, y0: int, x1: int, y1: int) -> bool:
        """Zoom into the view rectangle spanned by two corners.

        The new region keeps the view's aspect ratio: its height is
        recomputed from its width.

        Returns:
            False if the rectangle was too small and the region was kept.
        """
        region = self.current_region
        min_x, max_x = min(x0, x1), max(x0, x1)
        min_y, max_y = min(y0, y1), max(y0, y1)

        src_x0, src_y0 = region.unproject(self.view_width, self.view_height, min_x, min_y)
        src_x1, src_y1 = region.unproject(self.view_width, self.view_height, max_x, max_y)

        new_width = src_x1 - src_x0
        new_height = round_half_up(new_width * self._height_to_width())

        if new_width < self.min_zoom_size or new_height < self.min_zoom_size:
            self._logger.debug(
                "Zoom rectangle too small, ignored",
                extra={"width": new_width, "height": new_height},
            )
            return False

        self.region = ImageRegion(src_x0, src_y0, new_width, new_height)
        self._logger.debug("Zoomed in", extra={"region": str(self.region)})
        return True

    def zoom_out(self) -> ImageRegion:
        """Double the region's width around its center."""
        region = self.current_region
        center_x = region.x_origin + region.width // 2
        center_y = region.y_origin + region.height // 2

        new_width = region.width * 2
        new_height = round_half_up(new_width * self._height_to_width())

        candidate = ImageRegion(
            center_x - new_width // 2, center_y - new_height // 2, new_width, new_height
        )
        self.region = self.map_image.limit(candidate)
        self._logger.debug("Zoomed out", extra={"region": str(self.region)})
        return self.region

    def pan(self, dx: int, dy: int) -> ImageRegion:
        """Move the region by a view-pixel delta (content follows the cursor)."""
        region = self.current_region
        shift_x = round_half_up(dx * region.width / float(self.view_width))
        shift_y = round_half_up(dy * region.height / float(self.view_height))
        candidate = ImageRegion(
            region.x_origin - shift_x, region.y_origin - shift_y, region.width, region.height
        )
        self.region = self.map_image.limit(candidate)
        return self.region
