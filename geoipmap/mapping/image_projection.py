"""The composite geographic → view pixel pipeline.

1. degrees → radians → projection → globe (x, y)
2. globe → full image pixels via the MapImage calibration
3. full image pixels → view pixels via the current ImageRegion

Calibration is captured when the ImageProjection is built; build a new
one whenever the map image, region or view size changes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from ..domain.models import Coordinate
from ..ports.projection import ProjectionPort
from .map_image import MapImage
from .region import ImageRegion, round_half_up


@dataclass(frozen=True)
class ImageProjection:
    """Projects coordinates onto a view of ``region`` sized ``view_width`` x ``view_height``."""

    map_image: MapImage
    region: ImageRegion
    view_width: int
    view_height: int

    _projection: ProjectionPort = field(init=False, repr=False)
    _origin: Tuple[float, float] = field(init=False, repr=False)
    _scale: Tuple[float, float] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        origin, scale = self.map_image.calibration()
        object.__setattr__(self, "_projection", self.map_image.projection)
        object.__setattr__(self, "_origin", origin)
        object.__setattr__(self, "_scale", scale)

    @property
    def width_in_pixels(self) -> int:
        return self.view_width

    @property
    def height_in_pixels(self) -> int:
        return self.view_height

    def to_globe(self, coordinate: Coordinate) -> Tuple[float, float]:
        return self._projection.project(
            coordinate.longitude_in_rad(), coordinate.latitude_in_rad()
        )

    def to_image(self, coordinate: Coordinate) -> Tuple[float, float]:
        """Project a coordinate into full source image pixels (unrounded)."""
        globe_x, globe_y = self.to_globe(coordinate)
        image_width = float(self.map_image.width)
        image_height = float(self.map_image.height)

        center_x = self._origin[0] * image_width
        center_y = self._origin[1] * image_height
        scale_x = self._scale[0] * (image_width / 1000.0)
        scale_y = self._scale[1] * (image_height / 1000.0)

        return center_x + globe_x * scale_x, center_y - globe_y * scale_y

    def project(self, coordinate: Coordinate) -> Tuple[int, int]:
        """Project a coordinate into view pixels."""
        image_x, image_y = self.to_image(coordinate)
        view_x, view_y = self.region.project(
            self.view_width, self.view_height, image_x, image_y
        )
        return round_half_up(view_x), round_half_up(view_y)

    def unproject(self, x: float, y: float) -> Tuple[int, int]:
        """Convert view pixels back to full source image pixels."""
        return self.region.unproject(self.view_width, self.view_height, x, y)

    def contains(self, x: float, y: float) -> bool:
        return 0 <= x < self.view_width and 0 <= y < self.view_height
