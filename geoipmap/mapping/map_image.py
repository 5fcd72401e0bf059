"""A world map raster coupled with its projection and calibration.

The calibration maps the projection's globe coordinates onto the image:
the origin percentages say where 0° latitude / 0° longitude sits on the
image, the scale factors stretch globe units to pixels. Both are tuned
by hand per image and stay caller-configurable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Tuple

from PIL import Image

from ..domain.errors import ConfigurationError
from ..ports.projection import ProjectionPort
from .region import ImageRegion

MapKind = Literal["miller", "robinson"]

# (origin x %, origin y %), (scale x, scale y)
MILLER_CALIBRATION = ((0.5, 0.5009541984732825), (158.5, 213.0))
ROBINSON_CALIBRATION = ((0.4744791666666667, 0.5), (186.0, 360.0))


@dataclass
class MapImage:
    """Map raster plus projection and calibration.

    ``changed`` is a one-shot dirty flag: any calibration change sets it,
    the renderer reads and clears it to know cached element coordinates
    are stale.

    Attributes:
        image: The map raster
        projection: Projection the raster was drawn with
    """

    image: Image.Image
    projection: ProjectionPort

    scale_x: float = field(default=1.0, init=False)
    scale_y: float = field(default=1.0, init=False)
    origin_x_percent: float = field(default=0.5, init=False)
    origin_y_percent: float = field(default=0.5, init=False)
    _changed: bool = field(default=False, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def set_scale(self, scale_x: float, scale_y: float) -> None:
        """Set the factors mapping globe units to image pixels."""
        self.scale_x = scale_x
        self.scale_y = scale_y
        self._changed = True
        self._logger.debug("Map scale changed", extra={"scale_x": scale_x, "scale_y": scale_y})

    def set_origin_percentages(self, x_percent: float, y_percent: float) -> None:
        """Place 0° latitude / 0° longitude on the image.

        Args:
            x_percent: 0 = left-most pixel, 1 = right-most pixel.
            y_percent: 0 = top-most pixel, 1 = bottom-most pixel.

        Raises:
            ValueError: If either value lies outside [0, 1].
        """
        if not 0.0 <= x_percent <= 1.0 or not 0.0 <= y_percent <= 1.0:
            raise ValueError(
                f"Origin percentages must be within [0, 1], got ({x_percent}, {y_percent})"
            )
        self.origin_x_percent = x_percent
        self.origin_y_percent = y_percent
        self._changed = True
        self._logger.debug(
            "Map origin changed", extra={"origin_x": x_percent, "origin_y": y_percent}
        )

    def calibration(self) -> Tuple[Tuple[float, float], Tuple[float, float]]:
        return (
            (self.origin_x_percent, self.origin_y_percent),
            (self.scale_x, self.scale_y),
        )

    def has_changed(self) -> bool:
        return self._changed

    def reset_changed(self) -> None:
        self._changed = False

    def full_region(self) -> ImageRegion:
        return ImageRegion(0, 0, self.width, self.height)

    def limit(self, region: ImageRegion) -> ImageRegion:
        """Fall back to the full image when ``region`` leaves the image.

        This is a reset, not a clamp: a region that is only slightly out
        of bounds still becomes the full image.
        """
        x0, y0 = region.x_origin, region.y_origin
        if (
            x0 < 0
            or y0 < 0
            or x0 >= self.width
            or y0 >= self.height
            or x0 + region.width > self.width
            or y0 + region.height > self.height
        ):
            return self.full_region()
        return region

    @classmethod
    def calibrated(
        cls,
        image: Image.Image,
        projection: ProjectionPort,
        origin: Tuple[float, float],
        scale: Tuple[float, float],
    ) -> "MapImage":
        result = cls(image, projection)
        result.set_origin_percentages(*origin)
        result.set_scale(*scale)
        return result

    @classmethod
    def miller_world_map(cls, image: Image.Image) -> "MapImage":
        """World map drawn with the Miller cylindrical projection."""
        from ..adapters.projection import MillerCylindricalProjection

        origin, scale = MILLER_CALIBRATION
        return cls.calibrated(image, MillerCylindricalProjection(), origin, scale)

    @classmethod
    def robinson_world_map(cls, image: Image.Image) -> "MapImage":
        """World map drawn with the Robinson projection."""
        from ..adapters.projection import RobinsonProjection

        origin, scale = ROBINSON_CALIBRATION
        return cls.calibrated(image, RobinsonProjection(), origin, scale)

    @classmethod
    def load(cls, path: Path, kind: MapKind = "miller") -> "MapImage":
        """Open a map image from disk and apply the calibration for ``kind``.

        Raises:
            ConfigurationError: If ``kind`` is unknown or the image cannot be read.
        """
        try:
            with Image.open(path) as opened:
                image = opened.convert("RGB")
        except OSError as e:
            raise ConfigurationError(
                f"Failed to open world map image {path}",
                setting_name="map.image_path",
                cause=e,
            )

        if kind == "miller":
            return cls.miller_world_map(image)
        if kind == "robinson":
            return cls.robinson_world_map(image)
        raise ConfigurationError(
            f"Unknown map kind: {kind!r}",
            setting_name="map.kind",
            expected_type="miller|robinson",
        )
