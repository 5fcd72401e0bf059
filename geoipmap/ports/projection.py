"""Projection ports - Map projections and the image projection pipeline.

A ProjectionPort turns geographic radians into abstract "globe"
cartesian coordinates. An ImageProjectionPort is the full pipeline that
renderers use to turn a Coordinate into view pixels.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Tuple

if TYPE_CHECKING:
    from ..domain.models import Coordinate


class ProjectionPort(Protocol):
    """Port for cartographic projections.

    Implementation: adapters/projection/pyproj_adapter.py
    """

    name: str

    def project(self, longitude_rad: float, latitude_rad: float) -> Tuple[float, float]:
        """Project a point given in radians.

        Args:
            longitude_rad: Longitude in radians.
            latitude_rad: Latitude in radians.

        Returns:
            Globe cartesian (x, y), in projection-defined units.
        """
        ...


class ImageProjectionPort(Protocol):
    """Port consumed by map element renderers.

    Implementation: mapping/image_projection.py (ImageProjection)
    """

    def project(self, coordinate: Coordinate) -> Tuple[int, int]:
        """Map a geographic coordinate to view pixel coordinates."""
        ...

    @property
    def width_in_pixels(self) -> int:
        """Width of the destination view."""
        ...

    @property
    def height_in_pixels(self) -> int:
        """Height of the destination view."""
        ...
