"""Things drawn on the map: points, lines and curved lines.

Each element caches the view coordinates it was last projected to. The
cache is a single tuple attribute that is either set or None, so an
``invalidate()`` from another thread at worst costs one extra
recomputation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Sequence, Tuple, Union

from ..domain.models import GeoLocation
from ..ports.projection import ImageProjectionPort

Color = Tuple[int, int, int]

YELLOW: Color = (255, 255, 0)
RED: Color = (255, 0, 0)
GREEN: Color = (0, 255, 0)


class ElementKind(Enum):
    """Element types; the renderer factory picks a renderer by kind."""

    POINT = auto()
    LINE = auto()
    CURVED_LINE = auto()


@dataclass(frozen=True)
class ElementFlags:
    """Rendering hints attached to an element.

    Attributes:
        show_label: Draw the location's label next to the point
        is_endpoint: The point starts or ends a traced path
    """

    show_label: bool = False
    is_endpoint: bool = False


def _inside(projection: ImageProjectionPort, x: float, y: float) -> bool:
    return 0 <= x < projection.width_in_pixels and 0 <= y < projection.height_in_pixels


@dataclass(eq=False)
class MapPoint:
    """A located subject drawn as a dot."""

    location: GeoLocation
    color: Color = YELLOW
    flags: ElementFlags = field(default_factory=ElementFlags)

    _point: Optional[Tuple[int, int]] = field(default=None, init=False, repr=False)

    kind = ElementKind.POINT

    @property
    def point(self) -> Tuple[int, int]:
        """Last projected view coordinates.

        Raises:
            RuntimeError: If the coordinates have not been calculated.
        """
        point = self._point
        if point is None:
            raise RuntimeError("coordinates not calculated")
        return point

    def invalidate(self) -> None:
        self._point = None

    def is_valid(self) -> bool:
        return self._point is not None

    def calculate_coordinates(self, projection: ImageProjectionPort) -> None:
        self._point = projection.project(self.location.coordinate)

    def ensure_coordinates(self, projection: ImageProjectionPort) -> Tuple[int, int]:
        point = self._point
        if point is None:
            point = projection.project(self.location.coordinate)
            self._point = point
        return point

    def is_visible(self, projection: ImageProjectionPort) -> bool:
        x, y = self.ensure_coordinates(projection)
        return _inside(projection, x, y)

    def distance_squared(self, x: int, y: int) -> float:
        point = self._point
        if point is None:
            return math.inf
        dx = x - point[0]
        dy = y - point[1]
        return float(dx * dx + dy * dy)

    def closest_element(
        self, x: int, y: int, max_distance_squared: float
    ) -> Optional["MapPoint"]:
        return self if self.distance_squared(x, y) <= max_distance_squared else None


@dataclass(eq=False)
class MapLine:
    """A straight line between two points; both points are drawn as well."""

    start: MapPoint
    end: MapPoint
    color: Color = YELLOW

    kind = ElementKind.LINE

    @classmethod
    def between(
        cls, start: GeoLocation, end: GeoLocation, color: Color = YELLOW
    ) -> "MapLine":
        return cls(MapPoint(start, color), MapPoint(end, color), color)

    def invalidate(self) -> None:
        self.start.invalidate()
        self.end.invalidate()

    def is_valid(self) -> bool:
        return self.start.is_valid() and self.end.is_valid()

    def calculate_coordinates(self, projection: ImageProjectionPort) -> None:
        self.start.calculate_coordinates(projection)
        self.end.calculate_coordinates(projection)

    def ensure_coordinates(
        self, projection: ImageProjectionPort
    ) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        return self.start.ensure_coordinates(projection), self.end.ensure_coordinates(
            projection
        )

    def is_visible(self, projection: ImageProjectionPort) -> bool:
        (x0, y0), (x1, y1) = self.ensure_coordinates(projection)
        if _inside(projection, x0, y0) or _inside(projection, x1, y1):
            return True
        # Both ends off-screen: visible only if the bounding box crosses the view
        return (
            max(x0, x1) >= 0
            and min(x0, x1) < projection.width_in_pixels
            and max(y0, y1) >= 0
            and min(y0, y1) < projection.height_in_pixels
        )

    def distance_squared(self, x: int, y: int) -> float:
        return min(self.start.distance_squared(x, y), self.end.distance_squared(x, y))

    def closest_element(
        self, x: int, y: int, max_distance_squared: float
    ) -> Optional[MapPoint]:
        d_start = self.start.distance_squared(x, y)
        d_end = self.end.distance_squared(x, y)
        if d_start < d_end:
            if d_start <= max_distance_squared:
                return self.start
        if d_end <= max_distance_squared:
            return self.end
        return None


@dataclass(eq=False)
class MapCurvedLine(MapLine):
    """A line drawn as a slight arc between two points."""

    kind = ElementKind.CURVED_LINE


MapElement = Union[MapPoint, MapLine]


def element_label(location: GeoLocation) -> str:
    """Tooltip/label text for a location."""
    parts = [
        str(part)
        for part in (
            location.parameter(GeoLocation.KEY_CITY),
            location.parameter(GeoLocation.KEY_COUNTRY),
        )
        if part
    ]
    if parts:
        return f"{location.subject} ({', '.join(parts)})"
    return str(location.subject)


def build_elements(
    locations: Sequence[GeoLocation], connect: bool = False, curved: bool = True
) -> List[MapElement]:
    """Turn located subjects into map elements.

    Invalid locations are skipped. With ``connect`` set, consecutive
    locations are joined by lines (a traced path); the first point is
    drawn green, the last red, and both are labelled.
    """
    valid = [location for location in locations if location.is_valid]
    if not connect or len(valid) < 2:
        return [
            MapPoint(location, YELLOW, ElementFlags(show_label=True)) for location in valid
        ]

    line_cls = MapCurvedLine if curved else MapLine
    last = len(valid) - 1
    points: List[MapPoint] = []
    for index, location in enumerate(valid):
        if index == 0:
            points.append(MapPoint(location, GREEN, ElementFlags(True, True)))
        elif index == last:
            points.append(MapPoint(location, RED, ElementFlags(True, True)))
        else:
            points.append(MapPoint(location, YELLOW))
    return [line_cls(start, end) for start, end in zip(points, points[1:])]
