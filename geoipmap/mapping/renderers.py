"""Pillow renderers for map elements, and the map renderer that drives them.

One renderer class per ElementKind; ``create_renderer`` maps a kind to
its renderer. SimpleMapRenderer draws the visible region of the map
image and every element on top of it.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Type, Union

import numpy as np
from PIL import Image, ImageDraw

from ..ports.projection import ImageProjectionPort
from .elements import (
    ElementKind,
    MapCurvedLine,
    MapElement,
    MapLine,
    MapPoint,
    element_label,
)
from .image_projection import ImageProjection
from .map_image import MapImage
from .region import ImageRegion, round_half_up

Point = Tuple[float, float]


class PointRenderer:
    """Draws a MapPoint as a filled circle, optionally labelled."""

    def __init__(
        self, projection: ImageProjectionPort, draw: ImageDraw.ImageDraw, radius: int = 3
    ) -> None:
        self.projection = projection
        self.draw = draw
        self.radius = radius

    def render(self, element: MapPoint) -> None:
        x, y = element.ensure_coordinates(self.projection)
        r = self.radius
        self.draw.ellipse((x - r, y - r, x + r, y + r), fill=element.color)
        if element.flags.show_label:
            self.draw.text((x + r + 2, y - r), element_label(element.location), fill=element.color)


class LineRenderer:
    """Draws both end points and a straight line between them."""

    def __init__(
        self, projection: ImageProjectionPort, draw: ImageDraw.ImageDraw, radius: int = 3
    ) -> None:
        self.projection = projection
        self.draw = draw
        self.point_renderer = PointRenderer(projection, draw, radius)

    def render(self, element: MapLine) -> None:
        (x0, y0), (x1, y1) = element.ensure_coordinates(self.projection)
        self.point_renderer.render(element.start)
        self.point_renderer.render(element.end)
        self.draw.line((x0, y0, x1, y1), fill=element.color)


def curve_points(
    p0: Point,
    p1: Point,
    min_distance: float = 40.0,
    min_axis_delta: float = 20.0,
    bulge: float = 10.0,
    steps: int = 10,
) -> List[Point]:
    """Sample an arc from ``p0`` to ``p1``.

    The arc is the parabola through both end points and the midpoint
    pushed ``bulge`` pixels along the segment's normal. Short segments,
    nearly axis-aligned segments and segments whose sampled x values are
    not strictly increasing come back as a straight line (two points).
    """
    v = (p1[0] - p0[0], p1[1] - p0[1])
    if (
        math.hypot(*v) <= min_distance
        or abs(v[0]) <= min_axis_delta
        or abs(v[1]) <= min_axis_delta
    ):
        return [p0, p1]

    length = math.hypot(*v)
    normal = (v[1] / length, -v[0] / length)
    center = ((p0[0] + p1[0]) * 0.5, (p0[1] + p1[1]) * 0.5)
    top = (center[0] - normal[0] * bulge, center[1] - normal[1] * bulge)

    points = sorted((p0, top, p1), key=lambda p: p[0])
    xs = np.array([p[0] for p in points])
    ys = np.array([p[1] for p in points])
    if np.any(np.diff(xs) <= 0):
        return [p0, p1]

    # Three points, degree two: the fit is the exact interpolating polynomial
    coefficients = np.polyfit(xs, ys, 2)
    sample_x = np.linspace(xs[0], xs[-1], steps + 1)
    sample_y = np.polyval(coefficients, sample_x)
    return [(float(x), float(y)) for x, y in zip(sample_x, sample_y)]


class CurvedLineRenderer:
    """Draws both end points and a gentle arc between them."""

    def __init__(
        self,
        projection: ImageProjectionPort,
        draw: ImageDraw.ImageDraw,
        radius: int = 3,
        min_distance: float = 40.0,
    ) -> None:
        self.projection = projection
        self.draw = draw
        self.min_distance = min_distance
        self.point_renderer = PointRenderer(projection, draw, radius)

    def render(self, element: MapCurvedLine) -> None:
        p0, p1 = element.ensure_coordinates(self.projection)
        self.point_renderer.render(element.start)
        self.point_renderer.render(element.end)
        points = curve_points(p0, p1, min_distance=self.min_distance)
        self.draw.line(
            [(round_half_up(x), round_half_up(y)) for x, y in points], fill=element.color
        )


ElementRenderer = Union[PointRenderer, LineRenderer, CurvedLineRenderer]

RENDERERS: Dict[ElementKind, Type[ElementRenderer]] = {
    ElementKind.POINT: PointRenderer,
    ElementKind.LINE: LineRenderer,
    ElementKind.CURVED_LINE: CurvedLineRenderer,
}


def create_renderer(
    kind: ElementKind,
    projection: ImageProjectionPort,
    draw: ImageDraw.ImageDraw,
    radius: int = 3,
    curve_min_distance: float = 40.0,
) -> ElementRenderer:
    """Return the renderer for ``kind``.

    Raises:
        KeyError: If no renderer is registered for ``kind``.
    """
    renderer_cls = RENDERERS[kind]
    if renderer_cls is CurvedLineRenderer:
        return CurvedLineRenderer(projection, draw, radius, min_distance=curve_min_distance)
    return renderer_cls(projection, draw, radius)


@dataclass
class SimpleMapRenderer:
    """Renders a region of a MapImage with elements on top.

    Cached element coordinates are invalidated when the view size, the
    region or the map calibration changes.

    Attributes:
        map_image: The map to draw
        point_radius: Radius of point markers in pixels
        curve_min_distance: Curved lines shorter than this are drawn straight
    """

    map_image: MapImage
    point_radius: int = 3
    curve_min_distance: float = 40.0

    _elements: List[MapElement] = field(default_factory=list, init=False, repr=False)
    _last_size: Optional[Tuple[int, int]] = field(default=None, init=False, repr=False)
    _last_region: Optional[ImageRegion] = field(default=None, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def set_map_image(self, map_image: MapImage) -> None:
        self.map_image = map_image
        self.invalidate_all()

    def add_elements(self, elements: Iterable[MapElement]) -> None:
        self._elements.extend(elements)

    def add_element(self, element: MapElement) -> None:
        self._elements.append(element)

    def remove_element(self, element: MapElement) -> bool:
        try:
            self._elements.remove(element)
        except ValueError:
            return False
        return True

    def remove_all_elements(self) -> None:
        self._elements.clear()

    @property
    def elements(self) -> Sequence[MapElement]:
        return tuple(self._elements)

    def invalidate_all(self) -> None:
        for element in self._elements:
            element.invalidate()

    def _invalidate_if_stale(self, region: ImageRegion, width: int, height: int) -> None:
        stale = (
            self._last_size != (width, height)
            or self._last_region != region
            or self.map_image.has_changed()
        )
        if stale:
            self.invalidate_all()
            self.map_image.reset_changed()
            self._last_size = (width, height)
            self._last_region = region

    def render_map(self, region: ImageRegion, width: int, height: int) -> Image.Image:
        """Draw ``region`` of the map scaled to ``width`` x ``height``."""
        self._invalidate_if_stale(region, width, height)
        projection = ImageProjection(self.map_image, region, width, height)

        box = (
            region.x_origin,
            region.y_origin,
            region.x_origin + region.width,
            region.y_origin + region.height,
        )
        canvas = self.map_image.image.crop(box).resize((width, height)).convert("RGB")
        draw = ImageDraw.Draw(canvas)

        drawn = 0
        renderers: Dict[ElementKind, ElementRenderer] = {}
        for element in self._elements:
            if not element.is_visible(projection):
                continue
            renderer = renderers.get(element.kind)
            if renderer is None:
                renderer = create_renderer(
                    element.kind,
                    projection,
                    draw,
                    self.point_radius,
                    self.curve_min_distance,
                )
                renderers[element.kind] = renderer
            renderer.render(element)
            drawn += 1

        self._logger.debug(
            "Map rendered",
            extra={"elements": len(self._elements), "drawn": drawn, "region": str(region)},
        )
        return canvas

    def closest_element(
        self, x: int, y: int, max_distance_squared: float
    ) -> Optional[MapElement]:
        """Return the element nearest to view pixel (x, y), within range."""
        closest: Optional[MapElement] = None
        closest_distance = math.inf
        for element in self._elements:
            candidate = element.closest_element(x, y, max_distance_squared)
            if candidate is None:
                continue
            distance = candidate.distance_squared(x, y)
            if distance <= max_distance_squared and distance < closest_distance:
                closest = element
                closest_distance = distance
        return closest
