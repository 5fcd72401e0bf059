"""Mapping core - From geographic coordinates to view pixels.

- ImageRegion: the visible rectangle of the source image
- MapImage: raster + projection + calibration
- ImageProjection: the composed coordinate → pixel pipeline
- MapViewport: zoom in/out and pan
- elements / renderers: what gets drawn and how
"""

from .elements import (
    ElementFlags,
    ElementKind,
    MapCurvedLine,
    MapElement,
    MapLine,
    MapPoint,
    build_elements,
    element_label,
)
from .image_projection import ImageProjection
from .map_image import MILLER_CALIBRATION, ROBINSON_CALIBRATION, MapImage
from .region import ImageRegion, round_half_up
from .renderers import SimpleMapRenderer, create_renderer, curve_points
from .viewport import MapViewport

__all__ = [
    "ImageRegion",
    "round_half_up",
    "MapImage",
    "MILLER_CALIBRATION",
    "ROBINSON_CALIBRATION",
    "ImageProjection",
    "MapViewport",
    "ElementFlags",
    "ElementKind",
    "MapPoint",
    "MapLine",
    "MapCurvedLine",
    "MapElement",
    "element_label",
    "build_elements",
    "SimpleMapRenderer",
    "create_renderer",
    "curve_points",
]
