"""Map projections backed by pyproj.

Projections run on a unit sphere, so the globe coordinates they return
are in radians-scale units; MapImage calibration turns them into pixels.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Tuple

from pyproj import CRS, Transformer

_GEOGRAPHIC = "+proj=longlat +R=1 +no_defs"


@dataclass(frozen=True)
class PyprojProjection:
    """Any PROJ projection on a unit sphere.

    Attributes:
        name: Human-readable name of the projection
        proj4_string: PROJ definition of the target projection
    """

    name: str
    proj4_string: str

    _transformer: Transformer = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "_transformer",
            Transformer.from_crs(
                CRS.from_proj4(_GEOGRAPHIC),
                CRS.from_proj4(self.proj4_string),
                always_xy=True,
            ),
        )

    def project(self, longitude_rad: float, latitude_rad: float) -> Tuple[float, float]:
        x, y = self._transformer.transform(
            math.degrees(longitude_rad), math.degrees(latitude_rad)
        )
        return float(x), float(y)


@dataclass(frozen=True)
class MillerCylindricalProjection(PyprojProjection):
    name: str = "Miller Cylindrical"
    proj4_string: str = "+proj=mill +R=1 +no_defs"


@dataclass(frozen=True)
class RobinsonProjection(PyprojProjection):
    name: str = "Robinson"
    proj4_string: str = "+proj=robin +R=1 +no_defs"
