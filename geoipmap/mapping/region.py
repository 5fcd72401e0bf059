"""Pixel-space rectangles over the full map image.

An ImageRegion is the part of the source image currently shown in the
view. ``project`` maps source pixels into view pixels, ``unproject`` goes
back. Neither clamps: elements outside the region simply land outside
the view.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True, slots=True)
class ImageRegion:
    """A rectangle in source image pixels, origin at the upper-left corner.

    Attributes:
        x_origin: Left edge in source pixels
        y_origin: Top edge in source pixels
        width: Width in source pixels
        height: Height in source pixels
    """

    x_origin: int
    y_origin: int
    width: int
    height: int

    def top_left_corner(self) -> Tuple[int, int]:
        return self.x_origin, self.y_origin

    def bottom_right_corner(self) -> Tuple[int, int]:
        return self.x_origin + self.width, self.y_origin + self.height

    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def project(
        self, dst_width: int, dst_height: int, x: float, y: float
    ) -> Tuple[float, float]:
        """Convert source image pixels to pixels of a view showing this region.

        Args:
            dst_width: Width the region is rendered at.
            dst_height: Height the region is rendered at.
            x: Source image x.
            y: Source image y.

        Returns:
            View (x, y), possibly outside ``[0, dst_width) x [0, dst_height)``.
        """
        local_x = (x - self.x_origin) / float(self.width)
        local_y = (y - self.y_origin) / float(self.height)
        return local_x * dst_width, local_y * dst_height

    def unproject(
        self, dst_width: int, dst_height: int, x: float, y: float
    ) -> Tuple[int, int]:
        """Convert view pixels back to source image pixels (rounded)."""
        local_x = (x / float(dst_width)) * self.width
        local_y = (y / float(dst_height)) * self.height
        return (
            round_half_up(self.x_origin + local_x),
            round_half_up(self.y_origin + local_y),
        )

    def __str__(self) -> str:
        return (
            f"ImageRegion [x_origin={self.x_origin}, y_origin={self.y_origin}, "
            f"width={self.width}, height={self.height}]"
        )
