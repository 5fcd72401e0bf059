"""Rendering port - Abstraction for producing map output files.

This protocol defines the contract for rendering located subjects,
allowing different implementations (Pillow raster, Folium HTML) to be
used by the service layer.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import GeoLocation


class MapRendererPort(Protocol):
    """Port for map rendering.

    Implementations:
    - adapters/rendering/pillow_adapter.py (PillowMapRenderer)
    - adapters/rendering/folium_adapter.py (FoliumMapRenderer)
    """

    def render(
        self,
        locations: Sequence[GeoLocation],
        output_path: Path,
        connect: bool = False,
    ) -> Path:
        """Render locations on a map and save to file.

        Args:
            locations: Locations to draw; invalid ones are skipped.
            output_path: Where to save the rendered map.
            connect: Draw lines between consecutive locations (trace paths).

        Returns:
            Path to the generated map file.
        """
        ...
