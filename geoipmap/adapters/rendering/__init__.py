"""Rendering adapters - Implementations of MapRendererPort.

Available implementations:
- PillowMapRenderer: world map raster with points and curved path lines
- FoliumMapRenderer: interactive HTML map
"""

from .folium_adapter import FoliumMapRenderer
from .pillow_adapter import PillowMapRenderer

__all__ = ["PillowMapRenderer", "FoliumMapRenderer"]
