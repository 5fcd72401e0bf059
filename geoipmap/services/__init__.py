"""Services layer - Application orchestration.

Available services:
- GeoMapService: locate subjects and traced paths, render maps
"""

from .geomap_service import GeoMapService

__all__ = ["GeoMapService"]
