"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the application core and external
adapters. They enable dependency injection and make the system testable.
"""

from .cache import CacheStorePort
from .geolocation import GeoLocatorPort, ProgressListener, no_progress
from .projection import ImageProjectionPort, ProjectionPort
from .rendering import MapRendererPort
from .tracing import PathTracerPort

__all__ = [
    # Geo-location
    "GeoLocatorPort",
    "ProgressListener",
    "no_progress",
    # Cache
    "CacheStorePort",
    # Projection
    "ProjectionPort",
    "ImageProjectionPort",
    # Rendering
    "MapRendererPort",
    # Tracing
    "PathTracerPort",
]
