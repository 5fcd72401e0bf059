"""Domain layer - Core models and errors.

This module contains the coordinate and geo-location models and the
typed errors used throughout the application.
"""

from .errors import (
    CacheFormatError,
    CachePersistError,
    ConfigurationError,
    GeoIPMapError,
    GeoLocatorError,
    NoLocatorAvailableError,
    RenderingError,
    TraceError,
)
from .models import (
    Coordinate,
    GeoLocation,
    ParameterValue,
    StringSubject,
    Subject,
    parameter_type_tag,
)

__all__ = [
    # Models
    "Coordinate",
    "GeoLocation",
    "ParameterValue",
    "StringSubject",
    "Subject",
    "parameter_type_tag",
    # Errors
    "GeoIPMapError",
    "GeoLocatorError",
    "NoLocatorAvailableError",
    "CacheFormatError",
    "CachePersistError",
    "ConfigurationError",
    "RenderingError",
    "TraceError",
]
