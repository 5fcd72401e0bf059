"""Typed domain errors for geoipmap.

All errors inherit from GeoIPMapError and can optionally wrap a root
cause exception for debugging.

Callers can tell a missing provider (NoLocatorAvailableError, usually a
configuration problem) apart from a provider failing at runtime
(GeoLocatorError, usually a network problem).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence


@dataclass
class GeoIPMapError(Exception):
    """Base error for the geoipmap domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class GeoLocatorError(GeoIPMapError):
    """A geo-location provider failed to answer.

    Covers network errors, HTTP errors and malformed responses. Never
    retried by the core.

    Attributes:
        subject: The subject being located
        provider: Name of the provider that failed
    """

    subject: str = ""
    provider: str = ""


@dataclass
class NoLocatorAvailableError(GeoIPMapError):
    """None of the configured geo-locators reported itself available.

    Attributes:
        candidates: Names of the locators that were tried
    """

    candidates: Sequence[str] = field(default_factory=tuple)


@dataclass
class CacheFormatError(GeoIPMapError):
    """The persisted geo-location cache could not be parsed.

    Raised for invalid JSON, missing fields and unknown parameter type
    tags. Always fatal to the whole load.

    Attributes:
        type_tag: The offending parameter type tag, if any
    """

    type_tag: Optional[str] = None


@dataclass
class CachePersistError(GeoIPMapError):
    """Writing the geo-location cache failed.

    Attributes:
        path: Location of the cache file
    """

    path: Optional[str] = None


@dataclass
class ConfigurationError(GeoIPMapError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None


@dataclass
class RenderingError(GeoIPMapError):
    """Map rendering failed.

    Attributes:
        output_path: Path where rendering was attempted
        renderer_type: Type of renderer that failed
    """

    output_path: Optional[str] = None
    renderer_type: str = ""


@dataclass
class TraceError(GeoIPMapError):
    """Tracing the network path to a host failed.

    Attributes:
        address: The host or address being traced
        tool: The tracing executable used, if any
    """

    address: str = ""
    tool: Optional[str] = None
