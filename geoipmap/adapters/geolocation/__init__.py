"""Geo-location adapters - Implementations of GeoLocatorPort.

Available implementations:
- FreeGeoIPLocator: FreeGeoIP JSON API
- IPInfoDbLocator: IPInfoDB API (needs an API key)
- MaxMindGeoLocator: local GeoLite2 database (optional geoip2 extra)
- CachingGeoLocator: decorator with a persistent cache
- DelegatingGeoLocator: first available of several locators
"""

from .base import GeoLocatorBase
from .caching import CachingGeoLocator
from .delegating import DelegatingGeoLocator
from .freegeoip_adapter import FreeGeoIPLocator
from .ipinfodb_adapter import IPInfoDbLocator
from .maxmind_adapter import MaxMindGeoLocator

__all__ = [
    "GeoLocatorBase",
    "CachingGeoLocator",
    "DelegatingGeoLocator",
    "FreeGeoIPLocator",
    "IPInfoDbLocator",
    "MaxMindGeoLocator",
]
