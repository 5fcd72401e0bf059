"""MaxMind GeoLite2 geo-locator adapter.

Looks addresses up in a local GeoLite2 City database through the
``geoip2`` library (optional extra: ``pip install geoipmap[maxmind]``).
The database reader is opened on first use and closed by ``dispose()``.
"""

from __future__ import annotations

import ipaddress
import logging
import socket
import threading
from dataclasses import dataclass, field
from typing import Any, Optional

from ...config import LocatorConfig, get_config
from ...domain.errors import GeoLocatorError
from ...domain.models import GeoLocation, StringSubject
from .base import GeoLocatorBase


def _resolve(host: str) -> str:
    try:
        ipaddress.ip_address(host)
        return host
    except ValueError:
        return socket.gethostbyname(host)


@dataclass
class MaxMindGeoLocator(GeoLocatorBase[StringSubject]):
    """GeoLocatorPort backed by a local MaxMind database.

    Attributes:
        config: Locator configuration (``maxmind_db_path``)
    """

    provider_name = "maxmind"

    config: LocatorConfig = field(default_factory=lambda: get_config().locator)

    _reader: Optional[Any] = field(default=None, init=False, repr=False)
    _reader_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def is_available(self) -> bool:
        return self.config.maxmind_db_path.is_file()

    def _get_reader(self) -> Any:
        """Get or open the database reader."""
        with self._reader_lock:
            if self._reader is not None:
                return self._reader

            try:
                import geoip2.database
            except ImportError as e:
                raise GeoLocatorError(
                    "geoip2 not installed", provider=self.provider_name, cause=e
                )

            path = self.config.maxmind_db_path
            try:
                self._reader = geoip2.database.Reader(str(path))
            except (OSError, ValueError) as e:
                raise GeoLocatorError(
                    f"Failed to open MaxMind database {path}",
                    provider=self.provider_name,
                    cause=e,
                )
            self._logger.info("MaxMind database opened", extra={"path": str(path)})
            return self._reader

    def locate(self, subject: StringSubject) -> GeoLocation[StringSubject]:
        """Locate an IP address or hostname in the database.

        Addresses missing from the database come back as invalid locations.

        Raises:
            GeoLocatorError: If the database cannot be opened or the
                hostname cannot be resolved.
        """
        reader = self._get_reader()
        from geoip2.errors import AddressNotFoundError

        try:
            response = reader.city(_resolve(subject.value()))
        except AddressNotFoundError:
            self._logger.debug(
                "Address not in database", extra={"subject": subject.value()}
            )
            return GeoLocation.invalid(subject)
        except (OSError, ValueError) as e:
            raise GeoLocatorError(
                "MaxMind lookup failed",
                subject=subject.value(),
                provider=self.provider_name,
                cause=e,
            )

        latitude = response.location.latitude
        longitude = response.location.longitude
        if latitude is None or longitude is None:
            return GeoLocation.invalid(subject)

        location = GeoLocation.of(subject, float(latitude), float(longitude))
        if response.city.name is not None:
            location.set_parameter(GeoLocation.KEY_CITY, response.city.name)
        if response.country.name is not None:
            location.set_parameter(GeoLocation.KEY_COUNTRY, response.country.name)
        return location

    def dispose(self) -> None:
        with self._reader_lock:
            try:
                if self._reader is not None:
                    self._reader.close()
            finally:
                self._reader = None
