"""FreeGeoIP geo-locator adapter.

Queries ``{freegeoip_url}{ip}`` and reads ``city``, ``country_name``,
``latitude`` and ``longitude`` from the JSON answer. Needs no
credentials, so it is always available.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...domain.models import GeoLocation, StringSubject
from .http_base import HttpGeoLocator


@dataclass
class FreeGeoIPLocator(HttpGeoLocator):
    """GeoLocatorPort backed by the FreeGeoIP JSON API."""

    provider_name = "freegeoip"

    def is_available(self) -> bool:
        return True

    def locate(self, subject: StringSubject) -> GeoLocation[StringSubject]:
        """Locate an IP address or hostname.

        Raises:
            GeoLocatorError: If the service could not be queried.
        """
        url = self.config.freegeoip_url.rstrip("/") + "/" + subject.value()
        payload = self._fetch_json(subject, url)
        return self._to_location(subject, payload, "city", "country_name")
