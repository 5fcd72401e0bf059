"""IPInfoDB geo-locator adapter.

Queries the ``ip-city`` endpoint with an API key taken from the
configuration or, failing that, from the first line of the key file.
The locator is only available when a key can be found.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...domain.errors import GeoLocatorError
from ...domain.models import GeoLocation, StringSubject
from .http_base import HttpGeoLocator


@dataclass
class IPInfoDbLocator(HttpGeoLocator):
    """GeoLocatorPort backed by the IPInfoDB API."""

    provider_name = "ipinfodb"

    def api_key(self) -> Optional[str]:
        """Return the configured API key, or None when there is none."""
        if self.config.ipinfodb_api_key:
            return self.config.ipinfodb_api_key

        key_file = self.config.ipinfodb_api_key_file
        try:
            if not key_file.is_file():
                return None
            with key_file.open(encoding="utf-8") as handle:
                line = handle.readline().strip()
        except OSError as e:
            self._logger.warning(
                "Cannot read API key file", extra={"path": str(key_file), "error": str(e)}
            )
            return None
        return line or None

    def is_available(self) -> bool:
        return self.api_key() is not None

    def locate(self, subject: StringSubject) -> GeoLocation[StringSubject]:
        """Locate an IP address.

        Raises:
            GeoLocatorError: If no API key is configured or the service
                could not be queried.
        """
        key = self.api_key()
        if key is None:
            raise GeoLocatorError(
                f"No IPInfoDB API key configured (looked in {self.config.ipinfodb_api_key_file})",
                subject=subject.value(),
                provider=self.provider_name,
            )

        payload = self._fetch_json(
            subject,
            self.config.ipinfodb_url,
            params={"format": "json", "key": key, "ip": subject.value()},
        )
        return self._to_location(subject, payload, "cityname", "countryname")
