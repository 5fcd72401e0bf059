"""Shared plumbing for geo-IP web services.

Each HTTP locator owns a ``requests.Session`` wrapped in a geopy
RateLimiter, which keeps at least ``throttle_seconds`` between two
requests made by the same instance.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional

import requests
from geopy.extra.rate_limiter import RateLimiter

from ...config import LocatorConfig, get_config
from ...domain.errors import GeoLocatorError
from ...domain.models import GeoLocation, StringSubject
from .base import GeoLocatorBase

# Country name some services return for private and otherwise reserved blocks
RESERVED_COUNTRY = "Reserved"


@dataclass
class HttpGeoLocator(GeoLocatorBase[StringSubject]):
    """Base for locators that query a JSON web service.

    Attributes:
        config: Locator configuration
        session: HTTP session, created on first use when not given
    """

    provider_name = "http"

    config: LocatorConfig = field(default_factory=lambda: get_config().locator)
    session: Optional[requests.Session] = field(default=None, repr=False)

    _fetch: Optional[Callable[..., Any]] = field(default=None, init=False, repr=False)
    _fetch_lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(type(self).__module__)
        if self.session is not None:
            self._fetch = self._create_fetcher(self.session)

    def _create_fetcher(self, session: requests.Session) -> Callable[..., Any]:
        throttle = self.config.throttle_seconds
        # RateLimiter requires error_wait_seconds >= min_delay_seconds
        return RateLimiter(
            session.get,
            min_delay_seconds=throttle,
            error_wait_seconds=max(5.0, throttle),
            max_retries=0,
            swallow_exceptions=False,
        )

    def _get_fetcher(self) -> Callable[..., Any]:
        """Get or initialize the throttled GET function."""
        with self._fetch_lock:
            if self._fetch is None:
                if self.session is None:
                    self.session = requests.Session()
                    self.session.headers["User-Agent"] = self.config.user_agent
                self._fetch = self._create_fetcher(self.session)
            return self._fetch

    def _fetch_json(
        self,
        subject: StringSubject,
        url: str,
        params: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        """GET ``url`` and return the JSON object with lower-cased keys.

        Raises:
            GeoLocatorError: On transport errors, HTTP errors or a body
                that is not a JSON object.
        """
        fetch = self._get_fetcher()
        self._logger.debug(
            "Retrieving location data",
            extra={"subject": subject.value(), "provider": self.provider_name},
        )
        try:
            response = fetch(url, params=params, timeout=self.config.timeout_seconds)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise GeoLocatorError(
                f"{self.provider_name} request failed",
                subject=subject.value(),
                provider=self.provider_name,
                cause=e,
            )
        except ValueError as e:
            raise GeoLocatorError(
                f"{self.provider_name} returned malformed JSON",
                subject=subject.value(),
                provider=self.provider_name,
                cause=e,
            )

        if not isinstance(payload, dict):
            raise GeoLocatorError(
                f"{self.provider_name} returned a non-object response",
                subject=subject.value(),
                provider=self.provider_name,
            )
        return {str(key).lower(): value for key, value in payload.items() if value is not None}

    def _to_location(
        self,
        subject: StringSubject,
        payload: Mapping[str, Any],
        city_key: str,
        country_key: str,
    ) -> GeoLocation[StringSubject]:
        city = str(payload.get(city_key, ""))
        country = str(payload.get(country_key, ""))

        if country == RESERVED_COUNTRY:
            self._logger.debug(
                "Address is in a reserved block", extra={"subject": subject.value()}
            )
            return GeoLocation.invalid(subject)

        try:
            latitude = float(payload["latitude"])
            longitude = float(payload["longitude"])
        except (KeyError, TypeError, ValueError) as e:
            raise GeoLocatorError(
                f"{self.provider_name} response lacks coordinates",
                subject=subject.value(),
                provider=self.provider_name,
                cause=e,
            )

        return (
            GeoLocation.of(subject, latitude, longitude)
            .set_parameter(GeoLocation.KEY_CITY, city)
            .set_parameter(GeoLocation.KEY_COUNTRY, country)
        )

    def dispose(self) -> None:
        if self.session is not None:
            self.session.close()
