"""
Address -> (lat, lng) with a two-provider fallback.

Nominatim is tried first; Mapbox is used when Nominatim errors or has
no match and a token is configured. Rate-limited calls (429) are
retried with exponential backoff.
"""

from typing import Callable, Optional, Tuple
from urllib.parse import quote
import logging
import time

import requests

from halal_bites.core.config import Settings

logger = logging.getLogger(__name__)

MAPBOX_URL = "https://api.mapbox.com/geocoding/v5/mapbox.places/{address}.json"

Coordinates = Tuple[Optional[float], Optional[float]]


class GeocodingError(Exception):
    pass


class Geocoder:
    def __init__(
        self,
        nominatim_url: str,
        user_agent: str,
        mapbox_token: Optional[str] = None,
        timeout: float = 15,
        max_retries: int = 2,
        session=None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.nominatim_url = nominatim_url
        self.user_agent = user_agent
        self.mapbox_token = mapbox_token
        self.timeout = timeout
        self.max_retries = max_retries
        self.session = session or requests.Session()
        self.sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings) -> "Geocoder":
        return cls(
            nominatim_url=settings.NOMINATIM_URL,
            user_agent=settings.NOMINATIM_USER_AGENT,
            mapbox_token=settings.MAPBOX_TOKEN,
            timeout=settings.GEOCODER_TIMEOUT,
            max_retries=settings.GEOCODER_MAX_RETRIES,
        )

    def geocode(self, address: str) -> Coordinates:
        if not address or not address.strip():
            return None, None

        providers = [("nominatim", self._nominatim)]
        if self.mapbox_token:
            providers.append(("mapbox", self._mapbox))

        for name, lookup in providers:
            try:
                coords = lookup(address)
            except (requests.RequestException, GeocodingError, ValueError, KeyError) as exc:
                logger.warning("Geocoding via %s failed for %r: %s", name, address, exc)
                continue
            if coords is not None:
                return coords
            logger.info("Geocoding via %s found no match for %r", name, address)

        return None, None

    # ------------------------------------------------------------
    # Providers
    # ------------------------------------------------------------

    def _get(self, url: str, **kwargs) -> requests.Response:
        for attempt in range(self.max_retries + 1):
            response = self.session.get(url, timeout=self.timeout, **kwargs)
            if response.status_code != 429:
                break
            if attempt < self.max_retries:
                self.sleep(2 ** attempt)
        else:
            raise GeocodingError("Rate limited")

        if response.status_code != 200:
            raise GeocodingError(f"API error: {response.status_code}")
        return response

    def _nominatim(self, address: str) -> Optional[Tuple[float, float]]:
        response = self._get(
            self.nominatim_url,
            params={"q": address, "format": "json", "limit": 1},
            headers={"User-Agent": self.user_agent},
        )
        data = response.json()
        if not data:
            return None
        return float(data[0]["lat"]), float(data[0]["lon"])

    def _mapbox(self, address: str) -> Optional[Tuple[float, float]]:
        url = MAPBOX_URL.format(address=quote(address))
        response = self._get(url, params={"access_token": self.mapbox_token, "limit": 1})
        features = response.json().get("features")
        if not features:
            return None
        lon, lat = features[0]["center"]
        return float(lat), float(lon)
