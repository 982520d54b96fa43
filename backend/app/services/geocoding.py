"""Best-effort geocoding through the Google Geocoding API.

``GeocodingClient.geocode`` never raises: every failure comes back as a
``GeocodeResult`` carrying a ``GeocodeError`` so the caller decides what to do
with it (event creation logs it and carries on without coordinates).
"""
import logging
from typing import Optional

import requests
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class Coordinates(BaseModel):
    model_config = {"frozen": True}

    latitude: float
    longitude: float


class GeocodeError(BaseModel):
    model_config = {"frozen": True}

    reason: str


class GeocodeResult(BaseModel):
    """Either ``coordinates`` or ``error`` is set, never both."""

    model_config = {"frozen": True}

    coordinates: Optional[Coordinates] = None
    error: Optional[GeocodeError] = None

    @property
    def ok(self) -> bool:
        return self.coordinates is not None

    @classmethod
    def success(cls, latitude: float, longitude: float) -> "GeocodeResult":
        return cls(coordinates=Coordinates(latitude=latitude, longitude=longitude))

    @classmethod
    def failure(cls, reason: str) -> "GeocodeResult":
        return cls(error=GeocodeError(reason=reason))


class GeocodingClient:
    """Client for the geocoding JSON endpoint."""

    def __init__(self, api_key: str, base_url: str, timeout: float = 5.0):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout

    def geocode(self, address: str) -> GeocodeResult:
        if not self.api_key:
            return GeocodeResult.failure("geocoding is not configured")
        if not address or not address.strip():
            return GeocodeResult.failure("empty address")

        try:
            response = requests.get(
                self.base_url,
                params={"address": address, "key": self.api_key},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            return GeocodeResult.failure(f"request failed: {e}")
        except ValueError:
            return GeocodeResult.failure("response is not JSON")

        return self._parse(data)

    @staticmethod
    def _parse(data) -> GeocodeResult:
        if not isinstance(data, dict):
            return GeocodeResult.failure("unexpected response shape")
        status = data.get("status", "OK")
        if status != "OK":
            return GeocodeResult.failure(f"status {status}")
        results = data.get("results") or []
        if not results:
            return GeocodeResult.failure("no results")

        location = (results[0].get("geometry") or {}).get("location") or {}
        lat, lng = location.get("lat"), location.get("lng")
        if lat is None or lng is None:
            return GeocodeResult.failure("partial coordinates")
        try:
            return GeocodeResult.success(float(lat), float(lng))
        except (TypeError, ValueError):
            return GeocodeResult.failure("coordinates are not numeric")
