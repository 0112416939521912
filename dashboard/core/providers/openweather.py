"""OpenWeather weather provider."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests
from requests import Response

from dashboard.core.abstractions import WeatherProvider
from dashboard.core.exceptions import AuthenticationError, UpstreamError


logger = logging.getLogger(__name__)

INVALID_KEY_MESSAGE = (
    "The OpenWeather API key provided is invalid or not yet active. "
    "It can take up to 2 hours for new keys to activate."
)


class OpenWeatherProvider(WeatherProvider):
    """Integration with the OpenWeather current, air pollution, forecast and geocoding endpoints.

    The session is only used for stateless GET requests, so it may be shared
    by the threads that fetch the three weather endpoints concurrently.
    """

    name = "openweather"

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = "https://api.openweathermap.org/data/2.5",
        geo_url: str = "https://api.openweathermap.org/geo/1.0/direct",
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key.strip()
        self.base_url = base_url.rstrip("/")
        self.geo_url = geo_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def current(self, latitude: float, longitude: float) -> Dict[str, Any]:
        return self._get(f"{self.base_url}/weather", {"lat": latitude, "lon": longitude, "units": "metric"})

    def air_quality(self, latitude: float, longitude: float) -> Dict[str, Any]:
        return self._get(f"{self.base_url}/air_pollution", {"lat": latitude, "lon": longitude})

    def forecast(self, latitude: float, longitude: float) -> Dict[str, Any]:
        return self._get(f"{self.base_url}/forecast", {"lat": latitude, "lon": longitude, "units": "metric"})

    def geocode(self, city: str) -> List[Dict[str, Any]]:
        """Return the best matching places for ``city`` (at most one)."""
        return self._get(self.geo_url, {"q": city, "limit": 1}) or []

    def _get(self, url: str, params: Dict[str, Any]) -> Any:
        query = dict(params, appid=self.api_key)
        try:
            response = self.session.get(url, params=query, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("OpenWeather request to %s failed: %s", url, exc)
            raise UpstreamError(f"OpenWeather request failed: {exc}") from exc
        logger.debug("OpenWeather %s returned %s", url, response.status_code)
        self._handle_response(response)
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError("OpenWeather returned a non-JSON response") from exc

    def _handle_response(self, response: Response) -> None:
        if response.status_code == 401:
            logger.warning("OpenWeather rejected the API key")
            raise AuthenticationError(INVALID_KEY_MESSAGE, status_code=401)
        if response.status_code >= 400:
            message = self._error_message(response)
            logger.warning("OpenWeather returned %s: %s", response.status_code, message)
            raise UpstreamError(message, status_code=response.status_code)

    @staticmethod
    def _error_message(response: Response) -> str:
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return f"HTTP {response.status_code}: {response.text[:200]}"


__all__ = ["OpenWeatherProvider", "INVALID_KEY_MESSAGE"]
