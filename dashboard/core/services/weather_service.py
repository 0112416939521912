"""Weather service that combines the provider endpoints with the snapshot cache."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone as dt_timezone
from typing import Any, Dict, List

import logging

from django.utils import timezone

from dashboard.core.abstractions import (
    ForecastPoint,
    SnapshotCache,
    WeatherProvider,
    WeatherService,
    WeatherSnapshot,
)
from dashboard.core.exceptions import ConfigurationError, NotFoundError, UpstreamError


logger = logging.getLogger(__name__)

PLACEHOLDER_API_KEY = "YOUR_OPENWEATHER_API_KEY"


class WeatherAggregator(WeatherService):
    """Fetch current conditions, air quality and forecast as one snapshot."""

    def __init__(
        self,
        provider: WeatherProvider,
        cache: SnapshotCache,
        *,
        api_key: str,
        forecast_points: int = 8,
    ) -> None:
        self._provider = provider
        self._cache = cache
        self._api_key = api_key
        self._forecast_points = forecast_points

    def fetch_by_city(self, city: str) -> WeatherSnapshot:
        self._require_api_key()
        matches = self._provider.geocode(city)
        if not matches:
            raise NotFoundError(f'City "{city}" not found.')
        try:
            latitude = float(matches[0]["lat"])
            longitude = float(matches[0]["lon"])
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamError("Unexpected OpenWeather geocoding response") from exc
        logger.debug("Resolved %r to %s, %s", city, latitude, longitude)
        return self.fetch_by_coordinates(latitude, longitude)

    def fetch_by_coordinates(self, latitude: float, longitude: float) -> WeatherSnapshot:
        self._require_api_key()
        cached = self._cache.get(latitude, longitude)
        if cached is not None:
            return cached

        # The provider session is shared by the workers; it only issues stateless
        # GETs (no cookies, auth handlers or adapter mounting after construction).
        with ThreadPoolExecutor(max_workers=3) as pool:
            futures = [
                pool.submit(self._provider.current, latitude, longitude),
                pool.submit(self._provider.air_quality, latitude, longitude),
                pool.submit(self._provider.forecast, latitude, longitude),
            ]
            current, air, forecast = (future.result() for future in futures)

        snapshot = self._normalize(latitude, longitude, current, air, forecast)
        self._cache.put(latitude, longitude, snapshot)
        return snapshot

    # Helpers ------------------------------------------------------------
    def _require_api_key(self) -> None:
        key = (self._api_key or "").strip()
        if not key or key == PLACEHOLDER_API_KEY:
            raise ConfigurationError("Please set OPENWEATHER_API_KEY to a valid OpenWeather API key.")

    def _normalize(
        self,
        latitude: float,
        longitude: float,
        current: Dict[str, Any],
        air: Dict[str, Any],
        forecast: Dict[str, Any],
    ) -> WeatherSnapshot:
        try:
            main = current["main"]
            condition = current["weather"][0]
            rain = current.get("rain") or {}
            points = self._forecast_series(forecast["list"])
            return WeatherSnapshot(
                temperature=float(main["temp"]),
                feels_like=float(main["feels_like"]),
                humidity=int(main["humidity"]),
                description=str(condition["description"]),
                icon=str(condition["icon"]),
                wind_speed=float((current.get("wind") or {}).get("speed", 0.0)),
                precipitation_probability=points[0].rain_probability if points else 0.0,
                rain_volume_mm=float(rain.get("1h") or 0.0),
                air_quality_index=int(air["list"][0]["main"]["aqi"]),
                city_name=str(current.get("name") or ""),
                latitude=latitude,
                longitude=longitude,
                forecast=tuple(points),
            )
        except (KeyError, IndexError, TypeError, ValueError) as exc:
            logger.warning("Unexpected OpenWeather payload: %s", exc)
            raise UpstreamError("Unexpected OpenWeather response structure") from exc

    def _forecast_series(self, items: List[Dict[str, Any]]) -> List[ForecastPoint]:
        return [
            ForecastPoint(
                time=self._format_time(item["dt"]),
                temperature=float(item["main"]["temp"]),
                rain_probability=round(float(item.get("pop") or 0.0) * 100, 2),
                icon=str(item["weather"][0]["icon"]),
            )
            for item in items[: self._forecast_points]
        ]

    @staticmethod
    def _format_time(value: int) -> str:
        moment = datetime.fromtimestamp(int(value), tz=dt_timezone.utc)
        return timezone.localtime(moment).strftime("%H:%M")


__all__ = ["WeatherAggregator", "PLACEHOLDER_API_KEY"]
