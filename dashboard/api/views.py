"""REST API views for weather information."""
from __future__ import annotations

import logging
import math
from functools import lru_cache
from typing import Any, Dict

from django.conf import settings
from django.db import DatabaseError
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from dashboard.core.abstractions import WeatherSnapshot
from dashboard.core.cache import WeatherCache
from dashboard.core.exceptions import ErrorKind, WeatherServiceError
from dashboard.core.insights import aqi_label, compute_insights, condition_for, is_night, ratings
from dashboard.core.providers.openweather import OpenWeatherProvider
from dashboard.core.services.weather_service import WeatherAggregator


logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.CONFIGURATION: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.AUTHENTICATION: status.HTTP_401_UNAUTHORIZED,
}


@lru_cache(maxsize=1)
def get_weather_service() -> WeatherAggregator:
    provider = OpenWeatherProvider(
        api_key=settings.OPENWEATHER_API_KEY,
        base_url=settings.OPENWEATHER_BASE_URL,
        geo_url=settings.OPENWEATHER_GEO_URL,
        timeout=settings.OPENWEATHER_TIMEOUT,
    )
    cache = WeatherCache(
        ttl=settings.WEATHER_CACHE_TTL,
        precision=settings.WEATHER_CACHE_PRECISION,
        using=settings.WEATHER_CACHE_DATABASE,
    )
    return WeatherAggregator(
        provider,
        cache,
        api_key=settings.OPENWEATHER_API_KEY,
        forecast_points=settings.WEATHER_FORECAST_POINTS,
    )


def build_payload(snapshot: WeatherSnapshot) -> Dict[str, Any]:
    """Combine a snapshot with its insights and the display helpers."""
    insights = compute_insights(snapshot)
    weather = snapshot.to_dict()
    weather["aqi_label"] = aqi_label(snapshot.air_quality_index)
    weather["condition"] = condition_for(snapshot.icon)
    weather["is_night"] = is_night(snapshot.icon)
    insights_payload = insights.to_dict()
    insights_payload["ratings"] = ratings(insights.scores)
    return {"weather": weather, "insights": insights_payload}


def error_status(exc: WeatherServiceError) -> int:
    if exc.kind is ErrorKind.UPSTREAM:
        return exc.status_code or status.HTTP_500_INTERNAL_SERVER_ERROR
    return STATUS_BY_KIND[exc.kind]


class WeatherView(APIView):
    """Provide weather and lifestyle insights for coordinates or a city name."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the weather snapshot and insights for the requested location."""
        raw_lat = request.query_params.get("lat")
        raw_lon = request.query_params.get("lon")
        city = (request.query_params.get("city") or "").strip()

        try:
            if raw_lat and raw_lon:
                try:
                    latitude = float(raw_lat)
                    longitude = float(raw_lon)
                except ValueError:
                    latitude = longitude = math.nan
                if not (math.isfinite(latitude) and math.isfinite(longitude)):
                    return Response(
                        {"error": "lat and lon must be valid floating point numbers"},
                        status=status.HTTP_400_BAD_REQUEST,
                    )
                snapshot = get_weather_service().fetch_by_coordinates(latitude, longitude)
            elif city:
                snapshot = get_weather_service().fetch_by_city(city)
            else:
                return Response(
                    {"error": "Latitude/Longitude or City is required"},
                    status=status.HTTP_400_BAD_REQUEST,
                )
        except WeatherServiceError as exc:
            logger.warning("Weather request failed (%s): %s", exc.code, exc.message)
            return Response({"error": exc.message, "code": exc.code}, status=error_status(exc))
        except DatabaseError:
            logger.exception("Weather cache storage failed")
            return Response(
                {"error": "Weather cache storage is unavailable"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(build_payload(snapshot), status=status.HTTP_200_OK)
