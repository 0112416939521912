"""Management command to fetch weather using the same stack as the API."""
from __future__ import annotations

import json
import math
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from dashboard.api.views import build_payload, get_weather_service
from dashboard.core.exceptions import WeatherServiceError


class Command(BaseCommand):
    help = "Fetch weather and lifestyle insights for coordinates or a city"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--lat", type=float, help="Latitude")
        parser.add_argument("--lon", type=float, help="Longitude")
        parser.add_argument("--city", type=str, help="City name")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        city = (options.get("city") or "").strip()
        latitude = options.get("lat")
        longitude = options.get("lon")

        try:
            if latitude is not None and longitude is not None:
                if not (math.isfinite(latitude) and math.isfinite(longitude)):
                    raise CommandError("--lat and --lon must be finite numbers")
                snapshot = get_weather_service().fetch_by_coordinates(latitude, longitude)
            elif city:
                snapshot = get_weather_service().fetch_by_city(city)
            else:
                raise CommandError("--lat and --lon, or --city, are required")
        except WeatherServiceError as exc:
            raise CommandError(f"{exc.code}: {exc.message}") from exc

        self.stdout.write(json.dumps(build_payload(snapshot)))
