from __future__ import annotations

import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError


GEO_URL = "https://owm.test/geo/1.0/direct"

pytestmark = pytest.mark.django_db


def test_fetch_by_coordinates_prints_payload(configured, openweather) -> None:
    out = StringIO()

    call_command("weather_fetch", lat=12.97, lon=77.59, stdout=out)

    payload = json.loads(out.getvalue())
    assert payload["weather"]["city_name"] == "Bengaluru"
    assert payload["insights"]["scores"]["travel"] == 60


def test_fetch_by_city(configured, openweather) -> None:
    openweather.get(GEO_URL, json=[{"name": "Bengaluru", "lat": 12.97, "lon": 77.59}])
    out = StringIO()

    call_command("weather_fetch", city="Bengaluru", stdout=out)

    assert json.loads(out.getvalue())["weather"]["aqi_label"] == "Fair"


def test_location_is_required(configured) -> None:
    with pytest.raises(CommandError):
        call_command("weather_fetch")


def test_service_errors_become_command_errors(configured, requests_mock) -> None:
    requests_mock.get(GEO_URL, json=[])

    with pytest.raises(CommandError, match="NOT_FOUND"):
        call_command("weather_fetch", city="Atlantis")


@pytest.mark.parametrize("lat", [float("inf"), float("nan")])
def test_non_finite_coordinates_are_rejected(configured, requests_mock, lat) -> None:
    with pytest.raises(CommandError, match="finite"):
        call_command("weather_fetch", lat=lat, lon=2.0)

    assert requests_mock.call_count == 0
