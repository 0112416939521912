from __future__ import annotations

import pytest

from requests_mock import Mocker

from dashboard.api.views import get_weather_service


BASE_URL = "https://owm.test/data/2.5"
GEO_URL = "https://owm.test/geo/1.0/direct"

# 2023-11-14 22:13:20 UTC, forecast steps are three hours apart.
FORECAST_START = 1700000000


@pytest.fixture
def requests_mock():
    with Mocker() as mock:
        yield mock


@pytest.fixture(autouse=True)
def _reset_weather_service():
    get_weather_service.cache_clear()
    yield
    get_weather_service.cache_clear()


@pytest.fixture
def current_payload() -> dict:
    return {
        "coord": {"lon": 77.59, "lat": 12.97},
        "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}],
        "main": {"temp": 22.0, "feels_like": 22.4, "pressure": 1012, "humidity": 85},
        "wind": {"speed": 5.0, "deg": 240},
        "rain": {"1h": 0.25},
        "dt": FORECAST_START,
        "name": "Bengaluru",
    }


@pytest.fixture
def air_payload() -> dict:
    return {"coord": {"lon": 77.59, "lat": 12.97}, "list": [{"main": {"aqi": 2}, "dt": FORECAST_START}]}


@pytest.fixture
def forecast_payload() -> dict:
    pops = [0.7, 0.29, 0.0, 0.1, 0.5, 0.55, 1.0, 0.0, 0.9, 0.9]
    return {
        "cnt": len(pops),
        "list": [
            {
                "dt": FORECAST_START + index * 3 * 3600,
                "main": {"temp": 20.0 + index},
                "weather": [{"icon": "10n" if index % 2 else "04d"}],
                "pop": pop,
            }
            for index, pop in enumerate(pops)
        ],
    }


@pytest.fixture
def openweather(requests_mock, current_payload, air_payload, forecast_payload):
    """Register successful responses for the three weather endpoints."""
    requests_mock.get(f"{BASE_URL}/weather", json=current_payload)
    requests_mock.get(f"{BASE_URL}/air_pollution", json=air_payload)
    requests_mock.get(f"{BASE_URL}/forecast", json=forecast_payload)
    return requests_mock


@pytest.fixture
def configured(settings):
    settings.OPENWEATHER_API_KEY = "test-key"
    settings.OPENWEATHER_BASE_URL = BASE_URL
    settings.OPENWEATHER_GEO_URL = GEO_URL
    return settings
