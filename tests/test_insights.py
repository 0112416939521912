from __future__ import annotations

from dataclasses import replace

import pytest

from dashboard.core.abstractions import WeatherSnapshot
from dashboard.core.insights import (
    HEATWAVE_ALERT,
    HUMID_ADVICE,
    MODERATE_AIR_ADVICE,
    PLEASANT_ADVICE,
    POOR_AIR_ADVICE,
    POOR_AIR_ALERT,
    RAIN_ADVICE,
    RAIN_ALERT,
    WARM_ADVICE,
    aqi_label,
    compute_insights,
    condition_for,
    exercise_score,
    is_night,
    laundry_score,
    outdoor_score,
    rating_for,
    travel_score,
)


def make_snapshot(**overrides) -> WeatherSnapshot:
    base = WeatherSnapshot(
        temperature=25.0,
        feels_like=25.0,
        humidity=50,
        description="clear sky",
        icon="01d",
        wind_speed=3.0,
        precipitation_probability=0.0,
        rain_volume_mm=0.0,
        air_quality_index=1,
        city_name="Testville",
        latitude=10.0,
        longitude=20.0,
    )
    return replace(base, **overrides)


def test_pleasant_day_has_perfect_scores_and_fallback_advice() -> None:
    insights = compute_insights(make_snapshot())

    assert insights.alerts == []
    assert insights.advice == [PLEASANT_ADVICE]
    assert insights.scores.laundry == 100
    assert insights.scores.outdoor == 100
    assert insights.scores.travel == 100
    assert insights.scores.exercise == 100


def test_light_rain_on_a_humid_day() -> None:
    weather = make_snapshot(
        description="light rain",
        temperature=22.0,
        humidity=85,
        wind_speed=5.0,
        air_quality_index=2,
        precipitation_probability=70.0,
    )

    insights = compute_insights(weather)

    assert insights.alerts == [RAIN_ALERT]
    assert insights.advice == [HUMID_ADVICE, RAIN_ADVICE]
    # 100 - 30 (humidity) - 80 (rain), clamped
    assert insights.scores.laundry == 0
    # 100 - 20 (humidity) - 60 (rain)
    assert insights.scores.outdoor == 20
    assert insights.scores.travel == 60
    assert insights.scores.exercise == 50


@pytest.mark.parametrize(
    ("overrides", "expected"),
    [
        ({"humidity": 80}, 80),
        ({"humidity": 75, "temperature": 18.0}, 70),
        ({"temperature": 19.0}, 80),
        ({"description": "moderate rain"}, 20),
        ({"humidity": 70}, 100),
    ],
)
def test_laundry_penalties(overrides, expected) -> None:
    assert laundry_score(make_snapshot(**overrides)) == expected


@pytest.mark.parametrize(
    ("overrides", "expected"),
    [
        ({"temperature": 38.0}, 70),
        ({"temperature": 35.5}, 95),
        ({"temperature": 10.0}, 75),
        ({"humidity": 81}, 80),
        ({"air_quality_index": 4}, 50),
        ({"description": "rain showers"}, 40),
        ({"temperature": 35.0, "humidity": 80}, 100),
    ],
)
def test_outdoor_penalties(overrides, expected) -> None:
    assert outdoor_score(make_snapshot(**overrides)) == expected


@pytest.mark.parametrize(
    ("overrides", "expected"),
    [
        ({"description": "heavy intensity rain"}, 60),
        ({"temperature": 39.0}, 70),
        ({"wind_speed": 12.0}, 80),
        ({"temperature": 39.0, "wind_speed": 12.0}, 50),
        ({"wind_speed": 10.0}, 100),
    ],
)
def test_travel_penalties(overrides, expected) -> None:
    assert travel_score(make_snapshot(**overrides)) == expected


@pytest.mark.parametrize(
    ("overrides", "expected"),
    [
        ({"air_quality_index": 4}, 30),
        ({"temperature": 33.0}, 70),
        ({"humidity": 90}, 80),
        ({"humidity": 85}, 100),
        ({"air_quality_index": 5, "temperature": 33.0}, 0),
        ({"description": "light rain"}, 50),
    ],
)
def test_exercise_penalties(overrides, expected) -> None:
    assert exercise_score(make_snapshot(**overrides)) == expected


@pytest.mark.parametrize(
    "overrides",
    [
        {"humidity": 200, "description": "heavy rain", "temperature": 60.0, "air_quality_index": 5, "wind_speed": 50.0},
        {"temperature": -40.0, "humidity": 0},
        {"temperature": 1e6},
        {"humidity": -500},
    ],
)
def test_scores_are_bounded_integers(overrides) -> None:
    scores = compute_insights(make_snapshot(**overrides)).scores

    for value in (scores.laundry, scores.outdoor, scores.travel, scores.exercise):
        assert isinstance(value, int)
        assert 0 <= value <= 100


def test_rain_detection_ignores_case() -> None:
    insights = compute_insights(make_snapshot(description="Light Rain"))

    assert RAIN_ALERT in insights.alerts
    assert insights.scores.travel == 60


def test_rain_alert_from_probability_alone() -> None:
    wet = compute_insights(make_snapshot(description="overcast clouds", precipitation_probability=51.0))
    borderline = compute_insights(make_snapshot(description="overcast clouds", precipitation_probability=50.0))

    assert wet.alerts == [RAIN_ALERT]
    assert wet.advice == [RAIN_ADVICE]
    # probability never feeds the scores
    assert wet.scores.laundry == 100
    assert borderline.alerts == []


def test_heatwave_and_warm_day_are_exclusive() -> None:
    heatwave = compute_insights(make_snapshot(temperature=36.0))
    warm = compute_insights(make_snapshot(temperature=31.0))

    assert heatwave.alerts == [HEATWAVE_ALERT]
    assert WARM_ADVICE not in heatwave.advice
    assert warm.alerts == []
    assert warm.advice == [WARM_ADVICE]


def test_air_quality_advice() -> None:
    poor = compute_insights(make_snapshot(air_quality_index=4))
    moderate = compute_insights(make_snapshot(air_quality_index=3))

    assert poor.alerts == [POOR_AIR_ALERT]
    assert poor.advice == [POOR_AIR_ADVICE]
    assert moderate.alerts == []
    assert moderate.advice == [MODERATE_AIR_ADVICE]


def test_rules_keep_their_order() -> None:
    weather = make_snapshot(humidity=90, description="thunderstorm with rain", temperature=36.0, air_quality_index=5)

    insights = compute_insights(weather)

    assert insights.advice == [HUMID_ADVICE, RAIN_ADVICE, POOR_AIR_ADVICE]
    assert insights.alerts == [RAIN_ALERT, HEATWAVE_ALERT, POOR_AIR_ALERT]


def test_insights_serialize_to_plain_dict() -> None:
    payload = compute_insights(make_snapshot()).to_dict()

    assert payload == {
        "scores": {"laundry": 100, "outdoor": 100, "travel": 100, "exercise": 100},
        "advice": [PLEASANT_ADVICE],
        "alerts": [],
    }


@pytest.mark.parametrize(("score", "rating"), [(100, "good"), (71, "good"), (70, "fair"), (41, "fair"), (40, "poor"), (0, "poor")])
def test_rating_bands(score, rating) -> None:
    assert rating_for(score) == rating


def test_aqi_labels() -> None:
    assert [aqi_label(value) for value in range(1, 6)] == ["Good", "Fair", "Moderate", "Poor", "Very Poor"]
    assert aqi_label(0) == "Unknown"
    assert aqi_label(6) == "Unknown"


@pytest.mark.parametrize(
    ("icon", "condition", "night"),
    [
        ("01d", "clear", False),
        ("03n", "clouds", True),
        ("09d", "rain", False),
        ("10n", "rain", True),
        ("11d", "thunderstorm", False),
        ("13d", "snow", False),
        ("50n", "mist", True),
        ("99d", "unknown", False),
    ],
)
def test_icon_interpretation(icon, condition, night) -> None:
    assert condition_for(icon) == condition
    assert is_night(icon) is night
