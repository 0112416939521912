"""Lifestyle scores and advice derived from a weather snapshot.

Everything here is a pure function of the snapshot: no I/O and no state.
Each score starts at 100, every matching penalty is subtracted and the
result is clamped to 0..100.
"""
from __future__ import annotations

from typing import Dict, List

from dashboard.core.abstractions import LifestyleInsights, LifestyleScores, WeatherSnapshot


HUMID_ADVICE = "It's quite sticky today. Stay hydrated and prefer cotton clothes."
RAIN_ALERT = "Rain expected soon. Don't forget your umbrella!"
RAIN_ADVICE = "Maybe a good day for indoor activities."
HEATWAVE_ALERT = "Heatwave warning! Avoid direct sun exposure between 12 PM and 4 PM."
WARM_ADVICE = "Warm day ahead. Keep a water bottle handy."
POOR_AIR_ALERT = "Poor air quality. Wear a mask if heading outdoors."
POOR_AIR_ADVICE = "Sensitive groups should avoid prolonged outdoor exertion."
MODERATE_AIR_ADVICE = "Moderate air quality. Fine for most, but keep an eye out."
PLEASANT_ADVICE = "The weather looks pleasant! Great time for a quick walk."

# Percent, compared against the snapshot's precipitation probability.
RAIN_ALERT_THRESHOLD = 50.0

AQI_LABELS = ("Good", "Fair", "Moderate", "Poor", "Very Poor")


def compute_insights(weather: WeatherSnapshot) -> LifestyleInsights:
    scores = LifestyleScores(
        laundry=laundry_score(weather),
        outdoor=outdoor_score(weather),
        travel=travel_score(weather),
        exercise=exercise_score(weather),
    )

    advice: List[str] = []
    alerts: List[str] = []

    if weather.humidity > 80:
        advice.append(HUMID_ADVICE)

    if weather.precipitation_probability > RAIN_ALERT_THRESHOLD or is_rainy(weather):
        alerts.append(RAIN_ALERT)
        advice.append(RAIN_ADVICE)

    if weather.temperature > 35:
        alerts.append(HEATWAVE_ALERT)
    elif weather.temperature > 30:
        advice.append(WARM_ADVICE)

    if weather.air_quality_index >= 4:
        alerts.append(POOR_AIR_ALERT)
        advice.append(POOR_AIR_ADVICE)
    elif weather.air_quality_index == 3:
        advice.append(MODERATE_AIR_ADVICE)

    if not advice and not alerts:
        advice.append(PLEASANT_ADVICE)

    return LifestyleInsights(scores=scores, advice=advice, alerts=alerts)


def is_rainy(weather: WeatherSnapshot) -> bool:
    return "rain" in weather.description.lower()


def laundry_score(w: WeatherSnapshot) -> int:
    score = 100.0
    if w.humidity > 70:
        score -= (w.humidity - 70) * 2
    if is_rainy(w):
        score -= 80
    if w.temperature < 20:
        score -= 20
    return _clamp(score)


def outdoor_score(w: WeatherSnapshot) -> int:
    score = 100.0
    if w.temperature > 35:
        score -= (w.temperature - 35) * 10
    if w.temperature < 15:
        score -= (15 - w.temperature) * 5
    if w.humidity > 80:
        score -= 20
    if w.air_quality_index >= 4:
        score -= 50
    if is_rainy(w):
        score -= 60
    return _clamp(score)


def travel_score(w: WeatherSnapshot) -> int:
    score = 100.0
    if is_rainy(w):
        score -= 40
    if w.temperature > 38:
        score -= 30
    if w.wind_speed > 10:
        score -= 20
    return _clamp(score)


def exercise_score(w: WeatherSnapshot) -> int:
    score = 100.0
    if w.air_quality_index >= 4:
        score -= 70
    if w.temperature > 32:
        score -= 30
    if w.humidity > 85:
        score -= 20
    if is_rainy(w):
        score -= 50
    return _clamp(score)


def rating_for(score: int) -> str:
    """Traffic-light band used by the dashboard for a score."""
    if score > 70:
        return "good"
    if score > 40:
        return "fair"
    return "poor"


def ratings(scores: LifestyleScores) -> Dict[str, str]:
    return {
        "laundry": rating_for(scores.laundry),
        "outdoor": rating_for(scores.outdoor),
        "travel": rating_for(scores.travel),
        "exercise": rating_for(scores.exercise),
    }


def aqi_label(aqi: int) -> str:
    if 1 <= aqi <= len(AQI_LABELS):
        return AQI_LABELS[aqi - 1]
    return "Unknown"


def condition_for(icon: str) -> str:
    """Map a provider icon code such as ``10d`` to a broad condition group."""
    prefix = icon[:2]
    if prefix == "01":
        return "clear"
    if prefix in ("02", "03", "04"):
        return "clouds"
    if prefix in ("09", "10"):
        return "rain"
    if prefix == "11":
        return "thunderstorm"
    if prefix == "13":
        return "snow"
    if prefix == "50":
        return "mist"
    return "unknown"


def is_night(icon: str) -> bool:
    return icon.endswith("n")


def _clamp(score: float) -> int:
    return int(round(max(0.0, min(100.0, score))))


__all__ = [
    "aqi_label",
    "compute_insights",
    "condition_for",
    "exercise_score",
    "is_night",
    "is_rainy",
    "laundry_score",
    "outdoor_score",
    "rating_for",
    "ratings",
    "travel_score",
]
