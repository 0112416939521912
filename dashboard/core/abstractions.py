"""Core abstractions for the weather dashboard domain."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Tuple


@dataclass(frozen=True, slots=True)
class ForecastPoint:
    """One step of the upcoming forecast, rain probability in percent."""

    time: str
    temperature: float
    rain_probability: float
    icon: str


@dataclass(frozen=True, slots=True)
class WeatherSnapshot:
    """Normalized weather for a location.

    Units:
    - temperatures in Celsius
    - wind speed in metres per second (m/s)
    - precipitation probability in percent (0-100)
    - rain volume over the last hour in millimetres (mm)
    - air quality index on the provider's 1 (good) to 5 (very poor) scale
    """

    temperature: float
    feels_like: float
    humidity: int
    description: str
    icon: str
    wind_speed: float
    precipitation_probability: float
    rain_volume_mm: float
    air_quality_index: int
    city_name: str
    latitude: float
    longitude: float
    forecast: Tuple[ForecastPoint, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["forecast"] = [asdict(point) for point in self.forecast]
        return payload

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "WeatherSnapshot":
        values = dict(payload)
        values["forecast"] = tuple(ForecastPoint(**point) for point in values.get("forecast") or ())
        return cls(**values)


@dataclass(frozen=True, slots=True)
class LifestyleScores:
    laundry: int
    outdoor: int
    travel: int
    exercise: int


@dataclass(frozen=True)
class LifestyleInsights:
    """Scores plus informational advice and warnings, in rule order."""

    scores: LifestyleScores
    advice: List[str] = field(default_factory=list)
    alerts: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class WeatherProvider(Protocol):
    """Upstream source for raw current, air quality, forecast and geocoding data."""

    name: str

    def current(self, latitude: float, longitude: float) -> Dict[str, Any]:
        ...

    def air_quality(self, latitude: float, longitude: float) -> Dict[str, Any]:
        ...

    def forecast(self, latitude: float, longitude: float) -> Dict[str, Any]:
        ...

    def geocode(self, city: str) -> List[Dict[str, Any]]:
        ...


class SnapshotCache(Protocol):
    """Storage for recently fetched snapshots keyed by rounded coordinates."""

    def get(self, latitude: float, longitude: float) -> Optional[WeatherSnapshot]:
        ...

    def put(self, latitude: float, longitude: float, snapshot: WeatherSnapshot) -> None:
        ...


class WeatherService(Protocol):
    """High level service that exposes weather snapshots to the API layer."""

    def fetch_by_coordinates(self, latitude: float, longitude: float) -> WeatherSnapshot:
        """Return a snapshot for the provided coordinates."""
        ...

    def fetch_by_city(self, city: str) -> WeatherSnapshot:
        """Resolve a place name and return its snapshot."""
        ...


__all__ = [
    "ForecastPoint",
    "LifestyleInsights",
    "LifestyleScores",
    "SnapshotCache",
    "WeatherProvider",
    "WeatherService",
    "WeatherSnapshot",
]
