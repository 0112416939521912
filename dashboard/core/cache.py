from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Callable, Optional

from django.utils import timezone

from dashboard.core.abstractions import WeatherSnapshot
from dashboard.core.models import CachedWeather


logger = logging.getLogger(__name__)


class WeatherCache:
    """Database backed snapshot cache keyed by rounded coordinates.

    Entries older than ``ttl`` are treated as misses but left in place; the
    next successful fetch for the same key overwrites them.
    """

    def __init__(
        self,
        *,
        ttl: float = 15 * 60,
        precision: int = 2,
        using: str = "default",
        time_func: Callable[[], datetime] = timezone.now,
    ) -> None:
        if precision < 0:
            raise ValueError("precision must be non-negative")
        self._ttl = timedelta(seconds=ttl)
        self._quantum = Decimal(1).scaleb(-precision)
        self._using = using
        self._time_func = time_func

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def key_for(self, latitude: float, longitude: float) -> str:
        return f"{self._round(latitude)}_{self._round(longitude)}"

    def get(self, latitude: float, longitude: float) -> Optional[WeatherSnapshot]:
        key = self.key_for(latitude, longitude)
        row = CachedWeather.objects.using(self._using).filter(key=key).first()
        if row is None:
            logger.debug("Weather cache miss for %s", key)
            return None
        age = self._time_func() - row.timestamp
        if age >= self._ttl:
            logger.debug("Weather cache entry %s is stale (age %s)", key, age)
            return None
        try:
            snapshot = WeatherSnapshot.from_dict(json.loads(row.payload))
        except (ValueError, TypeError, KeyError) as exc:
            # Rows written with an older snapshot layout; the next put replaces them.
            logger.warning("Ignoring undecodable weather cache entry %s: %s", key, exc)
            return None
        logger.debug("Weather cache hit for %s", key)
        return snapshot

    def put(self, latitude: float, longitude: float, snapshot: WeatherSnapshot) -> None:
        key = self.key_for(latitude, longitude)
        CachedWeather.objects.using(self._using).update_or_create(
            key=key,
            defaults={
                "latitude": latitude,
                "longitude": longitude,
                "payload": json.dumps(snapshot.to_dict()),
                "timestamp": self._time_func(),
            },
        )

    def _round(self, value: float) -> Decimal:
        rounded = Decimal(str(value)).quantize(self._quantum, rounding=ROUND_HALF_EVEN)
        if rounded.is_zero():
            return rounded.copy_abs()
        return rounded


__all__ = ["WeatherCache"]
