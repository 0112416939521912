"""Database models for the weather dashboard."""
from __future__ import annotations

from django.db import models


class CachedWeather(models.Model):
    """Last fetched snapshot for a rounded coordinate pair.

    Rows are overwritten on every successful fetch and never deleted; stale
    rows are simply ignored by readers.
    """

    key = models.CharField(max_length=64, primary_key=True)
    latitude = models.FloatField()
    longitude = models.FloatField()
    payload = models.TextField()
    timestamp = models.DateTimeField()

    class Meta:
        db_table = "weather_cache"

    def __str__(self) -> str:
        return f"{self.key} @ {self.timestamp.isoformat()}"
