"""Error taxonomy shared by the provider, the weather service and the API."""
from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    CONFIGURATION = "API_KEY_MISSING"
    NOT_FOUND = "NOT_FOUND"
    AUTHENTICATION = "API_KEY_INVALID"
    UPSTREAM = "UPSTREAM"


class WeatherServiceError(RuntimeError):
    """Base error tagged with the kind of failure and an optional upstream status."""

    kind: ErrorKind = ErrorKind.UPSTREAM

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def code(self) -> str:
        return self.kind.value


class ConfigurationError(WeatherServiceError):
    """The provider credential is missing or still set to the placeholder."""

    kind = ErrorKind.CONFIGURATION


class NotFoundError(WeatherServiceError):
    """Geocoding returned no match for the requested place."""

    kind = ErrorKind.NOT_FOUND


class AuthenticationError(WeatherServiceError):
    """The provider rejected the configured credential."""

    kind = ErrorKind.AUTHENTICATION


class UpstreamError(WeatherServiceError):
    """Any other provider failure: HTTP error, network error or malformed payload."""

    kind = ErrorKind.UPSTREAM


__all__ = [
    "AuthenticationError",
    "ConfigurationError",
    "ErrorKind",
    "NotFoundError",
    "UpstreamError",
    "WeatherServiceError",
]
