"""
Error taxonomy shared by the resolver, fetcher, widget and HTTP service.
"""

from typing import Optional


class WeatherWidgetError(Exception):
    """Base exception for weather widget errors."""


class EmptyInputError(WeatherWidgetError):
    """Raised when a query is empty after trimming; no request is issued."""


class LocationNotFoundError(WeatherWidgetError):
    """Raised when the geocoding service returns zero matches."""

    def __init__(self, query: str):
        self.query = query
        super().__init__(f"No location matches '{query}'")


class WeatherUnavailableError(WeatherWidgetError):
    """Raised when a forecast response carries no current-conditions block."""


class TransportError(WeatherWidgetError):
    """Network, HTTP status or parse failure on an upstream call."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
