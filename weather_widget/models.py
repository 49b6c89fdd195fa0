"""
Pydantic models for widget data and service responses.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from weather_widget.conditions import WeatherIcon


class LocationCandidate(BaseModel):
    """A geocoding match offered as a suggestion or resolved from a query."""

    name: str
    country: str = ""
    latitude: float
    longitude: float

    @property
    def label(self) -> str:
        """Display label, e.g. "Paris, France"."""
        if not self.country:
            return self.name
        return f"{self.name}, {self.country}"


class WeatherReading(BaseModel):
    """Normalized current conditions for one location."""

    temperature_c: float
    wind_speed_kmh: float
    wind_direction_deg: float
    condition_code: int
    humidity_percent: Optional[int] = None
    observed_at: datetime


class WeatherPanel(BaseModel):
    """Display strings for the results panel."""

    location: str
    temperature: str
    icon: WeatherIcon
    icon_class: str
    humidity: str
    wind_speed: str
    wind_direction: str


class WeatherReport(BaseModel):
    """Response model for a weather lookup."""

    location: LocationCandidate
    reading: WeatherReading
    panel: WeatherPanel


class SuggestionsResponse(BaseModel):
    """Response model for autocomplete suggestions."""

    query: str
    results: List[LocationCandidate]
