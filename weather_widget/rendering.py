"""
Display formatting for weather readings and an in-memory widget view.
"""

from typing import List, Optional

from weather_widget.conditions import icon_class_for_code, icon_for_code
from weather_widget.config import WidgetConfig
from weather_widget.models import LocationCandidate, WeatherPanel, WeatherReading


def format_number(value: float) -> str:
    """Format a number without a trailing ".0" for whole values."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_humidity(humidity: Optional[int]) -> str:
    if humidity is None:
        return WidgetConfig.HUMIDITY_PLACEHOLDER
    return f"{humidity}%"


def build_panel(location: LocationCandidate, reading: WeatherReading) -> WeatherPanel:
    """
    Format a reading into the strings shown on the results panel.

    Args:
        location: Resolved location
        reading: Current weather for that location

    Returns:
        WeatherPanel: Display strings
    """
    return WeatherPanel(
        location=location.label,
        temperature=f"{format_number(reading.temperature_c)}°C",
        icon=icon_for_code(reading.condition_code),
        icon_class=icon_class_for_code(reading.condition_code),
        humidity=format_humidity(reading.humidity_percent),
        wind_speed=f"{format_number(reading.wind_speed_kmh)} km/h",
        wind_direction=f"{format_number(reading.wind_direction_deg)}°",
    )


class MemoryView:
    """
    Widget view that keeps the visible UI state in plain attributes.

    A graphical front end implements the same methods against its own
    widgets.
    """

    def __init__(self):
        self.input_text = ""
        self.suggestions: List[LocationCandidate] = []
        self.error: Optional[str] = None
        self.panel: Optional[WeatherPanel] = None

    def set_input_text(self, text: str) -> None:
        self.input_text = text

    def show_suggestions(self, candidates: List[LocationCandidate]) -> None:
        self.suggestions = list(candidates)

    def clear_suggestions(self) -> None:
        self.suggestions = []

    def show_error(self, message: str) -> None:
        # A single inline message; a new one replaces the old one.
        self.error = message

    def clear_error(self) -> None:
        self.error = None

    def render_weather(self, panel: WeatherPanel) -> None:
        self.panel = panel
