"""
Mapping of Open-Meteo WMO weather codes to coarse UI icon categories.
"""

from enum import Enum


class WeatherIcon(str, Enum):
    """Coarse weather condition categories shown by the widget."""

    CLEAR = "clear"
    PARTLY_CLOUDY = "partly_cloudy"
    CLOUDY = "cloudy"
    FOG = "fog"
    RAIN = "rain"
    SNOW = "snow"
    THUNDER = "thunder"
    UNKNOWN = "unknown"


# Inclusive upper bounds, evaluated in ascending order; first match wins.
CONDITION_BANDS = (
    (0, WeatherIcon.CLEAR),
    (1, WeatherIcon.PARTLY_CLOUDY),
    (3, WeatherIcon.CLOUDY),
    (48, WeatherIcon.FOG),
    (67, WeatherIcon.RAIN),
    (86, WeatherIcon.SNOW),
    (95, WeatherIcon.THUNDER),
)

ICON_CLASSES = {
    WeatherIcon.CLEAR: "fa-sun",
    WeatherIcon.PARTLY_CLOUDY: "fa-cloud-sun",
    WeatherIcon.CLOUDY: "fa-cloud",
    WeatherIcon.FOG: "fa-smog",
    WeatherIcon.RAIN: "fa-cloud-showers-heavy",
    WeatherIcon.SNOW: "fa-snowflake",
    WeatherIcon.THUNDER: "fa-bolt",
    WeatherIcon.UNKNOWN: "fa-question",
}


def icon_for_code(code: int) -> WeatherIcon:
    """
    Bucket a weather code into its icon category.

    Args:
        code: WMO weather code from the forecast response

    Returns:
        WeatherIcon for the first band whose upper bound is >= code
    """
    for upper_bound, icon in CONDITION_BANDS:
        if code <= upper_bound:
            return icon
    return WeatherIcon.UNKNOWN


def icon_class_for_code(code: int) -> str:
    """FontAwesome class name for a weather code."""
    return ICON_CLASSES[icon_for_code(code)]
