"""
Configuration constants for the weather widget.
"""

import os


class ExternalAPIConfig:
    """External API configuration"""

    GEOCODING_BASE_URL = os.getenv(
        "GEOCODING_BASE_URL", "https://geocoding-api.open-meteo.com/v1"
    )
    FORECAST_BASE_URL = os.getenv("FORECAST_BASE_URL", "https://api.open-meteo.com/v1")
    HTTP_TIMEOUT_SECONDS = int(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

    # Geocoding result limits
    SUGGESTION_COUNT = 5
    RESOLVE_COUNT = 1

    # Hourly series requested alongside current conditions
    HOURLY_HUMIDITY_FIELD = "relativehumidity_2m"


class WidgetConfig:
    """Widget behaviour configuration"""

    DEBOUNCE_SECONDS = float(os.getenv("DEBOUNCE_SECONDS", "0.3"))

    # User-facing messages
    EMPTY_INPUT_MESSAGE = "Please enter a city name."
    NOT_FOUND_MESSAGE = "City not found. Check spelling and try again."
    NETWORK_ERROR_MESSAGE = "Network error. Please try again later."
    UNAVAILABLE_MESSAGE = "Weather data unavailable for this location."
    FORECAST_ERROR_MESSAGE = "Failed to load weather data."

    HUMIDITY_PLACEHOLDER = "--"


class AppConfig:
    """HTTP service configuration"""

    ENV = os.getenv("ENV", "dev")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    SERVICE_NAME = "Weather Widget Service"
    VERSION = "1.0.0"
