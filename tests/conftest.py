"""
Pytest configuration and shared fixtures.
"""

import pytest

from weather_widget.external_api import ForecastResponse, GeocodingResponse
from weather_widget.models import LocationCandidate


@pytest.fixture
def paris_geocoding_payload() -> dict:
    """Geocoding search response with a single Paris match."""
    return {
        "results": [
            {
                "id": 2988507,
                "name": "Paris",
                "latitude": 48.85341,
                "longitude": 2.3488,
                "country_code": "FR",
                "country": "France",
                "timezone": "Europe/Paris",
            }
        ],
        "generationtime_ms": 0.7,
    }


@pytest.fixture
def empty_geocoding_payload() -> dict:
    """Geocoding search response when nothing matches."""
    return {"generationtime_ms": 0.3}


@pytest.fixture
def paris_forecast_payload() -> dict:
    """Forecast response with current conditions and hourly humidity."""
    return {
        "latitude": 48.86,
        "longitude": 2.3399997,
        "timezone": "Europe/Paris",
        "current_weather": {
            "temperature": 18.4,
            "windspeed": 12.3,
            "winddirection": 270,
            "weathercode": 2,
            "time": "2025-07-08T17:30",
        },
        "hourly": {
            "time": [
                "2025-07-08T15:00",
                "2025-07-08T16:00",
                "2025-07-08T17:00",
                "2025-07-08T18:00",
            ],
            "relativehumidity_2m": [58, 60, 63, 67],
        },
    }


@pytest.fixture
def paris_geocoding(paris_geocoding_payload) -> GeocodingResponse:
    return GeocodingResponse(**paris_geocoding_payload)


@pytest.fixture
def paris_forecast(paris_forecast_payload) -> ForecastResponse:
    return ForecastResponse(**paris_forecast_payload)


@pytest.fixture
def paris() -> LocationCandidate:
    return LocationCandidate(
        name="Paris", country="France", latitude=48.85341, longitude=2.3488
    )
