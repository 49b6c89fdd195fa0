"""
External API client for the Open-Meteo geocoding and forecast services.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp
from pydantic import BaseModel, Field, ValidationError

from weather_widget.config import ExternalAPIConfig
from weather_widget.exceptions import TransportError

logger = logging.getLogger(__name__)


class GeocodingResult(BaseModel):
    """Model for a single geocoding match."""

    name: str = Field(..., description="Place name")
    country: Optional[str] = Field("", description="Country name")
    latitude: float = Field(..., description="Latitude in degrees")
    longitude: float = Field(..., description="Longitude in degrees")


class GeocodingResponse(BaseModel):
    """Model for the geocoding search response."""

    # Open-Meteo omits "results" entirely when nothing matches
    results: Optional[List[GeocodingResult]] = None


class CurrentWeather(BaseModel):
    """Model for the current-conditions block of a forecast."""

    temperature: float = Field(..., description="Air temperature in °C")
    windspeed: float = Field(..., description="Wind speed in km/h")
    winddirection: float = Field(..., description="Wind direction in degrees")
    weathercode: int = Field(..., description="WMO weather code")
    time: str = Field(..., description="Observation time in local wall-clock")


class ForecastResponse(BaseModel):
    """Model for the forecast response."""

    current_weather: Optional[CurrentWeather] = None
    hourly: Optional[Dict[str, Any]] = None
    timezone: Optional[str] = None


class OpenMeteoClient:
    """
    Asynchronous client for the Open-Meteo geocoding and forecast APIs.
    """

    def __init__(
        self,
        geocoding_url: str = None,
        forecast_url: str = None,
        timeout: int = None,
    ):
        """
        Initialize the Open-Meteo client.

        Args:
            geocoding_url: Geocoding API base URL (defaults to config value)
            forecast_url: Forecast API base URL (defaults to config value)
            timeout: Request timeout in seconds (defaults to config value)
        """
        self.geocoding_url = geocoding_url or ExternalAPIConfig.GEOCODING_BASE_URL
        self.forecast_url = forecast_url or ExternalAPIConfig.FORECAST_BASE_URL
        self.timeout = aiohttp.ClientTimeout(
            total=timeout or ExternalAPIConfig.HTTP_TIMEOUT_SECONDS
        )

    async def _get_json(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Issue a GET request and decode its JSON body.

        Raises:
            TransportError: On network errors, timeouts, non-200 status codes
                or bodies that are not a JSON object
        """
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.get(url, params=params) as response:
                    if response.status != 200:
                        body = await response.text()
                        logger.error(
                            "Upstream error from %s (status: %d): %s",
                            url,
                            response.status,
                            body[:200],
                        )
                        raise TransportError(
                            f"Upstream returned status {response.status}",
                            status_code=response.status,
                        )
                    data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("Network error requesting %s: %s", url, e)
            raise TransportError(f"Network error: {e}") from e
        except ValueError as e:
            logger.error("Invalid JSON from %s: %s", url, e)
            raise TransportError("Invalid JSON response") from e

        if not isinstance(data, dict):
            raise TransportError("Unexpected response payload")
        return data

    async def search_locations(self, name: str, count: int) -> GeocodingResponse:
        """
        Search the geocoding service by free-text name.

        Args:
            name: Place name to search for
            count: Maximum number of matches to return

        Returns:
            GeocodingResponse: Matches, or no results when nothing matched

        Raises:
            TransportError: If the request or response parsing fails
        """
        params = {"name": name, "count": count}
        logger.debug("Searching locations for %r (count=%d)", name, count)

        data = await self._get_json(f"{self.geocoding_url}/search", params)
        try:
            return GeocodingResponse(**data)
        except ValidationError as e:
            logger.error("Malformed geocoding response for %r: %s", name, e)
            raise TransportError("Malformed geocoding response") from e

    async def get_forecast(self, latitude: float, longitude: float) -> ForecastResponse:
        """
        Fetch current conditions and the hourly humidity series.

        The upstream service resolves the location's timezone, so all returned
        timestamps are local wall-clock times.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees

        Returns:
            ForecastResponse: Current weather block and hourly series

        Raises:
            TransportError: If the request or response parsing fails
        """
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current_weather": "true",
            "hourly": ExternalAPIConfig.HOURLY_HUMIDITY_FIELD,
            "timezone": "auto",
        }
        logger.debug("Requesting forecast for %s,%s", latitude, longitude)

        data = await self._get_json(f"{self.forecast_url}/forecast", params)
        try:
            return ForecastResponse(**data)
        except ValidationError as e:
            logger.error(
                "Malformed forecast response for %s,%s: %s", latitude, longitude, e
            )
            raise TransportError("Malformed forecast response") from e

    async def health_check(self) -> bool:
        """
        Check if the geocoding API is accessible.

        Returns:
            bool: True if API is accessible, False otherwise
        """
        try:
            await self.search_locations("London", 1)
            logger.info("Open-Meteo API health check passed")
            return True
        except TransportError as e:
            logger.warning("Open-Meteo API health check failed: %s", str(e))
            return False
