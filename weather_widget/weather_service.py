"""
Weather service layer used by the HTTP endpoints.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from weather_widget.external_api import OpenMeteoClient
from weather_widget.location_resolver import LocationResolver
from weather_widget.models import (
    LocationCandidate,
    SuggestionsResponse,
    WeatherReport,
)
from weather_widget.rendering import build_panel
from weather_widget.weather_fetcher import WeatherFetcher

logger = logging.getLogger(__name__)


class WeatherService:
    """
    Composes location resolution and weather fetching.
    """

    def __init__(self, api_client: OpenMeteoClient = None):
        """
        Initialize the weather service.

        Args:
            api_client: Open-Meteo client (a default client is created if omitted)
        """
        self.api_client = api_client or OpenMeteoClient()
        self.resolver = LocationResolver(self.api_client)
        self.fetcher = WeatherFetcher(self.api_client)

    async def suggest(self, query: str) -> SuggestionsResponse:
        """Autocomplete suggestions; never raises."""
        results = await self.resolver.suggest(query)
        return SuggestionsResponse(query=(query or "").strip(), results=results)

    async def resolve_location(self, city: str) -> LocationCandidate:
        """
        Resolve a city name to its best geocoding match.

        Raises:
            EmptyInputError, LocationNotFoundError, TransportError
        """
        return await self.resolver.resolve_by_name(city)

    async def get_weather_for_location(
        self, location: LocationCandidate
    ) -> WeatherReport:
        """
        Get current weather for an already resolved location.

        Args:
            location: Resolved or selected location

        Returns:
            WeatherReport: Reading and its display panel

        Raises:
            WeatherUnavailableError: If the forecast has no current conditions
            TransportError: On network or parse failures
        """
        reading = await self.fetcher.fetch(location.latitude, location.longitude)
        logger.info(
            "Weather for %s: %s°C, code %d",
            location.label,
            reading.temperature_c,
            reading.condition_code,
        )
        return WeatherReport(
            location=location,
            reading=reading,
            panel=build_panel(location, reading),
        )

    async def health_check(self) -> Dict[str, Any]:
        """
        Perform health check of the weather service.

        Returns:
            Dict with health status information
        """
        api_healthy = await self.api_client.health_check()
        return {
            "status": "healthy" if api_healthy else "unhealthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": {
                "open_meteo_api": "healthy" if api_healthy else "unhealthy",
            },
        }
