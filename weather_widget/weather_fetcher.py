"""
Current-conditions lookup with humidity aligned to the observation hour.
"""

import logging
import math
from datetime import datetime
from typing import Any, Dict, Optional

from weather_widget.config import ExternalAPIConfig
from weather_widget.exceptions import TransportError, WeatherUnavailableError
from weather_widget.external_api import OpenMeteoClient
from weather_widget.models import WeatherReading

logger = logging.getLogger(__name__)


def parse_timestamp(value: str) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp as returned by Open-Meteo.

    Accepts minute precision ("2025-07-08T17:00") as well as seconds and a
    UTC offset or "Z" suffix. Returns None when the value cannot be parsed.
    """
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def truncate_to_hour(moment: datetime) -> datetime:
    """Zero out minutes, seconds and microseconds."""
    return moment.replace(minute=0, second=0, microsecond=0)


def hour_key(moment: datetime) -> str:
    """Canonical hour key, e.g. "2025-07-08T17:00"."""
    return truncate_to_hour(moment).strftime("%Y-%m-%dT%H:00")


def align_humidity(
    observed_at: datetime, hourly: Optional[Dict[str, Any]]
) -> Optional[int]:
    """
    Find the hourly humidity sample for the observation's hour.

    The hourly series is in local wall-clock time, so the observation is
    compared on its wall-clock value with any UTC offset dropped. Only an
    exact hour match counts; the first matching index wins.

    Args:
        observed_at: Observation time of the current-conditions snapshot
        hourly: Hourly block of the forecast response

    Returns:
        Humidity percentage, or None when there is no matching sample or the
        series is missing or malformed
    """
    if not isinstance(hourly, dict):
        return None

    times = hourly.get("time")
    humidities = hourly.get(ExternalAPIConfig.HOURLY_HUMIDITY_FIELD)
    if not isinstance(times, list) or not isinstance(humidities, list):
        return None

    target = truncate_to_hour(observed_at.replace(tzinfo=None))

    for index, raw_time in enumerate(times):
        sample_time = parse_timestamp(raw_time)
        if sample_time is None or sample_time.replace(tzinfo=None) != target:
            continue

        if index >= len(humidities):
            return None
        value = humidities[index]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        if not math.isfinite(value):
            return None
        return int(round(value))

    return None


class WeatherFetcher:
    """
    Builds a WeatherReading from a forecast request.
    """

    def __init__(self, client: OpenMeteoClient):
        self.client = client

    async def fetch(self, latitude: float, longitude: float) -> WeatherReading:
        """
        Get current weather for a pair of coordinates.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees

        Returns:
            WeatherReading: Current conditions with aligned humidity

        Raises:
            WeatherUnavailableError: If the forecast has no current conditions
            TransportError: On network or parse failures
        """
        forecast = await self.client.get_forecast(latitude, longitude)

        current = forecast.current_weather
        if current is None:
            logger.warning(
                "Forecast for %s,%s has no current conditions", latitude, longitude
            )
            raise WeatherUnavailableError(
                f"No current conditions for {latitude},{longitude}"
            )

        observed_at = parse_timestamp(current.time)
        if observed_at is None:
            raise TransportError(f"Unparseable observation time: {current.time!r}")

        humidity = align_humidity(observed_at, forecast.hourly)
        if humidity is None:
            logger.debug("No hourly humidity sample for %s", hour_key(observed_at))

        return WeatherReading(
            temperature_c=current.temperature,
            wind_speed_kmh=current.windspeed,
            wind_direction_deg=current.winddirection,
            condition_code=current.weathercode,
            humidity_percent=humidity,
            observed_at=observed_at,
        )
