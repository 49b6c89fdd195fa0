"""
Location resolution against the geocoding service.
"""

import logging
from typing import List

from weather_widget.config import ExternalAPIConfig
from weather_widget.exceptions import (
    EmptyInputError,
    LocationNotFoundError,
    TransportError,
)
from weather_widget.external_api import GeocodingResult, OpenMeteoClient
from weather_widget.models import LocationCandidate

logger = logging.getLogger(__name__)


def _to_candidate(result: GeocodingResult) -> LocationCandidate:
    return LocationCandidate(
        name=result.name,
        country=result.country or "",
        latitude=result.latitude,
        longitude=result.longitude,
    )


class LocationResolver:
    """
    Turns free-text input into location candidates.
    """

    def __init__(self, client: OpenMeteoClient):
        self.client = client

    async def suggest(self, query: str) -> List[LocationCandidate]:
        """
        Get autocomplete suggestions for a partial query.

        Never raises: empty input returns no suggestions without a request,
        and upstream failures are logged and degrade to an empty list.

        Args:
            query: Raw text from the input field

        Returns:
            Up to ExternalAPIConfig.SUGGESTION_COUNT candidates
        """
        query = (query or "").strip()
        if not query:
            return []

        try:
            response = await self.client.search_locations(
                query, ExternalAPIConfig.SUGGESTION_COUNT
            )
        except TransportError as e:
            logger.error("Autocomplete error for %r: %s", query, e)
            return []

        return [_to_candidate(result) for result in response.results or []]

    async def resolve_by_name(self, query: str) -> LocationCandidate:
        """
        Resolve a submitted query to its single best match.

        Args:
            query: Raw text from the input field

        Returns:
            LocationCandidate: Best geocoding match

        Raises:
            EmptyInputError: If the query is blank
            LocationNotFoundError: If the geocoding service has no match
            TransportError: On network or parse failures
        """
        query = (query or "").strip()
        if not query:
            raise EmptyInputError("Query is empty")

        response = await self.client.search_locations(
            query, ExternalAPIConfig.RESOLVE_COUNT
        )
        if not response.results:
            logger.info("No location found for %r", query)
            raise LocationNotFoundError(query)

        candidate = _to_candidate(response.results[0])
        logger.debug("Resolved %r to %s", query, candidate.label)
        return candidate
