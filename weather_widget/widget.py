"""
Widget controller: input, selection and submission handling.
"""

import logging
from typing import List, Optional, Protocol

from weather_widget.config import WidgetConfig
from weather_widget.debounce import Debouncer
from weather_widget.exceptions import (
    LocationNotFoundError,
    TransportError,
    WeatherUnavailableError,
)
from weather_widget.location_resolver import LocationResolver
from weather_widget.models import LocationCandidate, WeatherPanel
from weather_widget.rendering import build_panel
from weather_widget.weather_fetcher import WeatherFetcher

logger = logging.getLogger(__name__)


class WidgetView(Protocol):
    """Visible UI state the controller renders into."""

    def set_input_text(self, text: str) -> None: ...

    def show_suggestions(self, candidates: List[LocationCandidate]) -> None: ...

    def clear_suggestions(self) -> None: ...

    def show_error(self, message: str) -> None: ...

    def clear_error(self) -> None: ...

    def render_weather(self, panel: WeatherPanel) -> None: ...


class WeatherWidget:
    """
    Drives a WidgetView from user events.

    Suggestion fetches are debounced and tagged with a sequence number; a
    response is rendered only if no newer fetch, dismissal, selection or
    submission happened while it was in flight.
    """

    def __init__(
        self,
        view: WidgetView,
        resolver: LocationResolver,
        fetcher: WeatherFetcher,
        debounce_seconds: Optional[float] = None,
    ):
        self.view = view
        self.resolver = resolver
        self.fetcher = fetcher
        self.input_text = ""
        self._sequence = 0
        self._debouncer = Debouncer(self._refresh_suggestions, debounce_seconds)

    def _next_sequence(self) -> int:
        self._sequence += 1
        return self._sequence

    def on_input(self, text: str) -> None:
        """Handle a keystroke; must be called from the running event loop."""
        self.input_text = text
        self._debouncer.trigger(text)

    async def _refresh_suggestions(self, text: str) -> None:
        sequence = self._next_sequence()
        query = text.strip()
        if not query:
            self.view.clear_suggestions()
            return

        candidates = await self.resolver.suggest(query)
        if sequence != self._sequence:
            logger.debug("Discarding stale suggestions for %r", query)
            return
        self.view.show_suggestions(candidates)

    def on_outside_click(self) -> None:
        self._debouncer.cancel()
        self._next_sequence()
        self.view.clear_suggestions()

    async def on_select(self, candidate: LocationCandidate) -> Optional[WeatherPanel]:
        """
        Handle a click on a suggestion.

        Args:
            candidate: The selected suggestion

        Returns:
            The rendered panel, or None if an error message was shown
        """
        self._debouncer.cancel()
        self._next_sequence()
        self.input_text = candidate.label
        self.view.set_input_text(candidate.label)
        self.view.clear_suggestions()
        self.view.clear_error()
        return await self._fetch_and_render(candidate)

    async def on_submit(self) -> Optional[WeatherPanel]:
        """
        Handle the search button or the Enter key.

        Returns:
            The rendered panel, or None if an error message was shown
        """
        self._debouncer.cancel()
        self._next_sequence()
        self.view.clear_suggestions()
        self.view.clear_error()

        city = self.input_text.strip()
        if not city:
            self.view.show_error(WidgetConfig.EMPTY_INPUT_MESSAGE)
            return None

        try:
            location = await self.resolver.resolve_by_name(city)
        except LocationNotFoundError:
            self.view.show_error(WidgetConfig.NOT_FOUND_MESSAGE)
            return None
        except TransportError as e:
            logger.error("Geocoding failed for %r: %s", city, e)
            self.view.show_error(WidgetConfig.NETWORK_ERROR_MESSAGE)
            return None

        return await self._fetch_and_render(location)

    async def _fetch_and_render(
        self, location: LocationCandidate
    ) -> Optional[WeatherPanel]:
        try:
            reading = await self.fetcher.fetch(location.latitude, location.longitude)
        except WeatherUnavailableError:
            self.view.show_error(WidgetConfig.UNAVAILABLE_MESSAGE)
            return None
        except TransportError as e:
            logger.error("Weather fetch failed for %s: %s", location.label, e)
            self.view.show_error(WidgetConfig.FORECAST_ERROR_MESSAGE)
            return None

        panel = build_panel(location, reading)
        self.view.render_weather(panel)
        return panel

    async def flush(self) -> None:
        """Wait for any debounced suggestion fetch to finish."""
        await self._debouncer.flush()

    def close(self) -> None:
        self._debouncer.cancel()
