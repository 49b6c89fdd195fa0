"""
Tests for the widget controller: debounced suggestions, selection and search.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from weather_widget.exceptions import TransportError
from weather_widget.external_api import ForecastResponse, GeocodingResponse
from weather_widget.location_resolver import LocationResolver
from weather_widget.models import LocationCandidate
from weather_widget.rendering import MemoryView
from weather_widget.weather_fetcher import WeatherFetcher
from weather_widget.widget import WeatherWidget


@pytest.fixture
def client(paris_geocoding, paris_forecast):
    mock_client = AsyncMock()
    mock_client.search_locations.return_value = paris_geocoding
    mock_client.get_forecast.return_value = paris_forecast
    return mock_client


@pytest.fixture
def view():
    return MemoryView()


def make_widget(view, client, debounce_seconds=0.01):
    return WeatherWidget(
        view,
        LocationResolver(client),
        WeatherFetcher(client),
        debounce_seconds=debounce_seconds,
    )


class TestSuggestions:
    """Debounced autocomplete."""

    def test_single_request_after_quiet_period(self, view, client):
        """Test that a burst of keystrokes yields one geocoding request."""

        async def scenario():
            widget = make_widget(view, client, debounce_seconds=0.05)
            for text in ("P", "Pa", "Par", "Pari"):
                widget.on_input(text)
            await widget.flush()

        asyncio.run(scenario())

        client.search_locations.assert_awaited_once_with("Pari", 5)
        assert [c.label for c in view.suggestions] == ["Paris, France"]

    def test_clearing_input_before_quiet_period_issues_no_request(self, view, client):
        async def scenario():
            widget = make_widget(view, client, debounce_seconds=0.05)
            widget.on_input("Par")
            widget.on_input("")
            await widget.flush()

        asyncio.run(scenario())

        client.search_locations.assert_not_awaited()
        assert view.suggestions == []

    def test_whitespace_input_clears_suggestions(self, view, client, paris):
        view.show_suggestions([paris])

        async def scenario():
            widget = make_widget(view, client)
            widget.on_input("   ")
            await widget.flush()

        asyncio.run(scenario())

        client.search_locations.assert_not_awaited()
        assert view.suggestions == []

    def test_stale_response_is_discarded(self, view):
        """Test that a slow earlier response cannot overwrite newer results."""
        lyon = LocationCandidate(
            name="Lyon", country="France", latitude=45.75, longitude=4.85
        )
        paris = LocationCandidate(
            name="Paris", country="France", latitude=48.85, longitude=2.35
        )

        resolver = AsyncMock()

        async def suggest(query):
            if query == "Ly":
                await asyncio.sleep(0.2)
                return [lyon]
            return [paris]

        resolver.suggest.side_effect = suggest

        async def scenario():
            widget = WeatherWidget(view, resolver, AsyncMock(), debounce_seconds=0.01)
            widget.on_input("Ly")
            await asyncio.sleep(0.05)
            widget.on_input("Paris")
            await widget.flush()

        asyncio.run(scenario())

        assert resolver.suggest.await_count == 2
        assert view.suggestions == [paris]

    def test_autocomplete_failure_is_silent(self, view, client):
        client.search_locations.side_effect = TransportError("Network error")

        async def scenario():
            widget = make_widget(view, client)
            widget.on_input("Paris")
            await widget.flush()

        asyncio.run(scenario())

        assert view.suggestions == []
        assert view.error is None

    def test_outside_click_dismisses_suggestions(self, view, client, paris):
        view.show_suggestions([paris])
        make_widget(view, client).on_outside_click()
        assert view.suggestions == []

    def test_dismissed_list_stays_closed(self, view, client):
        """Test that a response arriving after an outside click is not shown."""

        async def slow_search(name, count):  # pylint: disable=unused-argument
            await asyncio.sleep(0.1)
            return GeocodingResponse(
                results=[
                    {
                        "name": "Paris",
                        "country": "France",
                        "latitude": 48.85,
                        "longitude": 2.35,
                    }
                ]
            )

        client.search_locations.side_effect = slow_search

        async def scenario():
            widget = make_widget(view, client)
            widget.on_input("Paris")
            await asyncio.sleep(0.03)
            widget.on_outside_click()
            await widget.flush()

        asyncio.run(scenario())

        client.search_locations.assert_awaited_once_with("Paris", 5)
        assert view.suggestions == []

    def test_outside_click_drops_pending_fetch(self, view, client):
        async def scenario():
            widget = make_widget(view, client, debounce_seconds=0.05)
            widget.on_input("Paris")
            widget.on_outside_click()
            await widget.flush()
            await asyncio.sleep(0.08)

        asyncio.run(scenario())

        client.search_locations.assert_not_awaited()
        assert view.suggestions == []

    def test_submit_supersedes_in_flight_suggestions(self, view, client, paris):
        """Test that suggestions arriving after a search are not shown."""
        resolver = AsyncMock()

        async def suggest(query):  # pylint: disable=unused-argument
            await asyncio.sleep(0.1)
            return [paris]

        resolver.suggest.side_effect = suggest
        resolver.resolve_by_name.return_value = paris

        async def scenario():
            widget = WeatherWidget(
                view, resolver, WeatherFetcher(client), debounce_seconds=0.01
            )
            widget.on_input("Paris")
            await asyncio.sleep(0.03)
            await widget.on_submit()
            await widget.flush()

        asyncio.run(scenario())

        assert view.suggestions == []
        assert view.panel.location == "Paris, France"


class TestSubmit:
    """Search via button or Enter."""

    def test_search_paris_renders_panel(self, view, client):
        """Test the full search flow renders location, temperature and humidity."""

        async def scenario():
            widget = make_widget(view, client)
            widget.input_text = "Paris"
            return await widget.on_submit()

        panel = asyncio.run(scenario())

        client.search_locations.assert_awaited_once_with("Paris", 1)
        client.get_forecast.assert_awaited_once_with(48.85341, 2.3488)
        assert view.panel is panel
        assert panel.location == "Paris, France"
        assert panel.temperature.endswith("°C")
        assert panel.humidity == "63%"
        assert view.error is None

    def test_search_without_hourly_match_uses_placeholder(
        self, view, client, paris_forecast_payload
    ):
        paris_forecast_payload["hourly"]["time"] = ["2025-07-08T01:00"] * 4
        client.get_forecast.return_value = ForecastResponse(**paris_forecast_payload)

        async def scenario():
            widget = make_widget(view, client)
            widget.input_text = "Paris"
            return await widget.on_submit()

        panel = asyncio.run(scenario())

        assert panel.humidity == "--"

    def test_city_not_found(self, view, client, empty_geocoding_payload):
        """Test that zero matches show the message and skip the forecast."""
        client.search_locations.return_value = GeocodingResponse(
            **empty_geocoding_payload
        )

        async def scenario():
            widget = make_widget(view, client)
            widget.input_text = "qwxzvbnm"
            return await widget.on_submit()

        assert asyncio.run(scenario()) is None
        assert view.error == "City not found. Check spelling and try again."
        client.get_forecast.assert_not_awaited()
        assert view.panel is None

    def test_empty_input(self, view, client):
        async def scenario():
            widget = make_widget(view, client)
            widget.input_text = "  "
            return await widget.on_submit()

        assert asyncio.run(scenario()) is None
        assert view.error == "Please enter a city name."
        client.search_locations.assert_not_awaited()

    def test_geocoding_network_error(self, view, client):
        client.search_locations.side_effect = TransportError("Network error")

        async def scenario():
            widget = make_widget(view, client)
            widget.input_text = "Paris"
            return await widget.on_submit()

        asyncio.run(scenario())

        assert view.error == "Network error. Please try again later."

    def test_forecast_unavailable(self, view, client, paris_forecast_payload):
        del paris_forecast_payload["current_weather"]
        client.get_forecast.return_value = ForecastResponse(**paris_forecast_payload)

        async def scenario():
            widget = make_widget(view, client)
            widget.input_text = "Paris"
            return await widget.on_submit()

        asyncio.run(scenario())

        assert view.error == "Weather data unavailable for this location."
        assert view.panel is None

    def test_forecast_network_error(self, view, client):
        client.get_forecast.side_effect = TransportError("timeout")

        async def scenario():
            widget = make_widget(view, client)
            widget.input_text = "Paris"
            return await widget.on_submit()

        asyncio.run(scenario())

        assert view.error == "Failed to load weather data."

    def test_new_search_clears_previous_error(self, view, client):
        view.show_error("City not found. Check spelling and try again.")

        async def scenario():
            widget = make_widget(view, client)
            widget.input_text = "Paris"
            return await widget.on_submit()

        asyncio.run(scenario())

        assert view.error is None
        assert view.panel.location == "Paris, France"


class TestSelect:
    """Clicking a suggestion."""

    def test_select_fetches_by_coordinates(self, view, client, paris):
        view.show_suggestions([paris])
        view.show_error("Network error. Please try again later.")

        async def scenario():
            widget = make_widget(view, client)
            return await widget.on_select(paris)

        panel = asyncio.run(scenario())

        client.search_locations.assert_not_awaited()
        client.get_forecast.assert_awaited_once_with(paris.latitude, paris.longitude)
        assert view.input_text == "Paris, France"
        assert view.suggestions == []
        assert view.error is None
        assert panel.wind_speed == "12.3 km/h"
        assert panel.wind_direction == "270°"
