"""
FastAPI application and AWS Lambda handler for the weather widget.
"""

import logging

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from mangum import Mangum

from weather_widget.config import AppConfig, WidgetConfig
from weather_widget.exceptions import (
    EmptyInputError,
    LocationNotFoundError,
    TransportError,
    WeatherUnavailableError,
)
from weather_widget.models import LocationCandidate, SuggestionsResponse, WeatherReport
from weather_widget.weather_service import WeatherService

# Configure logging
logging.basicConfig(
    level=AppConfig.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def get_weather_service() -> WeatherService:
    """Create a service per request; nothing is shared between requests."""
    return WeatherService()


# Initialize FastAPI app
app = FastAPI(
    title=AppConfig.SERVICE_NAME,
    description="City search and current weather backed by Open-Meteo",
    version=AppConfig.VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Root endpoint providing API information."""
    return {
        "service": AppConfig.SERVICE_NAME,
        "version": AppConfig.VERSION,
        "status": "active",
        "environment": AppConfig.ENV,
        "endpoints": {
            "suggestions": "/suggestions?q={text}",
            "weather": "/weather?city={city}",
            "weather_by_coordinates": (
                "/weather/coordinates?latitude={lat}&longitude={lon}"
                "&name={name}&country={country}"
            ),
            "health_check": "/health",
            "documentation": "/docs",
        },
    }


@app.get("/health")
async def health_check(service: WeatherService = Depends(get_weather_service)):
    """Health check endpoint validating upstream reachability."""
    return await service.health_check()


@app.get("/suggestions", response_model=SuggestionsResponse)
async def get_suggestions(
    q: str = "", service: WeatherService = Depends(get_weather_service)
):
    """
    Autocomplete suggestions for a partial city name.

    Always succeeds; upstream failures yield an empty list.
    """
    return await service.suggest(q)


async def _weather_report(
    service: WeatherService, location: LocationCandidate
) -> WeatherReport:
    try:
        return await service.get_weather_for_location(location)
    except WeatherUnavailableError as e:
        logger.warning("Weather unavailable for %s", location.label)
        raise HTTPException(
            status_code=503, detail=WidgetConfig.UNAVAILABLE_MESSAGE
        ) from e
    except TransportError as e:
        logger.error("Weather fetch failed for %s: %s", location.label, e)
        raise HTTPException(
            status_code=502, detail=WidgetConfig.FORECAST_ERROR_MESSAGE
        ) from e


@app.get("/weather", response_model=WeatherReport)
async def get_weather(
    city: str = "", service: WeatherService = Depends(get_weather_service)
):
    """
    Get current weather for a submitted city name.

    Args:
        city: City name as typed by the user

    Returns:
        WeatherReport: Resolved location, reading and display panel

    Raises:
        HTTPException: 400 on empty input, 404 if the city is unknown,
            503 if no current conditions exist, 502 on upstream failures
    """
    try:
        location = await service.resolve_location(city)
    except EmptyInputError as e:
        raise HTTPException(
            status_code=400, detail=WidgetConfig.EMPTY_INPUT_MESSAGE
        ) from e
    except LocationNotFoundError as e:
        logger.info("City not found: %r", city)
        raise HTTPException(
            status_code=404, detail=WidgetConfig.NOT_FOUND_MESSAGE
        ) from e
    except TransportError as e:
        logger.error("Geocoding failed for %r: %s", city, e)
        raise HTTPException(
            status_code=502, detail=WidgetConfig.NETWORK_ERROR_MESSAGE
        ) from e

    return await _weather_report(service, location)


@app.get("/weather/coordinates", response_model=WeatherReport)
async def get_weather_by_coordinates(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    name: str = Query(..., min_length=1),
    country: str = "",
    service: WeatherService = Depends(get_weather_service),
):
    """Get current weather for a selected suggestion."""
    location = LocationCandidate(
        name=name, country=country, latitude=latitude, longitude=longitude
    )
    return await _weather_report(service, location)


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request, exc):  # pylint: disable=unused-argument
    """Global exception handler for unhandled errors."""
    logger.error("Unhandled exception: %s", str(exc))
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "message": "An unexpected error occurred",
            "status_code": 500,
        },
    )


# AWS Lambda handler using Mangum
lambda_handler = Mangum(app, lifespan="off")
