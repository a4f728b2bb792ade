"""
Weather router.

This module contains the weather proxy endpoints and the search history.
"""

from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, Request

from weatherdash.dependencies.auth import get_current_user
from weatherdash.dependencies.services import get_history_recorder, get_weather_gateway
from weatherdash.schemas.weather import CoordinatesRequest, CurrentWeatherRequest, HistoryRecord
from weatherdash.services.history import HistoryRecorder
from weatherdash.services.weather import WeatherGateway
from weatherdash.utils.rate_limit import DEFAULT_LIMIT, limiter
from weatherdash.utils.security import TokenClaims

router = APIRouter(
    prefix="/weather",
    tags=["weather"],
    responses={
        401: {"description": "Access token required"},
        403: {"description": "Invalid or expired token"},
        408: {"description": "Weather service timeout"},
    },
)


@router.post("/current")
@limiter.limit(DEFAULT_LIMIT)
async def current_weather(
    request: Request,
    query: CurrentWeatherRequest,
    background_tasks: BackgroundTasks,
    current_user: TokenClaims = Depends(get_current_user),
    gateway: WeatherGateway = Depends(get_weather_gateway),
    history: HistoryRecorder = Depends(get_history_recorder),
):
    """
    Current weather by city name or by coordinates.

    City lookups are added to the caller's history after the response has
    been sent; a failure to record them does not affect the response.
    """
    snapshot = await gateway.current(city=query.city, lat=query.lat, lon=query.lon)

    city = (query.city or "").strip()
    if city:
        background_tasks.add_task(
            history.append,
            current_user.user_id,
            snapshot.get("name") or city,
            snapshot,
        )

    return snapshot


@router.post("/forecast")
@limiter.limit(DEFAULT_LIMIT)
async def forecast(
    request: Request,
    query: CoordinatesRequest,
    current_user: TokenClaims = Depends(get_current_user),
    gateway: WeatherGateway = Depends(get_weather_gateway),
):
    """5 day / 3 hour forecast for a coordinate pair."""
    return await gateway.forecast(query.lat, query.lon)


@router.post("/air-quality")
@limiter.limit(DEFAULT_LIMIT)
async def air_quality(
    request: Request,
    query: CoordinatesRequest,
    current_user: TokenClaims = Depends(get_current_user),
    gateway: WeatherGateway = Depends(get_weather_gateway),
):
    """Air pollution data for a coordinate pair."""
    return await gateway.air_quality(query.lat, query.lon)


@router.get("/history", response_model=List[HistoryRecord])
@limiter.limit(DEFAULT_LIMIT)
async def weather_history(
    request: Request,
    current_user: TokenClaims = Depends(get_current_user),
    history: HistoryRecorder = Depends(get_history_recorder),
):
    """The caller's most recent city searches, newest first."""
    return await history.recent(current_user.user_id)
