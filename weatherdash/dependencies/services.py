"""
Service dependencies.

Components are built once per application in ``create_app`` and kept on
``app.state``; these functions hand them to route handlers.
"""

from fastapi import Request

from weatherdash.services.history import HistoryRecorder
from weatherdash.services.weather import WeatherGateway
from weatherdash.utils.security import TokenService


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_history_recorder(request: Request) -> HistoryRecorder:
    return request.app.state.history_recorder


def get_weather_gateway(request: Request) -> WeatherGateway:
    gateway = getattr(request.app.state, "weather_gateway", None)
    if gateway is None:
        raise RuntimeError("Weather gateway not initialised.")
    return gateway
