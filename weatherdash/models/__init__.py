# Database models package

from weatherdash.models.base import BaseModel
from weatherdash.models.user import User
from weatherdash.models.weather_history import WeatherHistory

__all__ = [
    "BaseModel",
    "User",
    "WeatherHistory",
]
