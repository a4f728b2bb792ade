# Pydantic schemas package

from weatherdash.schemas.base import BaseSchema, TimestampSchema, MessageResponse
from weatherdash.schemas.auth import RegisterRequest, LoginRequest, LoginUser, LoginResponse
from weatherdash.schemas.user import UserProfile, ProfileUpdate, PROFILE_FIELDS
from weatherdash.schemas.weather import CurrentWeatherRequest, CoordinatesRequest, HistoryRecord

__all__ = [
    # Base schemas
    "BaseSchema", "TimestampSchema", "MessageResponse",

    # Auth schemas
    "RegisterRequest", "LoginRequest", "LoginUser", "LoginResponse",

    # User schemas
    "UserProfile", "ProfileUpdate", "PROFILE_FIELDS",

    # Weather schemas
    "CurrentWeatherRequest", "CoordinatesRequest", "HistoryRecord",
]
