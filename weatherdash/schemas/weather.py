"""
Weather schemas.

Request bodies for the weather proxy endpoints and the history record
response. Weather payloads themselves are passed through as provider JSON.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from weatherdash.schemas.base import BaseSchema


class CurrentWeatherRequest(BaseSchema):
    """Current weather lookup by city name or by coordinates."""
    city: Optional[str] = Field(None, max_length=200)
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lon: Optional[float] = Field(None, ge=-180, le=180)


class CoordinatesRequest(BaseSchema):
    """Forecast and air quality lookups."""
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lon: Optional[float] = Field(None, ge=-180, le=180)


class HistoryRecord(BaseSchema):
    """One logged weather query."""
    id: int
    user_id: int
    city: str
    weather: Dict[str, Any]
    date: datetime
