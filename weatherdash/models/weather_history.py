"""
Weather history database model.

One row per successful city-based weather lookup.
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from weatherdash.models.base import BaseModel


class WeatherHistory(BaseModel):
    """
    Logged weather query.

    Stores the full weather snapshot returned to the user at query time.
    """

    __tablename__ = "weather_history"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    city = Column(String(200), nullable=False)
    weather = Column(JSON, nullable=False)
    date = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    user = relationship("User")

    __table_args__ = (
        Index("idx_weather_history_user_date", "user_id", "date"),
    )

    def __repr__(self):
        return f"<WeatherHistory(id={self.id}, user_id={self.user_id}, city='{self.city}')>"
