"""
Weather search history.

Appends are best-effort: they run after the response has been sent and
any storage failure is logged, never raised.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.future import select

from weatherdash.models.weather_history import WeatherHistory
from weatherdash.utils.logging_config import get_logger

logger = get_logger(__name__)


class HistoryRecorder:
    """Records and serves per-user weather lookups."""

    def __init__(self, session_factory: async_sessionmaker, limit: int = 10):
        self.session_factory = session_factory
        self.limit = limit

    async def append(self, user_id: int, city: str, snapshot: Dict[str, Any]) -> Optional[WeatherHistory]:
        """
        Persist one lookup.

        Args:
            user_id: Owner of the record
            city: City name to record
            snapshot: Weather payload returned to the user

        Returns:
            The stored record, or None if storing failed
        """
        try:
            async with self.session_factory() as session:
                record = WeatherHistory(user_id=user_id, city=city, weather=snapshot)
                session.add(record)
                await session.commit()
                await session.refresh(record)
        except Exception:
            logger.exception(f"Failed to save weather history for user {user_id}")
            return None

        logger.debug(f"Saved weather history id={record.id} user={user_id} city={city!r}")
        return record

    async def recent(self, user_id: int, limit: Optional[int] = None) -> List[WeatherHistory]:
        """
        Newest-first history for a user.

        Args:
            user_id: Owner of the records
            limit: Maximum number of records, defaults to the recorder's limit

        Returns:
            List of records, empty if the user has none
        """
        if limit is None:
            limit = self.limit
        async with self.session_factory() as session:
            result = await session.execute(
                select(WeatherHistory)
                .where(WeatherHistory.user_id == user_id)
                .order_by(WeatherHistory.date.desc(), WeatherHistory.id.desc())
                .limit(limit)
            )
            return list(result.scalars().all())
