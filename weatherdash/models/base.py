"""
Abstract base for all tables: integer key and audit timestamps.
"""

from sqlalchemy import Column, DateTime, Integer
from sqlalchemy.orm import declared_attr
from sqlalchemy.sql import func

from weatherdash.database import Base


class BaseModel(Base):
    """Adds ``id``, ``created_at`` and ``updated_at`` to a mapped class."""

    __abstract__ = True

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    @declared_attr
    def created_at(cls):
        return Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    @declared_attr
    def updated_at(cls):
        # Set by the database on insert and by SQLAlchemy on every UPDATE
        return Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id}>"
