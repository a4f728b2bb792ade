"""
Database configuration and session management.

This module contains the SQLAlchemy declarative base, engine and session
factory construction, and table creation utilities. Engines are built per
application from its settings and kept on ``app.state``.
"""

from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from weatherdash.config import Settings

# Base class for all database models
Base = declarative_base()


def create_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured database.

    Args:
        settings: Application settings

    Returns:
        AsyncEngine bound to ``SQLALCHEMY_DATABASE_URI``
    """
    database_url = settings.SQLALCHEMY_DATABASE_URI
    if database_url.startswith("postgresql://"):
        database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)

    return create_async_engine(
        database_url,
        echo=settings.DEBUG,
        pool_pre_ping=not database_url.startswith("sqlite"),
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Create the async session factory for an engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """
    Dependency function to get database session.

    Yields an async database session and ensures proper cleanup.
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all database tables.

    Called during application startup when ``AUTO_CREATE_TABLES`` is set.
    Production deployments should run ``alembic upgrade head`` instead.
    """
    # Import all models to ensure they are registered with Base
    import weatherdash.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def check_connection(engine: AsyncEngine) -> bool:
    """Return True if the database answers a trivial query."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
