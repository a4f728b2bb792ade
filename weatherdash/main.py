"""
Main FastAPI application for the Weather Dashboard API.

This module builds the application: settings, storage, token service,
weather gateway and history recorder are created once per application
and kept on ``app.state``.
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from weatherdash.config import Settings
from weatherdash.database import create_engine, create_session_factory, create_tables
from weatherdash.error_handlers import register_error_handlers
from weatherdash.routers import auth_router, status_router, user_router, weather_router
from weatherdash.services.history import HistoryRecorder
from weatherdash.services.weather import WeatherGateway, build_weather_gateway
from weatherdash.utils.logging_config import get_logger, setup_logging
from weatherdash.utils.rate_limit import limiter
from weatherdash.utils.security import TokenService

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Creates tables (when enabled), selects the weather gateway and
    releases the storage engine and HTTP client on shutdown.
    """
    settings: Settings = app.state.settings

    logger.info("=" * 60)
    logger.info(f"{settings.PROJECT_NAME} - Application starting up")
    logger.info(f"Environment: {'Development' if settings.DEBUG else 'Production'}")
    logger.info(f"Database: {settings.SQLALCHEMY_DATABASE_URI.split('://')[0]}")
    logger.info("=" * 60)

    if settings.AUTO_CREATE_TABLES:
        await create_tables(app.state.engine)
    else:
        logger.info("Table creation disabled, expecting 'alembic upgrade head' to have run")

    if app.state.weather_gateway is None:
        app.state.weather_gateway = build_weather_gateway(settings)

    yield

    logger.info(f"{settings.PROJECT_NAME} - Application shutting down")
    await app.state.weather_gateway.aclose()
    await app.state.engine.dispose()


def create_app(
    settings: Optional[Settings] = None,
    weather_gateway: Optional[WeatherGateway] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Application settings, read from the environment if omitted
        weather_gateway: Weather source to use instead of the one selected
            from settings at startup

    Returns:
        Configured FastAPI instance
    """
    settings = settings or Settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Authenticated weather proxy with per-user search history",
        version=settings.VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    engine = create_engine(settings)
    session_factory = create_session_factory(engine)

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory
    app.state.token_service = TokenService(settings)
    app.state.history_recorder = HistoryRecorder(session_factory, limit=settings.HISTORY_LIMIT)
    app.state.weather_gateway = weather_gateway
    app.state.started_at = time.monotonic()

    # Route decorators bind to the module-level limiter, so the switch is
    # process-wide: the most recently built app decides. One app per process.
    limiter.enabled = settings.RATE_LIMIT_ENABLED
    app.state.limiter = limiter

    register_error_handlers(app)

    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/")
    async def root():
        """Root endpoint returning API information."""
        return {
            "message": f"Welcome to {settings.PROJECT_NAME}",
            "version": settings.VERSION,
            "docs": "/docs",
            "redoc": "/redoc",
        }

    app.include_router(status_router, prefix=settings.API_PREFIX)
    app.include_router(auth_router, prefix=settings.API_PREFIX)
    app.include_router(user_router, prefix=settings.API_PREFIX)
    app.include_router(weather_router, prefix=settings.API_PREFIX)

    return app
