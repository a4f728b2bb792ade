# API routers package

from weatherdash.routers.auth import router as auth_router
from weatherdash.routers.status import router as status_router
from weatherdash.routers.user import router as user_router
from weatherdash.routers.weather import router as weather_router

__all__ = ["auth_router", "status_router", "user_router", "weather_router"]
