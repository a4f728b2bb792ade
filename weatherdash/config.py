"""
Application settings.

Everything is read from the environment (and an optional ``.env`` file)
once at startup. The resulting object is frozen and handed to the
components that need it instead of being imported as a global.
"""

import os
import secrets
from typing import List, Optional, Union

from pydantic import ConfigDict, Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings

# Value shipped in the sample .env; treated the same as an unset key
PLACEHOLDER_OPENWEATHER_KEY = "your-openweather-api-key-here"


class Settings(BaseSettings):
    """
    Runtime configuration for one application instance.

    Field names double as environment variable names (case sensitive).
    """

    # API Configuration
    PROJECT_NAME: str = "Weather Dashboard API"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    SECRET_KEY: str = Field(
        default_factory=lambda: os.getenv("SECRET_KEY") or secrets.token_urlsafe(32),
        description="Secret key for JWT signing. MUST be set via SECRET_KEY environment variable in production!"
    )
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 24 hours

    # Server Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    DEBUG: bool = False

    # CORS Configuration
    # Union[str, List] keeps pydantic-settings from JSON-decoding a plain string
    BACKEND_CORS_ORIGINS: Union[str, List[str]] = Field(
        default="http://localhost:3000,http://localhost:5173",
        validate_default=True,
    )

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def split_cors_origins(cls, v: Union[str, List[str], None]) -> List[str]:
        """Accept a list or a comma-separated string; blank means no origins."""
        if not v:
            return []
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        if isinstance(v, list):
            return v
        raise ValueError(f"Invalid CORS origins format: {v}")

    # Database Configuration
    SQLALCHEMY_DATABASE_URI: Optional[str] = Field(default=None, validate_default=True)
    AUTO_CREATE_TABLES: bool = True

    @field_validator("SQLALCHEMY_DATABASE_URI", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> str:
        """Resolve the async database connection string."""
        if isinstance(v, str) and v:
            return v

        # Render/Railway/Heroku style
        database_url = os.getenv("DATABASE_URL")
        if database_url:
            if database_url.startswith("postgres://"):
                database_url = database_url.replace("postgres://", "postgresql+asyncpg://", 1)
            elif database_url.startswith("postgresql://"):
                database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
            return database_url

        return "sqlite+aiosqlite:///./weather_app.db"

    # Upstream weather provider
    OPENWEATHER_API_KEY: Optional[str] = None
    OPENWEATHER_BASE_URL: str = "https://api.openweathermap.org/data/2.5"
    UPSTREAM_TIMEOUT_SECONDS: float = 10.0

    # Search history
    HISTORY_LIMIT: int = 10

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    model_config = ConfigDict(
        env_file=".env",
        case_sensitive=True,
        frozen=True,
        extra="ignore",
    )

    @property
    def mock_weather(self) -> bool:
        """True when no usable provider key is configured."""
        key = (self.OPENWEATHER_API_KEY or "").strip()
        return not key or key == PLACEHOLDER_OPENWEATHER_KEY
