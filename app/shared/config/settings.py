# 📄 File: app/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# Every knob the garden can be tuned with: where the database lives, how often idle plants
# are checked, how many times a clashing write is retried and which timezone ends a day.
#
# 🧪 Purpose (Technical Summary):
# pydantic-settings model read from environment variables (and an optional .env file),
# validated once at startup and shared through a cached accessor.
#
# 🔗 Dependencies:
# - pydantic-settings for configuration management
# - zoneinfo for day-boundary timezone validation
#
# 🔄 Connected Modules / Calls From:
# - app.main (application startup)
# - Database connection modules
# - Plant growth command handlers (retry budget, reward seed, timezone)
# - celery_config (beat schedule cadence)

from functools import lru_cache
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Mindful Garden configuration.

    Names match the environment variables exactly. Unknown variables
    are ignored so the API and the Celery worker can share one .env.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================

    APP_NAME: str = Field(default="Mindful Garden API", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    APP_DESCRIPTION: str = Field(
        default="Journaling companion whose virtual plant grows with your entries",
        description="Application description"
    )
    ENVIRONMENT: str = Field(default="development", description="Runtime environment")
    DEBUG: bool = Field(default=True, description="Debug mode flag")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="text", description="Log output format (json/text)")

    # =========================================================================
    # SERVER CONFIGURATION
    # =========================================================================

    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=8000, description="Server port")
    RELOAD: bool = Field(default=True, description="Auto-reload on changes")
    WORKERS: int = Field(default=1, description="Number of worker processes")

    # CORS Settings
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="CORS allowed origins"
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True, description="CORS allow credentials")

    # =========================================================================
    # DATABASE CONFIGURATION
    # =========================================================================

    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./mindful_garden.db",
        description="Async SQLAlchemy database URL"
    )

    # Connection Pool Settings (ignored by SQLite)
    DB_POOL_SIZE: int = Field(default=10, description="Database pool size")
    DB_MAX_OVERFLOW: int = Field(default=20, description="Database pool overflow")
    DB_POOL_TIMEOUT: int = Field(default=30, description="Database pool timeout")
    DB_POOL_RECYCLE: int = Field(default=3600, description="Database pool recycle time")

    # =========================================================================
    # CELERY / BACKGROUND JOBS
    # =========================================================================

    CELERY_BROKER_URL: str = Field(
        default="redis://localhost:6379/1",
        description="Celery broker URL"
    )
    CELERY_RESULT_BACKEND: str = Field(
        default="redis://localhost:6379/2",
        description="Celery result backend URL"
    )

    # =========================================================================
    # PLANT GROWTH ENGINE
    # =========================================================================

    DEFAULT_DAY_BOUNDARY_TIMEZONE: str = Field(
        default="UTC",
        description="IANA zone whose midnight separates journaling days for new plants"
    )
    HEALTH_CHECK_INTERVAL_SECONDS: int = Field(
        default=300,
        ge=1,
        description="Cadence of the periodic plant health sweep"
    )
    HEALTH_SWEEP_BATCH_SIZE: int = Field(
        default=200,
        ge=1,
        description="Plants loaded per page during a health sweep"
    )
    PLANT_UPDATE_MAX_RETRIES: int = Field(
        default=3,
        ge=0,
        description="Compare-and-swap retries before a write conflict is surfaced"
    )
    REWARD_RANDOM_SEED: Optional[int] = Field(
        default=None,
        description="Seed for reward type selection (unset = nondeterministic)"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed_environments = ["development", "staging", "production", "test"]
        if v.lower() not in allowed_environments:
            raise ValueError(f"Environment must be one of {allowed_environments}")
        return v.lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed_levels:
            raise ValueError(f"Log level must be one of {allowed_levels}")
        return v.upper()

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed_formats = ["json", "text"]
        if v.lower() not in allowed_formats:
            raise ValueError(f"Log format must be one of {allowed_formats}")
        return v.lower()

    @field_validator("CORS_ORIGINS")
    @classmethod
    def validate_cors_origins(cls, v: str) -> str:
        """Validate CORS origins format."""
        origins = [origin.strip() for origin in v.split(",")]
        for origin in origins:
            if not origin.startswith(("http://", "https://", "*")):
                raise ValueError(f"Invalid CORS origin format: {origin}")
        return v

    @field_validator("DEFAULT_DAY_BOUNDARY_TIMEZONE")
    @classmethod
    def validate_day_boundary_timezone(cls, v: str) -> str:
        """Validate that the day-boundary zone is a known IANA zone."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


# ============================================================================
# SETTINGS FACTORY
# ============================================================================

@lru_cache()
def get_settings() -> Settings:
    """
    Process-wide settings, read from the environment on first use.

    Tests that change environment variables must call
    ``get_settings.cache_clear()`` afterwards.
    """
    return Settings()
