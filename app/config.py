# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# Every tunable of the API, the daily question job and the Celery worker,
# read from the environment once and validated with pydantic-settings.
#
# Usage:
#   from app.config import get_settings
#   settings = get_settings()
#   print(settings.PORT)
#
# Process environment wins over values in .env. NODE_ENV is accepted as an
# alias for ENVIRONMENT.
# =============================================================================

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    CodeBuddy configuration.

    Built once by get_settings(); tests construct their own instances.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # These are required - app won't start without them

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str = Field(
        ...,
        description="Supabase anon/public API key (used for password sign-in)"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    SUPABASE_JWT_SECRET: str = Field(
        default="",
        description="Legacy HS256 secret for verifying Supabase access tokens"
    )

    DB_PROBE_TABLE: str = Field(
        default="topics",
        description="Table queried once at startup to confirm the database is reachable"
    )

    # -------------------------------------------------------------------------
    # Redis Configuration (for Celery)
    # -------------------------------------------------------------------------

    REDIS_URL: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL for Celery broker"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: str = Field(
        default="development",
        validation_alias=AliasChoices("ENVIRONMENT", "NODE_ENV"),
        description="Environment label; only \"production\" hides error detail"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level when DEBUG is off"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    PORT: int = Field(
        default=5000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # -------------------------------------------------------------------------
    # HTTP Pipeline
    # -------------------------------------------------------------------------

    CORS_ORIGIN: str = Field(
        default="http://localhost:4200",
        description="The single origin allowed to call the API with credentials"
    )

    MAX_JSON_BODY_MB: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Maximum JSON request body size in MB"
    )

    MAX_URLENCODED_BODY_KB: int = Field(
        default=100,
        ge=1,
        description="Maximum URL-encoded form body size in KB"
    )

    # -------------------------------------------------------------------------
    # Daily Questions
    # -------------------------------------------------------------------------

    DAILY_QUESTIONS_ENABLED: bool = Field(
        default=True,
        description="Run the daily question scheduler inside the API process"
    )

    DAILY_QUESTIONS_HOUR: int = Field(default=0, ge=0, le=23)

    DAILY_QUESTIONS_MINUTE: int = Field(default=0, ge=0, le=59)

    DAILY_QUESTIONS_COUNT: int = Field(
        default=3,
        ge=1,
        le=50,
        description="How many questions are picked for each day"
    )

    DAILY_QUESTIONS_RUN_ON_STARTUP: bool = Field(
        default=True,
        description="Also run the job once when the scheduler starts"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def max_json_body_bytes(self) -> int:
        return self.MAX_JSON_BODY_MB * 1024 * 1024

    @property
    def max_urlencoded_body_bytes(self) -> int:
        return self.MAX_URLENCODED_BODY_KB * 1024

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """The process-wide Settings, parsed on first call."""
    return Settings()
