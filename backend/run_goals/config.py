"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from typing import Optional

from pydantic import AliasChoices, Field, field_validator, ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === Database (user directory) ===
    database_url: str = Field(
        default="sqlite:///./run_goals.db",
        description="Database connection URL"
    )

    # === Strava credentials ===
    strava_secret_name: str = Field(
        default="strava",
        description="Name of the secret holding the OAuth client credentials"
    )
    strava_client_id: Optional[str] = Field(default=None)
    strava_client_secret: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("strava_client_secret", "strava_secret")
    )
    strava_credentials_json: Optional[str] = Field(
        default=None,
        description="Full credentials blob as JSON (takes precedence over discrete fields)"
    )

    # === Remote secret store ===
    secret_store_url: Optional[str] = Field(
        default=None,
        description="Internal secret store API; env settings are used when unset"
    )
    internal_api_key: Optional[str] = Field(
        default=None,
        description="Shared API key for internal endpoints and the secret store"
    )

    # === Strava API ===
    strava_api_url: str = Field(default="https://www.strava.com/api/v3")
    strava_token_url: str = Field(default="https://www.strava.com/oauth/token")
    strava_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for every upstream call"
    )

    # === Telegram ===
    telegram_bot_token: Optional[str] = Field(
        default=None,
        description="Telegram Bot token for goal notifications"
    )

    # === Goal check ===
    goal_check_enabled: bool = Field(default=True)
    goal_check_interval_seconds: int = Field(
        default=24 * 60 * 60,
        description="Interval between scheduled goal checks"
    )
    max_concurrency: int = Field(
        default=5,
        ge=1,
        description="How many users are processed in parallel"
    )
    invocation_deadline_seconds: Optional[float] = Field(
        default=None,
        description="Stop admitting new users after this many seconds"
    )

    @field_validator('database_url')
    @classmethod
    def fix_postgres_url(cls, v: str) -> str:
        """Fix Render/Railway postgres:// URL to postgresql://"""
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
