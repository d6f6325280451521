"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str
    database_echo: bool = False

    # Application
    environment: str = "production"
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_file: str = "logs/investnet.log"
    log_rotation: str = "1 day"
    log_retention: str = "7 days"

    # Team expansion caps (per query)
    team_level1_limit: int = Field(
        default=50, gt=0, description="Max direct referrals fetched for a team"
    )
    team_level_limit: int = Field(
        default=100, gt=0, description="Max members fetched per deeper level"
    )

    # Calendar used for "this month" commission totals
    stats_timezone: str = Field(
        default="America/Sao_Paulo",
        description="IANA timezone for monthly commission statistics",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode='after')
    def validate_production(self) -> 'Settings':
        """Validate production-specific requirements."""
        if self.environment == 'production' and self.debug:
            raise ValueError(
                'DEBUG must be False in production environment. '
                'Set DEBUG=false in your .env file.'
            )
        return self

    @field_validator('database_url')
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate database URL."""
        if not v.startswith(('postgresql://', 'postgresql+asyncpg://')):
            raise ValueError(
                'DATABASE_URL must start with postgresql:// or postgresql+asyncpg://'
            )
        # Engine is always async
        if v.startswith('postgresql://'):
            return v.replace('postgresql://', 'postgresql+asyncpg://', 1)
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize log level name."""
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f'Unknown log level: {v}')
        return level

    @field_validator('stats_timezone')
    @classmethod
    def validate_stats_timezone(cls, v: str) -> str:
        """Ensure timezone name resolves."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f'Unknown timezone: {v}') from e
        return v

    @property
    def stats_tzinfo(self) -> ZoneInfo:
        """Timezone object for monthly statistics."""
        return ZoneInfo(self.stats_timezone)


# Global settings instance
settings = Settings()
