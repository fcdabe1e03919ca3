"""
Configuration management for sql_access.

Environment-based configuration using Pydantic BaseSettings. Variables use
the SQLA_ prefix (SQLA_DATABASE_URL, SQLA_POOL_MIN, ...) and may also be
placed in a .env file; SQLA_ENV_FILE points at an alternative file.
"""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url

DEFAULT_ENV_FILE = Path(".env")
ENV_FILE_OVERRIDE = os.getenv("SQLA_ENV_FILE")
SETTINGS_ENV_FILE = (
    Path(ENV_FILE_OVERRIDE).expanduser() if ENV_FILE_OVERRIDE else DEFAULT_ENV_FILE
)


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Pool sizing follows the min/max model: ``pool_min`` connections are kept
    open and up to ``pool_max`` may exist at once.
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias=AliasChoices("SQLA_LOG_LEVEL", "LOG_LEVEL"),
        description="Logging level (uppercase)",
    )

    database_url: str = Field(
        default="mysql+pymysql://root:@localhost:3306/dev_db",
        description="SQLAlchemy database URL",
    )
    pool_min: int = Field(
        default=10, ge=1, description="Connections kept open in the pool"
    )
    pool_max: int = Field(
        default=100, ge=1, description="Maximum connections the pool may open"
    )
    pool_recycle: int = Field(
        default=3600,
        description="Seconds after which pooled connections are replaced (-1 disables)",
    )
    connect_timeout: int = Field(
        default=30, ge=1, description="Driver connection timeout in seconds"
    )
    echo_sql: bool = Field(
        default=False, description="Let SQLAlchemy echo every statement"
    )
    quote_identifiers: bool = Field(
        default=False,
        description="Backtick-quote table and column names in built statements",
    )

    model_config = SettingsConfigDict(
        env_prefix="SQLA_",
        env_file=SETTINGS_ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def validate_pool_bounds(self) -> "Settings":
        """Ensure the pool upper bound is not below the lower bound."""
        if self.pool_max < self.pool_min:
            raise ValueError(
                f"pool_max ({self.pool_max}) must be >= pool_min ({self.pool_min})"
            )
        return self

    def get_database_connection_string(self) -> str:
        """
        Get the database URL for SQLAlchemy.

        ``mysql://`` URLs are pinned to the PyMySQL driver.
        """
        url = self.database_url
        if url.startswith("mysql://"):
            url = url.replace("mysql://", "mysql+pymysql://", 1)
        return url

    def masked_database_url(self) -> str:
        """Database URL with the password hidden, for logging."""
        return make_url(self.get_database_connection_string()).render_as_string(
            hide_password=True
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings instance.

    Tests that change environment variables should call
    ``get_settings.cache_clear()`` first.
    """
    return Settings()
