"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults for the pool, logging and HTTP process wiring

Collaborators:
  - api/main.py: reads settings for the pool lifecycle and uvicorn
  - infrastructure/db/pool.py: statement_timeout per connection
  - infrastructure/db/instrumentation.py: slow query threshold / healthcheck
  - api/dependencies.py: name of the caller identity header

Constraints:
  - Lives in the crosscutting layer, NOT in domain/application
  - No business logic: pure configuration

Notes:
  - Singleton via lru_cache
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        database_url: PostgreSQL connection string
        app_env: Application environment (development/production)
        log_level: Logger level name (default: INFO)
        log_json: Emit JSON log lines (default: True)
        db_pool_min_size: Minimum pooled connections (default: 2)
        db_pool_max_size: Maximum pooled connections (default: 10)
        db_statement_timeout_ms: Server-side statement timeout, 0 disables
        db_slow_query_seconds: Threshold for slow query warnings
        db_healthcheck_on_acquire: Run SELECT 1 when a connection is checked out
        user_header: HTTP header carrying the caller identity
        host: Bind address for the HTTP server
        port: Bind port for the HTTP server
    """

    # Required (no defaults)
    database_url: str

    # Environment
    app_env: str = "development"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # Database - Connection Pool
    db_pool_min_size: int = 2
    db_pool_max_size: int = 10
    db_statement_timeout_ms: int = 30000  # 30 seconds
    db_slow_query_seconds: float = 0.25
    db_healthcheck_on_acquire: bool = True

    # HTTP
    user_header: str = "user"
    host: str = "0.0.0.0"
    port: int = 8080

    @field_validator("db_pool_min_size", "db_pool_max_size")
    @classmethod
    def pool_size_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("pool sizes must be greater than 0")
        return v

    @field_validator("db_statement_timeout_ms")
    @classmethod
    def statement_timeout_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("db_statement_timeout_ms must be >= 0")
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_valid(cls, v: str) -> str:
        level = (v or "INFO").strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log_level: {v}")
        return level

    @field_validator("user_header")
    @classmethod
    def user_header_not_empty(cls, v: str) -> str:
        header = (v or "").strip()
        if not header:
            raise ValueError("user_header must not be empty")
        return header

    @model_validator(mode="after")
    def validate_pool_bounds(self):
        if self.db_pool_min_size > self.db_pool_max_size:
            raise ValueError(
                f"db_pool_min_size ({self.db_pool_min_size}) must be <= "
                f"db_pool_max_size ({self.db_pool_max_size})"
            )
        return self

    def is_production(self) -> bool:
        return self.app_env.strip().lower() == "production"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get singleton Settings instance.

    Raises:
        ValidationError: If required env vars are missing or invalid
    """
    return Settings()
