"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. An empty DATABASE_URL means the SQL store is not
configured: the activity log query path answers 500 and the write path
becomes a silent no-op.
"""

from functools import lru_cache
from typing import Any

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ACTIVITY_LOG_DISPATCH_MODES = ("inline", "background")


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "leaguedesk"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (postgresql+asyncpg://... in production, sqlite+aiosqlite:// in tests)
    database_url: str = ""
    database_echo: bool = False
    # Optional pool/driver overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Security (token verification only; issuance lives outside this service)
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Activity log
    admin_role: str = "admin"
    activity_log_dispatch_mode: str = "background"
    activity_log_write_timeout_seconds: float = 5.0
    # ACTIVITY_LOG_RETENTION_DAYS: absent, unparsable or <= 0 disables pruning.
    activity_log_retention_days: int | None = None
    activity_log_cleanup_interval_seconds: int = 86_400
    # Look up the acting user by a body-supplied email when no token identifies them.
    activity_log_resolve_claimed_actor: bool = True

    # Largest JSON body the context middleware buffers for pre-auth actor hints.
    context_body_max_bytes: int = 64 * 1024

    # Telemetry (OpenTelemetry)
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"  # console, otlp, none
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("activity_log_retention_days", mode="before")
    @classmethod
    def _parse_retention_days(cls, value: Any) -> int | None:
        """Coerce the retention window; anything unusable means 'disabled'."""
        if value is None:
            return None
        try:
            days = int(str(value).strip())
        except ValueError:
            return None
        return days if days > 0 else None

    @model_validator(mode="after")
    def validate_activity_log(self) -> "Settings":
        """Validate activity log dispatch settings."""
        if self.activity_log_dispatch_mode not in ACTIVITY_LOG_DISPATCH_MODES:
            raise ValueError(
                "activity_log_dispatch_mode must be one of "
                f"{ACTIVITY_LOG_DISPATCH_MODES}, got: {self.activity_log_dispatch_mode!r}"
            )
        if self.activity_log_write_timeout_seconds <= 0:
            raise ValueError("activity_log_write_timeout_seconds must be positive")
        return self

    @property
    def sql_configured(self) -> bool:
        """True when a SQL database URL is set."""
        return bool(self.database_url.strip())


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.
    """
    return Settings()
