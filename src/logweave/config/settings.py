"""Configuration management with Pydantic Settings.

Environment variables are loaded from:
1. Environment variables (highest priority)
2. .env file (development)
3. Defaults (lowest priority)
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Logging level for internal diagnostics."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Logging format."""

    JSON = "json"
    TEXT = "text"


class SinkBackend(str, Enum):
    """Buffer sink implementation."""

    MEMORY = "memory"
    REDIS = "redis"


class RecordDefaults(BaseSettings):
    """Fallback classification for records built without one."""

    model_config = SettingsConfigDict(env_prefix="LOGWEAVE_")

    default_type: str = Field(default="Backend", description="Type used when none is given")
    default_area: str = Field(default="General", description="Area used when none is given")

    @field_validator("default_type", "default_area")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Defaults must never be blank, records rely on them."""
        if not v.strip():
            raise ValueError("Record defaults must not be blank")
        return v.strip()


class RedisSettings(BaseSettings):
    """Redis configuration."""

    model_config = SettingsConfigDict(env_prefix="REDIS_")

    host: str = Field(default="localhost", description="Redis host")
    port: int = Field(default=6379, description="Redis port")
    password: str | None = Field(default=None, description="Redis password")
    db: int = Field(default=0, description="Redis database number")

    @property
    def url(self) -> str:
        """Build Redis URL."""
        if self.password:
            return f"redis://:{self.password}@{self.host}:{self.port}/{self.db}"
        return f"redis://{self.host}:{self.port}/{self.db}"


class SinkSettings(BaseSettings):
    """Buffer sink selection."""

    model_config = SettingsConfigDict(env_prefix="SINK_")

    backend: SinkBackend = Field(
        default=SinkBackend.MEMORY,
        description="Where flushed records go",
    )
    redis_key: str = Field(
        default="logweave:records",
        description="Redis list receiving flushed records",
    )


class HttpFormatterSettings(BaseSettings):
    """Request/response serialization for integration records."""

    model_config = SettingsConfigDict(env_prefix="HTTP_")

    redact_headers: list[str] = Field(
        default_factory=lambda: ["authorization", "cookie", "set-cookie", "x-api-key"],
        description="Header names replaced by a redaction marker",
    )
    max_body_chars: int = Field(
        default=32768,
        description="Bodies longer than this are truncated",
    )

    @field_validator("redact_headers")
    @classmethod
    def lowercase_headers(cls, v: list[str]) -> list[str]:
        """Header matching is case-insensitive."""
        return [h.lower() for h in v]


class Settings(BaseSettings):
    """Main application settings.

    All settings can be overridden via environment variables.
    For nested settings, use the appropriate prefix (e.g., REDIS_HOST).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="logweave", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        alias="ENV",
        description="Deployment environment",
    )

    # Logging configuration
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_format: LogFormat = Field(default=LogFormat.JSON, description="Logging format")

    # Nested settings
    records: RecordDefaults = Field(default_factory=RecordDefaults)
    sink: SinkSettings = Field(default_factory=SinkSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)
    http: HttpFormatterSettings = Field(default_factory=HttpFormatterSettings)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses LRU cache to avoid re-parsing environment variables.
    """
    return Settings()
