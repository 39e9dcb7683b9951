"""Configuration management for ChaTop.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded once at
application startup and is immutable during runtime; the signing key in
particular is never rotated while the process runs.
"""

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables (prefixed with ``CHATOP_``)
    and .env files. All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CHATOP_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "ChaTop"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = "/api"
    external_url: str = "http://localhost:3001"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 3001
    workers: int = 1

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./data/chatop.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_timeout: int = 30
    db_pool_recycle: int = 3600
    db_echo: bool = False

    # Security Settings
    secret_key: SecretStr = Field(
        ...,
        min_length=32,
        description="HMAC-SHA256 key used to sign bearer tokens",
    )
    public_paths: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Extra path prefixes that skip bearer authentication",
    )

    # CORS Settings
    cors_origins: Annotated[list[str], NoDecode] = Field(default=["http://localhost:4200"])
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = Field(default=["*"])
    cors_allow_headers: list[str] = Field(default=["*"])

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Picture Upload Settings
    upload_dir: str = "./data/uploads"
    upload_url_path: str = "uploads"
    max_picture_size: int = 5 * 1024 * 1024  # 5MB in bytes
    allowed_picture_types: list[str] = Field(default=["image/jpeg", "image/png"])

    @field_validator("cors_origins", "public_paths", mode="before")
    @classmethod
    def parse_comma_separated(cls, v: str | list[str]) -> list[str]:
        """Parse a list from a comma-separated string or list."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @field_validator("upload_url_path")
    @classmethod
    def strip_slashes(cls, v: str) -> str:
        return v.strip("/")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"

    @model_validator(mode="after")
    def validate_sqlite_workers(self) -> "Settings":
        """Validate that SQLite is not used with multiple workers."""
        if self.workers > 1 and self.database_url.startswith("sqlite"):
            raise ValueError(
                "SQLite does not support multiple worker processes. "
                f"Requested {self.workers} workers, but SQLite requires workers=1."
            )
        return self

    @property
    def auth_prefix(self) -> str:
        return f"{self.api_prefix}/auth"

    @property
    def docs_url(self) -> str:
        return f"{self.api_prefix}/swagger-ui"

    @property
    def openapi_url(self) -> str:
        return f"{self.api_prefix}/api-docs"

    @property
    def exempt_paths(self) -> tuple[str, ...]:
        """Path prefixes that bypass the authentication gate."""
        return (
            f"{self.auth_prefix}/register",
            f"{self.auth_prefix}/login",
            self.docs_url,
            self.openapi_url,
            "/health",
            *self.public_paths,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are loaded once at startup. Components that need settings
    receive the instance explicitly rather than calling this function.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
