# src/upload_api/config/settings.py
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Values passed to the constructor (highest priority)
    2. Environment variables prefixed with ``UPLOAD_API_``
    3. .env file (if exists)
    4. Default values in this class (lowest priority)

    Usage:
        from upload_api.config.settings import Settings
        app = create_app(Settings(storage_dir="/tmp/uploads"))
    """

    # Server
    host: str = Field(
        default="0.0.0.0",
        description="Interface the HTTP server listens on"
    )

    port: int = Field(
        default=9393,
        ge=1,
        le=65535,
        description="Port the HTTP server listens on"
    )

    # Storage Configuration
    storage_dir: str = Field(
        default="./upload",
        description="Directory uploaded files are written to and served from"
    )

    # Upload limits
    max_upload_size: int = Field(
        default=2_000_000,
        gt=0,
        description="Maximum size in bytes of an uploaded file"
    )

    multipart_overhead_bytes: int = Field(
        default=64 * 1024,
        ge=0,
        description="Allowance for multipart boundaries and headers on top of max_upload_size"
    )

    token_bytes: int = Field(
        default=12,
        gt=0,
        description="Random bytes used for each generated file name"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard logging level names."""
        level = v.upper()
        valid_levels = ["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]
        if level not in valid_levels:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {valid_levels}")
        return level

    @property
    def max_request_body_size(self) -> int:
        """Largest multipart request body accepted before parsing fails."""
        return self.max_upload_size + self.multipart_overhead_bytes

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_prefix="UPLOAD_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures the CLI only builds one Settings instance per process.
    """
    return Settings()
