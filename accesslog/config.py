"""Access log service configuration — loaded from environment variables."""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings

_VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """Application settings, loaded from environment variables.

    All settings are prefixed with ACCESSLOG_ (e.g., ACCESSLOG_LOG_LEVEL).
    """

    # API
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"  # "text" or "json"

    # Access log middleware
    access_log_level: str = "INFO"
    include_duration: bool = False
    strict_fields: bool = False

    model_config = {"env_prefix": "ACCESSLOG_"}

    @field_validator("log_level", "access_log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.upper() not in _VALID_LEVELS:
            raise ValueError(f"log level must be one of {_VALID_LEVELS}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in ("text", "json"):
            raise ValueError("log_format must be 'text' or 'json'")
        return v.lower()


settings = Settings()
