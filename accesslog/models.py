"""Configuration and per-request record models for the access log."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, field_validator

if TYPE_CHECKING:
    from accesslog.config import Settings


class AccessLogConfig(BaseModel):
    """Immutable middleware configuration, shared by every request."""

    level: int = Field(default=logging.INFO, description="stdlib logging level for access lines")
    include_duration: bool = Field(default=False, description="Append the request latency to each line")
    logger_name: str = Field(default="accesslog.access", description="Logger the access lines go to")
    strict_fields: bool = Field(
        default=False,
        description="Drop the line instead of writing '-' when client address or length is missing",
    )

    model_config = {"frozen": True}

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: object) -> int:
        if isinstance(v, bool):
            raise ValueError("level must be a logging level, not a bool")
        if isinstance(v, str):
            name = "WARNING" if v.strip().upper() == "WARN" else v.strip().upper()
            resolved = logging.getLevelName(name)
            if not isinstance(resolved, int) or resolved <= logging.NOTSET:
                raise ValueError(f"unknown logging level {v!r}")
            return resolved
        if isinstance(v, int):
            if v <= logging.NOTSET or logging.getLevelName(v).startswith("Level "):
                raise ValueError(f"unknown logging level {v!r}")
            return v
        raise ValueError(f"level must be an int or level name, got {type(v).__name__}")

    @classmethod
    def from_settings(cls, settings: Settings) -> AccessLogConfig:
        return cls(
            level=settings.access_log_level,
            include_duration=settings.include_duration,
            strict_fields=settings.strict_fields,
        )


@dataclass(frozen=True)
class AccessRecord:
    """Everything one access line is built from.

    ``client_ip`` and ``content_length`` are None when the request or
    response did not carry them.
    """

    started_at: datetime
    client_ip: str | None
    method: str
    path: str
    http_version: str
    status_code: int
    content_length: int | None

    def missing_fields(self) -> list[str]:
        missing = []
        if self.client_ip is None:
            missing.append("client_ip")
        if self.content_length is None:
            missing.append("content_length")
        return missing


class HealthResponse(BaseModel):
    status: str
    uptime_seconds: float
