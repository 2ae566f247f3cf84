"""Logging configuration.

Provides JSON or text logging based on the ACCESSLOG_LOG_FORMAT setting.
JSON output suits log aggregation; text output is for local development.
Access lines are plain CLF strings either way, carried in the message field.
"""

from __future__ import annotations

import logging
import sys

from pythonjsonlogger.json import JsonFormatter

from accesslog.config import Settings, settings as default_settings


def setup_logging(settings: Settings | None = None) -> None:
    """Configure root logging for the application.

    Respects ACCESSLOG_LOG_LEVEL and ACCESSLOG_LOG_FORMAT settings.
    """
    settings = settings or default_settings
    log_level = getattr(logging, settings.log_level, logging.INFO)
    root_logger = logging.getLogger()

    # Remove existing handlers to avoid duplicates on reload
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    if settings.log_format == "json":
        handler.setFormatter(_json_formatter())
    else:
        handler.setFormatter(_text_formatter())
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # The access middleware replaces uvicorn's own access lines
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def _json_formatter() -> logging.Formatter:
    return JsonFormatter(
        fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
        rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )


def _text_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
