"""FastAPI application with CLF access logging installed."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from accesslog.config import Settings, settings as default_settings
from accesslog.logging_config import setup_logging
from accesslog.middleware.request_logging import RequestLoggingMiddleware
from accesslog.models import AccessLogConfig
from accesslog.routes import health

_logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application, wiring the access log from ``settings``."""
    settings = settings or default_settings
    access_config = AccessLogConfig.from_settings(settings)

    app = FastAPI(
        title="Access Log Service",
        description="HTTP service writing Common Log Format access lines",
        version="0.1.0",
    )
    app.add_middleware(RequestLoggingMiddleware, config=access_config)
    app.include_router(health.router)

    @app.get("/")
    async def root():
        return {
            "service": "accesslog",
            "version": "0.1.0",
            "docs": "/docs",
        }

    _logger.debug(
        "Access log at %s (duration=%s, strict=%s)",
        logging.getLevelName(access_config.level),
        access_config.include_duration,
        access_config.strict_fields,
    )
    return app


def start():
    """Entry point for running the server directly."""
    import uvicorn

    # Configure logging before anything else
    setup_logging(default_settings)
    uvicorn.run(
        create_app(default_settings),
        host=default_settings.host,
        port=default_settings.port,
        access_log=False,
    )


if __name__ == "__main__":
    start()
