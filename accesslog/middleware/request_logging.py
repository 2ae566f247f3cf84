"""Common Log Format access logging middleware.

Writes one CLF line per request once the downstream response exists:

    203.0.113.5 - - [10/Oct/2023:13:55:36 +0000] "GET /health HTTP/1.1" 200 12 - 42µs

The duration suffix is optional. When the access logger is not enabled for
the configured level the request passes straight through with no timing or
formatting work. The check runs per request, so level changes made at
runtime apply from the next request on.

The request target is logged undecoded, as the client sent it. The protocol
is ``HTTP/`` plus the ASGI ``http_version`` value, so HTTP/2 traffic shows
as ``HTTP/2`` rather than ``HTTP/2.0``.
"""

from __future__ import annotations

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Scope

from accesslog.formatting import MissingFieldError, format_access_line
from accesslog.models import AccessLogConfig, AccessRecord
from accesslog.timing import RequestTimer, format_duration

logger = logging.getLogger(__name__)


def is_logging_enabled(access_logger: logging.Logger, level: int) -> bool:
    return access_logger.isEnabledFor(level)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware that writes a CLF access line for every completed request.

    Configure either with keyword arguments or a prebuilt ``AccessLogConfig``:

        app.add_middleware(RequestLoggingMiddleware, level="info", include_duration=True)

    ``level`` defaults to INFO and ``include_duration`` to False, so
    ``app.add_middleware(RequestLoggingMiddleware)`` logs plain CLF at INFO.
    """

    def __init__(
        self,
        app: ASGIApp,
        level: int | str = logging.INFO,
        include_duration: bool = False,
        logger_name: str = "accesslog.access",
        strict_fields: bool = False,
        config: AccessLogConfig | None = None,
    ) -> None:
        super().__init__(app)
        self.config = config or AccessLogConfig(
            level=level,
            include_duration=include_duration,
            logger_name=logger_name,
            strict_fields=strict_fields,
        )
        self.access_logger = logging.getLogger(self.config.logger_name)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not is_logging_enabled(self.access_logger, self.config.level):
            return await call_next(request)

        timer = RequestTimer.start()
        response = await call_next(request)

        duration = None
        if self.config.include_duration:
            duration = format_duration(timer.elapsed_micros())

        record = build_record(request, response, timer)
        try:
            line = format_access_line(record, duration, strict=self.config.strict_fields)
        except MissingFieldError:
            logger.exception(
                "Dropped access line for %s %s", request.method, request.url.path
            )
            return response

        for field in record.missing_fields():
            logger.warning(
                "Access line for %s %s has no %s, wrote '-'",
                request.method,
                request.url.path,
                field,
            )

        self.access_logger.log(self.config.level, line)
        return response


def build_record(request: Request, response: Response, timer: RequestTimer) -> AccessRecord:
    """Collect the request and response values an access line needs."""
    return AccessRecord(
        started_at=timer.started_at,
        client_ip=request.client.host if request.client else None,
        method=request.method,
        path=request_target(request.scope),
        http_version=f"HTTP/{request.scope.get('http_version', '1.1')}",
        status_code=response.status_code,
        content_length=_content_length(response),
    )


def request_target(scope: Scope) -> str:
    """The path and query as the client sent them, without percent-decoding.

    Bytes that would break the quoted request field (``"``, whitespace,
    control and non-ASCII bytes) are written as ``%XX``.
    """
    raw_path = scope.get("raw_path")
    if raw_path:
        # some servers include the query string in raw_path
        path = raw_path.split(b"?", 1)[0]
    else:
        path = scope["path"].encode("utf-8")

    target = _escape(path)
    query = scope.get("query_string", b"")
    if query:
        target = f"{target}?{_escape(query)}"
    return target


def _escape(raw: bytes) -> str:
    return "".join(
        chr(b) if 0x21 <= b <= 0x7E and b != 0x22 else f"%{b:02X}" for b in raw
    )


def _content_length(response: Response) -> int | None:
    raw = response.headers.get("content-length")
    if raw is None:
        return None
    raw = raw.strip()
    if not (raw.isascii() and raw.isdigit()):
        return None
    return int(raw)
