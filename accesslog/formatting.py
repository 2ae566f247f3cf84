"""Common Log Format line assembly.

    <client-ip> - - [<timestamp>] "<method> <path> <version>" <status> <length>[ - <duration>]

The identity and user fields are always ``-``. Fields the request or response
did not provide are written as ``-`` too, unless the caller asks for strict
handling, in which case :class:`MissingFieldError` is raised instead.
"""

from __future__ import annotations

from datetime import datetime, timezone

from accesslog.models import AccessRecord

UNKNOWN_FIELD = "-"

# strftime's %b follows the process locale; CLF always uses English names
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class MissingFieldError(RuntimeError):
    """A value required by the access line was not available."""

    def __init__(self, field: str) -> None:
        super().__init__(f"access log field {field!r} is missing")
        self.field = field


def format_clf_timestamp(moment: datetime) -> str:
    """Format as ``DD/Mon/YYYY:HH:MM:SS +ZZZZ``. Naive datetimes are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    offset = moment.utcoffset()
    total_minutes = int(offset.total_seconds() // 60) if offset else 0
    sign = "-" if total_minutes < 0 else "+"
    hours, minutes = divmod(abs(total_minutes), 60)
    return (
        f"{moment.day:02d}/{_MONTHS[moment.month - 1]}/{moment.year:04d}:"
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d} "
        f"{sign}{hours:02d}{minutes:02d}"
    )


def format_access_line(
    record: AccessRecord, duration: str | None = None, strict: bool = False
) -> str:
    """Build one access line from ``record``.

    ``duration`` is appended after ``" - "`` when given; pass None to leave
    the suffix off entirely.
    """
    if strict:
        missing = record.missing_fields()
        if missing:
            raise MissingFieldError(missing[0])

    client_ip = record.client_ip if record.client_ip is not None else UNKNOWN_FIELD
    length = str(record.content_length) if record.content_length is not None else UNKNOWN_FIELD

    line = (
        f"{client_ip} - - [{format_clf_timestamp(record.started_at)}] "
        f'"{record.method} {record.path} {record.http_version}" '
        f"{record.status_code} {length}"
    )
    if duration is not None:
        line = f"{line} - {duration}"
    return line
