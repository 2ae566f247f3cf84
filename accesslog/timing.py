"""Request timing: a wall-clock start instant plus monotonic elapsed time."""

from __future__ import annotations

import time
from datetime import datetime, timezone


class RequestTimer:
    """Brackets one downstream call.

    ``started_at`` is the wall-clock instant shown in the log line; elapsed
    time comes from the monotonic clock so clock adjustments cannot make it
    negative.
    """

    __slots__ = ("started_at", "_start")

    def __init__(self, started_at: datetime, start: float) -> None:
        self.started_at = started_at
        self._start = start

    @classmethod
    def start(cls) -> RequestTimer:
        return cls(datetime.now(timezone.utc), time.perf_counter())

    def elapsed_micros(self) -> int:
        return max(0, int((time.perf_counter() - self._start) * 1_000_000))


def format_duration(micros: int) -> str:
    """Render elapsed microseconds on a human scale.

    Under a millisecond stays in whole microseconds, under a second goes to
    milliseconds and anything longer to seconds, both with two decimals.
    """
    if micros < 1_000:
        return f"{micros}µs"
    if micros < 1_000_000:
        return f"{micros / 1_000:.2f}ms"
    return f"{micros / 1_000_000:.2f}s"
