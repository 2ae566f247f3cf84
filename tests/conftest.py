"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging

import pytest

ACCESS_LOGGER = "accesslog.access"


@pytest.fixture(autouse=True)
def reset_access_logger():
    """Restore the access logger level after tests that change it."""
    access_logger = logging.getLogger(ACCESS_LOGGER)
    original = access_logger.level
    yield access_logger
    access_logger.setLevel(original)


@pytest.fixture
def access_lines(caplog):
    """Return a callable listing the access lines captured so far."""
    caplog.set_level(logging.INFO, logger=ACCESS_LOGGER)

    def _lines() -> list[str]:
        return [r.getMessage() for r in caplog.records if r.name == ACCESS_LOGGER]

    return _lines
