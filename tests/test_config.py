"""Tests for settings and middleware configuration."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from accesslog.config import Settings
from accesslog.models import AccessLogConfig


@pytest.mark.parametrize(
    "value, expected",
    [
        ("info", logging.INFO),
        ("DEBUG", logging.DEBUG),
        ("warn", logging.WARNING),
        ("Error", logging.ERROR),
        (logging.CRITICAL, logging.CRITICAL),
    ],
)
def test_level_accepts_names_and_ints(value, expected):
    assert AccessLogConfig(level=value).level == expected


@pytest.mark.parametrize("value", ["verbose", "", 0, 17, True, None, 1.5])
def test_invalid_level_fails_at_construction(value):
    with pytest.raises(ValidationError):
        AccessLogConfig(level=value)


def test_include_duration_defaults_off():
    config = AccessLogConfig()
    assert config.level == logging.INFO
    assert config.include_duration is False
    assert config.strict_fields is False


def test_config_is_immutable():
    config = AccessLogConfig()
    with pytest.raises(ValidationError):
        config.include_duration = True


def test_settings_read_env(monkeypatch):
    monkeypatch.setenv("ACCESSLOG_ACCESS_LOG_LEVEL", "warning")
    monkeypatch.setenv("ACCESSLOG_INCLUDE_DURATION", "true")
    monkeypatch.setenv("ACCESSLOG_LOG_FORMAT", "JSON")

    settings = Settings()

    assert settings.access_log_level == "WARNING"
    assert settings.include_duration is True
    assert settings.log_format == "json"

    config = AccessLogConfig.from_settings(settings)
    assert config.level == logging.WARNING
    assert config.include_duration is True


def test_settings_reject_unknown_log_level(monkeypatch):
    monkeypatch.setenv("ACCESSLOG_LOG_LEVEL", "LOUD")
    with pytest.raises(ValidationError):
        Settings()


def test_settings_reject_unknown_log_format(monkeypatch):
    monkeypatch.setenv("ACCESSLOG_LOG_FORMAT", "xml")
    with pytest.raises(ValidationError):
        Settings()
