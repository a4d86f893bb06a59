from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone

from market_watch.config.settings import (
    DEFAULT_BRIEFING_ERROR_MESSAGE,
    DEFAULT_LOCALE,
    get_settings,
)
from market_watch.utils import logging as logging_module
from market_watch.utils.dates import (
    as_utc,
    day_of_year,
    iso_day,
    minutes_since_utc_midnight,
    utc_now,
)


def test_settings_defaults_when_env_unset(monkeypatch) -> None:
    for name in (
        "APP_ENV",
        "OPENAI_MODEL",
        "MARKET_WATCH_LOCALE",
        "ENABLE_WEB_MODE",
        "BRIEFING_ERROR_MESSAGE",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.app_env == "development"
    assert settings.openai_model == "gpt-5-mini"
    assert settings.locale == DEFAULT_LOCALE == "Simplified Chinese"
    assert settings.enable_web_mode is True
    assert settings.briefing_error_message == DEFAULT_BRIEFING_ERROR_MESSAGE
    assert settings.log_level == "INFO"


def test_settings_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("MARKET_WATCH_LOCALE", "English")
    monkeypatch.setenv("ENABLE_WEB_MODE", "off")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("OPENAI_MODEL", "   ")

    settings = get_settings()

    assert settings.locale == "English"
    assert settings.enable_web_mode is False
    assert settings.log_level == "DEBUG"
    assert settings.openai_model == "gpt-5-mini"


def test_dates_helpers() -> None:
    assert utc_now().tzinfo is not None
    assert as_utc(datetime(2024, 5, 1, 9, 0)).tzinfo is timezone.utc

    shanghai = timezone(timedelta(hours=8))
    assert minutes_since_utc_midnight(datetime(2024, 5, 1, 7, 45, tzinfo=shanghai)) == 23 * 60 + 45
    assert minutes_since_utc_midnight(datetime(2024, 5, 1, 7, 30)) == 450

    assert iso_day(datetime(2024, 5, 1, 23, 59)) == "2024-05-01"
    assert iso_day(date(2024, 12, 31)) == "2024-12-31"
    assert day_of_year(date(2024, 1, 1)) == 1
    assert day_of_year(date(2024, 12, 31)) == 366


def test_resolve_level_accepts_names_and_ints(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "warning")
    assert logging_module._resolve_level(None) == logging.WARNING
    assert logging_module._resolve_level("debug") == logging.DEBUG
    assert logging_module._resolve_level(logging.ERROR) == logging.ERROR
    assert logging_module._resolve_level("nonsense") == logging.INFO


def test_get_logger_returns_named_logger() -> None:
    logger = logging_module.get_logger("market_watch.test")
    assert logger.name == "market_watch.test"
