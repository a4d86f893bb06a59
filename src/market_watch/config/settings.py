from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_LOCALE = "Simplified Chinese"
DEFAULT_BRIEFING_ERROR_MESSAGE = "Briefing generation failed. Check the API key or try again."


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _env_text(name: str, default: str) -> str:
    raw = str(os.getenv(name, "") or "").strip()
    return raw or default


@dataclass(frozen=True)
class Settings:
    app_env: str
    openai_model: str
    locale: str
    enable_web_mode: bool
    briefing_error_message: str
    log_level: str


def get_settings() -> Settings:
    return Settings(
        app_env=_env_text("APP_ENV", "development"),
        openai_model=_env_text("OPENAI_MODEL", "gpt-5-mini"),
        locale=_env_text("MARKET_WATCH_LOCALE", DEFAULT_LOCALE),
        enable_web_mode=_env_bool("ENABLE_WEB_MODE", True),
        briefing_error_message=_env_text("BRIEFING_ERROR_MESSAGE", DEFAULT_BRIEFING_ERROR_MESSAGE),
        log_level=_env_text("LOG_LEVEL", "INFO").upper(),
    )
