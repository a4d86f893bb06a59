from __future__ import annotations

import logging
import os

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_CONFIGURED = False


def _resolve_level(level: str | int | None) -> int:
    if isinstance(level, int):
        return level
    raw = str(level if level is not None else os.getenv("LOG_LEVEL", "INFO")).strip().upper()
    resolved = logging.getLevelName(raw or "INFO")
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | int | None = None) -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return

    logging.basicConfig(level=_resolve_level(level), format=_DEFAULT_FORMAT)
    # httpx logs every OpenAI request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)
