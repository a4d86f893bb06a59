from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any

from market_watch.assistant.responses import (
    build_openai_client,
    create_structured_response,
    extract_response_text,
)
from market_watch.config.settings import Settings, get_settings
from market_watch.domain.models import EconomicEvent, ImpactLevel
from market_watch.utils.dates import iso_day, local_now
from market_watch.utils.logging import get_logger

logger = get_logger(__name__)

_NULLABLE_TEXT = {"type": ["string", "null"]}

EVENT_ITEM_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "date": {
            "type": "string",
            "pattern": r"^\d{4}-\d{2}-\d{2}$",
            "description": "Date of the event (YYYY-MM-DD).",
        },
        "time": {"type": "string", "description": "Time of the event, with timezone if known."},
        "event": {"type": "string", "description": "Name of the event, e.g. CPI release."},
        "impact": {"type": "string", "enum": [level.value for level in ImpactLevel]},
        "forecast": {**_NULLABLE_TEXT, "description": "Consensus forecast if available."},
        "previous": {**_NULLABLE_TEXT, "description": "Previous print if available."},
        "relatedAsset": {**_NULLABLE_TEXT, "description": "The specific asset affected."},
    },
    "required": ["date", "time", "event", "impact", "forecast", "previous", "relatedAsset"],
    "additionalProperties": False,
}

# Structured outputs need an object at the root.
EVENTS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {"events": {"type": "array", "items": EVENT_ITEM_SCHEMA}},
    "required": ["events"],
    "additionalProperties": False,
}


def _events_instructions(locale: str) -> str:
    return (
        "You are an economic calendar researcher for a professional trader.\n"
        "Only list scheduled releases you can confirm with a source.\n"
        f"Translate 'event', 'forecast' and 'relatedAsset' into {locale}."
    )


def _events_prompt(symbols: Sequence[str], *, today: str) -> str:
    return (
        f"Today is {today} (YYYY-MM-DD).\n"
        "Find the major economic events, earnings releases and data prints specifically "
        f"relevant to these assets: {', '.join(symbols)}.\n"
        "Focus on the current week and use web search.\n"
        "Return the events in chronological order.\n"
        "The 'date' field MUST be strictly in YYYY-MM-DD format."
    )


def parse_events_payload(text: str) -> list[EconomicEvent]:
    if not text:
        raise ValueError("empty response text")
    payload = json.loads(text)
    rows = payload.get("events") if isinstance(payload, dict) else payload
    if not isinstance(rows, list):
        raise ValueError("events response must contain a JSON array")
    return [EconomicEvent.from_payload(row) for row in rows]


class EventsClient:
    """Requests this week's economic calendar; degrades to an empty list on failure."""

    def __init__(
        self,
        *,
        model: str,
        locale: str,
        web_enabled: bool = True,
        client: Any | None = None,
        client_factory: Callable[[], Any] = build_openai_client,
        clock: Callable[[], datetime] = local_now,
    ) -> None:
        self.model = model
        self.locale = locale
        self.web_enabled = web_enabled
        self._client = client
        self._client_factory = client_factory
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **kwargs: Any) -> "EventsClient":
        resolved = settings or get_settings()
        return cls(
            model=resolved.openai_model,
            locale=resolved.locale,
            web_enabled=resolved.enable_web_mode,
            **kwargs,
        )

    def request_events(self, symbols: Sequence[str]) -> list[EconomicEvent]:
        if not symbols:
            return []

        today = iso_day(self._clock())
        try:
            if self._client is None:
                self._client = self._client_factory()
            response = create_structured_response(
                self._client,
                model=self.model,
                instructions=_events_instructions(self.locale),
                prompt=_events_prompt(symbols, today=today),
                schema_name="economic_events",
                schema=EVENTS_SCHEMA,
                web_enabled=self.web_enabled,
            )
            return parse_events_payload(extract_response_text(response))
        except Exception as exc:
            logger.warning("Calendar fetch failed for %s: %s", ", ".join(symbols), exc)
            return []
