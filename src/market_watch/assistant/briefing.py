from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any

from market_watch.assistant.responses import (
    build_openai_client,
    create_structured_response,
    extract_response_sources,
    extract_response_text,
)
from market_watch.config.settings import Settings, get_settings
from market_watch.domain.errors import BriefingGenerationError, EmptyWatchlistError
from market_watch.domain.models import MarketBriefing, is_real_number
from market_watch.utils.dates import iso_day, local_now
from market_watch.utils.logging import get_logger

logger = get_logger(__name__)

SENTIMENT_MIN = 0.0
SENTIMENT_MAX = 100.0

BRIEFING_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "summary": {
            "type": "string",
            "description": "Detailed Markdown summary of the session's market action.",
        },
        "keyTakeaways": {
            "type": "array",
            "items": {"type": "string"},
            "description": "3-5 bullet points of crucial information.",
        },
        "sentimentScore": {
            "type": "number",
            "description": "0 (extreme fear) to 100 (extreme greed).",
        },
    },
    "required": ["summary", "keyTakeaways", "sentimentScore"],
    "additionalProperties": False,
}


def _briefing_instructions(locale: str) -> str:
    return (
        "You are an expert financial analyst writing for a professional trader.\n"
        "Guardrails:\n"
        "- Educational market commentary only, not financial advice.\n"
        "- No guaranteed outcomes.\n"
        f"Write every human-readable field in {locale}."
    )


def _briefing_prompt(symbols: Sequence[str], *, today: str, now: datetime, locale: str) -> str:
    return (
        f"Today is {today} (YYYY-MM-DD); the current time is {now.isoformat(timespec='minutes')}.\n\n"
        "Determine the current or upcoming global market session from the current time:\n"
        "- Asian session (UTC 00:00 - 08:00)\n"
        "- European session (UTC 07:00 - 16:00)\n"
        "- US session (UTC 13:30 - 20:00)\n\n"
        f"Review the market performance of these assets: {', '.join(symbols)}.\n\n"
        f"Produce a session market observation report in {locale}:\n"
        "1) Focus on the latest news and price action relevant to the current or upcoming session.\n"
        "2) Identify the primary catalyst (news, data or technicals) driving the moves.\n"
        "3) Give a sentiment score from 0 (extreme fear) to 100 (extreme greed).\n\n"
        "Use web search so every figure is up to date."
    )


def _clamp_sentiment(value: float) -> float:
    clamped = min(max(float(value), SENTIMENT_MIN), SENTIMENT_MAX)
    if clamped != value:
        logger.warning("Sentiment score %s outside [0, 100]; clamped to %s", value, clamped)
    return clamped


def parse_briefing_payload(text: str) -> tuple[str, tuple[str, ...], float]:
    if not text:
        raise ValueError("empty response text")
    payload = json.loads(text)
    if not isinstance(payload, dict):
        raise ValueError("briefing response must be a JSON object")

    summary = payload.get("summary")
    if not isinstance(summary, str):
        raise ValueError("'summary' must be a string")

    takeaways = payload.get("keyTakeaways")
    if not isinstance(takeaways, list) or not all(isinstance(row, str) for row in takeaways):
        raise ValueError("'keyTakeaways' must be a list of strings")

    score = payload.get("sentimentScore")
    if not is_real_number(score):
        raise ValueError("'sentimentScore' must be a number")

    return summary, tuple(takeaways), _clamp_sentiment(score)


class BriefingClient:
    """Requests a structured market briefing for a list of symbols."""

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
    def from_settings(cls, settings: Settings | None = None, **kwargs: Any) -> "BriefingClient":
        resolved = settings or get_settings()
        return cls(
            model=resolved.openai_model,
            locale=resolved.locale,
            web_enabled=resolved.enable_web_mode,
            **kwargs,
        )

    def request_briefing(self, symbols: Sequence[str]) -> MarketBriefing:
        if not symbols:
            raise EmptyWatchlistError("watchlist is empty")

        now = self._clock()
        today = iso_day(now)
        try:
            if self._client is None:
                self._client = self._client_factory()
            response = create_structured_response(
                self._client,
                model=self.model,
                instructions=_briefing_instructions(self.locale),
                prompt=_briefing_prompt(symbols, today=today, now=now, locale=self.locale),
                schema_name="market_briefing",
                schema=BRIEFING_SCHEMA,
                web_enabled=self.web_enabled,
            )
            summary, takeaways, score = parse_briefing_payload(extract_response_text(response))
            sources = tuple(extract_response_sources(response))
        except Exception as exc:
            logger.exception("Briefing generation failed for %s", ", ".join(symbols))
            raise BriefingGenerationError(f"Briefing generation failed: {exc}") from exc

        return MarketBriefing(
            date=today,
            summary=summary,
            key_takeaways=takeaways,
            sentiment_score=score,
            sources=sources,
        )
