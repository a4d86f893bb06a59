from __future__ import annotations

from collections.abc import Iterable

from market_watch.domain.models import EconomicEvent, ImpactLevel

IMPACT_LABELS = {
    ImpactLevel.HIGH: "High",
    ImpactLevel.MEDIUM: "Medium",
    ImpactLevel.LOW: "Low",
}

BULLISH_THRESHOLD = 60.0
BEARISH_THRESHOLD = 40.0


def partition_events(
    events: Iterable[EconomicEvent], today: str
) -> tuple[list[EconomicEvent], list[EconomicEvent]]:
    """Split events into (today, other), keeping the input order within each side."""
    today_events: list[EconomicEvent] = []
    other_events: list[EconomicEvent] = []
    for event in events:
        if event.date == today:
            today_events.append(event)
        else:
            other_events.append(event)
    return today_events, other_events


def impact_label(impact: ImpactLevel | str) -> str:
    try:
        level = impact if isinstance(impact, ImpactLevel) else ImpactLevel(str(impact).upper())
    except ValueError:
        return str(impact)
    return IMPACT_LABELS[level]


def sentiment_tone(score: float | None) -> str:
    if score is None:
        return "neutral"
    if score >= BULLISH_THRESHOLD:
        return "bullish"
    if score <= BEARISH_THRESHOLD:
        return "bearish"
    return "neutral"
