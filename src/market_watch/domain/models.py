from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from numbers import Real
from typing import Any
from uuid import uuid4


def new_item_id() -> str:
    return uuid4().hex


class AssetType(str, Enum):
    STOCK = "stock"
    CRYPTO = "crypto"
    FOREX = "forex"
    COMMODITY = "commodity"


class ImpactLevel(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


def coerce_asset_type(value: AssetType | str) -> AssetType:
    if isinstance(value, AssetType):
        return value
    return AssetType(str(value or "").strip().lower())


def _coerce_impact(value: ImpactLevel | str) -> ImpactLevel:
    if isinstance(value, ImpactLevel):
        return value
    return ImpactLevel(str(value or "").strip().upper())


def _required_text(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string")
    return value


def _optional_text(payload: dict[str, Any], key: str) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string or null")
    token = value.strip()
    return token or None


@dataclass(frozen=True)
class WatchlistItem:
    id: str
    symbol: str
    name: str
    asset_type: AssetType = AssetType.STOCK

    def as_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "symbol": self.symbol,
            "name": self.name,
            "asset_type": self.asset_type.value,
        }


@dataclass(frozen=True)
class BriefingSource:
    title: str
    uri: str


@dataclass(frozen=True)
class MarketBriefing:
    date: str
    summary: str
    key_takeaways: tuple[str, ...]
    sentiment_score: float
    sources: tuple[BriefingSource, ...] = field(default_factory=tuple)

    def as_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "summary": self.summary,
            "key_takeaways": list(self.key_takeaways),
            "sentiment_score": self.sentiment_score,
            "sources": [{"title": s.title, "uri": s.uri} for s in self.sources],
        }


@dataclass(frozen=True)
class EconomicEvent:
    date: str
    time: str
    event: str
    impact: ImpactLevel
    forecast: str | None = None
    previous: str | None = None
    related_asset: str | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "EconomicEvent":
        if not isinstance(payload, dict):
            raise ValueError("event entry must be a JSON object")
        return cls(
            date=_required_text(payload, "date").strip(),
            time=_required_text(payload, "time").strip(),
            event=_required_text(payload, "event").strip(),
            impact=_coerce_impact(_required_text(payload, "impact")),
            forecast=_optional_text(payload, "forecast"),
            previous=_optional_text(payload, "previous"),
            related_asset=_optional_text(payload, "relatedAsset"),
        )

    def as_dict(self) -> dict[str, str | None]:
        return {
            "date": self.date,
            "time": self.time,
            "event": self.event,
            "impact": self.impact.value,
            "forecast": self.forecast,
            "previous": self.previous,
            "related_asset": self.related_asset,
        }


@dataclass(frozen=True)
class Session:
    name: str
    time_str: str
    minutes_since_utc_midnight: int


def is_real_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)
