"""In-memory ordered watchlist with case-insensitive symbol dedupe."""

from __future__ import annotations

import threading
from collections.abc import Iterator

from market_watch.domain.models import (
    AssetType,
    WatchlistItem,
    coerce_asset_type,
    new_item_id,
)

DEFAULT_WATCHLIST: tuple[tuple[str, str, AssetType], ...] = (
    ("BTC", "Bitcoin", AssetType.CRYPTO),
    ("NVDA", "Nvidia", AssetType.STOCK),
    ("XAU", "Gold", AssetType.COMMODITY),
)


def normalize_symbol(symbol: str | None) -> str | None:
    token = str(symbol or "").strip().upper()
    return token or None


class WatchlistStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: list[WatchlistItem] = []

    @classmethod
    def with_defaults(cls) -> "WatchlistStore":
        store = cls()
        for symbol, name, asset_type in DEFAULT_WATCHLIST:
            store.add(symbol, name=name, asset_type=asset_type)
        return store

    def add(
        self,
        symbol: str,
        *,
        name: str | None = None,
        asset_type: AssetType | str = AssetType.STOCK,
    ) -> WatchlistItem | None:
        ticker = normalize_symbol(symbol)
        if ticker is None:
            return None

        with self._lock:
            if any(item.symbol.upper() == ticker for item in self._items):
                return None
            item = WatchlistItem(
                id=new_item_id(),
                symbol=ticker,
                name=str(name or "").strip() or ticker,
                asset_type=coerce_asset_type(asset_type),
            )
            self._items.append(item)
            return item

    def remove(self, item_id: str) -> bool:
        with self._lock:
            remaining = [item for item in self._items if item.id != item_id]
            removed = len(remaining) != len(self._items)
            self._items = remaining
            return removed

    def items(self) -> tuple[WatchlistItem, ...]:
        with self._lock:
            return tuple(self._items)

    def symbols(self) -> list[str]:
        with self._lock:
            return [item.symbol for item in self._items]

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[WatchlistItem]:
        return iter(self.items())
