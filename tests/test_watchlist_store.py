from __future__ import annotations

import pytest

from market_watch.domain.models import AssetType
from market_watch.watchlist.store import WatchlistStore


@pytest.mark.parametrize("symbol", ["NVDA", "btc", "Xau", "eur/usd"])
def test_add_is_case_insensitive_dedupe(symbol):
    store = WatchlistStore()

    first = store.add(symbol)
    second = store.add(symbol.lower())

    assert first is not None
    assert second is None
    assert len(store) == 1
    assert store.symbols() == [symbol.upper()]


def test_add_defaults_name_and_asset_type():
    store = WatchlistStore()
    item = store.add("  aapl ")

    assert item is not None
    assert item.symbol == "AAPL"
    assert item.name == "AAPL"
    assert item.asset_type == AssetType.STOCK
    assert item.id


def test_add_blank_symbol_is_noop():
    store = WatchlistStore()
    assert store.add("   ") is None
    assert len(store) == 0


def test_add_generates_unique_ids_and_keeps_order():
    store = WatchlistStore()
    for symbol in ["MSFT", "BTC", "XAU", "ETH"]:
        store.add(symbol)

    items = store.items()
    assert [item.symbol for item in items] == ["MSFT", "BTC", "XAU", "ETH"]
    assert len({item.id for item in items}) == 4


def test_remove_unknown_id_is_noop():
    store = WatchlistStore()
    store.add("NVDA")
    before = store.items()

    assert store.remove("does-not-exist") is False
    assert store.items() == before


def test_remove_existing_item():
    store = WatchlistStore()
    keep = store.add("NVDA")
    drop = store.add("BTC")

    assert store.remove(drop.id) is True
    assert store.items() == (keep,)


def test_with_defaults_seeds_reference_watchlist():
    store = WatchlistStore.with_defaults()
    items = store.items()

    assert [item.symbol for item in items] == ["BTC", "NVDA", "XAU"]
    assert items[0].name == "Bitcoin"
    assert items[0].asset_type == AssetType.CRYPTO
    assert items[2].asset_type == AssetType.COMMODITY


def test_items_snapshot_is_immutable_copy():
    store = WatchlistStore()
    store.add("NVDA")
    snapshot = store.items()
    store.add("BTC")

    assert len(snapshot) == 1
    assert len(store.items()) == 2


def test_seeded_items_are_removable_by_their_ids():
    store = WatchlistStore.with_defaults()

    for item in store.items():
        assert store.remove(item.id) is True

    assert len(store) == 0
    with pytest.raises(TypeError):
        WatchlistStore(list(WatchlistStore.with_defaults().items()))
