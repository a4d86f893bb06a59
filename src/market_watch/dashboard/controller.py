"""Dashboard state machine coordinating the watchlist and both AI request tracks.

Each command produces a new immutable `DashboardSnapshot`. The briefing and
events requests run on a small thread pool and resolve independently: a
failed briefing never touches the events track and vice versa. Every dispatch
carries a per-track token; a result whose token is no longer current (the
track was re-dispatched, or the watchlist was emptied meanwhile) is dropped so
it cannot resurrect stale data.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from market_watch.assistant.briefing import BriefingClient
from market_watch.assistant.events import EventsClient
from market_watch.config.settings import DEFAULT_BRIEFING_ERROR_MESSAGE, Settings, get_settings
from market_watch.domain.models import EconomicEvent, MarketBriefing, WatchlistItem
from market_watch.utils.logging import get_logger
from market_watch.watchlist.store import WatchlistStore

logger = get_logger(__name__)

Subscriber = Callable[["DashboardSnapshot"], None]


class TrackStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class DashboardSnapshot:
    watchlist: tuple[WatchlistItem, ...] = ()
    briefing: MarketBriefing | None = None
    events: tuple[EconomicEvent, ...] = ()
    briefing_status: TrackStatus = TrackStatus.IDLE
    events_status: TrackStatus = TrackStatus.IDLE
    error: str | None = None

    @property
    def loading_briefing(self) -> bool:
        return self.briefing_status is TrackStatus.LOADING

    @property
    def loading_events(self) -> bool:
        return self.events_status is TrackStatus.LOADING

    @property
    def has_watchlist(self) -> bool:
        return bool(self.watchlist)

    def symbols(self) -> list[str]:
        return [item.symbol for item in self.watchlist]


class DashboardController:
    def __init__(
        self,
        briefing_client: BriefingClient,
        events_client: EventsClient,
        *,
        store: WatchlistStore | None = None,
        executor: Executor | None = None,
        briefing_error_message: str = DEFAULT_BRIEFING_ERROR_MESSAGE,
    ) -> None:
        self._briefing_client = briefing_client
        self._events_client = events_client
        self._store = store if store is not None else WatchlistStore()
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=2, thread_name_prefix="market-watch"
        )
        self._briefing_error_message = briefing_error_message
        self._lock = threading.Lock()
        self._publish_lock = threading.Lock()
        self._closed = False
        self._version = 0
        self._published_version = 0
        self._subscribers: list[Subscriber] = []
        self._briefing_token = 0
        self._events_token = 0
        self._state = DashboardSnapshot(watchlist=self._store.items())

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        store: WatchlistStore | None = None,
        client: Any | None = None,
    ) -> "DashboardController":
        resolved = settings or get_settings()
        return cls(
            BriefingClient.from_settings(resolved, client=client),
            EventsClient.from_settings(resolved, client=client),
            store=store,
            briefing_error_message=resolved.briefing_error_message,
        )

    def snapshot(self) -> DashboardSnapshot:
        with self._lock:
            return self._state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register `callback` for every new snapshot; returns an unsubscribe callable.

        Callbacks run after the controller lock is released, on whichever
        thread made the change (worker threads included), so they may call
        back into the controller. A snapshot older than one already delivered
        is skipped.
        """
        with self._lock:
            self._subscribers.append(callback)

        def _unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return _unsubscribe

    def _commit(self, **changes: Any) -> tuple[int, DashboardSnapshot]:
        # Caller holds the lock; pass the result to _publish once released.
        self._state = replace(self._state, **changes)
        self._version += 1
        return self._version, self._state

    def _publish(self, committed: tuple[int, DashboardSnapshot]) -> None:
        version, snapshot = committed
        with self._publish_lock:
            if version <= self._published_version:
                return
            self._published_version = version
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(snapshot)
            except Exception:
                logger.exception("Dashboard subscriber %r failed", callback)

    def add(self, symbol: str) -> WatchlistItem | None:
        item = self._store.add(symbol)
        if item is None:
            return None
        with self._lock:
            committed = self._commit(watchlist=self._store.items())
        self._publish(committed)
        logger.info("Added %s to watchlist", item.symbol)
        return item

    def remove(self, item_id: str) -> bool:
        if not self._store.remove(item_id):
            return False

        with self._lock:
            items = self._store.items()
            if items:
                committed = self._commit(watchlist=items)
            else:
                self._briefing_token += 1
                self._events_token += 1
                committed = self._commit(
                    watchlist=(),
                    briefing=None,
                    events=(),
                    briefing_status=TrackStatus.IDLE,
                    events_status=TrackStatus.IDLE,
                    error=None,
                )
        self._publish(committed)
        if not items:
            logger.info("Watchlist emptied; cleared briefing and events")
        return True

    def refresh(self) -> list[Future]:
        with self._lock:
            # Symbols come from the committed watchlist so they and the
            # tokens change together with remove().
            symbols = self._state.symbols()
            if self._closed or not symbols:
                return []
            self._briefing_token += 1
            self._events_token += 1
            try:
                futures = [
                    self._executor.submit(self._run_briefing, symbols, self._briefing_token),
                    self._executor.submit(self._run_events, symbols, self._events_token),
                ]
            except RuntimeError as exc:
                self._briefing_token += 1
                self._events_token += 1
                logger.warning("Refresh not dispatched: %s", exc)
                return []
            committed = self._commit(
                error=None,
                briefing_status=TrackStatus.LOADING,
                events_status=TrackStatus.LOADING,
            )

        self._publish(committed)
        logger.info("Refreshing briefing and events for %s", ", ".join(symbols))
        return futures

    def refresh_events(self) -> Future | None:
        with self._lock:
            symbols = self._state.symbols()
            if self._closed or not symbols:
                return None
            self._events_token += 1
            try:
                future = self._executor.submit(self._run_events, symbols, self._events_token)
            except RuntimeError as exc:
                self._events_token += 1
                logger.warning("Events refresh not dispatched: %s", exc)
                return None
            committed = self._commit(events_status=TrackStatus.LOADING)

        self._publish(committed)
        return future

    def _run_briefing(self, symbols: list[str], token: int) -> None:
        try:
            briefing = self._briefing_client.request_briefing(symbols)
        except Exception as exc:
            with self._lock:
                if token != self._briefing_token:
                    logger.debug("Dropping stale briefing failure (token %s)", token)
                    return
                logger.error("Briefing track failed: %s", exc)
                committed = self._commit(
                    briefing_status=TrackStatus.FAILED,
                    error=self._briefing_error_message,
                )
            self._publish(committed)
            return

        with self._lock:
            if token != self._briefing_token:
                logger.debug("Dropping stale briefing result (token %s)", token)
                return
            committed = self._commit(briefing=briefing, briefing_status=TrackStatus.SUCCESS)
        self._publish(committed)

    def _run_events(self, symbols: list[str], token: int) -> None:
        try:
            events = tuple(self._events_client.request_events(symbols))
        except Exception:
            logger.exception("Events client raised; showing an empty calendar")
            events = ()

        with self._lock:
            if token != self._events_token:
                logger.debug("Dropping stale events result (token %s)", token)
                return
            committed = self._commit(events=events, events_status=TrackStatus.SUCCESS)
        self._publish(committed)

    def close(self) -> None:
        with self._lock:
            self._closed = True
        if self._owns_executor:
            self._executor.shutdown(wait=True)
