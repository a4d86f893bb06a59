from __future__ import annotations

from concurrent.futures import Future, wait

import streamlit as st

from market_watch.config.settings import get_settings
from market_watch.dashboard.controller import DashboardController
from market_watch.utils.logging import configure_logging
from market_watch.watchlist.store import WatchlistStore

CONTROLLER_SESSION_KEY = "market_watch_controller"


def get_controller() -> DashboardController:
    """One controller per browser session; the watchlist lives only in memory."""
    controller = st.session_state.get(CONTROLLER_SESSION_KEY)
    if controller is None:
        settings = get_settings()
        configure_logging(settings.log_level)
        controller = DashboardController.from_settings(
            settings, store=WatchlistStore.with_defaults()
        )
        st.session_state[CONTROLLER_SESSION_KEY] = controller
    return controller


def wait_with_spinner(futures: list[Future], label: str) -> None:
    if not futures:
        return
    with st.spinner(label):
        wait(futures)
