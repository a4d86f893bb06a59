from __future__ import annotations

from collections.abc import Iterable

import pandas as pd
import streamlit as st

from market_watch.analytics.events import impact_label, partition_events
from market_watch.dashboard.controller import DashboardController
from market_watch.domain.models import EconomicEvent
from market_watch.ui.streamlit.views.common import wait_with_spinner
from market_watch.utils.dates import iso_day, local_now

EVENT_COLUMNS = ["date", "time", "event", "impact", "forecast", "previous", "related_asset"]


def events_dataframe(events: Iterable[EconomicEvent]) -> pd.DataFrame:
    rows = [
        {
            "date": event.date,
            "time": event.time,
            "event": event.event,
            "impact": impact_label(event.impact),
            "forecast": event.forecast,
            "previous": event.previous,
            "related_asset": event.related_asset,
        }
        for event in events
    ]
    return pd.DataFrame(rows, columns=EVENT_COLUMNS)


def render_calendar_panel(controller: DashboardController, *, today: str | None = None) -> None:
    snapshot = controller.snapshot()
    header, action = st.columns([4, 1])
    header.markdown("### This week's events")
    if action.button("↻", help="Scan the calendar", disabled=not snapshot.has_watchlist):
        future = controller.refresh_events()
        wait_with_spinner([future] if future else [], "Scanning the calendar...")
        st.rerun()

    if not snapshot.events:
        st.caption("No major events found for this week.")
        return

    today_events, other_events = partition_events(snapshot.events, today or iso_day(local_now()))
    if today_events:
        st.markdown("#### Today's key releases")
        st.dataframe(events_dataframe(today_events), hide_index=True, use_container_width=True)

    st.markdown("#### Upcoming")
    if other_events:
        st.dataframe(events_dataframe(other_events), hide_index=True, use_container_width=True)
    else:
        st.caption("Nothing else scheduled.")
