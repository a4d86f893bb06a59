from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

# app.py -> streamlit -> ui -> market_watch -> src -> repo root
REPO_ROOT = Path(__file__).resolve().parents[4]
SRC_ROOT = REPO_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from market_watch.domain.models import Session
from market_watch.schedule.quotes import quote_of_day
from market_watch.schedule.sessions import next_session
from market_watch.ui.streamlit.views.briefing import render_briefing_panel
from market_watch.ui.streamlit.views.calendar import render_calendar_panel
from market_watch.ui.streamlit.views.common import get_controller
from market_watch.ui.streamlit.views.watchlist import render_watchlist_sidebar


def _next_update_caption(session: Session) -> str:
    return f"Next update: **{session.name}** (expected {session.time_str})"


def _pro_tip(session: Session) -> str:
    return (
        "Market observations follow the Asian, European and US opening rhythm. "
        f"Refresh around the {session.name} to get the latest pre-market briefing."
    )


def _render_header(session: Session) -> None:
    title, status = st.columns([3, 2])
    title.title("Dashboard")
    title.caption(f'"{quote_of_day()}"')
    status.markdown(_next_update_caption(session))


def main() -> None:
    st.set_page_config(page_title="Market Watch", layout="wide")
    controller = get_controller()
    session = next_session()

    render_watchlist_sidebar(controller)
    _render_header(session)

    main_col, side_col = st.columns([2, 1])
    with main_col:
        render_briefing_panel(controller)
    with side_col:
        render_calendar_panel(controller)
        st.info(_pro_tip(session))


if __name__ == "__main__":
    main()
