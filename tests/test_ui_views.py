from __future__ import annotations

from pathlib import Path

from market_watch.domain.models import BriefingSource, EconomicEvent, ImpactLevel
from market_watch.schedule.sessions import SESSIONS
from market_watch.ui.streamlit.views.briefing import sentiment_badge, source_links
from market_watch.ui.streamlit.views.calendar import EVENT_COLUMNS, events_dataframe


def test_events_dataframe_uses_display_labels():
    events = [
        EconomicEvent(date="2024-05-01", time="14:00 EDT", event="FOMC", impact=ImpactLevel.HIGH, forecast="5.50%"),
        EconomicEvent(date="2024-05-02", time="08:30 EDT", event="Claims", impact=ImpactLevel.LOW),
    ]

    frame = events_dataframe(events)

    assert list(frame.columns) == EVENT_COLUMNS
    assert frame["impact"].tolist() == ["High", "Low"]
    assert frame["forecast"].tolist()[0] == "5.50%"


def test_events_dataframe_empty_keeps_columns():
    frame = events_dataframe([])
    assert frame.empty
    assert list(frame.columns) == EVENT_COLUMNS


def test_sentiment_badge_colors_by_tone():
    assert sentiment_badge(72) == ":green[**72** bullish]"
    assert sentiment_badge(25.5) == ":red[**25.5** bearish]"
    assert sentiment_badge(50) == ":orange[**50** neutral]"


def test_source_links_render_markdown():
    sources = (BriefingSource(title="Reuters", uri="https://reuters.example.com"),)
    assert source_links(sources) == ["[Reuters](https://reuters.example.com)"]


def test_app_header_helpers():
    from market_watch.ui.streamlit import app as streamlit_app

    caption = streamlit_app._next_update_caption(SESSIONS[1])
    assert "US pre-market" in caption
    assert "21:00 (UTC+8)" in caption
    assert "European pre-market" in streamlit_app._pro_tip(SESSIONS[0])


def test_app_entrypoint_wires_views():
    root = Path(__file__).resolve().parents[1]
    content = (root / "src/market_watch/ui/streamlit/app.py").read_text(encoding="utf-8")
    for expected in (
        "from market_watch.ui.streamlit.views.briefing import render_briefing_panel",
        "from market_watch.ui.streamlit.views.calendar import render_calendar_panel",
        "from market_watch.ui.streamlit.views.watchlist import render_watchlist_sidebar",
    ):
        assert expected in content
