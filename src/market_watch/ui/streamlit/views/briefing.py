from __future__ import annotations

import streamlit as st

from market_watch.analytics.events import sentiment_tone
from market_watch.dashboard.controller import DashboardController, DashboardSnapshot
from market_watch.domain.models import BriefingSource, MarketBriefing
from market_watch.ui.streamlit.views.common import wait_with_spinner

TONE_COLORS = {
    "bullish": "green",
    "bearish": "red",
    "neutral": "orange",
}


def sentiment_badge(score: float) -> str:
    tone = sentiment_tone(score)
    return f":{TONE_COLORS[tone]}[**{score:g}** {tone}]"


def source_links(sources: tuple[BriefingSource, ...]) -> list[str]:
    return [f"[{source.title}]({source.uri})" for source in sources]


def _render_empty_state(controller: DashboardController, snapshot: DashboardSnapshot) -> None:
    st.markdown("### Daily market observation")
    st.write(
        "Generate a web-grounded AI analysis of the assets on your watchlist "
        "for the current or upcoming session."
    )
    label = "Generate briefing" if snapshot.has_watchlist else "Add an asset first"
    if st.button(label, disabled=not snapshot.has_watchlist, type="primary"):
        wait_with_spinner(controller.refresh(), "Analysing market data sources...")
        st.rerun()


def _render_briefing(briefing: MarketBriefing) -> None:
    header, score = st.columns([4, 1])
    header.markdown(f"### Market briefing `{briefing.date}`")
    header.caption("Daily observation generated by AI")
    score.markdown(f"Sentiment  \n{sentiment_badge(briefing.sentiment_score)}")

    st.markdown(briefing.summary)

    st.markdown("#### Key takeaways")
    for point in briefing.key_takeaways:
        st.markdown(f"- {point}")

    if briefing.sources:
        st.markdown("#### Sources")
        st.markdown(" · ".join(source_links(briefing.sources)))


def render_briefing_panel(controller: DashboardController) -> None:
    snapshot = controller.snapshot()
    if snapshot.error:
        st.error(snapshot.error)

    if snapshot.briefing is None:
        _render_empty_state(controller, snapshot)
        return

    _render_briefing(snapshot.briefing)
    if st.button("Refresh analysis", disabled=not snapshot.has_watchlist):
        wait_with_spinner(controller.refresh(), "Analysing market data sources...")
        st.rerun()
