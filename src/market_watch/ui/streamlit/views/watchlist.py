from __future__ import annotations

import streamlit as st

from market_watch.dashboard.controller import DashboardController


def render_watchlist_sidebar(controller: DashboardController) -> None:
    snapshot = controller.snapshot()
    with st.sidebar:
        st.title("Market Watch")
        st.caption("AI-driven market intelligence")
        st.subheader("Watchlist")

        with st.form("watchlist_add", clear_on_submit=True):
            symbol = st.text_input("Add symbol", placeholder="e.g. NVDA")
            if st.form_submit_button("Add", use_container_width=True) and symbol.strip():
                controller.add(symbol)
                st.rerun()

        if not snapshot.watchlist:
            st.caption("No assets yet; add one above.")
            return

        for item in snapshot.watchlist:
            left, right = st.columns([4, 1])
            left.markdown(f"**{item.symbol}**  \n{item.asset_type.value}")
            if right.button("✕", key=f"remove_{item.id}", help=f"Remove {item.symbol}"):
                controller.remove(item.id)
                st.rerun()
