from __future__ import annotations

import streamlit as st


def render_header(app_name: str, subtitle: str, right_pill: str) -> None:
    left, right = st.columns([4, 1])
    with left:
        st.markdown(f"## {app_name}")
        st.caption(subtitle)
    with right:
        st.markdown(f"`{right_pill}`")


def data_source_label(use_mock: bool, supabase_configured: bool) -> str:
    """Header pill text. Per-page fallbacks are reported by the page itself."""
    if use_mock:
        return "Data: Mock"
    if not supabase_configured:
        return "Data: Mock (Supabase not configured)"
    return "Data: Supabase"
