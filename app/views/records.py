from __future__ import annotations

import asyncio

import streamlit as st

from components.metrics import Kpi, bar_chart, render_kpi_row
from components.toast import StreamlitNotifier
from config import AppConfig
from data.collection import build_collection
from data.summaries import status_counts


def render(cfg: AppConfig, module_key: str, company_id: str, use_mock: bool) -> None:
    collection = build_collection(cfg, module_key, company_id, StreamlitNotifier(), use_mock=use_mock)
    module = collection.module
    st.title(module.label)

    if st.button("🔄 Refresh", key=f"refresh-{module.key}"):
        snap = asyncio.run(collection.refresh())
    else:
        snap = asyncio.run(collection.load())

    if snap.warning:
        st.warning(snap.warning)
    if snap.error:
        st.error(snap.error)
    if not collection.writable:
        st.info("Read-only phase: create, update and delete are disabled for this module.")

    render_kpi_row(
        [
            Kpi("Records", f"{len(snap.records):,}"),
            Kpi("Source", "Sample data" if snap.using_fallback else "Supabase"),
            Kpi("State", snap.state.value.title()),
        ]
    )

    if not snap.records:
        st.info(f"No {module.label.lower()} yet for this company.")
        return

    if module.status_field:
        counts = status_counts(snap.records, module.status_field)
        if len(counts):
            bar_chart(counts, x=module.status_field, y="count", title=f"{module.label} by {module.status_field}")

    st.dataframe(snap.records, use_container_width=True)
