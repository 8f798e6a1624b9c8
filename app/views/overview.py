from __future__ import annotations

import asyncio

import streamlit as st

from components.metrics import Kpi, bar_chart, render_kpi_row
from components.toast import StreamlitNotifier
from config import AppConfig
from data.collection import build_collection
from data.summaries import commission_totals, pipeline_by_stage


async def _load(cfg: AppConfig, company_id: str, use_mock: bool):
    notifier = StreamlitNotifier()
    deals = build_collection(cfg, "deals", company_id, notifier, use_mock=use_mock)
    commissions = build_collection(cfg, "commissions", company_id, notifier, use_mock=use_mock)
    return await asyncio.gather(deals.load(), commissions.load())


def render(cfg: AppConfig, company_id: str, use_mock: bool) -> None:
    st.title("Overview")

    deals, commissions = asyncio.run(_load(cfg, company_id, use_mock))
    for snap in (deals, commissions):
        if snap.warning:
            st.warning(snap.warning)

    pipeline = pipeline_by_stage(deals.records)
    payouts = commission_totals(commissions.records)

    open_deals = pipeline[~pipeline["stage"].isin(["Closed Won", "Closed Lost"])] if len(pipeline) else pipeline
    render_kpi_row(
        [
            Kpi("Open deals", f"{int(open_deals['deal_count'].sum()) if len(open_deals) else 0:,}"),
            Kpi("Weighted pipeline", f"${open_deals['weighted_amount'].sum() if len(open_deals) else 0:,.0f}"),
            Kpi("Commissions", f"${payouts['amount'].sum() if len(payouts) else 0:,.2f}"),
        ]
    )

    st.subheader("Pipeline by stage")
    if len(pipeline):
        bar_chart(pipeline, x="stage", y="total_amount", title="Deal value by stage", y_format="currency")
        st.dataframe(pipeline, use_container_width=True)
    else:
        st.info("No deals yet.")

    st.subheader("Commission totals")
    if len(payouts):
        st.dataframe(payouts, use_container_width=True)
    else:
        st.info("No commissions yet.")
