from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from config import THEME


@dataclass(frozen=True)
class Kpi:
    label: str
    value: str
    delta: Optional[str] = None
    help: Optional[str] = None


def render_kpi_row(kpis: list[Kpi]) -> None:
    cols = st.columns(len(kpis))
    for c, k in zip(cols, kpis):
        with c:
            st.metric(k.label, k.value, delta=k.delta, help=k.help)


def apply_plotly_theme(fig: go.Figure, x_title: str, y_title: str) -> go.Figure:
    fig.update_layout(
        margin=dict(l=10, r=10, t=44, b=10),
        font=dict(family="Inter, system-ui, -apple-system, Segoe UI, Roboto, Arial, sans-serif", color=THEME["text_primary"]),
        paper_bgcolor=THEME["bg_card"],
        plot_bgcolor=THEME["bg_card"],
        colorway=[THEME["navy_900"], THEME["accent_primary"], THEME["navy_800"], THEME["accent_secondary"], "#6B7280"],
        title_font={"color": THEME["navy_900"], "size": 16},
        showlegend=False,
    )
    fig.update_xaxes(title_text=x_title, gridcolor=THEME["grid"], linecolor=THEME["border_color"])
    fig.update_yaxes(title_text=y_title, gridcolor=THEME["grid"], linecolor=THEME["border_color"])
    return fig


def bar_chart(
    df: pd.DataFrame,
    x: str,
    y: str,
    title: str = "",
    y_format: Optional[str] = None,  # "currency" | None
):
    fig = px.bar(df, x=x, y=y, title=title)
    fig = apply_plotly_theme(fig, x_title=x, y_title=y)
    if y_format == "currency":
        fig.update_yaxes(tickprefix="$", separatethousands=True)
    st.plotly_chart(fig, use_container_width=True)
