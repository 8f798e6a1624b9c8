from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import streamlit as st

from config import AppConfig
from data.modules import MODULES


@dataclass(frozen=True)
class SidebarState:
    view: str
    module_key: Optional[str]
    use_mock: bool
    raw_company_id: Optional[str]


NAV_ITEMS = [("🏠 Overview", "overview")] + [(m.label, f"module:{m.key}") for m in MODULES.values()]


def render_sidebar(cfg: AppConfig) -> SidebarState:
    with st.sidebar:
        st.markdown("### 🚐 Dealer CRM")
        st.caption("Sales, inventory, finance and service")

        labels = [l for l, _ in NAV_ITEMS]
        default_label = st.session_state.get("nav_label", labels[0])
        idx = labels.index(default_label) if default_label in labels else 0

        label = st.radio(
            "Nav",
            labels,
            index=idx,
            label_visibility="collapsed",
        )
        st.session_state["nav_label"] = label
        target = dict(NAV_ITEMS)[label]

        with st.expander("⚙️ Settings", expanded=False):
            use_mock = st.toggle(
                "Use mock data",
                value=st.session_state.get("use_mock", cfg.default_use_mock),
                help="When off, the app queries Supabase. Any failure falls back to mock data.",
            )
            st.session_state["use_mock"] = use_mock

            raw_company_id = st.text_input(
                "Company ID",
                value=st.session_state.get("company_id", cfg.company_id or ""),
                help="Tenant scope for every query. Blank uses the demo company outside production.",
            )
            st.session_state["company_id"] = raw_company_id

            st.markdown("**Backend**")
            st.code(cfg.supabase_url or "not configured", language="text")

    if target.startswith("module:"):
        return SidebarState(view="module", module_key=target.split(":", 1)[1], use_mock=use_mock, raw_company_id=raw_company_id)
    return SidebarState(view=target, module_key=None, use_mock=use_mock, raw_company_id=raw_company_id)
