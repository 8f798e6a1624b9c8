"""
Routing only.

All view logic lives in app/views/.
All env reads happen ONLY in config.py.
"""

from __future__ import annotations

import os
import sys

# Make `app/` importable as a flat module path when running:
#   streamlit run app/app.py
APP_DIR = os.path.dirname(__file__)
if APP_DIR not in sys.path:
    sys.path.insert(0, APP_DIR)

import streamlit as st  # noqa: E402

from components.header import data_source_label, render_header  # noqa: E402
from components.sidebar import render_sidebar  # noqa: E402
from config import get_config  # noqa: E402
from data.errors import CompanyScopeError  # noqa: E402
from data.tenancy import resolve_company_id  # noqa: E402
from logging_config import setup_logging  # noqa: E402

from views import overview, records  # noqa: E402


def main() -> None:
    st.set_page_config(page_title="Dealer CRM", layout="wide")
    cfg = get_config()
    setup_logging(cfg)
    state = render_sidebar(cfg)

    try:
        company_id = resolve_company_id(state.raw_company_id, cfg)
    except CompanyScopeError as e:
        st.error(f"{e}. Set COMPANY_ID or sign in with a company account.")
        st.stop()

    render_header(
        app_name="Dealer CRM",
        subtitle=f"Company {company_id}",
        right_pill=data_source_label(state.use_mock, cfg.supabase_configured),
    )

    # Routing only
    if state.view == "overview":
        overview.render(cfg, company_id, state.use_mock)
    elif state.view == "module" and state.module_key:
        records.render(cfg, state.module_key, company_id, state.use_mock)
    else:
        st.error("Unknown view")


if __name__ == "__main__":
    main()
