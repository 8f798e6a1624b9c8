from __future__ import annotations

import logging

import streamlit as st

logger = logging.getLogger(__name__)

_ICONS = {"default": "✅", "destructive": "⚠️"}


class StreamlitNotifier:
    """Notifier that shows data-layer notifications as Streamlit toasts."""

    def notify(self, title: str, description: str, variant: str = "default") -> None:
        logger.debug("toast[%s] %s: %s", variant, title, description)
        st.toast(f"**{title}**: {description}", icon=_ICONS.get(variant, _ICONS["default"]))
