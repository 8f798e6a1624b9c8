"""
Centralized logging configuration.

Call `setup_logging(cfg)` once at startup. Noisy client loggers (httpx, the
Supabase/PostgREST client) get their own level so query diagnostics from the
data layer stay readable.
"""

from __future__ import annotations

import logging
import sys

from config import AppConfig


# Logger names whose level follows `log_level_http` instead of the root level.
_HTTP_LOGGERS = (
    "httpx",
    "httpcore",
    "hpack",
    "supabase",
    "postgrest",
    "realtime",
)


def setup_logging(cfg: AppConfig) -> None:
    root = logging.getLogger()
    root.setLevel(_parse_level(cfg.log_level))

    # Streamlit installs its own handlers for its loggers, not for root.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)-8s %(name)s - %(message)s"))
        root.addHandler(handler)

    http_level = _parse_level(cfg.log_level_http)
    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s, http=%s", cfg.log_level, cfg.log_level_http
    )


def _parse_level(raw: str) -> int:
    """Convert a level name to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
