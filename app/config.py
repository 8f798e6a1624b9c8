from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


#
# Shared theme tokens for the module pages and charts.
#
THEME = {
    "bg_card": "#FFFFFF",
    "accent_primary": "#2563EB",
    "accent_secondary": "#3B82F6",
    "navy_900": "#0B1220",
    "navy_800": "#111C33",
    "text_primary": "#111827",
    "border_color": "#E6E4E0",
    "grid": "rgba(17, 24, 39, 0.10)",
}

DEFAULT_PREVIEW_HOST_PATTERNS = (
    "localhost",
    "127.0.0.1",
    "0.0.0.0",
    "*.local",
    "preview-*",
    "*-preview.*",
    "*.streamlit.app",
    "*.webcontainer.io",
)

# Modules whose write operations stay disabled until the next product phase.
DEFAULT_READ_ONLY_MODULES = ("service_tickets", "quotes", "deliveries")


@dataclass(frozen=True)
class AppConfig:
    # Required for "live data" mode (Supabase)
    supabase_url: Optional[str]
    supabase_anon_key: Optional[str]

    # Seconds before a single remote call is abandoned
    supabase_timeout: float

    # Deployment context used by the company-id resolver
    app_env: str
    app_hostname: Optional[str]
    preview_host_patterns: tuple[str, ...]

    # Raw company id from the auth/session context (may be blank or invalid)
    company_id: Optional[str]

    # Defaults
    default_use_mock: bool
    read_only_modules: frozenset[str]

    # Logging
    log_level: str
    log_level_http: str

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def _getlist(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = _getenv(name)
    if raw is None:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _getfloat(name: str, default: float) -> float:
    raw = _getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def get_config() -> AppConfig:
    """
    Centralized config: this is the ONLY place env vars are read.
    - Loads `.env` if present (local dev)
    - Missing Supabase settings are allowed: every module then serves fallback data
    """
    load_dotenv(override=False)

    return AppConfig(
        supabase_url=_getenv("SUPABASE_URL"),
        supabase_anon_key=_getenv("SUPABASE_ANON_KEY"),
        supabase_timeout=_getfloat("SUPABASE_TIMEOUT", 15.0),
        app_env=(_getenv("APP_ENV", "development") or "development").lower(),
        app_hostname=_getenv("APP_HOSTNAME"),
        preview_host_patterns=_getlist("PREVIEW_HOST_PATTERNS", DEFAULT_PREVIEW_HOST_PATTERNS),
        company_id=_getenv("COMPANY_ID"),
        default_use_mock=(_getenv("USE_MOCK_DATA", "false") or "false").lower() == "true",
        read_only_modules=frozenset(_getlist("READ_ONLY_MODULES", DEFAULT_READ_ONLY_MODULES)),
        log_level=(_getenv("LOG_LEVEL", "INFO") or "INFO").upper(),
        log_level_http=(_getenv("LOG_LEVEL_HTTP", "WARNING") or "WARNING").upper(),
    )
