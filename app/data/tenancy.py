from __future__ import annotations

import logging
import re
from fnmatch import fnmatch
from typing import Optional

from config import AppConfig
from data.errors import CompanyScopeError

logger = logging.getLogger(__name__)


DEMO_COMPANY_ID = "11111111-1111-1111-1111-111111111111"

# Ids that auth providers hand out before a real tenant is attached.
PLACEHOLDER_COMPANY_IDS = frozenset({"00000000-0000-0000-0000-000000000000"})

PREVIEW_ENVIRONMENTS = frozenset({"development", "dev", "local", "preview", "test", "staging"})

_UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)


def normalize_company_id(value: Optional[str]) -> Optional[str]:
    """Trimmed, lower-cased id as sent to the backend; non-strings pass through."""
    if isinstance(value, str):
        return value.strip().lower()
    return value


def is_valid_company_id(value: object) -> bool:
    """UUID shape (8-4-4-4-12 hex groups) and not a placeholder."""
    if not isinstance(value, str):
        return False
    candidate = value.strip().lower()
    return bool(_UUID_RE.match(candidate)) and candidate not in PLACEHOLDER_COMPANY_IDS


def is_preview_environment(cfg: AppConfig) -> bool:
    if cfg.app_env in PREVIEW_ENVIRONMENTS:
        return True
    host = (cfg.app_hostname or "").lower()
    return bool(host) and any(fnmatch(host, pattern) for pattern in cfg.preview_host_patterns)


def resolve_company_id(raw: Optional[str], cfg: AppConfig) -> str:
    """
    Derive the active company id from the session value.
    - a valid, non-placeholder UUID is returned as-is (lower-cased)
    - preview/dev deployments get the demo company
    - anything else is a configuration error
    """
    if is_valid_company_id(raw):
        return normalize_company_id(raw)

    if is_preview_environment(cfg):
        logger.info("No valid company id (got %r); using demo company %s", raw, DEMO_COMPANY_ID)
        return DEMO_COMPANY_ID

    logger.error("No valid company id available (env=%s, host=%s)", cfg.app_env, cfg.app_hostname)
    raise CompanyScopeError(company_id=raw)
