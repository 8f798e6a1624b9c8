from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import pandas as pd

from data.connection import QueryClient
from data.modules import ModuleSpec
from data.tenancy import is_valid_company_id, normalize_company_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataResult:
    records: list[dict[str, Any]] = field(default_factory=list)
    source: str = "supabase"  # "supabase" | "mock"
    warning: str | None = None
    error: str | None = None

    @property
    def using_fallback(self) -> bool:
        return self.source == "mock"

    @property
    def df(self) -> pd.DataFrame:
        return pd.DataFrame(self.records)


async def fetch_records(
    client: Optional[QueryClient],
    module: ModuleSpec,
    company_id: Optional[str],
    use_mock: bool = False,
) -> DataResult:
    """
    Load one module's records for one company. Never raises for data
    problems: every failure path returns the module's fallback set.
    - use_mock: fallback set, no remote call
    - invalid company id: fallback set, no remote call
    - no client (Supabase not configured): fallback set, no remote call
    """
    company_id = normalize_company_id(company_id)
    if use_mock:
        return DataResult(records=module.fallback_records(), source="mock")

    if not is_valid_company_id(company_id):
        logger.warning("[%s] Invalid or missing company id %r; skipping remote load", module.key, company_id)
        return DataResult(
            records=module.fallback_records(),
            source="mock",
            warning="Invalid or missing company ID. Showing sample data.",
        )

    if client is None:
        logger.info("[%s] Supabase not configured; using fallback data", module.key)
        return DataResult(
            records=module.fallback_records(),
            source="mock",
            warning="Supabase is not configured. Showing sample data.",
        )

    try:
        rows = await client.select_scoped(module.table, company_id)
        records = [module.schema.transform(row) for row in rows]
    except Exception as e:
        logger.warning("[%s] Load from %s failed, using fallback data: %s", module.key, module.table, e)
        return DataResult(
            records=module.fallback_records(),
            source="mock",
            warning=f"Fell back to mock data: {type(e).__name__}",
            error=f"Failed to load {module.label.lower()}: {e}",
        )

    logger.info("[%s] Loaded %d records for company %s", module.key, len(records), company_id)
    return DataResult(records=records, source="supabase")
