from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional, Protocol

from supabase import AsyncClient, acreate_client

from config import AppConfig
from data.errors import ConfigurationError, DataShapeError, QueryError

logger = logging.getLogger(__name__)


class QueryClient(Protocol):
    """
    The narrow query shape the data layer depends on: equality filter on
    company_id, ordering by a timestamp column, and single-row writes that
    return the stored row.
    """

    async def select_scoped(self, table: str, company_id: str, order_by: str = "created_at") -> list[dict[str, Any]]:
        ...

    async def insert_returning(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        ...

    async def update_returning(
        self, table: str, record_id: str, company_id: str, fields: dict[str, Any]
    ) -> Optional[dict[str, Any]]:
        ...

    async def delete_by_id(self, table: str, record_id: str, company_id: str) -> None:
        ...


class SupabaseQueryClient:
    """QueryClient over supabase-py's async client (PostgREST)."""

    def __init__(self, cfg: AppConfig):
        self.cfg = cfg
        self._client: Optional[AsyncClient] = None

    async def _connect(self) -> AsyncClient:
        if self._client is None:
            if not self.cfg.supabase_configured:
                raise ConfigurationError("SUPABASE_URL and SUPABASE_ANON_KEY must both be set")
            self._client = await acreate_client(self.cfg.supabase_url, self.cfg.supabase_anon_key)
        return self._client

    async def _execute(self, table: str, build) -> Any:
        """Run one PostgREST request, bounded by the configured timeout."""
        client = await self._connect()
        try:
            response = await asyncio.wait_for(build(client.table(table)).execute(), timeout=self.cfg.supabase_timeout)
        except asyncio.TimeoutError:
            raise QueryError(table, f"request timed out after {self.cfg.supabase_timeout:g}s") from None
        except Exception as e:
            # postgrest APIError carries the server message; httpx errors carry the transport reason
            message = getattr(e, "message", None) or str(e) or type(e).__name__
            raise QueryError(table, message) from e
        return response.data

    async def select_scoped(self, table: str, company_id: str, order_by: str = "created_at") -> list[dict[str, Any]]:
        data = await self._execute(
            table,
            lambda q: q.select("*").eq("company_id", company_id).order(order_by, desc=True),
        )
        if not isinstance(data, list):
            raise DataShapeError(table, f"expected a list of rows, got {type(data).__name__}")
        logger.debug("select %s company_id=%s -> %d rows", table, company_id, len(data))
        return data

    async def insert_returning(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        data = await self._execute(table, lambda q: q.insert(row))
        return _single_row(table, data)

    async def update_returning(
        self, table: str, record_id: str, company_id: str, fields: dict[str, Any]
    ) -> Optional[dict[str, Any]]:
        data = await self._execute(
            table,
            lambda q: q.update(fields).eq("id", record_id).eq("company_id", company_id),
        )
        if isinstance(data, list) and not data:
            return None
        return _single_row(table, data)

    async def delete_by_id(self, table: str, record_id: str, company_id: str) -> None:
        await self._execute(
            table,
            lambda q: q.delete().eq("id", record_id).eq("company_id", company_id),
        )


def _single_row(table: str, data: Any) -> dict[str, Any]:
    if isinstance(data, list) and len(data) == 1 and isinstance(data[0], dict):
        return data[0]
    if isinstance(data, dict):
        return data
    raise DataShapeError(table, f"expected exactly one returned row, got {data!r:.80}")


def get_query_client(cfg: AppConfig) -> Optional[QueryClient]:
    """Returns None when Supabase settings are absent; callers then serve fallback data."""
    if not cfg.supabase_configured:
        logger.warning("Supabase not configured (SUPABASE_URL / SUPABASE_ANON_KEY); remote calls disabled")
        return None
    return SupabaseQueryClient(cfg)
