"""Shared fakes for data-layer tests."""

from __future__ import annotations

import asyncio
import copy
from dataclasses import replace
from typing import Any, Optional

import pytest

from config import DEFAULT_PREVIEW_HOST_PATTERNS, AppConfig
from data.errors import QueryError

COMPANY_ID = "5f1c2a9e-3b4d-4c8e-9a7b-2d6e8f0a1b3c"
OTHER_COMPANY_ID = "9a8b7c6d-5e4f-4a3b-8c2d-1e0f9a8b7c6d"


class FakeQueryClient:
    """In-memory QueryClient that records every call."""

    def __init__(self, tables: Optional[dict[str, list[dict]]] = None, fail: Optional[Exception] = None):
        self.tables = tables or {}
        self.fail = fail
        self.calls: list[tuple] = []
        self.gate: Optional[asyncio.Event] = None
        self._seq = 0

    def _check(self, table: str) -> None:
        if self.fail is not None:
            raise self.fail

    async def select_scoped(self, table, company_id, order_by="created_at"):
        self.calls.append(("select", table, company_id))
        if self.gate is not None:
            await self.gate.wait()
        self._check(table)
        rows = [r for r in self.tables.get(table, []) if r.get("company_id") == company_id]
        return copy.deepcopy(sorted(rows, key=lambda r: r.get(order_by) or "", reverse=True))

    async def insert_returning(self, table, row):
        self.calls.append(("insert", table, row))
        self._check(table)
        self._seq += 1
        stored = {"id": f"srv-{self._seq}", "created_at": "2024-02-01T00:00:00Z", "updated_at": "2024-02-01T00:00:00Z", **row}
        self.tables.setdefault(table, []).append(stored)
        return copy.deepcopy(stored)

    async def update_returning(self, table, record_id, company_id, fields):
        self.calls.append(("update", table, record_id, company_id, fields))
        self._check(table)
        for row in self.tables.get(table, []):
            if row["id"] == record_id and row.get("company_id") == company_id:
                row.update(fields, updated_at="2024-02-02T00:00:00Z")
                return copy.deepcopy(row)
        return None

    async def delete_by_id(self, table, record_id, company_id):
        self.calls.append(("delete", table, record_id, company_id))
        self._check(table)
        self.tables[table] = [
            r for r in self.tables.get(table, []) if not (r["id"] == record_id and r.get("company_id") == company_id)
        ]


class RecordingNotifier:
    def __init__(self):
        self.messages: list[tuple[str, str, str]] = []

    def notify(self, title: str, description: str, variant: str = "default") -> None:
        self.messages.append((title, description, variant))

    @property
    def destructive(self) -> list[tuple[str, str, str]]:
        return [m for m in self.messages if m[2] == "destructive"]


def deal_row(record_id: str, company_id: str = COMPANY_ID, **overrides: Any) -> dict:
    row = {
        "id": record_id,
        "company_id": company_id,
        "customer_name": "Pat Lee",
        "stage": "Qualified",
        "amount": 45000,
        "probability": 40,
        "created_at": "2024-01-10T09:00:00Z",
        "updated_at": "2024-01-15T09:00:00Z",
    }
    row.update(overrides)
    return row


def make_config(**overrides: Any) -> AppConfig:
    cfg = AppConfig(
        supabase_url=None,
        supabase_anon_key=None,
        supabase_timeout=15.0,
        app_env="production",
        app_hostname=None,
        preview_host_patterns=DEFAULT_PREVIEW_HOST_PATTERNS,
        company_id=None,
        default_use_mock=False,
        read_only_modules=frozenset({"service_tickets", "quotes", "deliveries"}),
        log_level="INFO",
        log_level_http="WARNING",
    )
    return replace(cfg, **overrides)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def failing_client() -> FakeQueryClient:
    return FakeQueryClient(fail=QueryError("deals", "connection refused"))
