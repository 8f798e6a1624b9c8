"""Unit tests for SupabaseQueryClient against a stubbed PostgREST builder."""

import asyncio
from types import SimpleNamespace

import pytest

from conftest import COMPANY_ID, make_config
from data import connection
from data.connection import SupabaseQueryClient, get_query_client
from data.errors import ConfigurationError, DataShapeError, QueryError


class StubRequest:
    """Chainable stand-in for a postgrest request builder."""

    def __init__(self, table, log, data=None, error=None, delay=0.0):
        self.table = table
        self.log = log
        self.data = data
        self.error = error
        self.delay = delay

    def __getattr__(self, name):
        def step(*args, **kwargs):
            self.log.append((name, args, kwargs))
            return self

        return step

    async def execute(self):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(data=self.data)


class StubSupabase:
    def __init__(self, **request_kwargs):
        self.request_kwargs = request_kwargs
        self.log = []

    def table(self, name):
        self.log.append(("table", (name,), {}))
        return StubRequest(name, self.log, **self.request_kwargs)


@pytest.fixture
def cfg():
    return make_config(supabase_url="https://crm.supabase.co", supabase_anon_key="anon-key", supabase_timeout=0.05)


def install(monkeypatch, stub):
    created = []

    async def fake_create(url, key):
        created.append((url, key))
        return stub

    monkeypatch.setattr(connection, "acreate_client", fake_create)
    return created


@pytest.mark.asyncio
async def test_select_filters_by_company_and_orders_newest_first(monkeypatch, cfg):
    stub = StubSupabase(data=[{"id": "d1"}])
    created = install(monkeypatch, stub)
    client = SupabaseQueryClient(cfg)

    rows = await client.select_scoped("deals", COMPANY_ID)
    await client.select_scoped("deals", COMPANY_ID)

    assert rows == [{"id": "d1"}]
    assert created == [("https://crm.supabase.co", "anon-key")]
    assert stub.log[:4] == [
        ("table", ("deals",), {}),
        ("select", ("*",), {}),
        ("eq", ("company_id", COMPANY_ID), {}),
        ("order", ("created_at",), {"desc": True}),
    ]


@pytest.mark.asyncio
async def test_select_rejects_non_list_payload(monkeypatch, cfg):
    install(monkeypatch, StubSupabase(data={"id": "d1"}))
    with pytest.raises(DataShapeError):
        await SupabaseQueryClient(cfg).select_scoped("deals", COMPANY_ID)


@pytest.mark.asyncio
async def test_backend_error_becomes_query_error(monkeypatch, cfg):
    install(monkeypatch, StubSupabase(error=RuntimeError("permission denied for table deals")))

    with pytest.raises(QueryError) as exc_info:
        await SupabaseQueryClient(cfg).select_scoped("deals", COMPANY_ID)

    assert exc_info.value.table == "deals"
    assert "permission denied" in str(exc_info.value)


@pytest.mark.asyncio
async def test_slow_request_times_out(monkeypatch, cfg):
    install(monkeypatch, StubSupabase(data=[], delay=1.0))

    with pytest.raises(QueryError) as exc_info:
        await SupabaseQueryClient(cfg).select_scoped("deals", COMPANY_ID)

    assert "timed out" in str(exc_info.value)


@pytest.mark.asyncio
async def test_update_scopes_by_id_and_company(monkeypatch, cfg):
    stub = StubSupabase(data=[{"id": "d1", "stage": "Closed Won"}])
    install(monkeypatch, stub)

    row = await SupabaseQueryClient(cfg).update_returning("deals", "d1", COMPANY_ID, {"stage": "Closed Won"})

    assert row == {"id": "d1", "stage": "Closed Won"}
    assert ("eq", ("id", "d1"), {}) in stub.log
    assert ("eq", ("company_id", COMPANY_ID), {}) in stub.log


@pytest.mark.asyncio
async def test_update_matching_no_rows_returns_none(monkeypatch, cfg):
    install(monkeypatch, StubSupabase(data=[]))
    assert await SupabaseQueryClient(cfg).update_returning("deals", "d1", COMPANY_ID, {"stage": "Lost"}) is None


@pytest.mark.asyncio
async def test_insert_requires_one_returned_row(monkeypatch, cfg):
    install(monkeypatch, StubSupabase(data=[]))
    with pytest.raises(DataShapeError):
        await SupabaseQueryClient(cfg).insert_returning("deals", {"company_id": COMPANY_ID})


@pytest.mark.asyncio
async def test_unconfigured_client_refuses_to_connect():
    with pytest.raises(ConfigurationError):
        await SupabaseQueryClient(make_config()).select_scoped("deals", COMPANY_ID)


def test_get_query_client_requires_both_settings(cfg):
    assert get_query_client(make_config()) is None
    assert get_query_client(make_config(supabase_url="https://crm.supabase.co")) is None
    assert isinstance(get_query_client(cfg), SupabaseQueryClient)
