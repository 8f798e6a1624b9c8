"""Unit tests for fetch_records: every failure path lands on the fallback set."""

import pytest

from conftest import COMPANY_ID, FakeQueryClient, deal_row
from data.errors import QueryError
from data.modules import DEALS, MODULES
from data.service import fetch_records

ALL_MODULES = pytest.mark.parametrize("module", list(MODULES.values()), ids=list(MODULES))


@pytest.mark.asyncio
@ALL_MODULES
async def test_query_failure_returns_fallback_set(module):
    client = FakeQueryClient(fail=QueryError(module.table, "connection refused"))

    result = await fetch_records(client, module, COMPANY_ID)

    assert result.records == module.fallback_records()
    assert result.using_fallback
    assert result.error == f"Failed to load {module.label.lower()}: [{module.table}] connection refused"
    assert result.warning == "Fell back to mock data: QueryError"


@pytest.mark.asyncio
@ALL_MODULES
@pytest.mark.parametrize("company_id", [None, "", "acme", "00000000-0000-0000-0000-000000000000"])
async def test_invalid_company_id_never_reaches_the_client(module, company_id):
    client = FakeQueryClient()

    result = await fetch_records(client, module, company_id)

    assert client.calls == []
    assert result.using_fallback
    assert result.error is None
    assert result.warning == "Invalid or missing company ID. Showing sample data."
    assert result.records == module.fallback_records()


@pytest.mark.asyncio
async def test_mock_mode_skips_the_client():
    client = FakeQueryClient(tables={"deals": [deal_row("d1")]})

    result = await fetch_records(client, DEALS, COMPANY_ID, use_mock=True)

    assert client.calls == []
    assert result.source == "mock"
    assert result.warning is None


@pytest.mark.asyncio
async def test_missing_client_falls_back_with_warning_only():
    result = await fetch_records(None, DEALS, COMPANY_ID)
    assert result.using_fallback
    assert result.error is None
    assert "not configured" in result.warning


@pytest.mark.asyncio
async def test_live_rows_are_scoped_and_transformed():
    client = FakeQueryClient(
        tables={
            "deals": [
                deal_row("d1", created_at="2024-01-01T00:00:00Z"),
                deal_row("d2", created_at="2024-01-05T00:00:00Z"),
                deal_row("d3", company_id="9a8b7c6d-5e4f-4a3b-8c2d-1e0f9a8b7c6d"),
            ]
        }
    )

    result = await fetch_records(client, DEALS, COMPANY_ID)

    assert client.calls == [("select", "deals", COMPANY_ID)]
    assert not result.using_fallback
    assert [r["id"] for r in result.records] == ["d2", "d1"]
    assert result.records[0]["type"] == "New Sale"
    assert list(result.df.columns) == list(DEALS.schema.field_names)


@pytest.mark.asyncio
async def test_empty_table_is_live_not_fallback():
    result = await fetch_records(FakeQueryClient(), DEALS, COMPANY_ID)
    assert result.records == []
    assert result.source == "supabase"
    assert result.warning is None


@pytest.mark.asyncio
async def test_malformed_row_falls_back():
    client = FakeQueryClient(tables={"deals": [deal_row("d1", amount="lots")]})

    result = await fetch_records(client, DEALS, COMPANY_ID)

    assert result.using_fallback
    assert result.warning == "Fell back to mock data: RowValidationError"
    assert result.records == DEALS.fallback_records()


@pytest.mark.asyncio
async def test_padded_company_id_is_queried_trimmed():
    client = FakeQueryClient(tables={"deals": [deal_row("d1")]})

    result = await fetch_records(client, DEALS, f"  {COMPANY_ID.upper()} ")

    assert client.calls == [("select", "deals", COMPANY_ID)]
    assert [r["id"] for r in result.records] == ["d1"]
    assert not result.using_fallback
