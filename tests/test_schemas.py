"""Unit tests for record schemas and the row transform."""

from datetime import datetime, timezone

import pytest

from conftest import make_config
from data.errors import RecordValidationError, RowValidationError
from data.modules import COMPANY_SETTINGS, DEALS, MODULES, SERVICE_TICKETS
from data.records import DealRecord
from data.tenancy import DEMO_COMPANY_ID


def test_transform_fills_declared_defaults():
    record = DEALS.schema.transform({"id": "d1", "company_id": "c1"})
    assert record["stage"] == "New"
    assert record["amount"] == 0
    assert record["type"] == "New Sale"
    assert record["customer_name"] == ""
    assert record["vehicle_id"] is None
    assert set(record) == set(DEALS.schema.field_names)


def test_null_columns_take_declared_defaults():
    record = SERVICE_TICKETS.schema.transform({"id": "t1", "status": None, "parts": None, "total_cost": None})
    assert record["status"] == "Open"
    assert record["parts"] == []
    assert record["total_cost"] is None


def test_schema_fields_follow_the_record_model():
    assert DEALS.schema.model is DealRecord
    assert DEALS.schema.field_names[:4] == ("id", "company_id", "created_at", "updated_at")
    assert "expected_close_date" in DEALS.schema.field_names


def test_transform_drops_unknown_columns_and_coerces_types():
    record = DEALS.schema.transform(
        {"id": 7, "amount": "1250.50", "probability": 60.0, "extra_column": "ignored", "created_at": datetime(2024, 1, 2, tzinfo=timezone.utc)}
    )
    assert record["id"] == "7"
    assert record["amount"] == 1250.5
    assert record["probability"] == 60
    assert record["created_at"].startswith("2024-01-02T00:00:00")
    assert "extra_column" not in record


def test_transform_rejects_row_without_id():
    with pytest.raises(RowValidationError) as exc_info:
        DEALS.schema.transform({"stage": "New"})
    assert exc_info.value.field == "id"


def test_transform_rejects_malformed_values():
    with pytest.raises(RowValidationError):
        DEALS.schema.transform({"id": "d1", "amount": "lots"})
    with pytest.raises(RowValidationError):
        SERVICE_TICKETS.schema.transform({"id": "t1", "parts": "water pump"})
    with pytest.raises(RowValidationError):
        DEALS.schema.transform(["d1", "New"])


def test_list_defaults_are_not_shared_between_records():
    a = SERVICE_TICKETS.schema.transform({"id": "t1"})
    b = SERVICE_TICKETS.schema.transform({"id": "t2"})
    a["parts"].append({"name": "fuse"})
    assert b["parts"] == []


def test_clean_rejects_unknown_and_system_fields():
    with pytest.raises(RecordValidationError):
        DEALS.schema.clean({"stagee": "Won"})
    with pytest.raises(RecordValidationError):
        DEALS.schema.clean({"id": "mine"})
    with pytest.raises(RecordValidationError):
        DEALS.schema.clean({"amount": "a lot"})
    assert DEALS.schema.clean({"amount": "10"}) == {"amount": 10.0}


@pytest.mark.parametrize("module", list(MODULES.values()), ids=list(MODULES))
def test_fallback_records_match_schema_field_for_field(module):
    records = module.fallback_records()
    assert records
    for record in records:
        assert tuple(record) == module.schema.field_names
        assert record["company_id"] == DEMO_COMPANY_ID
        assert record["id"].startswith(module.id_prefix + "-")
    assert len({r["id"] for r in records}) == len(records)


@pytest.mark.parametrize("module", list(MODULES.values()), ids=list(MODULES))
def test_fallback_records_are_static_and_newest_first(module):
    first, second = module.fallback_records(), module.fallback_records()
    assert first == second
    assert first is not second
    stamps = [r["created_at"] for r in first]
    assert stamps == sorted(stamps, reverse=True)


def test_company_settings_is_one_read_only_row():
    records = COMPANY_SETTINGS.fallback_records()
    assert len(records) == 1
    assert records[0]["currency"] == "USD"
    assert not COMPANY_SETTINGS.is_writable(make_config(read_only_modules=frozenset()))
    assert DEALS.is_writable(make_config(read_only_modules=frozenset()))
