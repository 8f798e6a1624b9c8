"""
Record schemas: the declared shape of each module's records.

A `RecordSchema` wraps one pydantic record model from `data.records`.
`transform` is the row-to-record transform applied to every stored row (live
or fallback); rows that fail validation raise `RowValidationError` instead of
silently picking up defaults.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import ConfigDict, ValidationError

from data.errors import RecordValidationError, RowValidationError
from data.records import BaseRecord

# Managed by the data layer, never accepted from callers.
SYSTEM_FIELDS = frozenset(BaseRecord.model_fields)


def _update_model(model: type[BaseRecord]) -> type[BaseRecord]:
    """Same fields as `model`, but unknown keys are an error."""

    class Update(model):
        model_config = ConfigDict(extra="forbid")

    Update.__name__ = f"{model.__name__}Update"
    return Update


def _first_error(exc: ValidationError) -> tuple[str, str]:
    err = exc.errors()[0]
    field = ".".join(str(part) for part in err["loc"]) or "<row>"
    return field, err["msg"]


class RecordSchema:
    def __init__(self, table: str, model: type[BaseRecord]):
        self.table = table
        self.model = model
        self._update = _update_model(model)

    def __repr__(self) -> str:
        return f"RecordSchema({self.table!r}, {self.model.__name__})"

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(self.model.model_fields)

    def transform(self, row: Any) -> dict[str, Any]:
        """Map one stored row to a record with exactly this schema's fields."""
        if not isinstance(row, Mapping):
            raise RowValidationError(self.table, "<row>", f"expected an object, got {type(row).__name__}")
        try:
            return self.model.model_validate(dict(row)).model_dump()
        except ValidationError as exc:
            field, message = _first_error(exc)
            raise RowValidationError(self.table, field, message) from None

    def clean(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """
        Validate a caller-supplied partial field set.
        Unknown or system-managed fields are rejected; known ones are coerced.
        """
        managed = sorted(set(values) & SYSTEM_FIELDS)
        if managed:
            raise RecordValidationError(f"Field(s) managed by the data layer: {', '.join(managed)}")

        try:
            validated = self._update.model_validate({**values, "id": "-"})
        except ValidationError as exc:
            field, message = _first_error(exc)
            raise RecordValidationError(f"{self.table}.{field}: {message}") from None
        record = validated.model_dump()
        return {name: record[name] for name in values}

    def new_record(self, values: Mapping[str, Any], record_id: str, company_id: Optional[str], now: str) -> dict[str, Any]:
        row = dict(self.clean(values))
        row.update(id=record_id, company_id=company_id, created_at=now, updated_at=now)
        return self.transform(row)
