"""Data-access exceptions. Nothing here is fatal: callers degrade or re-raise."""

from __future__ import annotations


class DataAccessError(Exception):
    pass


class ConfigurationError(DataAccessError):
    """Connection settings are absent, so no remote call can be made."""


class CompanyScopeError(ConfigurationError):
    """No valid company id is available for the current operation."""

    def __init__(self, message: str = "No valid company id available", company_id: object = None):
        self.company_id = company_id
        super().__init__(message)


class QueryError(DataAccessError):
    """The remote call failed (network, permission, malformed query, timeout)."""

    def __init__(self, table: str, message: str):
        self.table = table
        super().__init__(f"[{table}] {message}")


class DataShapeError(QueryError):
    """The response payload is not the expected list/row shape."""


class RowValidationError(DataShapeError):
    """A stored row does not satisfy its record schema."""

    def __init__(self, table: str, field: str, message: str):
        self.field = field
        super().__init__(table, f"field '{field}': {message}")


class RecordValidationError(DataAccessError):
    """Caller-supplied fields do not fit the record schema."""


class RecordNotFoundError(DataAccessError):
    def __init__(self, table: str, record_id: str):
        self.table = table
        self.record_id = record_id
        super().__init__(f"{table} record with id '{record_id}' not found")


class WriteDisabledError(DataAccessError):
    """The module is in its read-only phase."""

    def __init__(self, module: str, operation: str):
        self.module = module
        self.operation = operation
        super().__init__(f"{operation.capitalize()} operations are disabled for {module} in read-only mode")
