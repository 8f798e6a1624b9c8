"""
ScopedCollection: one module's records for one company scope.

State machine: UNRESOLVED -> LOADING -> {LIVE, FALLBACK}. LIVE and FALLBACK
hold until refresh() or a company change sends the collection back to
LOADING. There is no automatic retry.

Every load takes a generation number. A load whose generation is no longer
current (a newer load started, or the collection was closed) is discarded
before it touches any state.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from config import AppConfig
from data.cache import ScopeCache, ScopeKey
from data.connection import QueryClient, get_query_client
from data.errors import CompanyScopeError, RecordNotFoundError, RecordValidationError, WriteDisabledError
from data.modules import ModuleSpec, get_module
from data.notify import LogNotifier, Notifier
from data.service import DataResult, fetch_records
from data.tenancy import is_valid_company_id, normalize_company_id

logger = logging.getLogger(__name__)


class LoadState(str, Enum):
    UNRESOLVED = "unresolved"
    LOADING = "loading"
    LIVE = "live"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class ConnectionStatus:
    connected: bool = False
    error: Optional[str] = None
    count: int = 0


@dataclass(frozen=True)
class CollectionSnapshot:
    records: list[dict[str, Any]] = field(default_factory=list)
    loading: bool = False
    error: Optional[str] = None
    warning: Optional[str] = None
    using_fallback: bool = False
    state: LoadState = LoadState.UNRESOLVED
    status: ConnectionStatus = ConnectionStatus()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _iso(ts: datetime) -> str:
    return ts.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ScopedCollection:
    def __init__(
        self,
        module: ModuleSpec,
        client: Optional[QueryClient],
        company_id: Optional[str],
        notifier: Optional[Notifier] = None,
        *,
        writable: bool = True,
        use_mock: bool = False,
        cache: Optional[ScopeCache] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.module = module
        self.writable = writable
        self.use_mock = use_mock
        self._client = client
        self._company_id = normalize_company_id(company_id)
        self._notifier = notifier or LogNotifier()
        self._cache = cache
        self._clock = clock

        self.records: list[dict[str, Any]] = []
        self.loading = False
        self.error: Optional[str] = None
        self.warning: Optional[str] = None
        self.using_fallback = False
        self.state = LoadState.UNRESOLVED
        self.status = ConnectionStatus()

        self._generation = 0
        self._closed = False
        self._held_key: Optional[ScopeKey] = None

    def __repr__(self) -> str:
        return f"<ScopedCollection {self.module.key} company={self._company_id} state={self.state.value} n={len(self.records)}>"

    @property
    def company_id(self) -> Optional[str]:
        return self._company_id

    @property
    def closed(self) -> bool:
        return self._closed

    def snapshot(self) -> CollectionSnapshot:
        return CollectionSnapshot(
            records=list(self.records),
            loading=self.loading,
            error=self.error,
            warning=self.warning,
            using_fallback=self.using_fallback,
            state=self.state,
            status=self.status,
        )

    # --- loading ---

    async def load(self) -> CollectionSnapshot:
        if self._closed:
            raise RuntimeError(f"{self.module.key} collection is closed")

        self._generation += 1
        generation = self._generation
        self.loading = True
        self.error = None
        self.state = LoadState.LOADING

        try:
            result = await self._fetch()
            if generation != self._generation:
                logger.debug("[%s] Discarding superseded load (generation %d)", self.module.key, generation)
                return self.snapshot()
            self._apply(result)
        finally:
            if generation == self._generation:
                self.loading = False
        return self.snapshot()

    async def refresh(self) -> CollectionSnapshot:
        """Manual refresh: drop any shared result for this scope and reload."""
        if self._cache is not None and self._held_key is not None:
            self._cache.invalidate(self._held_key)
        return await self.load()

    async def set_company(self, company_id: Optional[str]) -> CollectionSnapshot:
        company_id = normalize_company_id(company_id)
        if company_id == self._company_id and self.state is not LoadState.UNRESOLVED:
            return self.snapshot()
        self._company_id = company_id
        return await self.load()

    def close(self) -> None:
        """Abandon the collection: in-flight loads are discarded, the cache scope is released."""
        self._closed = True
        self._generation += 1
        self.loading = False
        self._release_scope()

    async def _fetch(self) -> DataResult:
        company_id = self._company_id
        if self._cache is None or self.use_mock or not is_valid_company_id(company_id):
            # Uncached load: a scope held for the previous company is no longer needed.
            self._release_scope()
            return await fetch_records(self._client, self.module, company_id, self.use_mock)

        key = (self.module.table, company_id)
        if key != self._held_key:
            self._release_scope()
            self._cache.acquire(key)
            self._held_key = key
        return await self._cache.get(key, lambda: fetch_records(self._client, self.module, company_id))

    def _release_scope(self) -> None:
        if self._cache is not None and self._held_key is not None:
            self._cache.release(self._held_key)
        self._held_key = None

    def _apply(self, result: DataResult) -> None:
        # Results may be shared through the cache, so keep a private copy.
        self.records = copy.deepcopy(result.records)
        self.using_fallback = result.using_fallback
        self.error = result.error
        self.warning = result.warning
        self.state = LoadState.FALLBACK if result.using_fallback else LoadState.LIVE
        self.status = ConnectionStatus(
            connected=not result.using_fallback,
            error=result.error or result.warning,
            count=len(self.records),
        )
        if result.error:
            self._notifier.notify(
                "Connection Issue",
                "Using offline data. Some features may be limited.",
                variant="destructive",
            )

    # --- selectors ---

    def get(self, record_id: str) -> Optional[dict[str, Any]]:
        for record in self.records:
            if record["id"] == record_id:
                return record
        return None

    def where(self, **criteria: Any) -> list[dict[str, Any]]:
        return [r for r in self.records if all(r.get(k) == v for k, v in criteria.items())]

    # --- mutations ---

    async def create(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        company_id = self._check_write("create")
        values = self._clean(fields)

        if self._is_local():
            record = self.module.schema.new_record(values, self._local_id(), company_id, self._now())
            logger.info("[%s] Created %s locally (fallback mode)", self.module.key, record["id"])
        else:
            try:
                row = await self._client.insert_returning(self.module.table, {**values, "company_id": company_id})
                record = self.module.schema.transform(row)
            except Exception as e:
                self._report_failure("create", e)
                raise
            self._invalidate_scope()
            logger.info("[%s] Created %s", self.module.key, record["id"])

        self.records = [record, *self.records]
        self.status = ConnectionStatus(self.status.connected, self.status.error, len(self.records))
        self._notifier.notify("Success", f"{self._noun} created successfully.")
        return record

    async def update(self, record_id: str, fields: Mapping[str, Any]) -> dict[str, Any]:
        company_id = self._check_write("update")
        values = self._clean(fields)
        index = self._index_of(record_id)
        if index is None:
            error = RecordNotFoundError(self.module.table, record_id)
            self._report_failure("update", error)
            raise error

        if self._is_local():
            merged = {**self.records[index], **values, "updated_at": self._now()}
            record = self.module.schema.transform(merged)
        else:
            try:
                row = await self._client.update_returning(self.module.table, record_id, company_id, values)
                if row is None:
                    raise RecordNotFoundError(self.module.table, record_id)
                record = self.module.schema.transform(row)
            except Exception as e:
                self._report_failure("update", e)
                raise
            self._invalidate_scope()

        self.records = [record if r["id"] == record_id else r for r in self.records]
        self._notifier.notify("Success", f"{self._noun} updated successfully.")
        return record

    async def delete(self, record_id: str) -> bool:
        """Remove a record. Returns False (and does nothing) when the id is not in the list."""
        company_id = self._check_write("delete")
        if self._index_of(record_id) is None:
            return False

        if not self._is_local():
            try:
                await self._client.delete_by_id(self.module.table, record_id, company_id)
            except Exception as e:
                self._report_failure("delete", e)
                raise
            self._invalidate_scope()

        self.records = [r for r in self.records if r["id"] != record_id]
        self.status = ConnectionStatus(self.status.connected, self.status.error, len(self.records))
        self._notifier.notify("Success", f"{self._noun} deleted successfully.")
        return True

    # --- helpers ---

    @property
    def _noun(self) -> str:
        label = self.module.label
        return label[:-1] if label.endswith("s") else label

    def _is_local(self) -> bool:
        return self.using_fallback or self._client is None

    def _check_write(self, operation: str) -> str:
        """Phase gate, then scope. Returns the company id to write under."""
        if not self.writable:
            error = WriteDisabledError(self.module.label, operation)
            logger.info("[%s] %s operation refused: read-only phase", self.module.key, operation.capitalize())
            self._notifier.notify("Feature Disabled", str(error), variant="destructive")
            raise error

        if not is_valid_company_id(self._company_id):
            error = CompanyScopeError("Invalid company ID format", company_id=self._company_id)
            logger.warning("[%s] Refusing %s: invalid company id %r", self.module.key, operation, self._company_id)
            self._notifier.notify("Error", str(error), variant="destructive")
            raise error
        return self._company_id

    def _clean(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        try:
            return self.module.schema.clean(fields)
        except RecordValidationError as e:
            self._notifier.notify("Error", str(e), variant="destructive")
            raise

    def _report_failure(self, operation: str, error: Exception) -> None:
        logger.error("[%s] %s failed: %s", self.module.key, operation.capitalize(), error)
        self._notifier.notify("Error", f"Failed to {operation} {self._noun.lower()}: {error}", variant="destructive")

    def _index_of(self, record_id: str) -> Optional[int]:
        for i, record in enumerate(self.records):
            if record["id"] == record_id:
                return i
        return None

    def _now(self) -> str:
        return _iso(self._clock())

    def _local_id(self) -> str:
        taken = {r["id"] for r in self.records}
        stamp = int(self._clock().timestamp() * 1000)
        while f"{self.module.id_prefix}-{stamp}" in taken:
            stamp += 1
        return f"{self.module.id_prefix}-{stamp}"

    def _invalidate_scope(self) -> None:
        if self._cache is not None and self._held_key is not None:
            self._cache.invalidate(self._held_key)


def build_collection(
    cfg: AppConfig,
    module_key: str,
    company_id: Optional[str],
    notifier: Optional[Notifier] = None,
    *,
    use_mock: bool = False,
    cache: Optional[ScopeCache] = None,
) -> ScopedCollection:
    module = get_module(module_key)
    return ScopedCollection(
        module,
        get_query_client(cfg),
        company_id,
        notifier,
        writable=module.is_writable(cfg),
        use_mock=use_mock,
        cache=cache,
    )
