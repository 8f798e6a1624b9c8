"""
Shared load cache keyed by (table, company_id).

Collections that share a ScopeCache reuse one in-flight or completed load
per scope instead of each querying the table. Entries live while at least
one holder has acquired the key.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from data.service import DataResult

logger = logging.getLogger(__name__)

ScopeKey = tuple[str, str]


class ScopeCache:
    def __init__(self) -> None:
        self._refs: dict[ScopeKey, int] = {}
        self._tasks: dict[ScopeKey, asyncio.Future] = {}

    def __contains__(self, key: ScopeKey) -> bool:
        return key in self._tasks

    def refcount(self, key: ScopeKey) -> int:
        return self._refs.get(key, 0)

    def acquire(self, key: ScopeKey) -> None:
        self._refs[key] = self._refs.get(key, 0) + 1

    def release(self, key: ScopeKey) -> None:
        count = self._refs.get(key, 0) - 1
        if count > 0:
            self._refs[key] = count
            return
        self._refs.pop(key, None)
        self._tasks.pop(key, None)
        logger.debug("Evicted %s/%s", *key)

    def invalidate(self, key: ScopeKey) -> None:
        """Drop the cached result; the next get() reloads. References are kept."""
        self._tasks.pop(key, None)

    async def get(self, key: ScopeKey, loader: Callable[[], Awaitable[DataResult]]) -> DataResult:
        if key not in self._refs:
            # Nobody holds this scope, so there is nothing to share.
            return await loader()

        task = self._tasks.get(key)
        if task is None:
            task = asyncio.ensure_future(loader())
            self._tasks[key] = task
        else:
            logger.debug("Sharing load for %s/%s", *key)

        # One waiter being cancelled must not cancel the shared load.
        result = await asyncio.shield(task)

        # Fallback results are not kept, so the next load retries the backend.
        if result.using_fallback and self._tasks.get(key) is task:
            del self._tasks[key]
        return result
