"""
projects_client.transport.executor

Request coalescing in front of the GraphQL transport.

Responsibilities:
- Run at most one in-flight execution per (operation, variables) key.
- Share the outcome (data or error) with every concurrent caller.
- Isolate callers from each other's cancellation.
"""

from __future__ import annotations

import asyncio
from typing import Any, Protocol

from projects_client.observability.logging import get_logger
from projects_client.queries.descriptor import QueryDescriptor

log = get_logger(__name__)


class Transport(Protocol):
    async def execute(
        self, descriptor: QueryDescriptor, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]: ...


class QueryExecutor:
    def __init__(self, transport: Transport) -> None:
        self._transport = transport
        self._inflight: dict[str, asyncio.Task[dict[str, Any]]] = {}

    @property
    def inflight_count(self) -> int:
        return len(self._inflight)

    async def execute(
        self, descriptor: QueryDescriptor, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        key = descriptor.cache_key(variables)
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.create_task(self._transport.execute(descriptor, variables))
            self._inflight[key] = task
            task.add_done_callback(lambda t, k=key: self._forget(k, t))
        else:
            log.debug("graphql.coalesced", key=key)
        # shield: a cancelled caller must not cancel the request other callers share.
        return await asyncio.shield(task)

    def _forget(self, key: str, task: asyncio.Task[dict[str, Any]]) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        # Mark the exception retrieved when every awaiting caller was cancelled.
        if not task.cancelled():
            task.exception()

    async def aclose(self) -> None:
        tasks = list(self._inflight.values())
        for t in tasks:
            t.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._inflight.clear()


# --- Module Notes -----------------------------------------------------------
# Coalescing is keyed by `QueryDescriptor.cache_key`, the same key the cache uses for
# query roots, so one round trip feeds one root.
