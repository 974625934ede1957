"""
projects_client.reactive

Three-state reactive result delivered to consumers.

Responsibilities:
- Define the immutable `QueryResult` snapshot (loading / success / error).
- Provide `ResultCell`, a single-writer / multi-reader holder with explicit subscriptions.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from projects_client.errors import FetchError

T = TypeVar("T")


class QueryStatus(str, Enum):
    loading = "loading"
    success = "success"
    error = "error"


@dataclass(frozen=True, slots=True)
class QueryResult(Generic[T]):
    status: QueryStatus
    data: T | None = None
    error: FetchError | None = None
    # True when `data` came from the cache rather than a network response.
    from_cache: bool = False

    @classmethod
    def loading(cls) -> QueryResult[T]:
        return cls(status=QueryStatus.loading)

    @classmethod
    def success(cls, data: T, *, from_cache: bool = False) -> QueryResult[T]:
        return cls(status=QueryStatus.success, data=data, from_cache=from_cache)

    @classmethod
    def failure(cls, error: FetchError) -> QueryResult[T]:
        return cls(status=QueryStatus.error, error=error)

    @property
    def is_loading(self) -> bool:
        return self.status is QueryStatus.loading

    @property
    def is_settled(self) -> bool:
        return self.status is not QueryStatus.loading


class ResultCell(Generic[T]):
    """
    Holds the current `QueryResult`. Each transition swaps one immutable snapshot, so
    readers never observe a half-applied state.
    """

    def __init__(self, initial: QueryResult[T] | None = None) -> None:
        self._value: QueryResult[T] = initial or QueryResult.loading()
        self._version = 0
        self._changed = asyncio.Condition()
        self._closed = False

    @property
    def value(self) -> QueryResult[T]:
        return self._value

    @property
    def closed(self) -> bool:
        return self._closed

    async def set(self, value: QueryResult[T]) -> None:
        if self._closed:
            return
        async with self._changed:
            self._value = value
            self._version += 1
            self._changed.notify_all()

    async def close(self) -> None:
        async with self._changed:
            self._closed = True
            self._changed.notify_all()

    async def subscribe(self) -> AsyncIterator[QueryResult[T]]:
        """
        Yield the current snapshot, then every later one, until the cell is closed.
        A slow subscriber sees the latest snapshot, not every intermediate one.
        """

        seen = -1
        while True:
            async with self._changed:
                await self._changed.wait_for(lambda: self._version != seen or self._closed)
                if self._version == seen:
                    return
                seen = self._version
                value = self._value
            yield value


# --- Module Notes -----------------------------------------------------------
# Single writer: only the owning `ProjectsQuery` calls `set`. Readers may poll `value`
# from anywhere or iterate `subscribe()` on the event loop.
