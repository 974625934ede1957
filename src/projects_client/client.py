"""
projects_client.client

Consumer-facing client for the GetProjects query.

Responsibilities:
- Decide per fetch policy whether to serve from cache, the network, or both.
- Map responses into domain projects and merge them into the normalized cache.
- Expose each fetch as a `ProjectsQuery` handle with loading / success / error states.
- Own (or borrow) the HTTP client, executor and cache as a composition root.
"""

from __future__ import annotations

import asyncio
import weakref
from collections.abc import AsyncIterator
from enum import Enum
from typing import Any

import httpx

from projects_client.cache.normalized import NormalizedCache
from projects_client.errors import CacheMissError, FetchError
from projects_client.models.domain import Project
from projects_client.models.wire import map_projects_response
from projects_client.observability.logging import get_logger
from projects_client.queries.descriptor import GET_PROJECTS
from projects_client.reactive import QueryResult, ResultCell
from projects_client.settings import Settings
from projects_client.transport.executor import QueryExecutor
from projects_client.transport.graphql_http import GraphQLTransport

log = get_logger(__name__)

Projects = tuple[Project, ...]


class FetchPolicy(str, Enum):
    cache_first = "cache-first"
    network_only = "network-only"
    cache_and_network = "cache-and-network"
    no_cache = "no-cache"
    cache_only = "cache-only"


class ProjectsQuery:
    """
    Handle for one GetProjects fetch and its later refetches.

    The handle is the only writer of its result; consumers read `result`, await `wait()`
    or iterate `subscribe()`.
    """

    def __init__(
        self,
        *,
        executor: QueryExecutor,
        cache: NormalizedCache,
        cache_ttl_seconds: float | None,
        variables: dict[str, Any] | None = None,
    ) -> None:
        self._executor = executor
        self._cache = cache
        self._ttl = cache_ttl_seconds
        self._variables = variables
        self._key = GET_PROJECTS.cache_key(variables)
        self._cell: ResultCell[Projects] = ResultCell()
        self._task: asyncio.Task[None] | None = None

    @property
    def key(self) -> str:
        return self._key

    @property
    def result(self) -> QueryResult[Projects]:
        return self._cell.value

    @property
    def cached_data(self) -> Projects | None:
        return self._cache.read_query(self._key)

    def start(self, policy: FetchPolicy) -> ProjectsQuery:
        if self._cell.closed:
            raise RuntimeError("query handle is closed")
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = asyncio.create_task(self._run(policy))
        return self

    def refetch(self) -> ProjectsQuery:
        return self.start(FetchPolicy.network_only)

    def cancel(self) -> None:
        """
        Stop waiting for the outstanding fetch. The shared request keeps running for other
        handles; this handle neither writes its response to the cache nor changes state.
        """

        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def close(self) -> None:
        self.cancel()
        await self._cell.close()

    async def wait(self) -> QueryResult[Projects]:
        # Loop: a refetch may replace the task while we wait.
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})
        return self._cell.value

    async def get(self) -> Projects:
        result = await self.wait()
        if result.error is not None:
            raise result.error
        if result.data is None:
            raise FetchError(f"{GET_PROJECTS.operation_name} fetch was cancelled")
        return result.data

    def subscribe(self) -> AsyncIterator[QueryResult[Projects]]:
        return self._cell.subscribe()

    async def _run(self, policy: FetchPolicy) -> None:
        if policy is not FetchPolicy.cache_and_network and not self.result.is_loading:
            await self._cell.set(QueryResult.loading())

        if policy in (FetchPolicy.cache_first, FetchPolicy.cache_only, FetchPolicy.cache_and_network):
            cached = self._cache.read_query(self._key)
            if policy is FetchPolicy.cache_only:
                if cached is None:
                    await self._cell.set(
                        QueryResult.failure(CacheMissError(f"no cached result for {self._key}"))
                    )
                else:
                    await self._cell.set(QueryResult.success(cached, from_cache=True))
                return
            if cached is not None and policy is FetchPolicy.cache_first:
                if self._cache.is_fresh(self._key, self._ttl):
                    log.debug("projects.fetch.cache_hit", key=self._key)
                    await self._cell.set(QueryResult.success(cached, from_cache=True))
                    return
            if policy is FetchPolicy.cache_and_network:
                if cached is not None:
                    await self._cell.set(QueryResult.success(cached, from_cache=True))
                elif not self.result.is_loading:
                    await self._cell.set(QueryResult.loading())

        await self._fetch(write_cache=policy is not FetchPolicy.no_cache)

    async def _fetch(self, *, write_cache: bool) -> None:
        generation = self._cache.next_generation(self._key) if write_cache else 0
        try:
            data = await self._executor.execute(GET_PROJECTS, self._variables)
            projects = map_projects_response(data)
        except FetchError as e:
            # The cache is left as it was; consumers can still read `cached_data`.
            log.warning("projects.fetch.failed", key=self._key, error_type=type(e).__name__, error=str(e))
            await self._cell.set(QueryResult.failure(e))
            return

        if write_cache and not self._cache.write_query(self._key, projects, generation=generation):
            # A newer response already landed; show what the cache holds, even when empty.
            cached = self._cache.read_query(self._key)
            projects = cached if cached is not None else projects
        log.info("projects.fetch.succeeded", key=self._key, projects=len(projects))
        await self._cell.set(QueryResult.success(projects))


class ProjectsClient:
    """
    Composition root: one per application session.

    The cache is injectable so its lifecycle (creation at startup, `reset()` on logout)
    stays with the caller. An `httpx.AsyncClient` passed in is borrowed, not closed.
    """

    def __init__(
        self,
        *,
        settings: Settings,
        http: httpx.AsyncClient | None = None,
        cache: NormalizedCache | None = None,
        executor: QueryExecutor | None = None,
    ) -> None:
        self._settings = settings
        self._owns_http = http is None and executor is None
        self._owns_executor = executor is None
        self._http = http
        if executor is None:
            if self._http is None:
                self._http = httpx.AsyncClient(timeout=settings.request_timeout_s)
            executor = QueryExecutor(GraphQLTransport(settings=settings, http=self._http))
        self._executor = executor
        self.cache = cache if cache is not None else NormalizedCache()
        self._queries: weakref.WeakSet[ProjectsQuery] = weakref.WeakSet()

    async def __aenter__(self) -> ProjectsClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    def fetch_projects(self, fetch_policy: FetchPolicy | str | None = None) -> ProjectsQuery:
        """
        Start fetching all projects with their teams. Must be called on a running loop.
        """

        policy = FetchPolicy(fetch_policy or self._settings.default_fetch_policy)
        query = ProjectsQuery(
            executor=self._executor,
            cache=self.cache,
            cache_ttl_seconds=self._settings.cache_ttl_seconds,
        )
        self._queries.add(query)
        log.debug("projects.fetch.start", policy=policy.value)
        return query.start(policy)

    async def get_projects(self, fetch_policy: FetchPolicy | str | None = None) -> Projects:
        query = self.fetch_projects(fetch_policy)
        try:
            return await query.get()
        finally:
            await query.close()

    def read_cached_projects(self) -> Projects | None:
        return self.cache.read_query(GET_PROJECTS.cache_key())

    def invalidate(self) -> None:
        # Next cache-first fetch goes to the network; cached data stays readable.
        self.cache.invalidate(GET_PROJECTS.cache_key())

    async def reset(self) -> None:
        for query in list(self._queries):
            await query.close()
        self.cache.clear()

    async def aclose(self) -> None:
        for query in list(self._queries):
            await query.close()
        if self._owns_executor:
            await self._executor.aclose()
        if self._owns_http and self._http is not None:
            await self._http.aclose()


# --- Module Notes -----------------------------------------------------------
# Cache validity: cache-first with a TTL (`Settings.cache_ttl_seconds`) by default.
# Invalidation does not refetch live handles; consumers call `refetch()` when notified.
