"""
tests.conftest

Shared fixtures for the client test-suite.

Responsibilities:
- Provide settings pinned to the test environment.
- Provide a scripted GraphQL endpoint built on `httpx.MockTransport`.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator, Callable, Iterator
from typing import Any

import httpx
import pytest
import pytest_asyncio
from structlog.testing import capture_logs

from projects_client.settings import Settings

GRAPHQL_URL = "http://graphql.test/graphql"


def projet(
    pid: str,
    name: str = "Alpha",
    *,
    equipes: list[dict[str, Any]] | None = None,
    statut: str = "active",
) -> dict[str, Any]:
    return {
        "idProjet": pid,
        "nom_projet": name,
        "description_projet": "",
        "date_debut_projet": "2024-01-01",
        "date_fin_projet": None,
        "statut_projet": statut,
        "equipes": equipes if equipes is not None else [],
    }


class FakeGraphQL:
    """
    Scripted endpoint: each request pops the next responder (or reuses the last one).
    `gate`, when set, holds every request until released so tests can overlap fetches.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._responders: list[Callable[[httpx.Request], httpx.Response]] = []
        self.gate: asyncio.Event | None = None

    def reply(self, body: Any, status_code: int = 200) -> FakeGraphQL:
        self._responders.append(lambda _req: httpx.Response(status_code, json=body))
        return self

    def reply_data(self, projets: list[dict[str, Any]]) -> FakeGraphQL:
        return self.reply({"data": {"projets": projets}})

    def reply_with(self, fn: Callable[[httpx.Request], httpx.Response]) -> FakeGraphQL:
        self._responders.append(fn)
        return self

    @property
    def calls(self) -> int:
        return len(self.requests)

    def last_payload(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()
        responder = self._responders.pop(0) if len(self._responders) > 1 else self._responders[0]
        return responder(request)


@pytest.fixture(autouse=True)
def logs() -> Iterator[list[dict[str, Any]]]:
    # Captures structlog events instead of printing them to stdout.
    with capture_logs() as captured:
        yield captured


@pytest.fixture
def settings() -> Settings:
    return Settings(env="test", graphql_url=GRAPHQL_URL, cache_ttl_seconds=60.0)


@pytest.fixture
def fake() -> FakeGraphQL:
    return FakeGraphQL()


@pytest.fixture
def make_projet() -> Callable[..., dict[str, Any]]:
    return projet


@pytest_asyncio.fixture
async def http(fake: FakeGraphQL) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake)) as client:
        yield client


# --- Module Notes -----------------------------------------------------------
# MockTransport accepts async handlers when used with AsyncClient.
