"""
tests.test_cache

Normalized cache behavior.

Responsibilities:
- Entity upserts, query-root reassembly, freshness, invalidation and eviction.
- Stale-generation protection, including across `clear()`.
"""

from __future__ import annotations

from datetime import date

import pytest

from projects_client.cache import NormalizedCache
from projects_client.models import Project, Team

KEY = "GetProjects:{}"


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def make_project(pid: str, name: str = "Alpha", teams: tuple[Team, ...] = ()) -> Project:
    return Project(
        id=pid,
        name=name,
        start_date=date(2024, 1, 1),
        status="active",
        teams=teams,
    )


def test_write_and_read_query_round_trip() -> None:
    cache = NormalizedCache()
    core = Team(id="t1", name="Core")
    projects = (make_project("p1", teams=(core,)), make_project("p2"))

    assert cache.write_query(KEY, projects, generation=cache.next_generation(KEY))

    assert cache.read_query(KEY) == projects
    assert cache.read_team("t1") == core
    assert cache.read_project("p2") == projects[1]


def test_unknown_root_is_a_miss() -> None:
    assert NormalizedCache().read_query(KEY) is None


def test_empty_result_is_cached_as_empty() -> None:
    cache = NormalizedCache()
    cache.write_query(KEY, (), generation=cache.next_generation(KEY))
    assert cache.read_query(KEY) == ()


def test_team_update_from_another_project_is_visible() -> None:
    cache = NormalizedCache()
    cache.write_query(
        KEY,
        (make_project("p1", teams=(Team(id="t1", name="Core"),)),),
        generation=cache.next_generation(KEY),
    )

    cache.upsert_project(make_project("p9", teams=(Team(id="t1", name="Core Platform"),)))

    (p1,) = cache.read_query(KEY)
    assert p1.teams == (Team(id="t1", name="Core Platform"),)


def test_upsert_overwrites_wholesale() -> None:
    cache = NormalizedCache()
    cache.upsert_project(make_project("p1", teams=(Team(id="t1", name="Core"),)))
    cache.upsert_project(make_project("p1", name="Renamed"))

    project = cache.read_project("p1")
    assert project is not None
    assert project.name == "Renamed"
    assert project.teams == ()


def test_stale_generation_is_rejected() -> None:
    cache = NormalizedCache()
    old = cache.next_generation(KEY)
    new = cache.next_generation(KEY)

    assert cache.write_query(KEY, (make_project("p1", name="New"),), generation=new)
    assert not cache.write_query(KEY, (make_project("p1", name="Old"),), generation=old)

    (p1,) = cache.read_query(KEY)
    assert p1.name == "New"


def test_clear_rejects_responses_requested_before_it() -> None:
    cache = NormalizedCache()
    before = cache.next_generation(KEY)
    cache.clear()

    assert not cache.write_query(KEY, (make_project("p1"),), generation=before)
    assert cache.read_query(KEY) is None
    assert cache.write_query(KEY, (make_project("p1"),), generation=cache.next_generation(KEY))


def test_evicted_team_turns_root_into_miss() -> None:
    cache = NormalizedCache()
    cache.write_query(
        KEY,
        (make_project("p1", teams=(Team(id="t1", name="Core"),)),),
        generation=cache.next_generation(KEY),
    )

    assert cache.evict("Team", "t1")

    assert cache.read_project("p1") is None
    assert cache.read_query(KEY) is None


def test_evict_unknown_typename() -> None:
    with pytest.raises(ValueError):
        NormalizedCache().evict("User", "u1")


def test_freshness_follows_ttl_and_invalidation() -> None:
    clock = FakeClock()
    cache = NormalizedCache(clock=clock)
    assert not cache.is_fresh(KEY, 60)

    cache.write_query(KEY, (make_project("p1"),), generation=cache.next_generation(KEY))
    assert cache.is_fresh(KEY, 60)

    clock.now += 61
    assert not cache.is_fresh(KEY, 60)
    assert cache.is_fresh(KEY, None)

    cache.invalidate()
    assert not cache.is_fresh(KEY, None)
    # Invalidation keeps the data readable.
    assert cache.read_query(KEY) is not None


def test_snapshot_uses_references() -> None:
    cache = NormalizedCache()
    cache.write_query(
        KEY,
        (make_project("p1", teams=(Team(id="t1", name="Core"),)),),
        generation=cache.next_generation(KEY),
    )

    snap = cache.snapshot()

    assert snap["entities"]["Team:t1"] == {"id": "t1", "name": "Core"}
    assert snap["entities"]["Project:p1"]["teams"] == [{"__ref": "Team:t1"}]
    assert snap["roots"][KEY]["projects"] == [{"__ref": "Project:p1"}]


# --- Module Notes -----------------------------------------------------------
# FakeClock keeps TTL tests deterministic.
