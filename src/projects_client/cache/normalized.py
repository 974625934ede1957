"""
projects_client.cache.normalized

In-memory normalized cache for projects and teams.

Responsibilities:
- Upsert entities by identity (`Project:<id>`, `Team:<id>`), last write wins.
- Record query roots as ordered project references with a write time.
- Reject writes from responses older than the last applied one (generation tickets).
- Reassemble domain objects on read so updates from any query are visible.
"""

from __future__ import annotations

import time
from datetime import date
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from projects_client.models.domain import Project, Team
from projects_client.observability.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class _ProjectRecord:
    # Normalized form: teams are stored by reference, not embedded.
    id: str
    name: str
    description: str | None
    start_date: date | None
    end_date: date | None
    status: str
    team_ids: tuple[str, ...]


@dataclass(slots=True)
class _QueryRoot:
    project_ids: tuple[str, ...]
    written_at: float
    generation: int
    invalidated: bool = False


class NormalizedCache:
    """
    Entity store plus query roots. Not thread-safe; use from one event loop.
    """

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._projects: dict[str, _ProjectRecord] = {}
        self._teams: dict[str, Team] = {}
        self._roots: dict[str, _QueryRoot] = {}
        self._tickets: dict[str, int] = {}
        # Oldest generation still allowed to write, per key.
        self._floor: dict[str, int] = {}

    # -- entities -----------------------------------------------------------

    def upsert_team(self, team: Team) -> None:
        self._teams[team.id] = team

    def upsert_project(self, project: Project) -> None:
        for team in project.teams:
            self.upsert_team(team)
        self._projects[project.id] = _ProjectRecord(
            id=project.id,
            name=project.name,
            description=project.description,
            start_date=project.start_date,
            end_date=project.end_date,
            status=project.status,
            team_ids=tuple(t.id for t in project.teams),
        )

    def read_team(self, team_id: str) -> Team | None:
        return self._teams.get(team_id)

    def read_project(self, project_id: str) -> Project | None:
        rec = self._projects.get(project_id)
        if rec is None:
            return None
        teams: list[Team] = []
        for tid in rec.team_ids:
            team = self._teams.get(tid)
            if team is None:
                # Dangling reference: treat the whole project as missing.
                return None
            teams.append(team)
        return Project(
            id=rec.id,
            name=rec.name,
            description=rec.description,
            start_date=rec.start_date,
            end_date=rec.end_date,
            status=rec.status,
            teams=tuple(teams),
        )

    def evict(self, typename: str, entity_id: str) -> bool:
        if typename == "Project":
            return self._projects.pop(entity_id, None) is not None
        if typename == "Team":
            return self._teams.pop(entity_id, None) is not None
        raise ValueError(f"unknown typename: {typename}")

    # -- query roots --------------------------------------------------------

    def next_generation(self, key: str) -> int:
        """
        Issue a request ticket for `key`. Tickets are strictly increasing per key.
        """

        ticket = self._tickets.get(key, 0) + 1
        self._tickets[key] = ticket
        return ticket

    def write_query(self, key: str, projects: Iterable[Project], *, generation: int) -> bool:
        floor = self._floor.get(key, 0)
        if generation < floor:
            log.info("cache.write.stale_ignored", key=key, generation=generation, floor=floor)
            return False

        projects = tuple(projects)
        for p in projects:
            self.upsert_project(p)
        self._roots[key] = _QueryRoot(
            project_ids=tuple(p.id for p in projects),
            written_at=self._clock(),
            generation=generation,
        )
        self._floor[key] = generation
        log.debug("cache.write", key=key, generation=generation, projects=len(projects))
        return True

    def read_query(self, key: str) -> tuple[Project, ...] | None:
        root = self._roots.get(key)
        if root is None:
            return None
        out: list[Project] = []
        for pid in root.project_ids:
            project = self.read_project(pid)
            if project is None:
                return None
            out.append(project)
        return tuple(out)

    def is_fresh(self, key: str, ttl_seconds: float | None) -> bool:
        root = self._roots.get(key)
        if root is None or root.invalidated:
            return False
        if ttl_seconds is None:
            return True
        return (self._clock() - root.written_at) < ttl_seconds

    def invalidate(self, key: str | None = None) -> None:
        # Data stays readable; only freshness is revoked.
        if key is None:
            roots = list(self._roots.values())
        else:
            roots = [self._roots[key]] if key in self._roots else []
        for root in roots:
            root.invalidated = True

    def clear(self) -> None:
        self._projects.clear()
        self._teams.clear()
        self._roots.clear()
        # Responses for tickets issued before the clear must not repopulate the cache.
        for key, ticket in self._tickets.items():
            self._floor[key] = ticket + 1
        log.info("cache.cleared")

    def snapshot(self) -> dict[str, Any]:
        entities: dict[str, Any] = {}
        for tid, team in self._teams.items():
            entities[f"Team:{tid}"] = team.model_dump()
        for pid, rec in self._projects.items():
            entities[f"Project:{pid}"] = {
                "id": rec.id,
                "name": rec.name,
                "description": rec.description,
                "start_date": rec.start_date,
                "end_date": rec.end_date,
                "status": rec.status,
                "teams": [{"__ref": f"Team:{t}"} for t in rec.team_ids],
            }
        roots = {
            k: {
                "projects": [{"__ref": f"Project:{p}"} for p in r.project_ids],
                "generation": r.generation,
                "invalidated": r.invalidated,
            }
            for k, r in self._roots.items()
        }
        return {"entities": entities, "roots": roots}


# --- Module Notes -----------------------------------------------------------
# Stale-write protection: a response for ticket N is dropped once ticket M > N has been
# written for the same key, or once the cache was cleared after N was issued.
# Entities are last-write-wins with no field-level merge.
