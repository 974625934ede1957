"""
projects_client.models.domain

Domain entities returned to consumers.

Responsibilities:
- Define immutable `Project` and `Team` records with semantic field names.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict


class Team(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class Project(BaseModel):
    """
    A project as last seen by this client. The remote data source is the source of truth.

    `end_date` is None for ongoing projects. Ordering against `start_date` is the data
    source's invariant and is not checked here.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    # Opaque: the server owns the set of statuses.
    status: str
    teams: tuple[Team, ...] = ()


# --- Module Notes -----------------------------------------------------------
# Frozen models are shared between the cache and every consumer snapshot without copying.
