"""
projects_client.models.wire

Wire-format models for the GetProjects response and the mapping to domain types.

Responsibilities:
- Validate the `data` object of a GraphQL response against the expected shape.
- Rename wire fields to semantic names and build domain entities.
- Turn validation failures into `ProtocolError`.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from projects_client.errors import ProtocolError
from projects_client.models.domain import Project, Team


class _WireModel(BaseModel):
    # GraphQL `ID` may be serialized as a number; ids are opaque strings on our side.
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class EquipeWire(_WireModel):
    idEquipe: str
    nom_equipe: str

    def to_domain(self) -> Team:
        return Team(id=self.idEquipe, name=self.nom_equipe)


class ProjetWire(_WireModel):
    idProjet: str
    nom_projet: str
    description_projet: str | None = None
    date_debut_projet: date | None = None
    date_fin_projet: date | None = None
    statut_projet: str
    equipes: list[EquipeWire] = []

    @field_validator("equipes", mode="before")
    @classmethod
    def _null_equipes_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    def to_domain(self) -> Project:
        return Project(
            id=self.idProjet,
            name=self.nom_projet,
            description=self.description_projet,
            start_date=self.date_debut_projet,
            end_date=self.date_fin_projet,
            status=self.statut_projet,
            teams=tuple(e.to_domain() for e in self.equipes),
        )


class ProjectsResponse(_WireModel):
    projets: list[ProjetWire]


def map_projects_response(data: Any) -> tuple[Project, ...]:
    """
    Validate the GraphQL `data` object and return domain projects in server order.
    """

    if not isinstance(data, dict):
        raise ProtocolError(f"expected an object for GetProjects data, got {type(data).__name__}")
    try:
        parsed = ProjectsResponse.model_validate(data)
    except ValidationError as e:
        raise ProtocolError(f"GetProjects response does not match schema: {e}") from e
    return tuple(p.to_domain() for p in parsed.projets)


# --- Module Notes -----------------------------------------------------------
# `projets: null` fails validation on purpose: an absent list is not "confirmed empty".
