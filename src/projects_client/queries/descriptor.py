"""
projects_client.queries.descriptor

Immutable GraphQL request descriptors.

Responsibilities:
- Hold the operation name and document for a query.
- Build the GraphQL-over-HTTP request body.
- Derive a stable key used for request coalescing and cache roots.
- Reject variables the operation does not declare.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class QueryDescriptor:
    operation_name: str
    document: str
    # Variable names the operation declares; empty for parameterless queries.
    variable_names: tuple[str, ...] = ()

    def _checked(self, variables: dict[str, Any] | None) -> dict[str, Any]:
        variables = dict(variables or {})
        unknown = sorted(set(variables) - set(self.variable_names))
        if unknown:
            raise ValueError(f"{self.operation_name} does not declare variables: {', '.join(unknown)}")
        return variables

    def to_payload(self, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        # A fresh dict every call; the descriptor itself is never mutated.
        return {
            "query": self.document,
            "operationName": self.operation_name,
            "variables": self._checked(variables),
        }

    def cache_key(self, variables: dict[str, Any] | None = None) -> str:
        canonical = json.dumps(
            self._checked(variables), sort_keys=True, separators=(",", ":"), default=str
        )
        return f"{self.operation_name}:{canonical}"


GET_PROJECTS = QueryDescriptor(
    operation_name="GetProjects",
    document="""
query GetProjects {
    projets {
        idProjet
        nom_projet
        description_projet
        date_debut_projet
        date_fin_projet
        statut_projet
        equipes {
            idEquipe
            nom_equipe
        }
    }
}
""".strip(),
)


# --- Module Notes -----------------------------------------------------------
# Field names in GET_PROJECTS are the server schema's and must stay as-is for wire
# compatibility; `models.wire` renames them at the boundary.
