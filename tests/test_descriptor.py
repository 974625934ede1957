"""
tests.test_descriptor

GetProjects query descriptor.

Responsibilities:
- Pin the operation name, selected fields and request body shape.
"""

from __future__ import annotations

import dataclasses

import pytest

from projects_client.queries import GET_PROJECTS, QueryDescriptor


def test_operation_name_and_fields() -> None:
    assert GET_PROJECTS.operation_name == "GetProjects"
    assert GET_PROJECTS.variable_names == ()
    doc = GET_PROJECTS.document
    assert doc.startswith("query GetProjects {")
    for name in (
        "projets",
        "idProjet",
        "nom_projet",
        "description_projet",
        "date_debut_projet",
        "date_fin_projet",
        "statut_projet",
        "equipes",
        "idEquipe",
        "nom_equipe",
    ):
        assert name in doc


def test_payload_is_fresh_and_descriptor_is_frozen() -> None:
    payload = GET_PROJECTS.to_payload()
    assert payload == {
        "query": GET_PROJECTS.document,
        "operationName": "GetProjects",
        "variables": {},
    }
    payload["variables"]["x"] = 1
    assert GET_PROJECTS.to_payload()["variables"] == {}

    with pytest.raises(dataclasses.FrozenInstanceError):
        GET_PROJECTS.operation_name = "Other"  # type: ignore[misc]


def test_cache_key_is_canonical() -> None:
    assert GET_PROJECTS.cache_key() == "GetProjects:{}"
    by_status = QueryDescriptor(
        operation_name="GetProjectsByStatus",
        document="query GetProjectsByStatus($a: ID, $b: String) { projets { idProjet } }",
        variable_names=("a", "b"),
    )
    assert by_status.cache_key({"b": 1, "a": 2}) == by_status.cache_key({"a": 2, "b": 1})
    assert by_status.to_payload({"a": "p1"})["variables"] == {"a": "p1"}


def test_undeclared_variables_are_rejected() -> None:
    with pytest.raises(ValueError, match="statut"):
        GET_PROJECTS.to_payload({"statut": "active"})
    with pytest.raises(ValueError):
        GET_PROJECTS.cache_key({"statut": "active"})


# --- Module Notes -----------------------------------------------------------
# Field names are the server schema's; renaming happens in `models.wire`.
