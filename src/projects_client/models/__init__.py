"""
projects_client.models

Domain and wire models.

Responsibilities:
- Define the typed domain entities (`Project`, `Team`).
- Validate and convert wire payloads at the protocol boundary.
"""

from projects_client.models.domain import Project, Team
from projects_client.models.wire import ProjectsResponse, map_projects_response

__all__ = ["Project", "ProjectsResponse", "Team", "map_projects_response"]


# --- Module Notes -----------------------------------------------------------
# Only domain types should cross into cache/client code.
