"""
projects_client

Top-level package for the projects GraphQL client.

Responsibilities:
- Expose package version metadata.
- Re-export the consumer-facing entry points.
"""

from projects_client.client import FetchPolicy, ProjectsClient, ProjectsQuery
from projects_client.errors import (
    CacheMissError,
    FetchError,
    NetworkError,
    ProtocolError,
    ServerError,
)
from projects_client.models import Project, Team

__all__ = [
    "__version__",
    "CacheMissError",
    "FetchError",
    "FetchPolicy",
    "NetworkError",
    "Project",
    "ProjectsClient",
    "ProjectsQuery",
    "ProtocolError",
    "ServerError",
    "Team",
]

__version__ = "0.1.0"


# --- Module Notes -----------------------------------------------------------
# Keep this file free of side effects: no logging configuration, no network clients.
