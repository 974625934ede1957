"""
projects_client.queries

Query descriptors.

Responsibilities:
- Declare the GraphQL operations this client issues (read-only).
"""

from projects_client.queries.descriptor import GET_PROJECTS, QueryDescriptor

__all__ = ["GET_PROJECTS", "QueryDescriptor"]


# --- Module Notes -----------------------------------------------------------
# Descriptors are pure data; executing them is the transport's job.
