"""
projects_client.transport

Query execution package.

Responsibilities:
- Send query descriptors to the GraphQL endpoint and translate failures.
- Coalesce concurrent identical executions.
"""

from projects_client.transport.executor import QueryExecutor
from projects_client.transport.graphql_http import GraphQLTransport

__all__ = ["GraphQLTransport", "QueryExecutor"]


# --- Module Notes -----------------------------------------------------------
# The client depends on `QueryExecutor`; swapping the HTTP transport does not touch it.
