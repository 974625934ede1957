"""
projects_client.cache

Normalized result cache package.

Responsibilities:
- Store fetched entities by identity and query results as ordered references.
"""

from projects_client.cache.normalized import NormalizedCache

__all__ = ["NormalizedCache"]


# --- Module Notes -----------------------------------------------------------
# One cache instance per application session; it is created and injected by the caller.
