"""
projects_client.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Operation context propagation for consistent log enrichment.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Metrics exporters could live here without touching transport or cache code.
