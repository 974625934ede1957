"""
projects_client.observability.logging

Structured logging for the projects client.

Responsibilities:
- Render client events (`graphql.*`, `cache.*`, `projects.fetch.*`) as JSON lines on stderr.
- Stamp every line with the service name and the bound `operation`/`request_id`.
- Hand out module loggers via `get_logger`.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def configure_logging(*, service_name: str, level: str) -> None:
    """
    Called once by the application. `level` gates events such as `graphql.request`
    (debug) and `projects.fetch.failed` (warning); stdout stays free for command output.
    """

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service_name(service_name),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _add_service_name(service_name: str):
    # Lets several clients logging to one sink be told apart.
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Library modules only call `get_logger`; `configure_logging` belongs to the application
# (see `projects_client.__main__`). Unconfigured, structlog falls back to its dev renderer.
