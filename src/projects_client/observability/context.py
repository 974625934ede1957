"""
projects_client.observability.context

Operation-scoped logging context.

Responsibilities:
- Generate a request id per network execution.
- Bind operation metadata into structlog contextvars for the duration of a call.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager

import structlog


@contextmanager
def bind_operation(operation: str, *, request_id: str | None = None) -> Iterator[str]:
    """
    Bind `operation` and `request_id` to every log line emitted inside the block.
    Yields the request id so callers can forward it as a header.
    """

    rid = request_id or str(uuid.uuid4())
    tokens = structlog.contextvars.bind_contextvars(operation=operation, request_id=rid)
    try:
        yield rid
    finally:
        # Restore the previous values instead of clearing; executions may nest under tasks.
        structlog.contextvars.reset_contextvars(**tokens)


# --- Module Notes -----------------------------------------------------------
# asyncio tasks copy the current context on creation, so bindings made here do not leak
# into sibling tasks started by other consumers.
