"""
projects_client.errors

Fetch error taxonomy.

Responsibilities:
- Distinguish transport failures, malformed responses and server-reported failures.
- Carry server-provided messages when available.
"""

from __future__ import annotations


class FetchError(Exception):
    """
    Base class for every failure surfaced to a consumer as the `error` state.
    """


class NetworkError(FetchError):
    """No response was received (connection failure, timeout)."""


class ProtocolError(FetchError):
    """The response was received but is not a valid GraphQL result for the query."""


class ServerError(FetchError):
    """
    The data source reported a failure: an HTTP error status or a GraphQL `errors` array.
    """

    def __init__(
        self,
        message: str,
        *,
        messages: tuple[str, ...] = (),
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.messages = messages
        self.status_code = status_code


class CacheMissError(FetchError):
    """A cache-only read found no usable cached result."""


# --- Module Notes -----------------------------------------------------------
# None of these are retried inside the client; retry policy belongs to the caller.
