"""
projects_client.transport.graphql_http

HTTP boundary used by the client to execute GraphQL operations.

Responsibilities:
- POST a descriptor's payload to the configured endpoint.
- Attach the optional bearer token and a request id.
- Map transport, HTTP and GraphQL-level failures onto the `FetchError` taxonomy.
- Return the untyped `data` object; typing happens in `models.wire`.
"""

from __future__ import annotations

from typing import Any

import httpx

from projects_client.errors import NetworkError, ProtocolError, ServerError
from projects_client.observability.context import bind_operation
from projects_client.observability.logging import get_logger
from projects_client.queries.descriptor import QueryDescriptor
from projects_client.settings import Settings

log = get_logger(__name__)


class GraphQLTransport:
    """
    Thin GraphQL-over-HTTP client. The caller owns the `httpx.AsyncClient` lifecycle.
    """

    def __init__(self, *, settings: Settings, http: httpx.AsyncClient) -> None:
        self._settings = settings
        self._http = http

    def _headers(self, request_id: str) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "x-request-id": request_id,
        }
        if self._settings.auth_token:
            headers["Authorization"] = f"Bearer {self._settings.auth_token}"
        return headers

    async def execute(
        self, descriptor: QueryDescriptor, variables: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        with bind_operation(descriptor.operation_name) as request_id:
            log.debug("graphql.request", url=self._settings.graphql_url)
            try:
                r = await self._http.post(
                    self._settings.graphql_url,
                    json=descriptor.to_payload(variables),
                    headers=self._headers(request_id),
                    timeout=self._settings.request_timeout_s,
                )
            except httpx.DecodingError as e:
                # A response arrived but its body could not be decoded.
                log.warning("graphql.decoding_error", error=str(e))
                raise ProtocolError(f"{descriptor.operation_name}: {e}") from e
            except httpx.RequestError as e:
                # TransportError, TooManyRedirects and any other request-level failure.
                log.warning("graphql.network_error", error_type=type(e).__name__, error=str(e))
                raise NetworkError(f"{descriptor.operation_name}: {e}") from e

            body = _decode_body(r, descriptor.operation_name)

            # GraphQL servers often report errors with a 4xx/5xx and an `errors` array.
            messages = _error_messages(body)
            if r.is_error:
                log.warning("graphql.http_error", status_code=r.status_code, messages=messages)
                raise ServerError(
                    f"{descriptor.operation_name}: HTTP {r.status_code}",
                    messages=messages,
                    status_code=r.status_code,
                )
            if body is None:
                raise ProtocolError(f"{descriptor.operation_name}: response is not JSON")
            if messages:
                # Partial results are not accepted for this client; data is discarded.
                log.warning("graphql.errors", messages=messages, partial=body.get("data") is not None)
                raise ServerError(
                    f"{descriptor.operation_name}: {messages[0]}",
                    messages=messages,
                    status_code=r.status_code,
                )

            data = body.get("data")
            if not isinstance(data, dict):
                raise ProtocolError(f"{descriptor.operation_name}: response has no data object")
            log.debug("graphql.response", status_code=r.status_code)
            return data


def _decode_body(r: httpx.Response, operation_name: str) -> dict[str, Any] | None:
    try:
        body = r.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        if r.is_error:
            return None
        raise ProtocolError(f"{operation_name}: response body is not a JSON object")
    return body


def _error_messages(body: dict[str, Any] | None) -> tuple[str, ...]:
    if not body:
        return ()
    errors = body.get("errors")
    if not errors:
        return ()
    if not isinstance(errors, list):
        return (str(errors),)
    out: list[str] = []
    for err in errors:
        if isinstance(err, dict):
            out.append(str(err.get("message") or err))
        else:
            out.append(str(err))
    return tuple(out)


# --- Module Notes -----------------------------------------------------------
# No retries here; timeouts come from settings and surface as NetworkError.
