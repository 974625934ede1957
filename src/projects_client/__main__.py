"""
projects_client.__main__

Entrypoint for `python -m projects_client`.

Responsibilities:
- Load settings and configure structured logging.
- Fetch all projects with their teams once.
- Print the result as JSON on stdout; exit non-zero on a fetch error.
"""

from __future__ import annotations

import asyncio
import json
import sys

import httpx
from pydantic import TypeAdapter

from projects_client.client import ProjectsClient
from projects_client.errors import FetchError
from projects_client.models.domain import Project
from projects_client.observability.logging import configure_logging, get_logger
from projects_client.settings import Settings, get_settings

log = get_logger(__name__)

_projects_adapter = TypeAdapter(tuple[Project, ...])


async def run(settings: Settings, *, http: httpx.AsyncClient | None = None) -> int:
    async with ProjectsClient(settings=settings, http=http) as client:
        try:
            projects = await client.get_projects()
        except FetchError as e:
            log.error("projects.fetch.failed", error_type=type(e).__name__, error=str(e))
            return 1
    payload = _projects_adapter.dump_python(projects, mode="json")
    sys.stdout.write(json.dumps(payload, indent=2, ensure_ascii=False) + "\n")
    return 0


def main() -> None:
    settings = get_settings()
    configure_logging(service_name=settings.service_name, level=settings.log_level)
    log.info("startup", env=settings.env, url=settings.graphql_url)
    raise SystemExit(asyncio.run(run(settings)))


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# Logs go to stderr so stdout stays machine-readable.
