"""
projects_client.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the client.
- Hide secrets from repr/logging (e.g., the bearer token).
- Offer a cached settings instance for the command-line entrypoint.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration (`PROJECTS_*`).
    Library code receives an instance explicitly; only the entrypoint uses `get_settings`.
    """

    model_config = SettingsConfigDict(env_prefix="PROJECTS_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "projects-client"
    log_level: str = "INFO"

    # GraphQL endpoint
    graphql_url: str = "http://localhost:4000/graphql"
    request_timeout_s: float = Field(default=30.0, gt=0)
    auth_token: str | None = Field(default=None, repr=False)

    # Cache validity
    default_fetch_policy: Literal[
        "cache-first", "network-only", "cache-and-network", "no-cache", "cache-only"
    ] = "cache-first"
    # None disables expiry; roots then stay valid until invalidated or cleared.
    cache_ttl_seconds: float | None = Field(default=300.0, ge=0)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Fetch policy names follow the GraphQL client convention (kebab-case) so they can be
# set from the environment as-is; `client.FetchPolicy` parses them.
