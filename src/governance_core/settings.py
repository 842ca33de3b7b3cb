"""
governance_core.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the API, CLI and HTTP adapters.
- Hide secrets from repr/logging (adapter API key, JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="GOVCORE_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "governance-core"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    # Cloud Run style platforms inject PORT; accept it alongside the prefixed name.
    api_port: int = Field(
        default=8080,
        validation_alias=AliasChoices("GOVCORE_API_PORT", "PORT"),
    )

    # Collaborator endpoints
    policy_engine_url: str = "http://localhost:8101"
    cost_ops_url: str = "http://localhost:8102"
    analytics_hub_url: str = "http://localhost:8103"
    config_manager_url: str = "http://localhost:8104"
    schema_registry_url: str = "http://localhost:8105"
    dashboard_url: str = "http://localhost:8106"

    adapter_timeout_seconds: float = 10.0
    # When set, sent as a static bearer credential instead of minted service tokens.
    adapter_api_key: str | None = Field(default=None, repr=False)

    # Service-to-service tokens
    jwt_alg: str = "HS256"
    jwt_issuer: str = "governance-core"
    jwt_secret: str = Field(default="dev-secret-change-me-before-deploying-anywhere", repr=False)
    service_subject: str = "governance-core"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Collaborator URLs are per-environment; tests construct `Settings(...)` directly.
