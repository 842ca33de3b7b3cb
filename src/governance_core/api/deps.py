"""
governance_core.api.deps

FastAPI dependency wiring for the API layer.
"""

from __future__ import annotations

from fastapi import Request

from governance_core.settings import Settings


def settings_dep(request: Request) -> Settings:
    # Stashed by `governance_core.api.app.create_app` so tests can inject their own.
    return request.app.state.settings  # type: ignore[attr-defined]
