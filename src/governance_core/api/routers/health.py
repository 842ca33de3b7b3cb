"""
governance_core.api.routers.health

Service health and metadata endpoints.

Responsibilities:
- `GET /health`: liveness probe with service name and version.
- `GET /`: service identification.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from governance_core import __version__
from governance_core.api.deps import settings_dep
from governance_core.settings import Settings

router = APIRouter()


@router.get("/health")
async def health(settings: Settings = Depends(settings_dep)) -> dict[str, str]:
    # Liveness only: collaborators are not probed here.
    return {"status": "healthy", "service": settings.service_name, "version": __version__}


@router.get("/")
async def index(settings: Settings = Depends(settings_dep)) -> dict[str, str]:
    return {"service": settings.service_name, "version": __version__}
