"""
governance_core.api.app

FastAPI app factory.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Render every unknown route (or method) as `404 {"error": "Not found"}`.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_404_NOT_FOUND, HTTP_405_METHOD_NOT_ALLOWED

from governance_core import __version__
from governance_core.api.routers.health import router as health_router
from governance_core.observability.logging import configure_logging, get_logger
from governance_core.observability.middleware import RequestContextMiddleware
from governance_core.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level, env=settings.env)

    # No docs/openapi routes: the surface is exactly `/` and `/health`.
    app = FastAPI(
        title="Governance Core",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.add_exception_handler(StarletteHTTPException, _http_error)

    log.info("app_created", env=settings.env, version=__version__)
    return app


async def _http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code in (HTTP_404_NOT_FOUND, HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse(status_code=HTTP_404_NOT_FOUND, content={"error": "Not found"})
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})
