"""FastAPI application factory (create_app)."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from fastapi import FastAPI, Request
from starlette.responses import Response

from arteloo.application.use_cases.stremio_catalog import CATALOGS
from arteloo.infrastructure.config import AppConfig
from arteloo.interfaces.api.stremio.router import ADDON_VERSION
from arteloo.interfaces.api.stremio.router import router as stremio_router
from arteloo.interfaces.app_state import AppState
from arteloo.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def create_app(config: AppConfig) -> FastAPI:
    """Create FastAPI app: configuration ONLY, NO resource initialization.

    Resources (HTTP client, cache, Arte client) are created in lifespan().
    """
    app = FastAPI(
        title="Arteloo",
        description="Stremio addon for the Arte.tv catalog and live channel",
        version=ADDON_VERSION,
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    app.include_router(stremio_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Liveness probe, returns 200 as long as the process is running."""
        return {"status": "ok", "addon": "Arte.tv", "version": ADDON_VERSION}

    @app.get("/stats")
    async def stats() -> dict[str, Any]:
        cache = getattr(app.state, "cache", None)
        return {
            "addon": "Arte.tv",
            "version": ADDON_VERSION,
            "catalogs": [c.id for c in CATALOGS],
            "cache_entries": len(cache) if cache is not None else 0,
        }

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ):
        start = time.perf_counter()
        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            status_code = getattr(locals().get("response", None), "status_code", 500)

            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
                client_host=(request.client.host if request.client else None),
            )

    return app
