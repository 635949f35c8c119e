"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from arteloo.application.use_cases import (
    StremioCatalogUseCase,
    StremioMetaUseCase,
    StremioStreamUseCase,
)
from arteloo.infrastructure.arte import HttpxArteClient
from arteloo.infrastructure.cache import MemoryCacheAdapter
from arteloo.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. Cache (owned by the app, injected into the client)
        2. HTTP Client
        3. Arte client (uses HTTP client + cache)
        4. Stremio use cases (use the Arte client)
    """
    state = cast(AppState, app.state)
    config = state.config

    # 1) Cache
    cache = MemoryCacheAdapter(ttl_seconds=config.cache_ttl_seconds)
    await cache.__aenter__()
    state.cache = cache
    log.info("cache_initialized", ttl_seconds=config.cache_ttl_seconds)

    # 2) HTTP client (bounded timeout per upstream call)
    state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
        follow_redirects=True,
    )
    log.info("http_client_initialized", timeout=config.http_timeout_seconds)

    # 3) Arte client
    state.arte_client = HttpxArteClient(
        http_client=state.http_client,
        cache=state.cache,
        language=config.arte.language,
        authorized_country=config.arte.authorized_country,
        emac_base_url=config.arte.emac_base_url,
        player_base_url=config.arte.player_base_url,
        user_agent=config.http_user_agent,
        ttl_seconds=config.cache_ttl_seconds,
        max_zone_pages=config.arte.max_zone_pages,
    )
    log.info("arte_client_initialized", language=config.arte.language)

    # 4) Stremio use cases
    state.stremio_catalog_uc = StremioCatalogUseCase(
        arte=state.arte_client,
        page_size=config.stremio.page_size,
    )
    state.stremio_meta_uc = StremioMetaUseCase(arte=state.arte_client)
    state.stremio_stream_uc = StremioStreamUseCase(arte=state.arte_client)

    log.info("app_startup_complete", addon_url=config.stremio.addon_url)

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")

        await state.cache.aclose()
        log.info("cache_closed")

        log.info("app_shutdown_complete")
