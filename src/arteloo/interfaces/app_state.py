"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from arteloo.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from arteloo.application.use_cases import (
        StremioCatalogUseCase,
        StremioMetaUseCase,
        StremioStreamUseCase,
    )
    from arteloo.domain.ports import ArteClientPort, CachePort


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    cache: CachePort
    http_client: httpx.AsyncClient

    # Domain Ports
    arte_client: ArteClientPort

    # Stremio use cases
    stremio_catalog_uc: StremioCatalogUseCase
    stremio_meta_uc: StremioMetaUseCase
    stremio_stream_uc: StremioStreamUseCase
