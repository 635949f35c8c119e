"""Stremio catalog use case: Arte pages and categories as catalogs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import structlog

from arteloo.domain.entities.arte import LIVE_PROGRAM_ID, VideoSummary
from arteloo.domain.entities.stremio import StremioContentType, StremioMetaPreview
from arteloo.domain.ports.arte import ArteClientPort

log = structlog.get_logger(__name__)

ID_PREFIX = "arte:"
LIVE_META_ID = f"{ID_PREFIX}{LIVE_PROGRAM_ID}"
LIVE_NAME = "Arte - Direct"
LIVE_POSTER = "https://static-cdn.arte.tv/guide/favicons/apple-touch-icon.png"
ARTE_BACKGROUND = "https://api-cdn.arte.tv/img/v2/image/3JuyT2qo2eFCkPakJL1j3P/1920x1080"

CatalogSource = Literal["homepage", "category", "live"]


@dataclass(frozen=True)
class CatalogDefinition:
    """One catalog advertised in the manifest."""

    id: str
    type: StremioContentType
    name: str
    source: CatalogSource
    category: str | None = None  # Arte category code when source is "category"
    paginated: bool = True


CATALOGS: tuple[CatalogDefinition, ...] = (
    CatalogDefinition("arte-home", "movie", "Arte - À la une", "homepage"),
    CatalogDefinition("arte-cinema", "movie", "Arte - Cinéma", "category", "CIN"),
    CatalogDefinition("arte-docs", "movie", "Arte - Documentaires", "category", "DOR"),
    CatalogDefinition("arte-series", "series", "Arte - Séries", "category", "SER"),
    CatalogDefinition("arte-live", "tv", LIVE_NAME, "live", paginated=False),
)

_CATALOGS_BY_ID = {c.id: c for c in CATALOGS}


def to_preview(video: VideoSummary, content_type: StremioContentType) -> StremioMetaPreview:
    return StremioMetaPreview(
        id=f"{ID_PREFIX}{video.program_id}",
        type=content_type,
        name=video.title,
        poster=video.image_large or video.image_small,
        description=video.description,
        release_info=video.duration_label,
        genres=[video.genre] if video.genre else [],
    )


class StremioCatalogUseCase:
    """Provides Stremio catalog pages backed by the Arte client.

    The client always returns the full aggregate; slicing by ``skip`` and
    page size happens here.
    """

    def __init__(self, arte: ArteClientPort, page_size: int = 50) -> None:
        self._arte = arte
        self._page_size = page_size

    async def catalog(
        self,
        content_type: StremioContentType,
        catalog_id: str,
        skip: int = 0,
    ) -> list[StremioMetaPreview]:
        """Fetch one page of a catalog.

        Returns:
            Catalog previews (empty for unknown catalogs or on error).
        """
        definition = _CATALOGS_BY_ID.get(catalog_id)
        if definition is None:
            log.debug("stremio_catalog_unknown", catalog_id=catalog_id)
            return []

        try:
            if definition.source == "live":
                return await self._live_catalog()
            if definition.source == "homepage":
                videos = await self._arte.list_homepage()
            else:
                videos = await self._arte.list_category(definition.category or "")
        except Exception:
            log.warning(
                "stremio_catalog_error",
                catalog_id=catalog_id,
                skip=skip,
                exc_info=True,
            )
            return []

        skip = max(skip, 0)
        page = videos[skip : skip + self._page_size]
        log.info(
            "stremio_catalog_served",
            catalog_id=catalog_id,
            skip=skip,
            count=len(page),
        )
        return [to_preview(v, content_type) for v in page]

    async def _live_catalog(self) -> list[StremioMetaPreview]:
        live = await self._arte.get_live_channel()
        if live is None or not live.stream_url:
            return []

        if live.subtitle:
            description = f"{live.title} - {live.subtitle}"
        else:
            description = live.title or "Arte en direct"

        return [
            StremioMetaPreview(
                id=LIVE_META_ID,
                type="tv",
                name=LIVE_NAME,
                poster=LIVE_POSTER,
                poster_shape="square",
                background=ARTE_BACKGROUND,
                description=description,
            )
        ]
