"""Stremio addon API endpoints (manifest, catalog, meta, stream)."""

from __future__ import annotations

from typing import Any, cast
from urllib.parse import parse_qs

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from arteloo.application.use_cases.stremio_catalog import CATALOGS, ID_PREFIX
from arteloo.domain.entities.stremio import (
    StremioContentType,
    StremioMeta,
    StremioMetaPreview,
    StremioStream,
    StremioVideo,
)
from arteloo.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["stremio"])

ADDON_ID = "community.stremio.arte"
ADDON_VERSION = "1.0.0"

_CONTENT_TYPES: frozenset[str] = frozenset({"movie", "series", "tv"})
_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Origin, X-Requested-With, Content-Type, Accept",
}


def build_manifest() -> dict[str, Any]:
    """Build the Stremio addon manifest."""
    return {
        "id": ADDON_ID,
        "version": ADDON_VERSION,
        "name": "Arte.tv",
        "description": (
            "Streaming légal et gratuit depuis Arte.tv - "
            "Documentaires, films, séries et direct"
        ),
        "background": "https://api-cdn.arte.tv/img/v2/image/3JuyT2qo2eFCkPakJL1j3P/1920x1080",
        "resources": ["catalog", "meta", "stream"],
        "types": ["movie", "series", "tv"],
        "catalogs": [
            {
                "type": c.type,
                "id": c.id,
                "name": c.name,
                "extra": [{"name": "skip", "isRequired": False}] if c.paginated else [],
            }
            for c in CATALOGS
        ],
        "idPrefixes": [ID_PREFIX],
    }


def _parse_skip(extra: str) -> int:
    """Parse the ``skip`` value out of a Stremio extra segment (``skip=50``)."""
    values = parse_qs(extra).get("skip")
    if not values:
        return 0
    try:
        return max(int(values[0]), 0)
    except ValueError:
        return 0


def _format_preview(m: StremioMetaPreview) -> dict[str, Any]:
    return {
        "id": m.id,
        "type": m.type,
        "name": m.name,
        "poster": m.poster,
        "posterShape": m.poster_shape,
        "background": m.background,
        "description": m.description,
        "releaseInfo": m.release_info,
        "genres": m.genres,
    }


def _format_video(v: StremioVideo) -> dict[str, Any]:
    return {
        "id": v.id,
        "title": v.title,
        "season": v.season,
        "episode": v.episode,
        "thumbnail": v.thumbnail,
        "overview": v.overview,
        "released": v.released,
    }


def _format_meta(m: StremioMeta) -> dict[str, Any]:
    meta: dict[str, Any] = {
        "id": m.id,
        "type": m.type,
        "name": m.name,
        "poster": m.poster,
        "posterShape": m.poster_shape,
        "background": m.background,
        "description": m.description,
        "genres": m.genres,
    }
    if m.runtime:
        meta["runtime"] = m.runtime
    if m.release_info:
        meta["releaseInfo"] = m.release_info
    if m.videos:
        meta["videos"] = [_format_video(v) for v in m.videos]
    return meta


def _format_stream(s: StremioStream) -> dict[str, Any]:
    return {
        "name": s.name,
        "title": s.title,
        "url": s.url,
        "behaviorHints": {"notWebReady": s.not_web_ready},
    }


async def _catalog_response(
    request: Request, content_type: str, catalog_id: str, skip: int
) -> JSONResponse:
    state = cast(AppState, request.app.state)
    use_case = getattr(state, "stremio_catalog_uc", None)
    if use_case is None or content_type not in _CONTENT_TYPES:
        return JSONResponse(content={"metas": []}, headers=_CORS_HEADERS)

    metas = await use_case.catalog(
        cast(StremioContentType, content_type), catalog_id, skip=skip
    )
    return JSONResponse(
        content={"metas": [_format_preview(m) for m in metas]},
        headers=_CORS_HEADERS,
    )


@router.get("/manifest.json")
async def stremio_manifest() -> JSONResponse:
    """Serve the Stremio addon manifest."""
    return JSONResponse(content=build_manifest(), headers=_CORS_HEADERS)


@router.get("/catalog/{content_type}/{catalog_id}.json")
async def stremio_catalog(
    request: Request,
    content_type: str,
    catalog_id: str,
) -> JSONResponse:
    """Serve the first page of a catalog."""
    log.info("stremio_catalog_request", catalog_id=catalog_id, type=content_type)
    return await _catalog_response(request, content_type, catalog_id, skip=0)


@router.get("/catalog/{content_type}/{catalog_id}/{extra}.json")
async def stremio_catalog_extra(
    request: Request,
    content_type: str,
    catalog_id: str,
    extra: str,
) -> JSONResponse:
    """Serve a catalog page selected by the ``skip`` extra."""
    skip = _parse_skip(extra)
    log.info(
        "stremio_catalog_request",
        catalog_id=catalog_id,
        type=content_type,
        skip=skip,
    )
    return await _catalog_response(request, content_type, catalog_id, skip=skip)


@router.get("/meta/{content_type}/{meta_id}.json")
async def stremio_meta(
    request: Request,
    content_type: str,
    meta_id: str,
) -> JSONResponse:
    """Serve program, series or live metadata."""
    state = cast(AppState, request.app.state)
    use_case = getattr(state, "stremio_meta_uc", None)
    log.info("stremio_meta_request", meta_id=meta_id, type=content_type)

    if (
        use_case is None
        or content_type not in _CONTENT_TYPES
        or not meta_id.startswith(ID_PREFIX)
    ):
        return JSONResponse(content={"meta": None}, headers=_CORS_HEADERS)

    meta = await use_case.meta(cast(StremioContentType, content_type), meta_id)
    return JSONResponse(
        content={"meta": _format_meta(meta) if meta is not None else None},
        headers=_CORS_HEADERS,
    )


@router.get("/stream/{content_type}/{stream_id}.json")
async def stremio_stream(
    request: Request,
    content_type: str,
    stream_id: str,
) -> JSONResponse:
    """Resolve the playable stream for a program or the live channel."""
    state = cast(AppState, request.app.state)
    use_case = getattr(state, "stremio_stream_uc", None)
    log.info("stremio_stream_request", stream_id=stream_id, type=content_type)

    if use_case is None or not stream_id.startswith(ID_PREFIX):
        return JSONResponse(content={"streams": []}, headers=_CORS_HEADERS)

    streams = await use_case.streams(stream_id)
    return JSONResponse(
        content={"streams": [_format_stream(s) for s in streams]},
        headers=_CORS_HEADERS,
    )
