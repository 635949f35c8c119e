"""Stremio meta use case: program, collection and live detail pages."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

import structlog

from arteloo.application.use_cases.stremio_catalog import (
    ARTE_BACKGROUND,
    ID_PREFIX,
    LIVE_NAME,
    LIVE_POSTER,
)
from arteloo.domain.entities.arte import (
    CollectionEpisode,
    ProgramRef,
    VideoDetail,
)
from arteloo.domain.entities.stremio import (
    StremioContentType,
    StremioMeta,
    StremioVideo,
)
from arteloo.domain.ports.arte import ArteClientPort

log = structlog.get_logger(__name__)

_DEFAULT_GENRES = ["Arte", "Culture"]
_EXPIRY_WARNING_DAYS = 30


def format_runtime(duration_seconds: int) -> str:
    """``5400`` -> ``"1h30min"``, ``1500`` -> ``"25min"``."""
    hours, rest = divmod(max(duration_seconds, 0), 3600)
    minutes = rest // 60
    return f"{hours}h{minutes}min" if hours > 0 else f"{minutes}min"


def _released(episode: CollectionEpisode) -> str | None:
    start = episode.availability.get("start")
    if not isinstance(start, str) or not start:
        return None
    try:
        dt = datetime.fromisoformat(start.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _series_name(video: VideoDetail | None, episodes: list[CollectionEpisode]) -> str:
    title = (video.title if video else "") or (episodes[0].title if episodes else "")
    return title.split(" - ")[0] or "Série Arte"


class StremioMetaUseCase:
    """Builds Stremio meta objects from Arte records.

    Args:
        arte: Arte client port.
        now: Clock for the "expires soon" label (UTC, injectable for tests).
    """

    def __init__(
        self,
        arte: ArteClientPort,
        now: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._arte = arte
        self._now = now

    async def meta(self, content_type: StremioContentType, meta_id: str) -> StremioMeta | None:
        """Resolve a ``arte:<id>`` meta request. None when nothing is found."""
        ref = ProgramRef.parse(meta_id.removeprefix(ID_PREFIX))
        try:
            if ref.is_live:
                return await self._live_meta(meta_id)
            if ref.is_collection and content_type == "series":
                return await self._series_meta(meta_id, ref)
            return await self._program_meta(meta_id, content_type, ref)
        except Exception:
            log.warning("stremio_meta_error", meta_id=meta_id, exc_info=True)
            return None

    async def _live_meta(self, meta_id: str) -> StremioMeta | None:
        live = await self._arte.get_live_channel()
        if live is None:
            return None
        return StremioMeta(
            id=meta_id,
            type="tv",
            name=LIVE_NAME,
            poster=LIVE_POSTER,
            poster_shape="square",
            background=ARTE_BACKGROUND,
            description=live.description
            or "Arte en direct - La chaîne culturelle européenne",
            runtime="En direct",
            genres=["Direct", "Culture"],
        )

    async def _series_meta(self, meta_id: str, ref: ProgramRef) -> StremioMeta | None:
        episodes = await self._arte.list_collection_episodes(ref.value)
        video = await self._arte.get_program_detail(ref.value)
        if video is None and not episodes:
            return None

        videos = [
            StremioVideo(
                id=f"{ID_PREFIX}{ep.program_id}",
                title=ep.subtitle or ep.title,
                season=1,
                episode=index,
                thumbnail=ep.image_small,
                overview=ep.description,
                released=_released(ep),
            )
            for index, ep in enumerate(episodes, start=1)
        ]
        poster = (video.poster if video else None) or (
            episodes[0].image_small if episodes else None
        )
        description = (video.description if video else "") or (
            episodes[0].description if episodes else ""
        )
        return StremioMeta(
            id=meta_id,
            type="series",
            name=_series_name(video, episodes),
            poster=poster,
            background=poster,
            description=description,
            genres=list(_DEFAULT_GENRES),
            videos=videos,
        )

    async def _program_meta(
        self, meta_id: str, content_type: StremioContentType, ref: ProgramRef
    ) -> StremioMeta | None:
        video = await self._arte.get_program_detail(ref.value)
        if video is None:
            return None

        runtime = format_runtime(video.duration_seconds)
        release_info = runtime
        if video.rights is not None:
            days_left = video.rights.days_left(self._now())
            if days_left is not None and 0 < days_left <= _EXPIRY_WARNING_DAYS:
                release_info = f"{runtime} | Dispo {days_left}j"

        if video.subtitle:
            description = f"{video.subtitle}\n\n{video.description}"
        else:
            description = video.description

        return StremioMeta(
            id=meta_id,
            type=content_type,
            name=video.title,
            poster=video.poster,
            background=video.poster,
            description=description,
            runtime=runtime,
            release_info=release_info,
            genres=list(_DEFAULT_GENRES),
        )
