"""Stremio stream use case: playable Arte URLs for programs and live."""

from __future__ import annotations

import structlog

from arteloo.application.use_cases.stremio_catalog import ID_PREFIX
from arteloo.domain.entities.arte import ProgramRef
from arteloo.domain.entities.stremio import StremioStream
from arteloo.domain.ports.arte import ArteClientPort

log = structlog.get_logger(__name__)

_STREAM_NAME = "Arte.tv"
_STREAM_LABEL = "🇫🇷 Français - HD"


class StremioStreamUseCase:
    """Resolves Stremio stream requests through the Arte client.

    VOD URLs are resolved fresh on every request; only the title lookup
    goes through the client's metadata cache.
    """

    def __init__(self, arte: ArteClientPort) -> None:
        self._arte = arte

    async def streams(self, stream_id: str) -> list[StremioStream]:
        """Return zero or one stream for an ``arte:<id>`` request."""
        ref = ProgramRef.parse(stream_id.removeprefix(ID_PREFIX))
        try:
            if ref.is_live:
                live = await self._arte.get_live_channel()
                if live is None or not live.stream_url:
                    log.info("stremio_live_unavailable")
                    return []
                url, title = live.stream_url, "Arte Direct"
            else:
                url = await self._arte.resolve_stream_url(ref.value)
                if not url:
                    log.info("stremio_no_stream", program_id=ref.value)
                    return []
                detail = await self._arte.get_program_detail(ref.value)
                title = (detail.title if detail else "") or "Arte"
        except Exception:
            log.warning("stremio_stream_error", stream_id=stream_id, exc_info=True)
            return []

        log.info("stremio_stream_resolved", stream_id=stream_id)
        return [
            StremioStream(
                name=_STREAM_NAME,
                title=f"{title}\n{_STREAM_LABEL}",
                url=url,
            )
        ]
