"""Port for Arte.tv catalog and stream operations."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from arteloo.domain.entities.arte import (
    CollectionEpisode,
    LiveChannel,
    VideoDetail,
    VideoSummary,
)


@runtime_checkable
class ArteClientPort(Protocol):
    """Async interface for Arte.tv lookups.

    None of these raise for ordinary "not found" or upstream failures;
    they answer with an empty list or None instead.
    """

    async def list_homepage(self) -> list[VideoSummary]:
        """Deduplicated videos featured on the Arte homepage."""
        ...

    async def list_category(self, code: str) -> list[VideoSummary]:
        """Deduplicated videos of a category page (e.g. ``CIN``, ``SER``)."""
        ...

    async def get_program_detail(self, program_id: str) -> VideoDetail | None:
        """Player metadata for one program, or None."""
        ...

    async def list_collection_episodes(
        self, collection_id: str
    ) -> list[CollectionEpisode]:
        """Playable episodes of a collection (nested collections excluded)."""
        ...

    async def resolve_stream_url(self, program_id: str) -> str | None:
        """Best playable URL for a program. Never cached."""
        ...

    async def get_live_channel(self) -> LiveChannel | None:
        """Live channel metadata and current stream URL."""
        ...
