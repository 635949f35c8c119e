"""Domain entities for the Arte.tv catalog.

Pure value objects without framework dependencies or I/O.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

COLLECTION_PREFIX = "RC-"
LIVE_PROGRAM_ID = "LIVE"


class ProgramKind(str, Enum):
    """Discriminant for Arte identifiers."""

    PROGRAM = "program"
    COLLECTION = "collection"
    LIVE = "live"


@dataclass(frozen=True)
class ProgramRef:
    """Tagged Arte identifier.

    ``120387-000-A`` is a playable program, ``RC-019724`` a collection
    (series) and ``LIVE`` the reserved live-channel identifier.
    """

    value: str
    kind: ProgramKind

    @classmethod
    def parse(cls, raw: str) -> ProgramRef:
        if raw == LIVE_PROGRAM_ID:
            return cls(value=raw, kind=ProgramKind.LIVE)
        if raw.startswith(COLLECTION_PREFIX):
            return cls(value=raw, kind=ProgramKind.COLLECTION)
        return cls(value=raw, kind=ProgramKind.PROGRAM)

    @property
    def is_collection(self) -> bool:
        return self.kind is ProgramKind.COLLECTION

    @property
    def is_live(self) -> bool:
        return self.kind is ProgramKind.LIVE

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CacheEntry:
    """A memoized value and the monotonic time at which it goes stale."""

    value: Any
    expires_at: float

    def is_fresh(self, now: float) -> bool:
        return now < self.expires_at


@dataclass(frozen=True)
class ImageRef:
    """A program image as returned by the player config API."""

    url: str
    caption: str = ""


@dataclass(frozen=True)
class RightsWindow:
    """Availability window of a program."""

    begin: datetime | None = None
    end: datetime | None = None

    def days_left(self, now: datetime) -> int | None:
        """Whole days (rounded up) until ``end``; None without an end date."""
        if self.end is None:
            return None
        seconds = (self.end - now).total_seconds()
        days, rest = divmod(seconds, 86_400)
        return int(days) + (1 if rest > 0 else 0)


@dataclass(frozen=True)
class StreamVersion:
    """Language/dub variant of a stream entry."""

    code: str = ""  # "VF", "VOF-STFR", "VA-STA"
    label: str = ""  # "Français", "Allemand (sous-titré)"
    short_label: str = ""  # "VF", "VA"


@dataclass(frozen=True)
class StreamOption:
    """One entry of the player config stream list."""

    protocol: str  # "HLS", "MP4", ...
    url: str
    versions: tuple[StreamVersion, ...] = ()


@dataclass(frozen=True)
class VideoSummary:
    """Catalog list item (EMAC zone content)."""

    program_id: str
    title: str = ""
    subtitle: str = ""
    description: str = ""
    duration_seconds: int = 0
    duration_label: str = ""
    genre: str | None = None
    genre_code: str | None = None
    image_small: str | None = None
    image_large: str | None = None
    availability: Mapping[str, Any] = field(default_factory=dict)
    url: str | None = None

    @property
    def has_video_streams(self) -> bool:
        # Missing flag means "has streams"; only an explicit False disqualifies.
        return self.availability.get("hasVideoStreams") is not False


@dataclass(frozen=True)
class CollectionEpisode(VideoSummary):
    """A playable item of a collection (never itself a collection)."""


@dataclass(frozen=True)
class VideoDetail:
    """Single-program metadata from the player config API."""

    program_id: str
    title: str = ""
    subtitle: str = ""
    description: str = ""
    duration_seconds: int = 0
    images: tuple[ImageRef, ...] = ()
    rights: RightsWindow | None = None
    streams: tuple[StreamOption, ...] = ()

    @property
    def poster(self) -> str | None:
        return self.images[0].url if self.images else None


@dataclass(frozen=True)
class LiveChannel:
    """The Arte live channel and its currently playable stream."""

    title: str = ""
    subtitle: str = ""
    description: str = ""
    stream_url: str | None = None
    current_program_url: str | None = None
