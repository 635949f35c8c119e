"""Domain entities for the Stremio addon protocol.

Pure value objects without framework dependencies or I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

StremioContentType = Literal["movie", "series", "tv"]
PosterShape = Literal["regular", "square", "landscape"]


@dataclass(frozen=True)
class StremioMetaPreview:
    """Stremio catalog item (MetaPreview object)."""

    id: str  # "arte:120387-000-A"
    type: StremioContentType
    name: str
    poster: str | None = None
    poster_shape: PosterShape = "regular"
    background: str | None = None
    description: str = ""
    release_info: str = ""  # Duration label, e.g. "94 min"
    genres: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class StremioVideo:
    """One episode entry of a series meta."""

    id: str
    title: str
    season: int
    episode: int
    thumbnail: str | None = None
    overview: str = ""
    released: str | None = None  # ISO-8601


@dataclass(frozen=True)
class StremioMeta:
    """Stremio Meta object (detail page)."""

    id: str
    type: StremioContentType
    name: str
    poster: str | None = None
    poster_shape: PosterShape = "regular"
    background: str | None = None
    description: str = ""
    runtime: str = ""
    release_info: str = ""
    genres: list[str] = field(default_factory=list)
    videos: list[StremioVideo] = field(default_factory=list)


@dataclass(frozen=True)
class StremioStream:
    """Stremio protocol Stream object (JSON-serializable)."""

    name: str  # Bold title in Stremio UI
    title: str  # Below name, e.g. "Le Mépris\n🇫🇷 Français - HD"
    url: str
    not_web_ready: bool = False
