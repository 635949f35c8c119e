"""Converters from Arte JSON documents to domain records."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from datetime import datetime, timezone
from typing import Any, TypeVar

import structlog

from arteloo.domain.entities.arte import (
    CollectionEpisode,
    ImageRef,
    LiveChannel,
    ProgramRef,
    RightsWindow,
    StreamOption,
    StreamVersion,
    VideoDetail,
    VideoSummary,
)
from arteloo.infrastructure.arte.rules import DESCRIPTION_RULES

log = structlog.get_logger(__name__)

_SIZE_TOKEN = "__SIZE__"
IMAGE_SIZE_SMALL = "400x225"
IMAGE_SIZE_LARGE = "940x530"

V = TypeVar("V", bound=VideoSummary)


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError, OverflowError):
        return 0


def _parse_datetime(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        log.debug("arte_bad_datetime", value=value)
        return None
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def sized_image(item: Mapping[str, Any], size: str) -> str | None:
    """Substitute the size token of ``mainImage.url``."""
    url = _as_dict(item.get("mainImage")).get("url")
    if not isinstance(url, str) or not url:
        return None
    return url.replace(_SIZE_TOKEN, size)


# ---------------------------------------------------------------------------
# EMAC (catalog) documents
# ---------------------------------------------------------------------------


def iter_zones(document: Mapping[str, Any]) -> Iterator[dict[str, Any]]:
    """Yield the zones of a page/collection document (``value.zones``)."""
    for zone in _as_list(_as_dict(document.get("value")).get("zones")):
        if isinstance(zone, dict):
            yield zone


def has_inline_data(zone: Mapping[str, Any]) -> bool:
    return isinstance(_as_dict(zone.get("content")).get("data"), list)


def zone_items(zone: Mapping[str, Any]) -> list[dict[str, Any]]:
    """Inline items of a zone (``content.data``)."""
    content = _as_dict(zone.get("content"))
    return [i for i in _as_list(content.get("data")) if isinstance(i, dict)]


def zone_page_count(zone: Mapping[str, Any]) -> int:
    pagination = _as_dict(_as_dict(zone.get("content")).get("pagination"))
    return _int(pagination.get("pages"))


def continuation_items(document: Mapping[str, Any]) -> list[dict[str, Any]]:
    """Items of a zone continuation page (``value.data``)."""
    data = _as_list(_as_dict(document.get("value")).get("data"))
    return [i for i in data if isinstance(i, dict)]


def is_listable(item: Mapping[str, Any]) -> bool:
    """True for items with an id, a main image and not flagged stream-less."""
    if not item.get("programId") or not item.get("mainImage"):
        return False
    availability = _as_dict(item.get("availability"))
    return availability.get("hasVideoStreams") is not False


def to_summary(item: Mapping[str, Any]) -> VideoSummary:
    return _build_summary(item, VideoSummary)


def _build_summary(item: Mapping[str, Any], cls: type[V]) -> V:
    genre = _as_dict(item.get("genre"))
    return cls(
        program_id=_str(item.get("programId")),
        title=_str(item.get("title")),
        subtitle=_str(item.get("subtitle")),
        description=DESCRIPTION_RULES.value(item) or "",
        duration_seconds=_int(item.get("duration")),
        duration_label=_str(item.get("durationLabel")),
        genre=genre.get("label") or None,
        genre_code=genre.get("id") or None,
        image_small=sized_image(item, IMAGE_SIZE_SMALL),
        image_large=sized_image(item, IMAGE_SIZE_LARGE),
        availability=_as_dict(item.get("availability")),
        url=item.get("url") or None,
    )


def to_episode(item: Mapping[str, Any]) -> CollectionEpisode | None:
    """Episode record, or None for items without id or nested collections."""
    raw_id = _str(item.get("programId"))
    if not raw_id or ProgramRef.parse(raw_id).is_collection:
        return None
    return _build_summary(item, CollectionEpisode)


# ---------------------------------------------------------------------------
# Player config documents
# ---------------------------------------------------------------------------


def config_attributes(document: Mapping[str, Any]) -> dict[str, Any] | None:
    """``data.attributes`` of a player config document, or None."""
    attrs = _as_dict(document.get("data")).get("attributes")
    return attrs if isinstance(attrs, dict) and attrs else None


def to_streams(attrs: Mapping[str, Any]) -> tuple[StreamOption, ...]:
    streams: list[StreamOption] = []
    for raw in _as_list(attrs.get("streams")):
        if not isinstance(raw, dict):
            continue
        versions = tuple(
            StreamVersion(
                code=_str(v.get("code")),
                label=_str(v.get("label")),
                short_label=_str(v.get("shortLabel")),
            )
            for v in _as_list(raw.get("versions"))
            if isinstance(v, dict)
        )
        streams.append(
            StreamOption(
                protocol=_str(raw.get("protocol")),
                url=_str(raw.get("url")),
                versions=versions,
            )
        )
    return tuple(streams)


def to_rights(attrs: Mapping[str, Any]) -> RightsWindow | None:
    rights = attrs.get("rights")
    if not isinstance(rights, dict):
        return None
    return RightsWindow(
        begin=_parse_datetime(rights.get("begin")),
        end=_parse_datetime(rights.get("end")),
    )


def to_detail(program_id: str, attrs: Mapping[str, Any]) -> VideoDetail | None:
    meta = attrs.get("metadata")
    if not isinstance(meta, dict):
        return None
    images = tuple(
        ImageRef(url=_str(img.get("url")), caption=_str(img.get("caption")))
        for img in _as_list(meta.get("images"))
        if isinstance(img, dict) and img.get("url")
    )
    return VideoDetail(
        program_id=program_id,
        title=_str(meta.get("title")),
        subtitle=_str(meta.get("subtitle")),
        description=_str(meta.get("description")),
        duration_seconds=_int(_as_dict(meta.get("duration")).get("seconds")),
        images=images,
        rights=to_rights(attrs),
        streams=to_streams(attrs),
    )


def to_live_channel(attrs: Mapping[str, Any], stream_url: str | None) -> LiveChannel:
    meta = _as_dict(attrs.get("metadata"))
    return LiveChannel(
        title=_str(meta.get("title")),
        subtitle=_str(meta.get("subtitle")),
        description=_str(meta.get("description")),
        stream_url=stream_url,
        current_program_url=_as_dict(meta.get("link")).get("url") or None,
    )
