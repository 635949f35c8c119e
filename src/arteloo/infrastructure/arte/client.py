"""Arte.tv API client: async httpx implementation with caching."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from arteloo.domain.entities.arte import (
    LIVE_PROGRAM_ID,
    CollectionEpisode,
    LiveChannel,
    VideoDetail,
    VideoSummary,
)
from arteloo.domain.ports.cache import CachePort
from arteloo.infrastructure.arte import normalize
from arteloo.infrastructure.arte.rules import LIVE_STREAM_RULES, VOD_STREAM_RULES

log = structlog.get_logger(__name__)

EMAC_BASE_URL = "https://www.arte.tv/api/rproxy/emac/v4"
PLAYER_BASE_URL = "https://api.arte.tv/api/player/v2"
DEFAULT_USER_AGENT = "Stremio-Arte-Addon/1.0"

HOMEPAGE_ID = "HOME"

# Cache TTLs (seconds)
_TTL_CATALOG = 1_800  # 30 minutes
_MAX_ZONE_PAGES = 10


class ArteResponseError(ValueError):
    """Upstream answered 2xx but the body is not a JSON object."""


class HttpxArteClient:
    """Async Arte.tv client using httpx + CachePort.

    Implements ``ArteClientPort`` from domain.ports.arte.
    """

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        cache: CachePort,
        language: str = "fr",
        authorized_country: str = "FR",
        emac_base_url: str = EMAC_BASE_URL,
        player_base_url: str = PLAYER_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        ttl_seconds: float = _TTL_CATALOG,
        max_zone_pages: int = _MAX_ZONE_PAGES,
    ) -> None:
        self._http = http_client
        self._cache = cache
        self._lang = language
        self._country = authorized_country
        self._emac = emac_base_url.rstrip("/")
        self._player = player_base_url.rstrip("/")
        self._headers = {"Accept": "application/json", "User-Agent": user_agent}
        self._ttl = ttl_seconds
        self._max_zone_pages = max_zone_pages

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _get_json(
        self, url: str, params: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """GET a JSON object. Raises on non-2xx, network error or bad body."""
        resp = await self._http.get(url, params=params, headers=self._headers)
        resp.raise_for_status()
        try:
            data = resp.json()
        except ValueError as e:
            raise ArteResponseError(f"Invalid JSON from {url}") from e
        if not isinstance(data, dict):
            raise ArteResponseError(f"Expected JSON object from {url}")
        return data

    async def _get_page(self, page_id: str) -> dict[str, Any]:
        return await self._get_json(
            f"{self._emac}/{self._lang}/web/pages/{page_id}/",
            params={"authorizedCountry": self._country},
        )

    async def _get_zone_page(
        self, zone_code: str, page: int, page_id: str
    ) -> dict[str, Any]:
        return await self._get_json(
            f"{self._emac}/{self._lang}/web/zones/{zone_code}/content",
            params={
                "page": page,
                "pageId": page_id,
                "authorizedCountry": self._country,
            },
        )

    async def _get_player_config(self, program_id: str) -> dict[str, Any]:
        return await self._get_json(
            f"{self._player}/config/{self._lang}/{program_id}"
        )

    async def _aggregate_page(self, page_id: str) -> list[VideoSummary]:
        """Walk all zones of a page, following pagination, then dedup."""
        document = await self._get_page(page_id)
        videos: list[VideoSummary] = []

        for zone in normalize.iter_zones(document):
            if not normalize.has_inline_data(zone):
                continue
            videos.extend(
                normalize.to_summary(i)
                for i in normalize.zone_items(zone)
                if normalize.is_listable(i)
            )

            pages = normalize.zone_page_count(zone)
            if pages <= 1:
                continue
            total_pages = min(pages, self._max_zone_pages)
            log.debug(
                "arte_zone_paginated",
                page_id=page_id,
                zone=zone.get("title"),
                pages=pages,
                fetched=total_pages,
            )
            # Sequential on purpose: keeps order and upstream load predictable.
            for page in range(2, total_pages + 1):
                try:
                    zone_doc = await self._get_zone_page(
                        str(zone.get("code", "")), page, page_id
                    )
                except (httpx.HTTPError, ArteResponseError):
                    log.warning(
                        "arte_zone_page_failed",
                        page_id=page_id,
                        zone=zone.get("code"),
                        page=page,
                        exc_info=True,
                    )
                    continue
                videos.extend(
                    normalize.to_summary(i)
                    for i in normalize.continuation_items(zone_doc)
                    if normalize.is_listable(i)
                )

        unique = _dedup_by_program_id(videos)
        log.info("arte_page_aggregated", page_id=page_id, videos=len(unique))
        return unique

    async def _list_page(self, cache_key: str, page_id: str) -> list[VideoSummary]:
        try:
            return await self._cache.get_or_compute(
                cache_key,
                lambda: self._aggregate_page(page_id),
                ttl=self._ttl,
            )
        except (httpx.HTTPError, ArteResponseError):
            log.warning("arte_page_failed", page_id=page_id, exc_info=True)
            return []

    # ------------------------------------------------------------------
    # Public API (ArteClientPort)
    # ------------------------------------------------------------------

    async def list_homepage(self) -> list[VideoSummary]:
        """Videos featured on the homepage (deduplicated)."""
        return await self._list_page("homepage", HOMEPAGE_ID)

    async def list_category(self, code: str) -> list[VideoSummary]:
        """Videos of a category page such as ``CIN``, ``DOR`` or ``SER``.

        Paginated zones are followed up to ``max_zone_pages`` pages each.
        """
        return await self._list_page(f"category_{code}", code)

    async def get_program_detail(self, program_id: str) -> VideoDetail | None:
        """Player metadata for one program. None when absent or on failure."""

        async def produce() -> VideoDetail | None:
            document = await self._get_player_config(program_id)
            attrs = normalize.config_attributes(document)
            if attrs is None:
                return None
            return normalize.to_detail(program_id, attrs)

        try:
            return await self._cache.get_or_compute(
                f"meta_{program_id}", produce, ttl=self._ttl
            )
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                log.debug("arte_program_not_found", program_id=program_id)
            else:
                log.warning("arte_meta_failed", program_id=program_id, exc_info=True)
            return None
        except (httpx.HTTPError, ArteResponseError):
            log.warning("arte_meta_failed", program_id=program_id, exc_info=True)
            return None

    async def list_collection_episodes(
        self, collection_id: str
    ) -> list[CollectionEpisode]:
        """Episodes of a collection. Single page; nested collections skipped."""

        async def produce() -> list[CollectionEpisode]:
            document = await self._get_json(
                f"{self._emac}/{self._lang}/web/collections/{collection_id}/",
                params={"authorizedCountry": self._country},
            )
            episodes = [
                episode
                for zone in normalize.iter_zones(document)
                for item in normalize.zone_items(zone)
                if (episode := normalize.to_episode(item)) is not None
            ]
            log.info(
                "arte_collection_loaded",
                collection_id=collection_id,
                episodes=len(episodes),
            )
            return episodes

        try:
            return await self._cache.get_or_compute(
                f"collection_{collection_id}", produce, ttl=self._ttl
            )
        except (httpx.HTTPError, ArteResponseError):
            log.warning(
                "arte_collection_failed", collection_id=collection_id, exc_info=True
            )
            return []

    async def resolve_stream_url(self, program_id: str) -> str | None:
        """Best playable URL for a program (not cached: URLs carry tokens)."""
        try:
            document = await self._get_player_config(program_id)
        except (httpx.HTTPError, ArteResponseError):
            log.warning("arte_stream_failed", program_id=program_id, exc_info=True)
            return None

        attrs = normalize.config_attributes(document)
        streams = normalize.to_streams(attrs) if attrs else ()
        if not streams:
            log.info("arte_no_streams", program_id=program_id)
            return None

        rule, url = VOD_STREAM_RULES.evaluate(streams)
        log.debug("arte_stream_selected", program_id=program_id, rule=rule, url=url)
        return url

    async def get_live_channel(self) -> LiveChannel | None:
        """Live channel metadata with its current stream URL."""

        async def produce() -> LiveChannel | None:
            document = await self._get_player_config(LIVE_PROGRAM_ID)
            attrs = normalize.config_attributes(document)
            if attrs is None:
                return None
            rule, url = LIVE_STREAM_RULES.evaluate(normalize.to_streams(attrs))
            log.debug("arte_live_stream_selected", rule=rule, url=url)
            return normalize.to_live_channel(attrs, url)

        try:
            return await self._cache.get_or_compute("live", produce, ttl=self._ttl)
        except (httpx.HTTPError, ArteResponseError):
            log.warning("arte_live_failed", exc_info=True)
            return None


def _dedup_by_program_id(videos: list[VideoSummary]) -> list[VideoSummary]:
    """Keep the first occurrence of each program id, preserving order."""
    seen: set[str] = set()
    unique: list[VideoSummary] = []
    for video in videos:
        if video.program_id in seen:
            continue
        seen.add(video.program_id)
        unique.append(video)
    return unique
