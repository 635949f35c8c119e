"""Tests for StremioMetaUseCase."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from arteloo.application.use_cases.stremio_meta import (
    StremioMetaUseCase,
    format_runtime,
)
from arteloo.domain.entities.arte import (
    CollectionEpisode,
    ImageRef,
    LiveChannel,
    RightsWindow,
    VideoDetail,
)

_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def _detail(**kwargs) -> VideoDetail:
    defaults = {
        "program_id": "100-000-A",
        "title": "Le Mépris",
        "description": "Un film de Jean-Luc Godard",
        "duration_seconds": 6300,
        "images": (ImageRef("https://img/poster.jpg"),),
    }
    defaults.update(kwargs)
    return VideoDetail(**defaults)


def _episode(program_id: str, **kwargs) -> CollectionEpisode:
    defaults = {
        "title": "Série - Titre",
        "subtitle": f"Episode {program_id}",
        "description": f"Desc {program_id}",
        "image_small": f"https://img/{program_id}/400x225",
    }
    defaults.update(kwargs)
    return CollectionEpisode(program_id=program_id, **defaults)


@pytest.fixture()
def arte() -> AsyncMock:
    mock = AsyncMock()
    mock.get_program_detail.return_value = _detail()
    mock.list_collection_episodes.return_value = []
    mock.get_live_channel.return_value = LiveChannel(
        title="Journal", description="Le direct", stream_url="https://live/fr.m3u8"
    )
    return mock


@pytest.fixture()
def use_case(arte: AsyncMock) -> StremioMetaUseCase:
    return StremioMetaUseCase(arte=arte, now=lambda: _NOW)


class TestFormatRuntime:
    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [(5400, "1h30min"), (1500, "25min"), (3600, "1h0min"), (0, "0min")],
    )
    def test_format(self, seconds: int, expected: str) -> None:
        assert format_runtime(seconds) == expected


class TestProgramMeta:
    async def test_fields(self, use_case: StremioMetaUseCase, arte: AsyncMock) -> None:
        meta = await use_case.meta("movie", "arte:100-000-A")

        assert meta is not None
        assert meta.id == "arte:100-000-A"
        assert meta.type == "movie"
        assert meta.name == "Le Mépris"
        assert meta.poster == "https://img/poster.jpg"
        assert meta.background == "https://img/poster.jpg"
        assert meta.runtime == "1h45min"
        assert meta.release_info == "1h45min"
        assert meta.genres == ["Arte", "Culture"]
        assert meta.description == "Un film de Jean-Luc Godard"
        arte.get_program_detail.assert_awaited_once_with("100-000-A")

    async def test_subtitle_prepended(
        self, use_case: StremioMetaUseCase, arte: AsyncMock
    ) -> None:
        arte.get_program_detail.return_value = _detail(subtitle="Version restaurée")
        meta = await use_case.meta("movie", "arte:100-000-A")
        assert meta is not None
        assert meta.description == "Version restaurée\n\nUn film de Jean-Luc Godard"

    async def test_expiring_soon_label(
        self, use_case: StremioMetaUseCase, arte: AsyncMock
    ) -> None:
        arte.get_program_detail.return_value = _detail(
            rights=RightsWindow(end=_NOW + timedelta(days=4, hours=2))
        )
        meta = await use_case.meta("movie", "arte:100-000-A")
        assert meta is not None
        assert meta.release_info == "1h45min | Dispo 5j"

    async def test_far_expiry_has_no_label(
        self, use_case: StremioMetaUseCase, arte: AsyncMock
    ) -> None:
        arte.get_program_detail.return_value = _detail(
            rights=RightsWindow(end=_NOW + timedelta(days=90))
        )
        meta = await use_case.meta("movie", "arte:100-000-A")
        assert meta is not None
        assert meta.release_info == "1h45min"

    async def test_expired_has_no_label(
        self, use_case: StremioMetaUseCase, arte: AsyncMock
    ) -> None:
        arte.get_program_detail.return_value = _detail(
            rights=RightsWindow(end=_NOW - timedelta(days=1))
        )
        meta = await use_case.meta("movie", "arte:100-000-A")
        assert meta is not None
        assert meta.release_info == "1h45min"

    async def test_not_found(self, use_case: StremioMetaUseCase, arte: AsyncMock) -> None:
        arte.get_program_detail.return_value = None
        assert await use_case.meta("movie", "arte:missing") is None

    async def test_client_error(self, use_case: StremioMetaUseCase, arte: AsyncMock) -> None:
        arte.get_program_detail.side_effect = RuntimeError("boom")
        assert await use_case.meta("movie", "arte:100-000-A") is None

    async def test_collection_requested_as_movie_uses_detail(
        self, use_case: StremioMetaUseCase, arte: AsyncMock
    ) -> None:
        meta = await use_case.meta("movie", "arte:RC-019724")
        assert meta is not None
        assert meta.videos == []
        arte.list_collection_episodes.assert_not_awaited()


class TestSeriesMeta:
    async def test_episodes_numbered(
        self, use_case: StremioMetaUseCase, arte: AsyncMock
    ) -> None:
        arte.get_program_detail.return_value = _detail(
            program_id="RC-019724", title="Ma série - Saison 1"
        )
        arte.list_collection_episodes.return_value = [
            _episode("100-001-A", availability={"start": "2024-05-01T08:00:00Z"}),
            _episode("100-002-A", subtitle=""),
        ]

        meta = await use_case.meta("series", "arte:RC-019724")

        assert meta is not None
        assert meta.type == "series"
        assert meta.name == "Ma série"
        assert [(v.season, v.episode) for v in meta.videos] == [(1, 1), (1, 2)]
        first, second = meta.videos
        assert first.id == "arte:100-001-A"
        assert first.title == "Episode 100-001-A"
        assert first.thumbnail == "https://img/100-001-A/400x225"
        assert first.released == "2024-05-01T08:00:00Z"
        assert second.title == "Série - Titre"
        assert second.released is None
        arte.list_collection_episodes.assert_awaited_once_with("RC-019724")

    async def test_name_from_first_episode(
        self, use_case: StremioMetaUseCase, arte: AsyncMock
    ) -> None:
        arte.get_program_detail.return_value = None
        arte.list_collection_episodes.return_value = [_episode("100-001-A")]

        meta = await use_case.meta("series", "arte:RC-019724")

        assert meta is not None
        assert meta.name == "Série"
        assert meta.poster == "https://img/100-001-A/400x225"
        assert meta.description == "Desc 100-001-A"

    async def test_nothing_found(
        self, use_case: StremioMetaUseCase, arte: AsyncMock
    ) -> None:
        arte.get_program_detail.return_value = None
        assert await use_case.meta("series", "arte:RC-019724") is None


class TestLiveMeta:
    async def test_live(self, use_case: StremioMetaUseCase) -> None:
        meta = await use_case.meta("tv", "arte:LIVE")

        assert meta is not None
        assert meta.type == "tv"
        assert meta.name == "Arte - Direct"
        assert meta.poster_shape == "square"
        assert meta.runtime == "En direct"
        assert meta.description == "Le direct"
        assert meta.genres == ["Direct", "Culture"]

    async def test_default_description(
        self, use_case: StremioMetaUseCase, arte: AsyncMock
    ) -> None:
        arte.get_live_channel.return_value = LiveChannel()
        meta = await use_case.meta("tv", "arte:LIVE")
        assert meta is not None
        assert meta.description.startswith("Arte en direct")

    async def test_unavailable(self, use_case: StremioMetaUseCase, arte: AsyncMock) -> None:
        arte.get_live_channel.return_value = None
        assert await use_case.meta("tv", "arte:LIVE") is None
