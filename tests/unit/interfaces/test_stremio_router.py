"""Tests for Stremio addon router endpoints."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from arteloo.domain.entities.stremio import (
    StremioMeta,
    StremioMetaPreview,
    StremioStream,
    StremioVideo,
)
from arteloo.interfaces.api.stremio.router import (
    ADDON_ID,
    _parse_skip,
    build_manifest,
    router,
)

_PREVIEW = StremioMetaPreview(
    id="arte:100-000-A",
    type="movie",
    name="Le Mépris",
    poster="https://img/940x530",
    description="Un film",
    release_info="90 min",
    genres=["Cinéma"],
)


def _make_app(
    *,
    stremio_catalog_uc: AsyncMock | None = None,
    stremio_meta_uc: AsyncMock | None = None,
    stremio_stream_uc: AsyncMock | None = None,
) -> FastAPI:
    """Create a minimal FastAPI app with the stremio router."""
    app = FastAPI()
    app.include_router(router)
    app.state.stremio_catalog_uc = stremio_catalog_uc
    app.state.stremio_meta_uc = stremio_meta_uc
    app.state.stremio_stream_uc = stremio_stream_uc
    return app


class TestParseSkip:
    @pytest.mark.parametrize(
        ("extra", "expected"),
        [
            ("skip=50", 50),
            ("skip=0", 0),
            ("genre=x&skip=100", 100),
            ("skip=abc", 0),
            ("skip=-5", 0),
            ("search=foo", 0),
            ("", 0),
        ],
    )
    def test_parse(self, extra: str, expected: int) -> None:
        assert _parse_skip(extra) == expected


class TestManifest:
    def test_manifest_content(self) -> None:
        manifest = build_manifest()

        assert manifest["id"] == ADDON_ID
        assert manifest["resources"] == ["catalog", "meta", "stream"]
        assert manifest["types"] == ["movie", "series", "tv"]
        assert manifest["idPrefixes"] == ["arte:"]
        ids = [c["id"] for c in manifest["catalogs"]]
        assert ids == ["arte-home", "arte-cinema", "arte-docs", "arte-series", "arte-live"]

    def test_skip_extra_only_on_paginated_catalogs(self) -> None:
        catalogs = {c["id"]: c for c in build_manifest()["catalogs"]}
        assert catalogs["arte-cinema"]["extra"] == [{"name": "skip", "isRequired": False}]
        assert catalogs["arte-live"]["extra"] == []

    def test_endpoint_with_cors(self) -> None:
        client = TestClient(_make_app())
        resp = client.get("/manifest.json")

        assert resp.status_code == 200
        assert resp.json()["id"] == ADDON_ID
        assert resp.headers["access-control-allow-origin"] == "*"


class TestCatalogEndpoint:
    def test_first_page(self) -> None:
        uc = AsyncMock()
        uc.catalog.return_value = [_PREVIEW]
        client = TestClient(_make_app(stremio_catalog_uc=uc))

        resp = client.get("/catalog/movie/arte-cinema.json")

        assert resp.status_code == 200
        metas = resp.json()["metas"]
        assert metas == [
            {
                "id": "arte:100-000-A",
                "type": "movie",
                "name": "Le Mépris",
                "poster": "https://img/940x530",
                "posterShape": "regular",
                "background": None,
                "description": "Un film",
                "releaseInfo": "90 min",
                "genres": ["Cinéma"],
            }
        ]
        uc.catalog.assert_awaited_once_with("movie", "arte-cinema", skip=0)

    def test_skip_extra(self) -> None:
        uc = AsyncMock()
        uc.catalog.return_value = []
        client = TestClient(_make_app(stremio_catalog_uc=uc))

        resp = client.get("/catalog/movie/arte-docs/skip=50.json")

        assert resp.status_code == 200
        uc.catalog.assert_awaited_once_with("movie", "arte-docs", skip=50)

    def test_unknown_type(self) -> None:
        uc = AsyncMock()
        client = TestClient(_make_app(stremio_catalog_uc=uc))

        resp = client.get("/catalog/channel/arte-cinema.json")

        assert resp.json() == {"metas": []}
        uc.catalog.assert_not_awaited()

    def test_not_configured(self) -> None:
        client = TestClient(_make_app())
        assert client.get("/catalog/movie/arte-home.json").json() == {"metas": []}


class TestMetaEndpoint:
    def test_series_meta(self) -> None:
        uc = AsyncMock()
        uc.meta.return_value = StremioMeta(
            id="arte:RC-1",
            type="series",
            name="Ma série",
            description="Desc",
            genres=["Arte", "Culture"],
            videos=[
                StremioVideo(id="arte:100-001-A", title="Ep 1", season=1, episode=1)
            ],
        )
        client = TestClient(_make_app(stremio_meta_uc=uc))

        resp = client.get("/meta/series/arte:RC-1.json")

        meta = resp.json()["meta"]
        assert meta["name"] == "Ma série"
        assert meta["videos"][0]["id"] == "arte:100-001-A"
        assert meta["videos"][0]["season"] == 1
        assert "runtime" not in meta
        assert "releaseInfo" not in meta

    def test_program_meta_has_runtime(self) -> None:
        uc = AsyncMock()
        uc.meta.return_value = StremioMeta(
            id="arte:100-000-A",
            type="movie",
            name="Le Mépris",
            runtime="1h40min",
            release_info="1h40min | Dispo 3j",
        )
        client = TestClient(_make_app(stremio_meta_uc=uc))

        meta = client.get("/meta/movie/arte:100-000-A.json").json()["meta"]

        assert meta["runtime"] == "1h40min"
        assert meta["releaseInfo"] == "1h40min | Dispo 3j"
        assert "videos" not in meta

    def test_foreign_prefix(self) -> None:
        uc = AsyncMock()
        client = TestClient(_make_app(stremio_meta_uc=uc))

        resp = client.get("/meta/movie/tt0137523.json")

        assert resp.json() == {"meta": None}
        uc.meta.assert_not_awaited()

    def test_not_found(self) -> None:
        uc = AsyncMock()
        uc.meta.return_value = None
        client = TestClient(_make_app(stremio_meta_uc=uc))

        assert client.get("/meta/movie/arte:x.json").json() == {"meta": None}


class TestStreamEndpoint:
    def test_stream(self) -> None:
        uc = AsyncMock()
        uc.streams.return_value = [
            StremioStream(
                name="Arte.tv",
                title="Le Mépris\n🇫🇷 Français - HD",
                url="https://cdn/a.m3u8",
            )
        ]
        client = TestClient(_make_app(stremio_stream_uc=uc))

        resp = client.get("/stream/movie/arte:100-000-A.json")

        assert resp.json() == {
            "streams": [
                {
                    "name": "Arte.tv",
                    "title": "Le Mépris\n🇫🇷 Français - HD",
                    "url": "https://cdn/a.m3u8",
                    "behaviorHints": {"notWebReady": False},
                }
            ]
        }
        uc.streams.assert_awaited_once_with("arte:100-000-A")

    def test_foreign_prefix(self) -> None:
        uc = AsyncMock()
        client = TestClient(_make_app(stremio_stream_uc=uc))

        assert client.get("/stream/movie/tt1.json").json() == {"streams": []}
        uc.streams.assert_not_awaited()
