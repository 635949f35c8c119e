"""Tests for ordered selection rules (description precedence, stream tiers)."""

from __future__ import annotations

from arteloo.domain.entities.arte import StreamOption, StreamVersion
from arteloo.infrastructure.arte.rules import (
    DESCRIPTION_RULES,
    LIVE_STREAM_RULES,
    VOD_ENTRY_RULES,
    VOD_STREAM_RULES,
    is_french_version,
    is_strict_french_version,
)


def _stream(url: str, protocol: str = "HLS", *versions: StreamVersion) -> StreamOption:
    return StreamOption(protocol=protocol, url=url, versions=tuple(versions))


_VF = StreamVersion(code="VF", label="Français", short_label="VF")
_VA = StreamVersion(code="VA", label="Allemand", short_label="VA")


class TestDescriptionRules:
    def test_short_description_wins(self) -> None:
        item = {"shortDescription": "short", "teaserText": "teaser"}
        assert DESCRIPTION_RULES.evaluate(item) == ("shortDescription", "short")

    def test_teaser_text_when_short_description_empty(self) -> None:
        item = {"shortDescription": "", "teaserText": "teaser"}
        assert DESCRIPTION_RULES.evaluate(item) == ("teaserText", "teaser")

    def test_named_default(self) -> None:
        assert DESCRIPTION_RULES.evaluate({}) == ("empty", "")


class TestFrenchPredicates:
    def test_code_containing_fr(self) -> None:
        assert is_french_version(StreamVersion(code="VOF-STFR"))

    def test_label_case_insensitive(self) -> None:
        assert is_french_version(StreamVersion(label="FRANÇAIS (VO)"))

    def test_short_label_exact(self) -> None:
        assert is_french_version(StreamVersion(short_label="VF"))
        assert not is_french_version(StreamVersion(short_label="VF-STMF"))

    def test_strict_ignores_short_label(self) -> None:
        assert not is_strict_french_version(StreamVersion(short_label="VF"))

    def test_strict_label_is_case_sensitive(self) -> None:
        assert is_strict_french_version(StreamVersion(label="Français"))
        assert not is_strict_french_version(StreamVersion(label="français"))


class TestVodEntryRules:
    def test_french_version_tier_named_first(self) -> None:
        stream = _stream("https://cdn/fr.m3u8", "HLS", _VA, _VF)
        assert VOD_ENTRY_RULES.evaluate(stream) == ("french_version", "https://cdn/fr.m3u8")

    def test_any_version_tier(self) -> None:
        stream = _stream("https://cdn/de.m3u8", "HLS", _VA)
        assert VOD_ENTRY_RULES.evaluate(stream) == ("any_version", "https://cdn/de.m3u8")

    def test_no_versions_rejected(self) -> None:
        stream = _stream("https://cdn/x.m3u8", "HLS")
        assert VOD_ENTRY_RULES.evaluate(stream) == ("rejected", None)


class TestVodStreamRules:
    def test_first_hls_with_french_version_selected(self) -> None:
        streams = (
            _stream("https://cdn/a.m3u8", "HLS", StreamVersion(short_label="VF")),
            _stream("https://cdn/b.m3u8", "HLS"),
        )
        assert VOD_STREAM_RULES.evaluate(streams) == (
            "first_hls_with_versions",
            "https://cdn/a.m3u8",
        )

    def test_non_hls_only_falls_back_to_first_stream(self) -> None:
        streams = (_stream("x", "MP4"),)
        assert VOD_STREAM_RULES.evaluate(streams) == ("first_stream", "x")

    def test_empty_list_yields_default(self) -> None:
        assert VOD_STREAM_RULES.evaluate(()) == ("none", None)

    def test_any_version_accepted_before_later_french(self) -> None:
        streams = (
            _stream("https://cdn/de.m3u8", "HLS", _VA),
            _stream("https://cdn/fr.m3u8", "HLS", _VF),
        )
        assert VOD_STREAM_RULES.value(streams) == "https://cdn/de.m3u8"

    def test_hls_without_versions_is_skipped(self) -> None:
        streams = (
            _stream("https://cdn/mp4", "MP4"),
            _stream("https://cdn/empty.m3u8", "HLS"),
            _stream("https://cdn/fr.m3u8", "HLS", _VF),
        )
        assert VOD_STREAM_RULES.value(streams) == "https://cdn/fr.m3u8"

    def test_first_stream_without_url_yields_default(self) -> None:
        streams = (_stream("", "MP4"),)
        assert VOD_STREAM_RULES.evaluate(streams) == ("none", None)


class TestLiveStreamRules:
    def test_strict_french_hls_selected(self) -> None:
        streams = (
            _stream("https://live/de.m3u8", "HLS", _VA),
            _stream("https://live/fr.m3u8", "HLS", _VF),
        )
        assert LIVE_STREAM_RULES.evaluate(streams) == (
            "first_hls_strict_french",
            "https://live/fr.m3u8",
        )

    def test_no_any_version_tier(self) -> None:
        streams = (
            _stream("https://live/first.m3u8", "HLS", StreamVersion(short_label="VF")),
            _stream("https://live/de.m3u8", "HLS", _VA),
        )
        # Short label alone is not a strict match; fallback is the first entry.
        assert LIVE_STREAM_RULES.evaluate(streams) == (
            "first_stream",
            "https://live/first.m3u8",
        )

    def test_fallback_to_first_stream(self) -> None:
        streams = (_stream("https://live/de.m3u8", "HLS", _VA),)
        assert LIVE_STREAM_RULES.value(streams) == "https://live/de.m3u8"

    def test_no_streams(self) -> None:
        assert LIVE_STREAM_RULES.value(()) is None
