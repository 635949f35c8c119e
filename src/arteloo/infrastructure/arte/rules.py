"""Ordered fallback rules for text fields and stream selection.

Each chain is a tuple of named rules evaluated top-to-bottom; the first
rule that yields a value wins, otherwise the chain's named default is used.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import structlog

from arteloo.domain.entities.arte import StreamOption, StreamVersion

log = structlog.get_logger(__name__)

T = TypeVar("T")
S = TypeVar("S")

HLS_PROTOCOL = "HLS"


@dataclass(frozen=True)
class Rule(Generic[S, T]):
    name: str
    apply: Callable[[S], T | None]


@dataclass(frozen=True)
class RuleChain(Generic[S, T]):
    rules: tuple[Rule[S, T], ...]
    default_name: str
    default: T | None = None

    def evaluate(self, subject: S) -> tuple[str, T | None]:
        """Return ``(rule_name, value)`` of the first matching rule."""
        for rule in self.rules:
            value = rule.apply(subject)
            if value is not None:
                return rule.name, value
        return self.default_name, self.default

    def value(self, subject: S) -> T | None:
        return self.evaluate(subject)[1]


# ---------------------------------------------------------------------------
# Text precedence
# ---------------------------------------------------------------------------


def _field(name: str) -> Rule[Mapping[str, Any], str]:
    def pick(item: Mapping[str, Any]) -> str | None:
        value = item.get(name)
        return value if isinstance(value, str) and value else None

    return Rule(name=name, apply=pick)


DESCRIPTION_RULES: RuleChain[Mapping[str, Any], str] = RuleChain(
    rules=(_field("shortDescription"), _field("teaserText")),
    default_name="empty",
    default="",
)


# ---------------------------------------------------------------------------
# Language versions
# ---------------------------------------------------------------------------


def is_french_version(version: StreamVersion) -> bool:
    """Loose French match used for on-demand programs."""
    return (
        "FR" in version.code
        or "français" in version.label.lower()
        or version.short_label == "VF"
    )


def is_strict_french_version(version: StreamVersion) -> bool:
    """Stricter French match used for the live channel (case-sensitive label)."""
    return "FR" in version.code or "Français" in version.label


# ---------------------------------------------------------------------------
# Stream tiers
# ---------------------------------------------------------------------------


def _french_version(stream: StreamOption) -> str | None:
    if any(is_french_version(v) for v in stream.versions):
        return stream.url
    return None


def _any_version(stream: StreamOption) -> str | None:
    return stream.url if stream.versions else None


# Acceptance tiers for a single HLS entry.
VOD_ENTRY_RULES: RuleChain[StreamOption, str] = RuleChain(
    rules=(
        Rule("french_version", _french_version),
        Rule("any_version", _any_version),
    ),
    default_name="rejected",
)


def _first_hls_with_versions(streams: Sequence[StreamOption]) -> str | None:
    # First accepted HLS entry wins; later French entries are not considered.
    for stream in streams:
        if stream.protocol != HLS_PROTOCOL:
            continue
        rule, url = VOD_ENTRY_RULES.evaluate(stream)
        if url is not None:
            log.debug("vod_hls_entry_accepted", rule=rule, url=url)
            return url
    return None


def _first_hls_strict_french(streams: Sequence[StreamOption]) -> str | None:
    for stream in streams:
        if stream.protocol != HLS_PROTOCOL:
            continue
        if any(is_strict_french_version(v) for v in stream.versions):
            return stream.url
    return None


def _first_stream(streams: Sequence[StreamOption]) -> str | None:
    if streams and streams[0].url:
        return streams[0].url
    return None


VOD_STREAM_RULES: RuleChain[Sequence[StreamOption], str] = RuleChain(
    rules=(
        Rule("first_hls_with_versions", _first_hls_with_versions),
        Rule("first_stream", _first_stream),
    ),
    default_name="none",
)

LIVE_STREAM_RULES: RuleChain[Sequence[StreamOption], str] = RuleChain(
    rules=(
        Rule("first_hls_strict_french", _first_hls_strict_french),
        Rule("first_stream", _first_stream),
    ),
    default_name="none",
)
