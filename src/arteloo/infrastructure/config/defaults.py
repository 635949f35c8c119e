"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "arteloo",
    "environment": "dev",
    "http": {
        "timeout_seconds": 15.0,
        "user_agent": "Stremio-Arte-Addon/1.0",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "cache": {
        "ttl_seconds": 1800,
    },
    "arte": {
        "language": "fr",
        "authorized_country": "FR",
        "emac_base_url": "https://www.arte.tv/api/rproxy/emac/v4",
        "player_base_url": "https://api.arte.tv/api/player/v2",
        "max_zone_pages": 10,
    },
    "stremio": {
        "page_size": 50,
        "addon_url": None,
    },
}
