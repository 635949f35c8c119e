"""Pydantic configuration models with validation."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    Field,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["dev", "test", "prod"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LogFormat = Literal["json", "console"]


class ArteConfig(BaseModel):
    """Upstream Arte.tv API settings (YAML section: arte.*)."""

    language: str = Field(
        default="fr",
        description="Catalog/player language code used in API paths.",
    )
    authorized_country: str = Field(
        default="FR",
        description="Value of the authorizedCountry query parameter.",
    )
    emac_base_url: str = Field(
        default="https://www.arte.tv/api/rproxy/emac/v4",
        description="Base URL of the EMAC catalog API (pages, zones, collections).",
    )
    player_base_url: str = Field(
        default="https://api.arte.tv/api/player/v2",
        description="Base URL of the player config API (metadata, streams).",
    )
    max_zone_pages: int = Field(
        default=10,
        description="Hard cap on pages fetched per paginated zone.",
    )

    @field_validator("max_zone_pages")
    @classmethod
    def _validate_max_zone_pages(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_zone_pages must be >= 1")
        return v


class StremioConfig(BaseModel):
    """Stremio addon presentation settings (YAML section: stremio.*)."""

    page_size: int = Field(
        default=50,
        description="Catalog items returned per Stremio catalog request.",
    )
    addon_url: Optional[str] = Field(
        default=None,
        description="Public addon URL (logged at startup for installation).",
    )


class AppConfig(BaseModel):
    """
    Canonical application configuration (validated, final).

    Note:
    - YAML is expected to be sectioned (http/logging/cache/arte/stremio).
    - Environment variables are handled by EnvOverrides(BaseSettings) to allow strict
      precedence control (defaults < YAML < ENV < CLI) in load.py.
    """

    # General
    app_name: str = Field(default="arteloo", description="Application name.")
    environment: Environment = Field(
        default="dev",
        description="Runtime environment (affects defaults like log format).",
    )

    # HTTP (YAML section: http.*)
    http_timeout_seconds: float = Field(
        default=15.0,
        validation_alias=AliasChoices(
            "http_timeout_seconds",
            AliasPath("http", "timeout_seconds"),
        ),
        description="Timeout in seconds for each upstream Arte request.",
    )
    http_user_agent: str = Field(
        default="Stremio-Arte-Addon/1.0",
        validation_alias=AliasChoices(
            "http_user_agent",
            AliasPath("http", "user_agent"),
        ),
        description="Client identifier sent to the Arte APIs.",
    )

    # Logging (YAML section: logging.*)
    log_level: LogLevel = Field(
        default="INFO",
        validation_alias=AliasChoices(
            "log_level",
            AliasPath("logging", "level"),
        ),
        description="Log level.",
    )
    log_format: Optional[LogFormat] = Field(
        default=None,
        validation_alias=AliasChoices(
            "log_format",
            AliasPath("logging", "format"),
        ),
        description=(
            "Log renderer format (console/json). If unset, derived from environment."
        ),
    )

    # Cache (YAML section: cache.*)
    cache_ttl_seconds: int = Field(
        default=1800,
        validation_alias=AliasChoices(
            "cache_ttl_seconds",
            AliasPath("cache", "ttl_seconds"),
        ),
        description="TTL of cached catalog pages, metadata and live info.",
    )

    arte: ArteConfig = Field(default_factory=ArteConfig)
    stremio: StremioConfig = Field(default_factory=StremioConfig)

    @field_validator("http_timeout_seconds")
    @classmethod
    def _validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("http_timeout_seconds must be > 0")
        return v

    @field_validator("cache_ttl_seconds")
    @classmethod
    def _validate_cache_ttl(cls, v: int) -> int:
        if v < 0:
            raise ValueError("cache_ttl_seconds must be >= 0")
        return v

    @model_validator(mode="after")
    def _derive_defaults(self) -> "AppConfig":
        # Default log format: console in dev/test, json in prod.
        if self.log_format is None:
            self.log_format = "json" if self.environment == "prod" else "console"
        return self

    def to_sectioned_dict(self) -> dict[str, Any]:
        """
        Dump configuration in the sectioned shape used by config.yaml/docs.
        """
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "http": {
                "timeout_seconds": self.http_timeout_seconds,
                "user_agent": self.http_user_agent,
            },
            "logging": {"level": self.log_level, "format": self.log_format},
            "cache": {"ttl_seconds": self.cache_ttl_seconds},
            "arte": self.arte.model_dump(),
            "stremio": self.stremio.model_dump(),
        }


class EnvOverrides(BaseSettings):
    """
    Environment-variable overrides (all optional).

    Supported env var examples (flat, explicit):
    - ARTELOO_ENVIRONMENT
    - ARTELOO_HTTP_TIMEOUT_SECONDS
    - ARTELOO_LOG_LEVEL
    - ARTELOO_ARTE_LANGUAGE
    """

    model_config = SettingsConfigDict(
        env_prefix="ARTELOO_",
        extra="ignore",
        case_sensitive=False,
    )

    app_name: Optional[str] = None
    environment: Optional[Environment] = None

    http_timeout_seconds: Optional[float] = None
    http_user_agent: Optional[str] = None

    log_level: Optional[LogLevel] = None
    log_format: Optional[LogFormat] = None

    cache_ttl_seconds: Optional[int] = None

    arte_language: Optional[str] = None
    arte_authorized_country: Optional[str] = None
    arte_max_zone_pages: Optional[int] = None

    stremio_page_size: Optional[int] = None
    stremio_addon_url: Optional[str] = None

    def to_update_dict(self) -> dict[str, Any]:
        """
        Return only values that were actually provided (non-None), for merging.
        """
        return self.model_dump(exclude_none=True)
