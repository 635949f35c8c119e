"""``arteloo`` console entrypoint: load config, configure logging, serve."""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog
import uvicorn

from arteloo.application.use_cases.stremio_catalog import CATALOGS
from arteloo.infrastructure.config import AppConfig, load_config
from arteloo.infrastructure.logging.setup import configure_logging
from arteloo.interfaces.api.stremio.router import ADDON_VERSION
from arteloo.interfaces.app import create_app

log = structlog.get_logger(__name__)

DEFAULT_PORT = 7000

# argparse dest -> flat config key
_OVERRIDE_FLAGS: dict[str, str] = {
    "log_level": "log_level",
    "log_format": "log_format",
    "page_size": "stremio_page_size",
    "language": "arte_language",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arteloo",
        description="Stremio addon for Arte.tv (catalogs, series, live).",
    )

    server = parser.add_argument_group("server")
    server.add_argument("--host", help="Bind address (default: $HOST or 0.0.0.0).")
    server.add_argument(
        "--port", type=int, help=f"Bind port (default: $PORT or {DEFAULT_PORT})."
    )

    sources = parser.add_argument_group("configuration sources")
    sources.add_argument("--config", type=Path, help="YAML config file.")
    sources.add_argument("--dotenv", type=Path, help=".env file with ARTELOO_* vars.")

    overrides = parser.add_argument_group("overrides")
    overrides.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    overrides.add_argument("--log-format", choices=["json", "console"])
    overrides.add_argument("--page-size", type=int, help="Catalog items per page.")
    overrides.add_argument("--language", help="Arte catalog language (fr, de, en...).")

    return parser


def _cli_overrides(args: argparse.Namespace) -> dict[str, Any]:
    return {
        key: getattr(args, dest)
        for dest, key in _OVERRIDE_FLAGS.items()
        if getattr(args, dest) is not None
    }


def _announce(config: AppConfig, host: str, port: int) -> None:
    """Log where the addon can be installed from."""
    addon_url = (config.stremio.addon_url or f"http://localhost:{port}").rstrip("/")
    log.info(
        "addon_starting",
        version=ADDON_VERSION,
        host=host,
        port=port,
        addon_url=addon_url,
        manifest_url=f"{addon_url}/manifest.json",
        language=config.arte.language,
        catalogs=[c.name for c in CATALOGS],
    )


def start(argv: Iterable[str] | None = None) -> None:
    """Process entrypoint. Config is loaded once and handed to the app."""
    args = build_parser().parse_args(list(argv) if argv is not None else sys.argv[1:])

    host = args.host or os.getenv("HOST", "0.0.0.0")
    port = args.port or int(os.getenv("PORT", str(DEFAULT_PORT)))

    config = load_config(
        config_path=args.config,
        dotenv_path=args.dotenv,
        cli_overrides=_cli_overrides(args),
    )
    log_config = configure_logging(config)
    _announce(config, host, port)

    uvicorn.run(create_app(config), host=host, port=port, log_config=log_config)


if __name__ == "__main__":
    raise SystemExit(start())
