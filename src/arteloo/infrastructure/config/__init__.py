from __future__ import annotations

from .load import load_config
from .schema import AppConfig, ArteConfig, EnvOverrides, StremioConfig

__all__ = ["AppConfig", "ArteConfig", "EnvOverrides", "StremioConfig", "load_config"]
