"""Arte.tv upstream adapter (EMAC catalog + player config APIs)."""

from .client import ArteResponseError, HttpxArteClient

__all__ = ["ArteResponseError", "HttpxArteClient"]
