from .stremio_catalog import CATALOGS, CatalogDefinition, StremioCatalogUseCase
from .stremio_meta import StremioMetaUseCase
from .stremio_stream import StremioStreamUseCase

__all__ = [
    "CATALOGS",
    "CatalogDefinition",
    "StremioCatalogUseCase",
    "StremioMetaUseCase",
    "StremioStreamUseCase",
]
