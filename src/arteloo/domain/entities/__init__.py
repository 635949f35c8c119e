from .arte import (
    COLLECTION_PREFIX,
    LIVE_PROGRAM_ID,
    CacheEntry,
    CollectionEpisode,
    ImageRef,
    LiveChannel,
    ProgramKind,
    ProgramRef,
    RightsWindow,
    StreamOption,
    StreamVersion,
    VideoDetail,
    VideoSummary,
)
from .stremio import (
    StremioContentType,
    StremioMeta,
    StremioMetaPreview,
    StremioStream,
    StremioVideo,
)

__all__ = [
    "COLLECTION_PREFIX",
    "LIVE_PROGRAM_ID",
    "CacheEntry",
    "CollectionEpisode",
    "ImageRef",
    "LiveChannel",
    "ProgramKind",
    "ProgramRef",
    "RightsWindow",
    "StreamOption",
    "StreamVersion",
    "StremioContentType",
    "StremioMeta",
    "StremioMetaPreview",
    "StremioStream",
    "StremioVideo",
    "VideoDetail",
    "VideoSummary",
]
