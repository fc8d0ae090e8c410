"""
Video catalog logic.

Contains the domain models, the catalog builder and display formatting.
"""

from .catalog import (
    DEFAULT_VIDEO_SUFFIXES,
    PlaybackSigner,
    build_catalog,
    build_play_view,
    cleanup_name,
    filter_videos,
    parse_timestamp,
    sort_by_updated,
)
from .formatting import human_size, human_time
from .models import BucketObject, CatalogEntry, FetchResult, PlayView

__all__ = [
    "DEFAULT_VIDEO_SUFFIXES",
    "PlaybackSigner",
    "build_catalog",
    "build_play_view",
    "cleanup_name",
    "filter_videos",
    "parse_timestamp",
    "sort_by_updated",
    "human_size",
    "human_time",
    "BucketObject",
    "CatalogEntry",
    "FetchResult",
    "PlayView",
]
