"""
Catalog building: which bucket objects are videos, what to call them,
and in which order to show them.

Everything here is a pure function of the fetched snapshot. Signing is
the only collaborator, passed in as a `PlaybackSigner` so tests can supply
a fake.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional, Protocol, Sequence

from .models import BucketObject, CatalogEntry, FetchResult, PlayView

DEFAULT_VIDEO_SUFFIXES: tuple[str, ...] = (".mp4",)

# Unparsable timestamps sort after everything else
_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


class PlaybackSigner(Protocol):
    """
    Protocol for producing playback URLs.

    Implementations must not raise: an empty string means
    "no playable link".
    """

    def sign_url(self, object_name: str) -> str:
        ...


def parse_timestamp(value: str) -> Optional[datetime]:
    """
    Parse an RFC 3339 timestamp into an aware datetime.

    Returns None when the value can't be parsed. Naive values are
    taken to be UTC.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def filter_videos(
    objects: Iterable[BucketObject],
    suffixes: Sequence[str] = DEFAULT_VIDEO_SUFFIXES,
) -> list[BucketObject]:
    """Keep objects whose name ends with a video suffix, preserving order."""
    suffixes = tuple(s for s in suffixes if s)
    if not suffixes:
        return []
    return [obj for obj in objects if obj.name.endswith(suffixes)]


def cleanup_name(
    name: str,
    suffixes: Sequence[str] = DEFAULT_VIDEO_SUFFIXES,
) -> str:
    """
    Strip one trailing video suffix from an object name.

    "clip.mp4.mp4" becomes "clip.mp4"; names without a suffix come
    back unchanged.
    """
    for suffix in suffixes:
        if suffix and name.endswith(suffix):
            return name[:-len(suffix)]
    return name


def sort_by_updated(objects: Iterable[BucketObject]) -> list[BucketObject]:
    """
    Order objects most recently updated first.

    sorted() is stable under reverse=True, so objects with equal
    timestamps keep their listing order.
    """
    return sorted(
        objects,
        key=lambda obj: parse_timestamp(obj.updated) or _OLDEST,
        reverse=True,
    )


def build_catalog(
    objects: Iterable[BucketObject],
    signer: PlaybackSigner,
    suffixes: Sequence[str] = DEFAULT_VIDEO_SUFFIXES,
) -> list[CatalogEntry]:
    """
    Build the listing page view model.

    Sort, keep the videos, then name and sign each one. Signing happens
    here rather than in the template so rendering stays presentational.
    """
    return [
        CatalogEntry(
            name=obj.name,
            display_name=cleanup_name(obj.name, suffixes),
            size=obj.size,
            updated=obj.updated,
            signed_url=signer.sign_url(obj.name),
        )
        for obj in filter_videos(sort_by_updated(objects), suffixes)
    ]


def build_play_view(
    requested_name: str,
    result: FetchResult[Optional[BucketObject]],
    signer: PlaybackSigner,
    suffixes: Sequence[str] = DEFAULT_VIDEO_SUFFIXES,
) -> PlayView:
    """Build the playback page view model for a single object."""
    video = result.value if result.ok else None
    if video is None:
        return PlayView(
            requested_name=requested_name,
            display_name=cleanup_name(requested_name, suffixes),
        )

    return PlayView(
        requested_name=requested_name,
        display_name=cleanup_name(video.name, suffixes),
        video=video,
        signed_url=signer.sign_url(video.name),
    )
