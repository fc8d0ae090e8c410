"""
Domain models for the video catalog.

These models represent what the player shows: objects fetched from the
bucket and the entries derived from them. They have no dependencies on
Google Cloud or FastAPI, so the catalog can be built and tested from
plain values.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class BucketObject:
    """
    Snapshot of one stored file.

    Frozen because a listing is a point-in-time view; nothing in the
    catalog is allowed to change what was fetched.
    """
    name: str
    updated: str  # RFC 3339 timestamp as reported by the bucket
    size: int = 0
    content_type: Optional[str] = None


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """
    Outcome of a storage or signing call.

    Failures are carried as values so the caller decides the fallback
    (empty listing, missing metadata, no playable link) instead of the
    request blowing up.
    """
    value: T
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class CatalogEntry:
    """A playable video as shown on the listing page."""
    name: str
    display_name: str
    size: int
    updated: str
    signed_url: str  # empty when signing failed

    @property
    def playable(self) -> bool:
        return bool(self.signed_url)


@dataclass(frozen=True)
class PlayView:
    """
    Everything the playback page needs for one object.

    `video` is None when the object could not be fetched; the page
    then renders without metadata.
    """
    requested_name: str
    display_name: str
    video: Optional[BucketObject] = None
    signed_url: str = ""

    @property
    def found(self) -> bool:
        return self.video is not None
