"""
Object storage client for the video bucket.

Wraps Google Cloud Storage with a small read-only interface: list every
object in the bucket, or fetch metadata for one. Using a protocol means
routes never touch the Google client directly, and tests can provide an
in-memory bucket instead.

Failures are returned as `FetchResult` errors rather than raised. The
listing page should still render when the bucket is unreachable, so the
caller decides what to show.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

from ...core.catalog.models import BucketObject, FetchResult

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Carried in a FetchResult when a storage operation fails."""
    pass


@dataclass
class BucketConfig:
    """
    Configuration for the Google Cloud Storage bucket.

    An empty credentials_file means application default credentials,
    which is what you want on Compute Engine.
    """
    bucket_name: str
    project_id: str
    credentials_file: str = ""


class BucketClient(Protocol):
    """
    Protocol for read-only bucket operations.

    Implementations never raise for storage failures; they return a
    FetchResult carrying the error and an empty value.
    """

    def list_objects(self) -> FetchResult[list[BucketObject]]:
        """List every object in the bucket."""
        ...

    def get_object(self, object_name: str) -> FetchResult[Optional[BucketObject]]:
        """Fetch metadata for one object."""
        ...

    def check(self) -> FetchResult[bool]:
        """Confirm the bucket is reachable without listing all of it."""
        ...


def _to_bucket_object(blob) -> BucketObject:
    """Translate a google.cloud.storage Blob into our domain model."""
    updated = blob.updated.isoformat() if blob.updated else ""
    return BucketObject(
        name=blob.name,
        updated=updated,
        size=blob.size or 0,
        content_type=blob.content_type,
    )


class GCSBucketClient:
    """
    Google Cloud Storage bucket client.

    The underlying storage.Client is created once and shared across
    requests; it is safe to use from multiple threads for reads.
    """

    def __init__(self, config: BucketConfig) -> None:
        """
        Initialize the Google Cloud Storage client.

        We import google.cloud.storage here (not at module level) because
        mock mode doesn't need it.
        """
        try:
            from google.cloud import storage
        except ImportError:
            raise ImportError(
                "google-cloud-storage is required for GCS. "
                "Install with: pip install google-cloud-storage"
            )

        self._config = config

        if config.credentials_file:
            self._client = storage.Client.from_service_account_json(
                config.credentials_file,
                project=config.project_id,
            )
        else:
            self._client = storage.Client(project=config.project_id)

        logger.info(
            "Initialized GCS bucket client",
            extra={
                "bucket": config.bucket_name,
                "project": config.project_id,
                "credentials_file": config.credentials_file or "default",
            }
        )

    def list_objects(self) -> FetchResult[list[BucketObject]]:
        """List all objects in the bucket."""
        try:
            blobs = list(self._client.list_blobs(self._config.bucket_name))
        except Exception as e:
            return FetchResult(
                value=[],
                error=StorageError(f"List failed: {e}"),
            )

        objects = [_to_bucket_object(blob) for blob in blobs]

        logger.debug(
            "Listed bucket objects",
            extra={"bucket": self._config.bucket_name, "count": len(objects)}
        )

        return FetchResult(value=objects)

    def get_object(self, object_name: str) -> FetchResult[Optional[BucketObject]]:
        """Fetch metadata for a single object."""
        try:
            blob = self._client.bucket(self._config.bucket_name).get_blob(object_name)
        except Exception as e:
            return FetchResult(
                value=None,
                error=StorageError(f"Get failed: {e}"),
            )

        if blob is None:
            return FetchResult(
                value=None,
                error=StorageError(f"Object not found: {object_name}"),
            )

        return FetchResult(value=_to_bucket_object(blob))

    def check(self) -> FetchResult[bool]:
        """Fetch at most one object name, enough to prove access."""
        try:
            blobs = self._client.list_blobs(self._config.bucket_name, max_results=1)
            next(iter(blobs), None)
        except Exception as e:
            return FetchResult(
                value=False,
                error=StorageError(f"Check failed: {e}"),
            )

        return FetchResult(value=True)


# ---------------------------------------------------------------------------
# Mock Storage for Local Development
# ---------------------------------------------------------------------------

class MockBucketClient:
    """
    In-memory bucket for local development.

    Lets the server start without a Google Cloud project. The factory
    hands out an empty one, so the listing page shows "No videos." until
    objects are added; tests seed it directly. Objects are kept in a
    dictionary in insertion order, which stands in for the bucket's
    listing order.
    """

    def __init__(self, objects: Iterable[BucketObject] = ()) -> None:
        self._objects: dict[str, BucketObject] = {}
        for obj in objects:
            self.add_object(obj)
        logger.info(
            "Initialized mock bucket client (in-memory)",
            extra={"count": len(self._objects)}
        )

    def add_object(self, obj: BucketObject) -> None:
        """Store an object, replacing any existing one with the same name."""
        self._objects[obj.name] = obj

    def list_objects(self) -> FetchResult[list[BucketObject]]:
        return FetchResult(value=list(self._objects.values()))

    def get_object(self, object_name: str) -> FetchResult[Optional[BucketObject]]:
        if object_name not in self._objects:
            return FetchResult(
                value=None,
                error=StorageError(f"Object not found: {object_name}"),
            )
        return FetchResult(value=self._objects[object_name])

    def check(self) -> FetchResult[bool]:
        return FetchResult(value=True)


# ---------------------------------------------------------------------------
# Factory Function
# ---------------------------------------------------------------------------

def create_bucket_client(
    config: Optional[BucketConfig] = None,
    mock_mode: bool = False,
) -> BucketClient:
    """
    Create bucket client based on configuration.

    Args:
        config: Bucket configuration (required if not mock_mode)
        mock_mode: If True, return an empty in-memory bucket

    Returns:
        BucketClient implementation (GCS or Mock)
    """
    if mock_mode:
        return MockBucketClient()

    if config is None:
        raise ValueError("config is required when not in mock mode")

    return GCSBucketClient(config)
