"""
Object storage integration for the video bucket.

Lists and inspects objects in Google Cloud Storage and signs time-limited
GET URLs so browsers can stream videos straight from the bucket.
Includes mock mode for local development without credentials.
"""

from .client import (
    BucketClient,
    BucketConfig,
    GCSBucketClient,
    MockBucketClient,
    StorageError,
    create_bucket_client,
)
from .signing import (
    SigningOptions,
    UrlSigner,
    escape_object_name,
    load_private_key,
)

__all__ = [
    "BucketClient",
    "BucketConfig",
    "GCSBucketClient",
    "MockBucketClient",
    "StorageError",
    "create_bucket_client",
    "SigningOptions",
    "UrlSigner",
    "escape_object_name",
    "load_private_key",
]
