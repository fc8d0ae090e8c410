"""
Signed URL generation for direct video playback.

Browsers stream videos straight from Cloud Storage using a V2 signed URL:
the object path plus GoogleAccessId, Expires and an RSA-SHA256 signature
made with the service account's private key. The bucket stays private;
anyone holding the URL can GET that one object until it expires.
"""

import base64
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Optional
from urllib.parse import quote_plus, urlencode

from cryptography.exceptions import UnsupportedAlgorithm
from google.auth import crypt

from ...core.catalog.models import FetchResult

logger = logging.getLogger(__name__)

DEFAULT_EXPIRY = timedelta(hours=6)
GCS_ENDPOINT = "https://storage.googleapis.com"


@dataclass(frozen=True)
class SigningOptions:
    """
    Process-wide signing configuration.

    Built once at startup and shared by every request.
    """
    google_access_id: str
    private_key: bytes  # PEM
    bucket_name: str
    method: str = "GET"
    expiry: timedelta = DEFAULT_EXPIRY
    endpoint: str = GCS_ENDPOINT


def load_private_key(pem_path: str) -> bytes:
    """
    Read the PEM private key from disk.

    Only the file is read here; the key itself is parsed when signing,
    so a malformed key degrades to unplayable links rather than stopping
    the server. A missing file raises OSError.
    """
    return Path(pem_path).read_bytes()


def escape_object_name(object_name: str) -> str:
    """
    Escape an object name for the URL path.

    Query escaping turns spaces into '+', which Cloud Storage reads as a
    literal plus in a path, so those become '%20'.
    """
    return quote_plus(object_name).replace("+", "%20")


class UrlSigner:
    """Generates time-limited GET URLs for objects in one bucket."""

    def __init__(
        self,
        options: SigningOptions,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._options = options
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def options(self) -> SigningOptions:
        return self._options

    def sign(self, object_name: str) -> FetchResult[str]:
        """
        Sign a URL for one object.

        Expiry is counted from the moment of the call, so every page
        render hands out fresh links.
        """
        expires = int((self._clock() + self._options.expiry).timestamp())
        resource = f"/{self._options.bucket_name}/{escape_object_name(object_name)}"
        string_to_sign = "\n".join([
            self._options.method,
            "",  # Content-MD5
            "",  # Content-Type
            str(expires),
            resource,
        ])

        try:
            key = crypt.RSASigner.from_string(self._options.private_key)
            signature = key.sign(string_to_sign.encode("utf-8"))
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            return FetchResult(value="", error=e)

        query = urlencode({
            "GoogleAccessId": self._options.google_access_id,
            "Expires": expires,
            "Signature": base64.b64encode(signature).decode("ascii"),
        })
        return FetchResult(value=f"{self._options.endpoint}{resource}?{query}")

    def sign_url(self, object_name: str) -> str:
        """
        Sign a URL, returning an empty string on failure.

        Callers treat "" as "no playable link".
        """
        result = self.sign(object_name)
        if not result.ok:
            logger.warning(
                "Error signing URL",
                extra={"object_name": object_name, "error": str(result.error)}
            )
        return result.value
