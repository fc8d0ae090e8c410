"""
FastAPI dependency injection.

Everything a request needs (settings, bucket client, URL signer,
templates) is built once at startup into an immutable AppContext and
stored on app.state. Route handlers receive it through a dependency, so:
- Routes don't instantiate their own clients (easier to test)
- Tests can hand create_app a context with a mock bucket
- Nothing shared between requests is ever mutated
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Annotated

from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates

from ..config.settings import Settings
from ..core.catalog.catalog import PlaybackSigner
from ..infrastructure.storage.client import BucketClient, BucketConfig, create_bucket_client
from ..infrastructure.storage.signing import SigningOptions, UrlSigner, load_private_key
from .templating import create_templates

logger = logging.getLogger(__name__)


class StartupError(Exception):
    """Raised when the application can't be configured; the process should exit."""
    pass


@dataclass(frozen=True)
class AppContext:
    """Shared, read-only state for every request."""
    settings: Settings
    bucket: BucketClient
    signer: PlaybackSigner
    templates: Jinja2Templates

    @property
    def video_suffixes(self) -> list[str]:
        return self.settings.video_suffixes_list


def build_context(settings: Settings) -> AppContext:
    """
    Build the application context from settings.

    Raises StartupError if the signing key can't be read or the storage
    client can't be created. Both are fatal: without them the site can
    neither list nor play anything.
    """
    try:
        private_key = load_private_key(settings.pem_filename)
    except OSError as e:
        logger.critical(
            "Unable to read PEM file",
            extra={"pem_file": settings.pem_filename, "error": str(e)}
        )
        raise StartupError(f"Unable to read PEM file {settings.pem_filename}: {e}") from e

    try:
        bucket = create_bucket_client(
            config=BucketConfig(
                bucket_name=settings.bucket_name,
                project_id=settings.project_id,
                credentials_file=settings.credentials_file,
            ),
            mock_mode=settings.storage_mock_mode,
        )
    except Exception as e:
        logger.critical(
            "Unable to create storage client",
            extra={"credentials_file": settings.credentials_file, "error": str(e)}
        )
        raise StartupError(f"Unable to create storage client: {e}") from e

    signer = UrlSigner(
        SigningOptions(
            google_access_id=settings.google_access_id,
            private_key=private_key,
            bucket_name=settings.bucket_name,
            expiry=timedelta(seconds=settings.signed_url_expiry_seconds),
        )
    )

    templates = create_templates(settings.templates_path)

    logger.debug(
        "Built application context",
        extra={
            "bucket": settings.bucket_name,
            "mock_mode": settings.storage_mock_mode,
            "templates_dir": str(settings.templates_path),
        }
    )

    return AppContext(
        settings=settings,
        bucket=bucket,
        signer=signer,
        templates=templates,
    )


def get_app_context(request: Request) -> AppContext:
    """Provide the context created by the application factory."""
    return request.app.state.context


# ---------------------------------------------------------------------------
# Convenience Type Aliases
# ---------------------------------------------------------------------------

AppContextDep = Annotated[AppContext, Depends(get_app_context)]
