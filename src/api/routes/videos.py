"""
Video listing and playback pages.

Two read-only pages:
- GET /                     - every video in the bucket, newest first
- GET /play/{object_name}   - a player for one video

Each request is fetch -> build view model -> render. Storage failures are
logged and the page renders with whatever was fetched (possibly nothing);
the site never answers a bucket hiccup with an error page.
"""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from ...core.catalog.catalog import build_catalog, build_play_view
from ..dependencies import AppContextDep

logger = logging.getLogger(__name__)

router = APIRouter()


# Plain `def` handlers run in FastAPI's thread pool; each blocks only on
# its own bucket call.

@router.get(
    "/",
    response_class=HTMLResponse,
    summary="List videos",
    description="Render the listing page with every video in the bucket, most recently updated first",
)
def list_videos(request: Request, context: AppContextDep) -> HTMLResponse:
    result = context.bucket.list_objects()
    if not result.ok:
        logger.warning(
            "Failed getting video list",
            extra={
                "bucket": context.settings.bucket_name,
                "error": str(result.error),
            }
        )

    entries = build_catalog(result.value, context.signer, context.video_suffixes)

    logger.debug(
        "Rendering video list",
        extra={"objects": len(result.value), "videos": len(entries)}
    )

    return context.templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": context.settings.app_title,
            "bucket_name": context.settings.bucket_name,
            "entries": entries,
            "listing_failed": not result.ok,
        },
    )


@router.get(
    "/play/{object_name:path}",
    response_class=HTMLResponse,
    summary="Play a video",
    description="Render the playback page for one object with a freshly signed URL",
)
def play_video(object_name: str, request: Request, context: AppContextDep) -> HTMLResponse:
    """
    Render the player for one object.

    object_name uses the path converter so names containing '/' work.
    A missing or unreachable object still renders the page, just
    without metadata or a video source.
    """
    result = context.bucket.get_object(object_name)
    if not result.ok:
        logger.warning(
            "Failed getting info for video",
            extra={"object_name": object_name, "error": str(result.error)}
        )

    view = build_play_view(object_name, result, context.signer, context.video_suffixes)

    return context.templates.TemplateResponse(
        request,
        "play.html",
        {
            "title": context.settings.app_title,
            "view": view,
        },
    )
