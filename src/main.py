"""
FastAPI application entry point.

This module creates and configures the FastAPI application.
Using an application factory pattern (create_app function) because:
- Tests can pass a context with an in-memory bucket
- Startup failures (missing key, bad credentials) surface before binding
- Nothing is built at import time

From the command line (flags override environment variables):
    python -m src.main --creds key.json --pem-filename key.pem \\
        --google-access-id xx@developer.gserviceaccount.com --port 8080

With uvicorn directly (configuration from the environment):
    uvicorn src.main:create_app --factory --reload
"""

import argparse
import logging
from contextlib import asynccontextmanager
from typing import Optional, Sequence

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from . import __version__
from .api.dependencies import AppContext, StartupError, build_context
from .api.routes import health, videos
from .config.settings import Settings, get_settings

# Configure logging
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    The context is already built by create_app; this only reports
    configuration problems on startup and logs shutdown.
    """
    settings = app.state.context.settings

    logger.info(
        "Video player starting",
        extra={
            "version": __version__,
            "bucket": settings.bucket_name,
            "mock_mode": {"storage": settings.storage_mock_mode},
        }
    )

    missing_fields = settings.validate_required_fields()
    if missing_fields:
        logger.error(
            "Missing required configuration",
            extra={"missing_fields": missing_fields}
        )

    yield

    logger.info("Video player shutting down")


def create_app(
    settings: Optional[Settings] = None,
    context: Optional[AppContext] = None,
) -> FastAPI:
    """
    Application factory.

    Builds the shared context from settings unless one is given.
    Raises StartupError if the context can't be built.
    """
    if context is None:
        context = build_context(settings or get_settings())
    settings = context.settings

    logging.getLogger().setLevel(settings.log_level.upper())

    app = FastAPI(
        title=settings.app_title,
        version=__version__,
        description="Lists the videos in a Cloud Storage bucket and plays them through signed URLs.",
        docs_url="/docs",
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.context = context

    # Include routers
    app.include_router(
        health.router,
        prefix="/health",
        tags=["Health"],
    )

    app.include_router(
        videos.router,
        tags=["Videos"],
    )

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """
        Catch-all exception handler.

        Prevents stack traces from leaking to browsers. We log the full
        error server-side but return a generic message.
        """
        logger.error(
            "Unhandled exception",
            extra={
                "path": request.url.path,
                "method": request.method,
                "error": str(exc),
            },
            exc_info=exc,
        )

        return PlainTextResponse(
            "Internal server error.",
            status_code=500,
        )

    logger.info(
        "FastAPI application created",
        extra={
            "title": settings.app_title,
            "version": __version__,
        }
    )

    return app


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse command-line flags.

    Every flag defaults to None so that only flags actually given
    override the environment.
    """
    parser = argparse.ArgumentParser(description="Serve the videos in a Cloud Storage bucket")
    parser.add_argument(
        "--creds",
        dest="credentials_file",
        help="Path to your service account JSON key file. Not needed on Compute Engine instances.",
    )
    parser.add_argument("--host", help="IP of host to run webserver on")
    parser.add_argument("--port", type=int, help="Port to run webserver on")
    parser.add_argument(
        "--google-access-id",
        dest="google_access_id",
        help="Service account client email address xx@developer.gserviceaccount.com",
    )
    parser.add_argument(
        "--pem-filename",
        dest="pem_filename",
        help="Service account PEM file used to sign URLs",
    )
    parser.add_argument("--log-level", dest="log_level", help="Logging level")
    return parser.parse_args(argv)


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point. Returns the process exit status."""
    import uvicorn

    args = parse_args(argv)
    overrides = {key: value for key, value in vars(args).items() if value is not None}

    # pydantic's ValidationError and logging's unknown-level error are both ValueErrors
    try:
        settings = Settings(**overrides)
        app = create_app(settings)
    except (StartupError, ValueError) as e:
        logger.critical("Dying with error", extra={"error": str(e)})
        return 1

    logger.info(
        "Starting webserver",
        extra={"host": settings.host, "port": settings.port}
    )

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(run())
