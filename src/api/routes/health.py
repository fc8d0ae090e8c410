"""
Health check endpoints.

Health checks are essential for:
- Load balancers to know if the service is alive
- Deployment systems to verify rollouts
- Debugging production issues

We provide two endpoints:
- /health: Basic liveness check (is the process running?)
- /health/ready: Readiness check (can we reach the bucket and sign?)
"""

import logging
from typing import Any

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from ... import __version__
from ..dependencies import AppContextDep

logger = logging.getLogger(__name__)

router = APIRouter()

# Object name used to exercise the signer; never fetched
_SIGNING_CHECK_OBJECT = "health-check.mp4"


class HealthResponse(BaseModel):
    """
    Health check response.

    Standardized format makes it easy for monitoring tools to parse.
    """
    status: str
    version: str
    details: dict[str, Any] = {}


class ReadinessCheck(BaseModel):
    """Individual readiness check result."""
    name: str
    status: str  # "ok" or "error"
    error: str | None = None


class ReadinessResponse(BaseModel):
    """Readiness check response with details."""
    status: str  # "ready" or "not_ready"
    version: str
    checks: list[ReadinessCheck]


@router.get(
    "",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Basic health check",
    description="Returns 200 if the service is running. Does not check dependencies.",
)
def health_check(context: AppContextDep) -> HealthResponse:
    """
    Liveness check - is the process alive?

    This endpoint should be very fast and not touch the bucket.
    """
    return HealthResponse(
        status="ok",
        version=__version__,
        details={
            "bucket": context.settings.bucket_name,
            "mock_mode": {
                "storage": context.settings.storage_mock_mode,
            }
        }
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    status_code=status.HTTP_200_OK,
    summary="Readiness check",
    description="Returns 200 if the service can handle traffic. Checks configuration, signing and storage.",
    responses={
        503: {
            "description": "Service not ready",
            "model": ReadinessResponse,
        }
    },
)
def readiness_check(context: AppContextDep, response: Response) -> ReadinessResponse:
    """
    Readiness check - can we serve traffic?

    Checks that:
    - Required configuration is present
    - The signing key actually produces URLs
    - The bucket is reachable (one object name, not a full listing)

    Returns 503 if any check fails, which tells load balancers not
    to route traffic here.
    """
    checks: list[ReadinessCheck] = []

    # Check configuration
    missing_fields = context.settings.validate_required_fields()
    if missing_fields:
        checks.append(ReadinessCheck(
            name="configuration",
            status="error",
            error=f"Missing required fields: {', '.join(missing_fields)}"
        ))
    else:
        checks.append(ReadinessCheck(name="configuration", status="ok"))

    # Check signing key
    if context.signer.sign_url(_SIGNING_CHECK_OBJECT):
        checks.append(ReadinessCheck(name="signing_key", status="ok"))
    else:
        checks.append(ReadinessCheck(
            name="signing_key",
            status="error",
            error="Could not sign a URL with the configured key"
        ))

    # Check storage
    reachable = context.bucket.check()
    if reachable.ok:
        checks.append(ReadinessCheck(name="storage", status="ok"))
    else:
        checks.append(ReadinessCheck(
            name="storage",
            status="error",
            error=str(reachable.error)
        ))

    all_ok = all(check.status == "ok" for check in checks)
    if not all_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning(
            "Readiness check failed",
            extra={
                "checks": [
                    {"name": c.name, "status": c.status, "error": c.error}
                    for c in checks
                ]
            }
        )

    return ReadinessResponse(
        status="ready" if all_ok else "not_ready",
        version=__version__,
        checks=checks,
    )
