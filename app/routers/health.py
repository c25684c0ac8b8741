# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# /health answers unconditionally, /health/ready probes the user database
# and the storage root, /health/live only proves the process responds.
# =============================================================================

import os
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from app.config import settings
from app.dependencies import get_path_mediator, get_user_store
from core.services.path_mediator import PathMediator
from lib.user_store import StoreError, UserRecordNotFoundError, UserStore

router = APIRouter()

VERSION = "1.0.0"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Individual service checks."""
    database: str
    storage: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Static status, environment and version."""
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(
    store: UserStore = Depends(get_user_store),
    paths: PathMediator = Depends(get_path_mediator),
):
    """
    Report "ready" only when the user table answers queries and the
    storage root is a readable, writable directory; "degraded" otherwise.
    """
    checks = ChecksResponse(database="unknown", storage="unknown")

    # Check database with a lookup that is expected to miss
    try:
        await run_in_threadpool(store.find_by_id, "readiness-probe")
        checks.database = "healthy"
    except UserRecordNotFoundError:
        checks.database = "healthy"
    except StoreError as e:
        checks.database = f"unhealthy: {str(e)[:50]}"

    # Check storage
    root = paths.storage_root
    if root.is_dir() and os.access(root, os.R_OK | os.W_OK):
        checks.storage = "healthy"
    else:
        checks.storage = "unhealthy: storage root is not a writable directory"

    all_healthy = checks.database == "healthy" and checks.storage == "healthy"

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """Process liveness; touches nothing."""
    return LivenessResponse(
        status="alive",
        timestamp=_now(),
    )
