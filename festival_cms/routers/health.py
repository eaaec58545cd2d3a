"""
Health Check Router

Provides health check endpoints for monitoring application status.
"""

import logging
import os
import sys
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from festival_cms.config import get_settings
from festival_cms.models.schemas import HealthCheckResponse
from festival_cms.resources import RESOURCES
from festival_cms.routers.deps import get_store
from festival_cms.store.collection_store import CollectionStore

logger = logging.getLogger(__name__)

router = APIRouter()

# Application start time for uptime calculation
_start_time = time.time()


async def _database_status(store: CollectionStore) -> dict:
    try:
        await store.ping()
    except (SQLAlchemyError, OSError) as exc:
        logger.error("Database ping failed: %s", exc)
        return {"reachable": False, "error": str(exc)}
    return {"reachable": True}


@router.get("/health", response_model=HealthCheckResponse, summary="Basic Health Check")
async def health_check():
    """
    Basic health check endpoint

    Returns application status, version, and environment information.
    This endpoint is used by load balancers and monitoring systems.
    """
    settings = get_settings()
    return HealthCheckResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment.value,
        timestamp=datetime.now(timezone.utc),
        uptime=time.time() - _start_time,
    )


@router.get("/health/detailed", summary="Detailed Health Check")
async def detailed_health_check(store: CollectionStore = Depends(get_store)):
    """
    Detailed health check with dependency status

    Checks the database connection and reports realtime subscriber counts.
    """
    settings = get_settings()
    database = await _database_status(store)
    return {
        "status": "healthy" if database["reachable"] else "degraded",
        "version": settings.app_version,
        "environment": settings.environment.value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": time.time() - _start_time,
        "components": {
            "database": database,
            "realtime": {
                "subscribers": {
                    name: store.feed.subscriber_count(name) for name in RESOURCES
                }
            },
        },
        "details": {
            "cors_origins": settings.cors_origins,
            "python_version": sys.version,
            "startup_time": datetime.fromtimestamp(_start_time).isoformat(),
        },
    }


@router.get("/health/ready", summary="Readiness Check")
async def readiness_check(store: CollectionStore = Depends(get_store)):
    """
    Kubernetes-style readiness probe

    Returns 200 once the database answers, 503 otherwise.
    """
    database = await _database_status(store)
    if not database["reachable"]:
        raise HTTPException(
            status_code=503,
            detail=f"Application not ready: {database['error']}",
        )
    return {"status": "ready", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/health/live", summary="Liveness Check")
async def liveness_check():
    return {
        "status": "alive",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "pid": os.getpid(),
    }
