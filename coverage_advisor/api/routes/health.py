"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health always returns 200 if the process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable (readiness)
    - Neither probe exercises the recommendation engine

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from the
      load balancer. The audit database being down does not make the service
      unable to answer, so orchestration should only gate traffic on /health
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from coverage_advisor.infrastructure.database import (
    DatabaseSessionManager, get_db_manager,
)
from coverage_advisor.schemas.recommendation import HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse, status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return HealthResponse(timestamp=datetime.now(timezone.utc).isoformat())


@router.get("/ready")
async def readiness_check(
    manager: DatabaseSessionManager | None = Depends(get_db_manager),
):
    """Readiness probe, includes database connectivity."""
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
