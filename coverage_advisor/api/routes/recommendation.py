"""Recommendation Route — validate, compute, schedule the audit write, respond.

Invariants:
    - Validating → Rejected (400) | Computing → Responded (200)
    - The engine never sees an unvalidated body
    - The audit write runs as a background task AFTER the response is sent;
      its outcome never changes the response
    - Engine failures surface as InternalError (500), never as a partial result

Design Decisions:
    - Raw JSON body (Any) instead of a Pydantic request model: the core validator
      owns the fail-fast, no-coercion rules and their error messages
    - AuditRecorder resolved through a dependency: tests override it with
      recorders wrapping in-memory fakes
"""

import logging
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Body, Depends

from coverage_advisor.config import get_settings
from coverage_advisor.core.errors import (
    ApplicantValidationError, InternalError, ValidationFailure,
)
from coverage_advisor.core.recommend import recommend
from coverage_advisor.core.validate_applicant import validate_applicant
from coverage_advisor.infrastructure.audit_sink import SqlAuditSink
from coverage_advisor.infrastructure.database import (
    DatabaseSessionManager, get_db_manager,
)
from coverage_advisor.schemas.recommendation import RecommendationResponse
from coverage_advisor.services.audit_recorder import AuditRecorder

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/recommendation", tags=["recommendation"])


def get_audit_recorder(
    manager: DatabaseSessionManager | None = Depends(get_db_manager),
) -> AuditRecorder:
    """Recorder bound to the process-wide connection pool."""
    return AuditRecorder(
        SqlAuditSink(manager),
        timeout_seconds=get_settings().audit_write_timeout_seconds,
    )


@router.post("", response_model=RecommendationResponse)
async def generate_recommendation(
    background_tasks: BackgroundTasks,
    payload: Any = Body(None),
    recorder: AuditRecorder = Depends(get_audit_recorder),
):
    """Generate a coverage recommendation for one applicant."""
    verdict = validate_applicant(payload)
    if isinstance(verdict, ValidationFailure):
        raise ApplicantValidationError(verdict)

    try:
        recommendation = recommend(verdict)
    except Exception as e:
        logger.error(f"Recommendation generation error: {e}", exc_info=True)
        raise InternalError("Failed to generate recommendation")

    background_tasks.add_task(recorder.record, verdict, recommendation)
    return RecommendationResponse.from_recommendation(recommendation)
