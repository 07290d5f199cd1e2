"""Audit Recorder — best-effort, fire-and-forget persistence of recommendations.

Invariants:
    - record() never raises: every sink failure ends as a logged AuditOutcome
    - Every append is bounded by timeout_seconds; a timeout is an ordinary failure
    - One append per call, never retried
    - record() is scheduled after the response; callers never await its outcome

Design Decisions:
    - Failures are values (AuditOutcome), not suppressed exceptions: the data-loss
      policy is readable in try_append() rather than buried in the route
    - Sink injected via constructor: production passes SqlAuditSink, tests pass
      in-memory fakes that succeed, fail, or hang
    - Dropped audit rows are accepted data loss, logged at ERROR for alerting
"""

import asyncio
import logging
from dataclasses import dataclass

from coverage_advisor.core.domain_types import (
    ApplicantProfile, AuditRecord, AuditRecordId, Recommendation,
)
from coverage_advisor.core.errors import ErrorCategory, PersistenceError
from coverage_advisor.core.repository_protocols import AuditSink

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditOutcome:
    """Result of one append: a stored id or the error that dropped the record."""
    record_id: AuditRecordId | None = None
    error: PersistenceError | None = None

    @property
    def stored(self) -> bool:
        return self.error is None


class AuditRecorder:
    """Writes one AuditRecord per accepted request, never failing the request."""

    def __init__(self, sink: AuditSink, timeout_seconds: float = 5.0):
        self._sink = sink
        self._timeout = timeout_seconds

    async def record(
        self, profile: ApplicantProfile, recommendation: Recommendation,
    ) -> None:
        outcome = await self.try_append(
            AuditRecord.from_pair(profile, recommendation),
        )
        if outcome.stored:
            logger.info(
                f"Recommendation stored with ID: {outcome.record_id}",
                extra={"record_id": outcome.record_id},
            )
            return
        logger.error(
            f"Audit record dropped: {outcome.error.message}",
            extra={
                "error_code": outcome.error.code,
                "risk_tolerance": profile.risk_tolerance.value,
            },
        )

    async def try_append(self, record: AuditRecord) -> AuditOutcome:
        """Append with timeout. Returns an outcome instead of raising."""
        try:
            record_id = await asyncio.wait_for(
                self._sink.append(record), timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            return AuditOutcome(error=PersistenceError(
                f"no response within {self._timeout}s", "append",
                category=ErrorCategory.TIMEOUT,
            ))
        except PersistenceError as e:
            return AuditOutcome(error=e)
        except Exception as e:
            logger.error(f"Unexpected audit sink failure: {e}", exc_info=True)
            return AuditOutcome(error=PersistenceError(str(e), "append"))
        return AuditOutcome(record_id=record_id)
