"""Recommendation Schemas — wire format for the recommendation and health endpoints.

Invariants:
    - RecommendationResponse.success is always True (failures use error bodies)
    - timestamp is ISO-8601 UTC, assigned when the response is assembled
"""

from datetime import datetime, timezone

from pydantic import BaseModel

from coverage_advisor.core.domain_types import Recommendation
from coverage_advisor.core.format_recommendation import format_recommendation


class RecommendationPayload(BaseModel):
    """Display-ready recommendation."""
    type: str
    coverage: str
    duration: str
    explanation: str


class RecommendationResponse(BaseModel):
    success: bool = True
    recommendation: RecommendationPayload
    timestamp: str

    @classmethod
    def from_recommendation(
        cls, recommendation: Recommendation, now: datetime | None = None,
    ) -> "RecommendationResponse":
        now = now or datetime.now(timezone.utc)
        return cls(
            recommendation=RecommendationPayload(
                **format_recommendation(recommendation),
            ),
            timestamp=now.isoformat(),
        )


class HealthResponse(BaseModel):
    status: str = "OK"
    timestamp: str
