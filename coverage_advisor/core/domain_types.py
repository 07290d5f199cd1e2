"""Domain Types — rich types for applicant profiles and coverage recommendations.

Invariants:
    - ApplicantProfile and Recommendation are frozen
    - All valid states encoded as Enums
    - AuditRecord is the flat concatenation of a profile and its recommendation

Design Decisions:
    - Frozen dataclasses over Pydantic models: the core stays free of IO-boundary
      concerns, and equality/hash come for free for determinism checks
    - str Enums: serialize to JSON and to VARCHAR columns without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

AuditRecordId = NewType("AuditRecordId", int)


# ─── Enums ───────────────────────────────────────────────────────

class RiskTolerance(str, Enum):
    """Applicant risk appetite. Drives the final multiplier and policy shape."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class PolicyType(str, Enum):
    """Recommended policy family."""
    TERM_LIFE = "TermLife"
    WHOLE_LIFE = "WholeLife"

    @property
    def label(self) -> str:
        """Human-readable name used in API responses."""
        return "Term Life" if self is PolicyType.TERM_LIFE else "Whole Life"


class ValidationCheck(str, Enum):
    """Which validation stage rejected the input."""
    MISSING_FIELD = "MissingField"
    INVALID_TYPE = "InvalidType"
    OUT_OF_RANGE = "OutOfRange"
    INVALID_ENUM = "InvalidEnum"


# ─── Value Objects ───────────────────────────────────────────────

@dataclass(frozen=True)
class ApplicantProfile:
    """Validated applicant attributes. Only validate_applicant() builds these."""
    age: int
    annual_income: int
    dependents: int
    risk_tolerance: RiskTolerance


@dataclass(frozen=True)
class Recommendation:
    """Coverage recommendation derived solely from an ApplicantProfile."""
    policy_type: PolicyType
    coverage_amount: int
    term_years: int
    explanation: str


@dataclass(frozen=True)
class AuditRecord:
    """Append-only analytics row. Id and timestamp are assigned by storage."""
    age: int
    annual_income: int
    dependents: int
    risk_tolerance: str
    policy_type: str
    coverage_amount: int
    term_years: int
    explanation: str

    @classmethod
    def from_pair(
        cls, profile: ApplicantProfile, recommendation: Recommendation,
    ) -> "AuditRecord":
        return cls(
            age=profile.age,
            annual_income=profile.annual_income,
            dependents=profile.dependents,
            risk_tolerance=profile.risk_tolerance.value,
            policy_type=recommendation.policy_type.value,
            coverage_amount=recommendation.coverage_amount,
            term_years=recommendation.term_years,
            explanation=recommendation.explanation,
        )
