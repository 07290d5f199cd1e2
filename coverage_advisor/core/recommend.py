"""Recommendation Engine — deterministic coverage rules for a validated applicant.

Invariants:
    - recommend() is PURE and TOTAL for any ApplicantProfile: no IO, no clock, no randomness
    - Adjustment order is fixed: base → dependents → age → risk tolerance → rounding.
      Reordering changes output (rounding and multiplication do not commute)
    - coverage_amount is always a multiple of ROUNDING_UNIT
    - Ages 30 and 50 are inside the neutral band (strict < and > only)

Design Decisions:
    - Decimal arithmetic end to end: income up to 10M × 10 × 1.3 stays exact and
      half-up rounding is reproducible across platforms
    - Rule tables as module constants: one place to audit every multiplier
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from coverage_advisor.core.domain_types import (
    ApplicantProfile, PolicyType, Recommendation, RiskTolerance,
)

INCOME_MULTIPLE = 10
PER_DEPENDENT_COVERAGE = 250_000
ROUNDING_UNIT = 1000

YOUNG_AGE_LIMIT = 30    # strictly below → boost
SENIOR_AGE_LIMIT = 50   # strictly above → reduction
YOUNG_MULTIPLIER = Decimal("1.2")
SENIOR_MULTIPLIER = Decimal("0.8")


@dataclass(frozen=True)
class RiskProfileRule:
    """Final adjustment and policy shape for one risk tolerance."""
    multiplier: Decimal
    term_years: int
    policy_type: PolicyType
    explanation: str


RISK_RULES: dict[RiskTolerance, RiskProfileRule] = {
    RiskTolerance.LOW: RiskProfileRule(
        multiplier=Decimal("0.8"),
        term_years=15,
        policy_type=PolicyType.TERM_LIFE,
        explanation="Conservative profile: moderate coverage, shorter term.",
    ),
    RiskTolerance.MEDIUM: RiskProfileRule(
        multiplier=Decimal("1"),
        term_years=20,
        policy_type=PolicyType.TERM_LIFE,
        explanation="Balanced profile: standard coverage and term.",
    ),
    RiskTolerance.HIGH: RiskProfileRule(
        multiplier=Decimal("1.3"),
        term_years=30,
        policy_type=PolicyType.WHOLE_LIFE,
        explanation="Aggressive profile: higher coverage, longer term, whole life.",
    ),
}


def age_multiplier(age: int) -> Decimal:
    """1.2 under 30, 0.8 over 50, 1 otherwise."""
    if age < YOUNG_AGE_LIMIT:
        return YOUNG_MULTIPLIER
    if age > SENIOR_AGE_LIMIT:
        return SENIOR_MULTIPLIER
    return Decimal(1)


def round_to_unit(amount: Decimal, unit: int = ROUNDING_UNIT) -> int:
    """Round half-up on amount / unit, then scale back."""
    quotient = (amount / unit).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return int(quotient) * unit


def recommend(profile: ApplicantProfile) -> Recommendation:
    """Derive a coverage recommendation. Order of adjustments matters."""
    coverage = Decimal(profile.annual_income * INCOME_MULTIPLE)
    coverage += profile.dependents * PER_DEPENDENT_COVERAGE
    coverage *= age_multiplier(profile.age)

    rule = RISK_RULES[profile.risk_tolerance]
    coverage *= rule.multiplier

    return Recommendation(
        policy_type=rule.policy_type,
        coverage_amount=round_to_unit(coverage),
        term_years=rule.term_years,
        explanation=rule.explanation,
    )
