"""Recommendation Formatting — public display strings for a Recommendation.

Invariants:
    - PURE: the response timestamp is added by the route, not here
    - coverage renders as "$" + comma-grouped whole dollars ("$1,250,000")
    - duration renders as "<N> years"
"""

from coverage_advisor.core.domain_types import Recommendation


def format_coverage(amount: int) -> str:
    return f"${amount:,}"


def format_duration(term_years: int) -> str:
    return f"{term_years} years"


def format_recommendation(recommendation: Recommendation) -> dict[str, str]:
    """Public recommendation payload: type, coverage, duration, explanation."""
    return {
        "type": recommendation.policy_type.label,
        "coverage": format_coverage(recommendation.coverage_amount),
        "duration": format_duration(recommendation.term_years),
        "explanation": recommendation.explanation,
    }
