"""Recommendation Formatting — display strings for the public response."""

from coverage_advisor.core.domain_types import PolicyType, Recommendation
from coverage_advisor.core.format_recommendation import (
    format_coverage, format_duration, format_recommendation,
)


def test_coverage_is_dollar_prefixed_and_grouped():
    assert format_coverage(1_250_000) == "$1,250,000"
    assert format_coverage(780_000) == "$780,000"
    assert format_coverage(159_900_000) == "$159,900,000"


def test_duration_in_years():
    assert format_duration(15) == "15 years"


def test_policy_type_labels():
    assert PolicyType.TERM_LIFE.label == "Term Life"
    assert PolicyType.WHOLE_LIFE.label == "Whole Life"


def test_format_recommendation_payload():
    rec = Recommendation(
        policy_type=PolicyType.WHOLE_LIFE,
        coverage_amount=780_000,
        term_years=30,
        explanation="Aggressive profile: higher coverage, longer term, whole life.",
    )
    assert format_recommendation(rec) == {
        "type": "Whole Life",
        "coverage": "$780,000",
        "duration": "30 years",
        "explanation": "Aggressive profile: higher coverage, longer term, whole life.",
    }
