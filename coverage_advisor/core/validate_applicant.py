"""Applicant Validation — presence, type, and range checks for raw request bodies.

Invariants:
    - All functions are PURE: no IO, no async, no side effects
    - Check functions return ValidationFailure on violation, None on success
    - validate_applicant chains presence → type → range, first failure wins
    - Strings are never coerced to numbers; bool is not an int; 30.0 is not an int
    - A present 0 is a value, not a missing field; None counts as missing
    - Range failures name the violated bound ("minimum" or "maximum")

Design Decisions:
    - Hand-rolled checks over Pydantic strict models: Pydantic accumulates every
      error, this API reports exactly one unambiguous failure per request
    - Return values (not exceptions): the route decides how to surface a failure,
      the core never knows about HTTP
"""

from collections.abc import Mapping

from coverage_advisor.core.domain_types import (
    ApplicantProfile, RiskTolerance, ValidationCheck,
)
from coverage_advisor.core.errors import ValidationFailure

REQUIRED_FIELDS: tuple[str, ...] = ("age", "income", "dependents", "riskTolerance")

# field → (min, max, message)
_INTEGER_RULES: dict[str, tuple[int, int, str]] = {
    "age": (18, 80, "Age must be an integer between 18 and 80"),
    "income": (
        20_000, 10_000_000,
        "Income must be an integer between 20,000 and 10,000,000",
    ),
    "dependents": (0, 10, "Dependents must be an integer between 0 and 10"),
}

_RISK_TOLERANCE_MESSAGE = "Risk tolerance must be Low, Medium, or High"
_RISK_TOLERANCE_VALUES = {r.value for r in RiskTolerance}


def _is_strict_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_body_shape(raw: object) -> ValidationFailure | None:
    """Body must be a JSON object. None is allowed (treated as empty)."""
    if raw is None or isinstance(raw, Mapping):
        return None
    return ValidationFailure(
        check=ValidationCheck.INVALID_TYPE,
        fields=("body",),
        message="Request body must be a JSON object",
    )


def check_presence(raw: Mapping) -> ValidationFailure | None:
    """Every required field must be present and non-null."""
    missing = tuple(f for f in REQUIRED_FIELDS if raw.get(f) is None)
    if missing:
        return ValidationFailure(
            check=ValidationCheck.MISSING_FIELD,
            fields=missing,
            message="Missing required fields",
            required=REQUIRED_FIELDS,
        )
    return None


def check_types(raw: Mapping) -> ValidationFailure | None:
    """Numeric fields must be ints, riskTolerance a string."""
    for name, (_, _, message) in _INTEGER_RULES.items():
        if not _is_strict_int(raw[name]):
            return ValidationFailure(
                ValidationCheck.INVALID_TYPE, (name,), message,
            )
    if not isinstance(raw["riskTolerance"], str):
        return ValidationFailure(
            ValidationCheck.INVALID_TYPE, ("riskTolerance",),
            _RISK_TOLERANCE_MESSAGE,
        )
    return None


def check_ranges(raw: Mapping) -> ValidationFailure | None:
    """Numeric fields inside their bounds, riskTolerance a known value."""
    for name, (low, high, message) in _INTEGER_RULES.items():
        if raw[name] < low:
            return ValidationFailure(
                ValidationCheck.OUT_OF_RANGE, (name,), message, bound="minimum",
            )
        if raw[name] > high:
            return ValidationFailure(
                ValidationCheck.OUT_OF_RANGE, (name,), message, bound="maximum",
            )
    if raw["riskTolerance"] not in _RISK_TOLERANCE_VALUES:
        return ValidationFailure(
            ValidationCheck.INVALID_ENUM, ("riskTolerance",),
            _RISK_TOLERANCE_MESSAGE,
        )
    return None


def validate_applicant(raw: object) -> ApplicantProfile | ValidationFailure:
    """Validate a decoded JSON body. Returns a profile or the first failure."""
    shape_error = check_body_shape(raw)
    if shape_error:
        return shape_error
    body: Mapping = raw or {}
    for check in (check_presence, check_types, check_ranges):
        failure = check(body)
        if failure:
            return failure
    return ApplicantProfile(
        age=body["age"],
        annual_income=body["income"],
        dependents=body["dependents"],
        risk_tolerance=RiskTolerance(body["riskTolerance"]),
    )
