"""Error Hierarchy — typed, categorized exceptions for all Coverage Advisor failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - ApplicantValidationError is the only error class surfaced to callers by design
    - PersistenceError never reaches a response; the audit recorder contains it
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with AdvisorError base: FastAPI global handler catches all
    - to_response() is overridable: the public API keeps the flat {error, ...}
      envelope its existing clients already parse
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from coverage_advisor.core.domain_types import ValidationCheck


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    DATABASE = "database"
    INTERNAL = "internal"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """When and where an error surfaced. path is filled by the HTTP error handler."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    path: str | None = None


@dataclass(frozen=True)
class ValidationFailure:
    """First violation found by the input validator."""
    check: ValidationCheck
    fields: tuple[str, ...]
    message: str
    required: tuple[str, ...] | None = None
    bound: str | None = None


class AdvisorError(Exception):
    """Base exception for all Coverage Advisor errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the public REST error body."""
        return {"error": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class ApplicantValidationError(AdvisorError):
    """Request body failed presence, type, or range checks."""
    def __init__(self, failure: ValidationFailure, context: ErrorContext | None = None):
        super().__init__(
            failure.message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.failure = failure

    def to_response(self) -> dict:
        body: dict[str, Any] = {
            "error": self.failure.message,
            "code": self.failure.check.value,
        }
        if self.failure.required is not None:
            body["required"] = list(self.failure.required)
            body["missing"] = list(self.failure.fields)
        else:
            body["field"] = self.failure.fields[0]
        if self.failure.bound is not None:
            body["bound"] = self.failure.bound
        return body


# ─── Infrastructure Errors (500-level) ──────────────────────────

class PersistenceError(AdvisorError):
    """Audit storage operation failed. Contained by the audit recorder."""
    def __init__(
        self,
        message: str,
        operation: str,
        category: ErrorCategory = ErrorCategory.DATABASE,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Audit {operation} failed: {message}",
            "PERSISTENCE_ERROR", category,
            ErrorSeverity.ERROR, context, 503,
        )
        self.operation = operation


class InternalError(AdvisorError):
    """Unexpected failure while computing a recommendation."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )

    def to_response(self) -> dict:
        return {"error": "Internal server error", "message": self.message}
