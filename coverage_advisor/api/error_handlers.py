"""Error Handlers — global exception handlers for the Coverage Advisor API.

Invariants:
    - AdvisorError → its own to_response() body and http_status
    - AdvisorError context carries the request path before it is logged
    - RequestValidationError (malformed JSON) → 400 with field-level details
    - HTTPException 404 → {"error": "Endpoint not found"}
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Four-layer handler: domain (AdvisorError), request parsing (FastAPI),
      routing (Starlette HTTPException), catch-all (Exception)
    - Flat {"error": ...} bodies: the web client reads error as a display string
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from coverage_advisor.core.errors import AdvisorError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_advisor_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_advisor_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(AdvisorError)
    async def advisor_error_handler(request: Request, exc: AdvisorError):
        exc.context.path = request.url.path
        log = (
            logger.warning if exc.severity in (
                ErrorSeverity.INFO, ErrorSeverity.WARNING,
            ) else logger.error
        )
        log(
            f"AdvisorError: {exc.message}",
            extra={"error_code": exc.code, "path": exc.context.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register request parsing error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing error handler (unknown paths, wrong methods)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            content = {"error": "Endpoint not found"}
        else:
            content = {"error": str(exc.detail)}
        return JSONResponse(
            status_code=exc.status_code,
            content=content,
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all. Never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "message": "Something went wrong",
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured request parsing error response."""
    return {
        "error": "Invalid request data",
        "details": [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
    }
