"""Request Size Limit — reject request bodies above the configured byte budget.

Invariants:
    - A declared Content-Length over max_bytes → 413 before the app runs
    - An undeclared or understated body is counted while it streams;
      crossing max_bytes aborts parsing with the same 413
    - Oversized requests never reach the validator, engine, or audit sink
    - Responses and background tasks pass through untouched

Design Decisions:
    - Plain ASGI middleware over BaseHTTPMiddleware: send is forwarded as-is,
      so background tasks still start only after the response body is sent
    - Streaming overflow raised as HTTPException: FastAPI re-raises it from
      body parsing and the registered handler renders the flat error body
"""

import logging

from fastapi import HTTPException, status
from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)

TOO_LARGE_MESSAGE = "Request body too large"


class RequestSizeLimitMiddleware:
    """Cap the number of body bytes a single request may carry."""

    def __init__(self, app: ASGIApp, max_bytes: int = 10_240):
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = _declared_length(scope)
        if declared is not None and declared > self.max_bytes:
            logger.warning(
                f"Rejected {declared}-byte body (limit {self.max_bytes})",
                extra={"path": scope.get("path")},
            )
            response = JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={"error": TOO_LARGE_MESSAGE},
            )
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    logger.warning(
                        f"Streamed body exceeded limit {self.max_bytes}",
                        extra={"path": scope.get("path")},
                    )
                    raise HTTPException(
                        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        detail=TOO_LARGE_MESSAGE,
                    )
            return message

        await self.app(scope, limited_receive, send)


def _declared_length(scope: Scope) -> int | None:
    for name, value in scope.get("headers", []):
        if name == b"content-length":
            try:
                return int(value)
            except ValueError:
                return None
    return None
