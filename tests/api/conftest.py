"""API test fixtures — FastAPI app over httpx ASGITransport with injected audit sinks.

Invariants:
    - get_audit_recorder overridden: requests never reach a real database
    - audit_sink defaults to the in-memory fake; modules override the fixture
      to inject failing, hanging, or gated sinks
    - Background tasks complete before the test client returns (ASGI transport
      awaits the whole app call), so sink state is assertable after a request
    - call_app drives the ASGI callable directly for tests that need to see
      individual send() messages or control how the body is streamed
"""

import asyncio
from collections.abc import Callable

import pytest
from httpx import ASGITransport, AsyncClient

from coverage_advisor.api.routes.recommendation import get_audit_recorder
from coverage_advisor.main import app
from coverage_advisor.services.audit_recorder import AuditRecorder


@pytest.fixture
def audit_sink(memory_sink):
    return memory_sink


@pytest.fixture
async def client(audit_sink):
    """Test client whose recorder wraps the audit_sink fixture."""
    app.dependency_overrides[get_audit_recorder] = (
        lambda: AuditRecorder(audit_sink, timeout_seconds=0.05)
    )
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def raw_client():
    """Test client with no overrides installed."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def call_app(audit_sink):
    """POST /recommendation straight into the ASGI app, collecting sent messages.

    chunks are delivered as separate http.request messages. on_final_body runs
    inside send() the moment the last response body message goes out.
    """

    async def _call(
        chunks: list[bytes],
        *,
        content_length: int | None = None,
        recorder_timeout: float = 0.05,
        on_final_body: Callable[[], None] | None = None,
    ) -> list[dict]:
        app.dependency_overrides[get_audit_recorder] = (
            lambda: AuditRecorder(audit_sink, timeout_seconds=recorder_timeout)
        )
        pending = list(chunks) or [b""]
        response_complete = asyncio.Event()
        sent: list[dict] = []

        async def receive() -> dict:
            if pending:
                chunk = pending.pop(0)
                return {
                    "type": "http.request", "body": chunk, "more_body": bool(pending),
                }
            await response_complete.wait()
            return {"type": "http.disconnect"}

        async def send(message: dict) -> None:
            sent.append(message)
            if message["type"] == "http.response.body" and not message.get(
                "more_body", False,
            ):
                if on_final_body:
                    on_final_body()
                response_complete.set()

        headers = [(b"host", b"test"), (b"content-type", b"application/json")]
        if content_length is not None:
            headers.append((b"content-length", str(content_length).encode()))
        scope = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": "POST",
            "scheme": "http",
            "path": "/recommendation",
            "raw_path": b"/recommendation",
            "root_path": "",
            "query_string": b"",
            "headers": headers,
            "client": ("127.0.0.1", 50000),
            "server": ("test", 80),
        }
        await app(scope, receive, send)
        return sent

    yield _call
    app.dependency_overrides.clear()
