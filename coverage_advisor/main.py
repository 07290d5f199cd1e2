"""Coverage Advisor API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map AdvisorError → flat JSON error bodies
    - CORS configured from settings (not hardcoded)
    - Request bodies capped at settings.max_request_bytes (413 above it)
    - Database pool created on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py to keep this module wiring-only
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from coverage_advisor.api.body_limit import RequestSizeLimitMiddleware
from coverage_advisor.api.error_handlers import register_error_handlers
from coverage_advisor.api.routes import health, recommendation
from coverage_advisor.config import get_settings
from coverage_advisor.infrastructure.database import close_db, init_db
from coverage_advisor.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Coverage Advisor API started")
    yield
    logger.info("Coverage Advisor API shutting down")
    await close_db()


app = FastAPI(
    title="Coverage Advisor API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    RequestSizeLimitMiddleware, max_bytes=settings.max_request_bytes,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(recommendation.router)

register_error_handlers(app)
