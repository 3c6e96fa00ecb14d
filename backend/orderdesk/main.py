"""OrderDesk API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map OrderDeskError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database (and the result cache, when REDIS_URL is set) initialized on startup
      via the lifespan context manager, torn down on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Startup failures abort the process (safely_initialize_service re-raises)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from orderdesk.api.error_handlers import register_error_handlers
from orderdesk.infrastructure.database import init_db, close_db
from orderdesk.infrastructure.lifecycle import safely_initialize_service
from orderdesk.infrastructure.observability import setup_logging
from orderdesk.infrastructure.result_cache import init_cache, close_cache
from orderdesk.config import get_settings
from orderdesk.api.routes import health, healthcheck, users, roles, invoices

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    async def _init_database():
        init_db(settings)

    await safely_initialize_service("Database", _init_database)
    if settings.redis_url:
        await safely_initialize_service(
            "Result cache", lambda: init_cache(settings.redis_url),
        )
    else:
        logger.info("Result cache disabled (REDIS_URL not set)")

    logger.info("OrderDesk API started")
    yield
    logger.info("OrderDesk API shutting down")
    await close_cache()
    await close_db()


app = FastAPI(
    title="OrderDesk API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(healthcheck.router)
app.include_router(users.router)
app.include_router(roles.router)
app.include_router(invoices.router)

register_error_handlers(app)
