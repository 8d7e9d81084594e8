"""Saikoron API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SaikoronError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Tables auto-created when settings.database_auto_create (local SQLite);
      server deployments run alembic instead
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from saikoron import __version__
from saikoron.api.error_handlers import register_error_handlers
from saikoron.api.routes import health, legacy, tool_draws, tools
from saikoron.config import get_settings
from saikoron.infrastructure.database import init_db
from saikoron.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_auto_create:
        await manager.create_all()
    logger.info("Saikoron API started")
    yield
    await manager.dispose()
    logger.info("Saikoron API shutting down")


app = FastAPI(title="Saikoron API", version=__version__, lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(tools.router)
app.include_router(tool_draws.router)
app.include_router(legacy.router)
