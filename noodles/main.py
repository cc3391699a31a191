"""Golden Noodles API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map NoodleError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Persistence handle created on startup, disposed on shutdown; it only
      connects on the first ledger call

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from noodles.api.error_handlers import register_error_handlers
from noodles.api.routes import grants, health, ledger_views
from noodles.config import get_settings
from noodles.infrastructure.database import init_db
from noodles.infrastructure.observability import setup_logging

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
    logger.info("Golden Noodles API started")
    yield
    await manager.close()
    logger.info("Golden Noodles API shutting down")


app = FastAPI(
    title="Golden Noodles API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(grants.router)
app.include_router(ledger_views.router)

register_error_handlers(app)
