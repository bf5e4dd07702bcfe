"""F1 Companion API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map F1CompanionError → structured JSON responses
    - CORS configured from settings (origin list + Netlify preview regex)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Schema creation on startup only in development or when explicitly enabled;
      production schema comes from Alembic
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from f1companion.api.error_handlers import register_error_handlers
from f1companion.api.routes import constructors, drivers, health, leagues, me, teams
from f1companion.config import get_settings
from f1companion.infrastructure import database
from f1companion.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.create_schema_on_startup or settings.is_development:
        await database.db_manager.create_schema()
        logger.info("Database schema ensured")
    logger.info(f"F1 Companion API started ({settings.environment})")
    yield
    logger.info("F1 Companion API shutting down")
    await database.db_manager.dispose()


app = FastAPI(
    title="F1 Companion API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_origin_regex=settings.cors_origin_regex,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(drivers.router)
app.include_router(constructors.router)
app.include_router(teams.router)
app.include_router(leagues.router)
app.include_router(me.router)

register_error_handlers(app)
