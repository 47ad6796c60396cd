"""Blog API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map BlogError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database pool created on startup and disposed on shutdown via lifespan

Run with: uvicorn blog.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blog.api.error_handlers import register_error_handlers
from blog.api.routes import health, posts
from blog.config import get_settings
from blog.infrastructure.database import close_db, init_db
from blog.infrastructure.observability import setup_logging

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
    logger.info("Blog API started")
    yield
    await close_db()
    logger.info("Blog API shutting down")


app = FastAPI(title="Blog API", version="0.1.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(posts.router)

register_error_handlers(app)
