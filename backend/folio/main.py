"""Folio API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map FolioError → structured JSON responses
    - AppContext built in the lifespan, disposed on shutdown
    - /uploads serves stored blobs; everything else unmatched goes to the static site

Design Decisions:
    - Lifespan owns every live resource (engine, blob dir, mailer); import only wires routes
    - Tables auto-created on startup for SQLite deployments; Alembic for managed databases
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from folio.api.error_handlers import register_error_handlers
from folio.api.routes import contact, health, posts, projects, uploads
from folio.api.static import SPAStaticFiles
from folio.config import get_settings
from folio.context import build_context
from folio.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    context = build_context(settings)
    context.blobs.ensure_directory()
    if settings.database_auto_create:
        await context.db.create_schema()
    app.state.context = context
    logger.info("Folio API started")
    yield
    logger.info("Folio API shutting down")
    await context.db.dispose()


app = FastAPI(title="Folio API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(posts.router)
app.include_router(projects.router)
app.include_router(uploads.router)
app.include_router(contact.router)

register_error_handlers(app)

# Mounted AFTER API routes so /api/* takes precedence
app.mount(
    settings.upload_url_prefix,
    StaticFiles(directory=settings.upload_dir, check_dir=False),
    name="uploads",
)
if os.path.isdir(settings.static_dir):
    app.mount(
        "/", SPAStaticFiles(directory=settings.static_dir, html=True),
        name="static",
    )
