"""Application factory and CLI entry point.

``create_app()`` builds the FastAPI application with:
  - Lifespan handler that loads the template catalogue once
  - CORS middleware
  - Global exception handlers (SDK KeyError/ValueError → 404/400)
  - All API routes mounted under ``/api/v1``
  - A ``/health`` endpoint for readiness probes

The ``cli()`` function is the ``intake-server`` console-script entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from intake_forms.templates import TemplateStore
from intake_forms.validation import FieldValidator

from intake_server.config import ServerSettings, load_settings
from intake_server.errors import (
    generic_error_handler,
    key_error_handler,
    value_error_handler,
)
from intake_server.routes import register_routes

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Lifespan — runs once at startup/shutdown
# ------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load the template catalogue at startup and stash it on ``app.state``.

    A malformed template aborts startup: broken schemas are configuration
    errors, not something to serve.
    """
    settings: ServerSettings = app.state.settings

    store = TemplateStore(template_dir=settings.templates_dir)
    store.load()
    logger.info("TemplateStore loaded successfully")

    app.state.store = store
    app.state.validator = FieldValidator()

    yield


# ------------------------------------------------------------------
# Factory
# ------------------------------------------------------------------

def create_app(settings: ServerSettings | None = None) -> FastAPI:
    """Build and return the configured FastAPI application."""
    if settings is None:
        settings = load_settings()

    # --- Configure logging ---
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Intake Forms API Server",
        description="REST API for clinical intake form templates and validation",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store settings so the lifespan handler can read them
    app.state.settings = settings

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Exception handlers ---
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(KeyError, key_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # --- Health check (outside /api/v1 prefix) ---
    @app.get("/health")
    async def health() -> dict:
        """Readiness probe — reports how many templates are loaded."""
        store: TemplateStore | None = getattr(app.state, "store", None)
        if store is None:
            return {"status": "error", "detail": "templates not loaded"}
        return {"status": "ok", "templates": len(store.templates)}

    # --- Mount all API routes ---
    register_routes(app)

    return app


# ------------------------------------------------------------------
# Module-level ASGI export (for uvicorn intake_server.app:app)
# ------------------------------------------------------------------
app = create_app()


# ------------------------------------------------------------------
# CLI entry point
# ------------------------------------------------------------------

def cli() -> None:
    """Console-script entry point: ``intake-server``."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "intake_server.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )
