"""Application factory and CLI entry point.

``create_app()`` builds the FastAPI application with:
  - Lifespan handler that loads the question set, builds the session store
    and engine once, and runs the expiry sweeper
  - CORS middleware
  - Global exception handlers (ValueError → 400/404, KeyError → 404,
    internal model validation failures → 500)
  - All API routes mounted under ``/api/v1``
  - ``/health``, ``/`` and the optional domain-verification endpoint

The ``cli()`` function is the ``soul-builder-server`` console-script entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from soul_builder.constants import SERVICE_NAME, SERVICE_VERSION
from soul_builder.engine import SoulBuilderEngine
from soul_builder.question_set import QuestionSet
from soul_builder.store import SessionStore

from soul_builder_server.config import ServerSettings, load_settings
from soul_builder_server.errors import (
    generic_error_handler,
    key_error_handler,
    model_validation_error_handler,
    value_error_handler,
)
from soul_builder_server.routes import API_PREFIX, register_routes

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Lifespan: runs once at startup/shutdown
# ------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialise shared resources at startup, tear down on shutdown.

    Startup:
      1. Load the question set for the configured locale
      2. Build ``SessionStore`` and ``SoulBuilderEngine``
      3. Start the store's expiry sweeper
      4. Stash them on ``app.state`` for dependency injection

    Shutdown:
      1. Cancel the sweeper task
    """
    settings: ServerSettings = app.state.settings

    # --- Load questions ---
    questions = QuestionSet(locale=settings.locale)
    questions.load()

    # --- Build engine ---
    store = SessionStore(
        expiry_seconds=settings.session_expiry_seconds,
        sweep_interval_seconds=settings.sweep_interval_seconds,
    )
    engine = SoulBuilderEngine(store, questions)
    store.start()

    app.state.questions = questions
    app.state.session_store = store
    app.state.engine = engine

    yield

    # --- Shutdown ---
    await store.stop()


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
        title="Soul Builder",
        description="Give your AI agent an identity: a guided questionnaire that renders SOUL.md",
        version=SERVICE_VERSION,
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
    app.add_exception_handler(ValidationError, model_validation_error_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(KeyError, key_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # --- Health check (outside /api/v1 prefix) ---
    @app.get("/health")
    async def health() -> dict:
        """Readiness probe: reports the live session count."""
        return {
            "status": "ok",
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "active_sessions": app.state.engine.active_session_count(),
        }

    @app.get("/")
    async def root() -> dict:
        """Service description and endpoint map."""
        return {
            "name": "Soul Builder",
            "description": "Give your AI agent an identity.",
            "api": API_PREFIX,
            "tools": f"{API_PREFIX}/tools",
            "health": "/health",
        }

    @app.get("/.well-known/openai-apps-challenge", response_class=PlainTextResponse)
    async def openai_apps_challenge() -> str:
        """Domain verification token, when one is configured."""
        if not settings.openai_apps_challenge:
            raise HTTPException(status_code=404, detail="Not configured")
        return settings.openai_apps_challenge

    # --- Mount all API routes ---
    register_routes(app)

    return app


# ------------------------------------------------------------------
# Module-level ASGI export (for uvicorn soul_builder_server.app:app)
# ------------------------------------------------------------------
app = create_app()


# ------------------------------------------------------------------
# CLI entry point
# ------------------------------------------------------------------

def cli() -> None:
    """Console-script entry point: ``soul-builder-server``."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "soul_builder_server.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )
