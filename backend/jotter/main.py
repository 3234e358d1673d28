"""
Jotter Backend: FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, the note-creation rate limiter,
       exception handlers and routers, and returns the app.
Who:   uvicorn (uvicorn jotter.main:app) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌─────────────────┐      │
    │  │  Req ID  │→│ Logging  │→│ Method Override │      │
    │  └──────────┘ └──────────┘ └─────────────────┘      │
    │                                                     │
    │  Routes:                                            │
    │  GET /notes   POST /notes   GET /notes/search       │
    │  PUT /notes/{id}            GET /health             │
    │                                                     │
    │  app.state.note_rate_limiter (POST /notes only)     │
    │                                                     │
    │  Fallback: unexpected exception → 500 text          │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log banner
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from jotter import __version__
from jotter.config import settings
from jotter.database import dispose_engine
from jotter.errors import AppError
from jotter.middleware.logging import RequestLoggingMiddleware
from jotter.middleware.method_override import MethodOverrideMiddleware
from jotter.middleware.request_id import RequestIDMiddleware
from jotter.responses import error_response
from jotter.routes import health, notes
from jotter.services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the whole application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output: stdout (collected by the container runtime)
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-query and per-request chatter from libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("Jotter Backend %s starting up...", __version__)
    logger.info(
        "Note creation limit: %d per %ds per client",
        settings.note_create_rate_limit,
        settings.note_create_rate_window,
    )
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Jotter Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Route-level failures arrive as Result errors and never reach this
    handler. Anything unexpected still leaves through error_response().
    """

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Generic 500; the traceback is logged, never returned."""
        logger.error("Unexpected error on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
        return error_response(AppError.internal(error_type=type(exc).__name__))


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Each call builds a fresh app with its own rate limiter, so tests can
    create isolated instances.
    """
    app = FastAPI(
        title="Jotter API",
        description="Create, list, search and update short text notes.",
        version=__version__,
        lifespan=lifespan,
    )

    # Constructed once per app; handlers get it through a dependency
    app.state.note_rate_limiter = RateLimiter(
        limit=settings.note_create_rate_limit,
        window_seconds=settings.note_create_rate_window,
    )

    # Middleware executes in REVERSE order of addition.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(MethodOverrideMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(notes.router)
    app.include_router(health.router)

    return app


app = create_app()
