"""
JournalFit Backend — FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn journalfit.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │ Req ID   │→│  Logging        │→│  CORS        │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────────┐ ┌──────────────┐  │
    │  │ POST /documents/analyze      │ │ GET /health  │  │
    │  │ POST /documents/generate-... │ └──────────────┘  │
    │  └──────────────────────────────┘                   │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ ProviderRequest→status │ 500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration; a missing provider key aborts startup
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from journalfit import __version__
from journalfit.config import settings
from journalfit.exceptions import (
    JournalFitError,
    ProviderRequestError,
)
from journalfit.middleware.logging import RequestLoggingMiddleware
from journalfit.middleware.request_id import RequestIDMiddleware, request_id_var
from journalfit.routes import documents, health

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Called once during app startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # SDK transports log every request at INFO
    for noisy in ("uvicorn.access", "httpcore", "httpx", "openai", "anthropic"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("JournalFit Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.critical("Configuration error: %s", str(e))
        raise

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("JournalFit Backend shut down.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        RequestValidationError  → 400 (body failed Pydantic validation)
        ProviderRequestError    → classified status, {"message", "provider"}
        JournalFitError (base)  → 500
        Exception (fallback)    → 500, stack trace logged server-side only
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        errors = [
            {"field": ".".join(str(part) for part in err.get("loc", ())[1:]), "message": err.get("msg")}
            for err in exc.errors()
        ]
        logger.warning("[%s] Invalid request body: %s", rid, errors)
        return JSONResponse(
            status_code=400,
            content={"message": "Request body is invalid", "details": errors},
        )

    @app.exception_handler(ProviderRequestError)
    async def handle_provider_error(request: Request, exc: ProviderRequestError):
        """The provider failed; surface the classified status and its message."""
        rid = request_id_var.get("")
        logger.error(
            "[%s] Provider %s failed (%d): %s",
            rid,
            exc.provider,
            exc.status,
            exc.message,
        )
        return JSONResponse(
            status_code=exc.status,
            content={"message": exc.message, "provider": exc.provider},
        )

    @app.exception_handler(JournalFitError)
    async def handle_app_error(request: Request, exc: JournalFitError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={"message": "An internal error occurred. Please try again later."},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"message": "An unexpected error occurred. Please try again later."},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="JournalFit API",
        description=(
            "Recommends journals for a manuscript and reformats it to a journal's "
            "style guidelines using OpenAI, Anthropic Claude or Google Gemini."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Content-Disposition"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(documents.router)
    app.include_router(health.router)

    return app


app = create_app()
