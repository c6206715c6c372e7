"""
QuickNotes — FastAPI Application Factory
=========================================

What:  Creates and configures the JSON API application.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn quicknotes.main:app) or `python -m quicknotes`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌──────┐ ┌──────┐        │
    │  │ Req ID   │→│ Logging  │→│ GZip │→│ CORS │        │
    │  └──────────┘ └──────────┘ └──────┘ └──────┘        │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────┐ ┌─────────────────┐   │
    │  │ GET/POST/PUT/DELETE notes│ │ GET /health     │   │
    │  └──────────────────────────┘ └─────────────────┘   │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ DB/other→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create the schema if missing
    Shutdown: dispose the database engine (close pooled connections)
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from quicknotes import __version__
from quicknotes.config import settings
from quicknotes.database import dispose_engine, init_models
from quicknotes.exceptions import DatabaseError, NotFoundError, ValidationError
from quicknotes.logging_config import setup_logging
from quicknotes.middleware.logging import RequestLoggingMiddleware
from quicknotes.middleware.request_id import RequestIDMiddleware, request_id_var
from quicknotes.routes import health, notes
from quicknotes.schemas.note import ErrorResponse

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "Something went wrong"
MALFORMED_REQUEST_MESSAGE = "Request body is malformed or has fields of the wrong type"


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("QuickNotes API %s starting up...", __version__)

    await init_models()

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("QuickNotes API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    rid = request_id_var.get("")
    body = ErrorResponse(error=error, message=message, details=details, request_id=rid)
    # The catch-all 500 is sent from outside RequestIDMiddleware, so the
    # header is set here as well
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers={"X-Request-ID": rid},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the QuickNotes error hierarchy onto HTTP responses.

    Handler hierarchy:
        ValidationError          → 400 Bad Request
        RequestValidationError   → 400 Bad Request (malformed JSON / wrong types)
        NotFoundError            → 404 Not Found
        DatabaseError            → 500 Internal Server Error
        Exception (fallback)     → 500 Internal Server Error, fixed message

    Every body has the ErrorResponse shape. 500 bodies never include the
    cause; it is logged server-side.
    """

    @app.exception_handler(ValidationError)
    async def on_invalid_note(request: Request, exc: ValidationError):
        logger.warning("[%s] Rejected note fields: %s", request_id_var.get(""), exc.message)
        return _error_response(400, "validation_error", exc.message, exc.context)

    @app.exception_handler(RequestValidationError)
    async def on_malformed_request(request: Request, exc: RequestValidationError):
        problems = [
            {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", "")}
            for error in exc.errors()
        ]
        logger.warning("[%s] Malformed request: %s", request_id_var.get(""), problems)
        return _error_response(400, "validation_error", MALFORMED_REQUEST_MESSAGE, {"errors": problems})

    @app.exception_handler(NotFoundError)
    async def on_missing_note(request: Request, exc: NotFoundError):
        return _error_response(404, "not_found", exc.message)

    @app.exception_handler(DatabaseError)
    async def on_store_failure(request: Request, exc: DatabaseError):
        logger.error("[%s] Store failure: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return _error_response(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def on_unexpected_error(request: Request, exc: Exception):
        """Catch-all for anything no other handler claimed."""
        logger.error("[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=exc)
        return _error_response(500, "internal_server_error", UNEXPECTED_ERROR_MESSAGE)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="QuickNotes API",
        description="Create, read, update and delete short categorized notes.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(notes.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Serve the API on settings.host:settings.port."""
    uvicorn.run(
        "quicknotes.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
