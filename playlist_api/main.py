"""
Playlist API: FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       bound to one process-scoped Database handle.
Who:   Called by uvicorn (uvicorn playlist_api.main:app) and by the tests.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Access Log → CORS        │
    │                                                     │
    │  Routes:                                            │
    │    /songs        /songs/{id}                        │
    │    /playlists    /playlists/{id}                    │
    │    /playlists/{playlistId}/songs/{songId}           │
    │    /health       /docs  /redoc  /openapi.json       │
    │                                                     │
    │  Exception Handlers:                                │
    │    NotFound→404 │ Conflict→409 │ other→500           │
    │                                                     │
    │  app.state.database: shared Database handle         │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  setup logging → create missing tables
    Shutdown: dispose the engine (for in-memory SQLite this drops all data)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from playlist_api import __version__
from playlist_api.config import settings
from playlist_api.database import Database
from playlist_api.exceptions import ConflictError, NotFoundError
from playlist_api.middleware.logging import RequestLoggingMiddleware
from playlist_api.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from playlist_api.routes import health, playlists, songs

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout.
    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage the Database handle's lifetime.

    The handle is created by create_app(); here the schema is created before
    the first request and the engine is disposed after the last one. Between
    the two, every request shares `app.state.database`.
    """
    setup_logging()
    database: Database = app.state.database

    logger.info("Playlist API %s starting up...", __version__)
    await database.create_schema()
    if database.is_in_memory:
        logger.warning("Using an in-memory database; all data is lost on shutdown")
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)

    yield

    logger.info("Playlist API shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def current_request_id(request: Request) -> str:
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

    Handler table:
        NotFoundError  → 404, empty body
        ConflictError  → 409 Conflict
        Exception      → 500, generic message (traceback logged only;
                         includes storage failures, which services do not catch)

    The catch-all runs outside the middleware stack, so it sets the
    X-Request-ID header itself.

    Request validation errors keep FastAPI's default 422 response.
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        logger.debug("[%s] %s", current_request_id(request), exc.message)
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        rid = current_request_id(request)
        logger.warning("[%s] Conflict: %s", rid, exc.message)
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={
                "error": "conflict",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = current_request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred.",
                "request_id": rid,
            },
            headers={REQUEST_ID_HEADER: rid},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: storage handle to serve from. Defaults to a new Database
                  for `settings.database_url`. Tests pass their own
                  in-memory handle.

    Returns:
        Configured FastAPI instance with `app.state.database` set.
    """
    app = FastAPI(
        title="Playlist API",
        description="CRUD service for songs and playlists.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.database = database or Database(settings.database_url)

    # Last added runs first: RequestID → Logging → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER, "Location"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(songs.router)
    app.include_router(playlists.router)
    app.include_router(health.router)

    return app


# uvicorn expects `playlist_api.main:app` to be importable
app = create_app()
