"""
Portfolio API - FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers, routers and the
       /uploads static mount; lifespan() handles startup and shutdown.
Who:   uvicorn (`uvicorn portfolio_api.main:app`) or the `portfolio-api`
       console script.

Application Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                     FastAPI App                         │
    │  Middleware:  Request ID → Logging → GZip → CORS        │
    │  Routes:      /resources  /projects  /profile           │
    │               /messages   /health    /uploads (static)  │
    │  Errors:      Validation→400  NotFound→404              │
    │               StorageUnavailable→503  other→500         │
    └─────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Configure logging
    2. Ensure the upload directory exists
    3. Create missing tables (failure is logged, not fatal: requests will
       answer 503 until the database is reachable)

    Shutdown:
    1. Dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from portfolio_api import __version__
from portfolio_api.config import settings
from portfolio_api.database import create_tables, dispose_engine
from portfolio_api.exceptions import (
    DatabaseError,
    FileStorageError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
)
from portfolio_api.middleware.logging import RequestLoggingMiddleware
from portfolio_api.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    request_id_var,
)
from portfolio_api.routes import health, messages, profile, projects, resources

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once for the whole application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Access lines come from RequestLoggingMiddleware instead
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("Portfolio API %s starting up...", __version__)
    logger.info("Database: %s", settings.safe_database_url)

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Upload directory: %s", upload_dir.resolve())

    if settings.auto_create_tables:
        try:
            await create_tables()
            logger.info("Database tables ready")
        except (SQLAlchemyError, OSError) as e:
            logger.error("Could not initialize database: %s", str(e))
            logger.error("Continuing without it; data routes will answer 503 until it is reachable.")

    logger.info("Server ready on %s:%d", settings.host, settings.port)
    logger.info("=" * 60)

    yield

    logger.info("Portfolio API shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(
    status_code: int,
    error: str,
    message: str,
    details: dict = None,
    request_id: str = None,
) -> JSONResponse:
    content = {"error": error, "message": message, "request_id": request_id or request_id_var.get("")}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and one JSON error format.

    Handler hierarchy:
        ValidationError, RequestValidationError → 400
        NotFoundError                           → 404
        StorageUnavailableError                 → 503
        FileStorageError, DatabaseError         → 500 (generic message)
        Exception (fallback)                    → 500 (generic message)

    Internal details (paths, SQL, driver errors) are logged, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error_response(400, "validation_error", exc.message, exc.context)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": ".".join(str(p) for p in err.get("loc", ()) if p != "body") or "body",
                "message": err.get("msg", "invalid value"),
            }
            for err in exc.errors()
        ]
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), errors)
        return _error_response(400, "validation_error", "Request contains invalid fields", {"errors": errors})

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error_response(404, "not_found", exc.message)

    @app.exception_handler(StorageUnavailableError)
    async def handle_storage_unavailable(request: Request, exc: StorageUnavailableError):
        logger.error("[%s] Storage unavailable | Context: %s", request_id_var.get(""), exc.context)
        response = _error_response(503, "storage_unavailable", exc.message)
        response.headers["Retry-After"] = "30"
        return response

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("[%s] Database error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return _error_response(500, "server_error", "An internal error occurred. Please try again later.")

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        logger.error("[%s] File storage error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return _error_response(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        # Runs in ServerErrorMiddleware, outside RequestIDMiddleware: the
        # context var is already reset, but the scope state still holds the id
        rid = getattr(request.state, "request_id", "")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        response = _error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again later.",
            request_id=rid,
        )
        if rid:
            response.headers[REQUEST_ID_HEADER] = rid
        return response


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Portfolio API",
        description=(
            "Backend for a personal portfolio site: resources with file uploads, "
            "project case studies, a profile, and contact messages."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # Middleware executes in reverse order of addition (last added = outermost)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials="*" not in settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(resources.router)
    app.include_router(projects.router)
    app.include_router(profile.router)
    app.include_router(messages.router)

    # check_dir=False: the directory is created by FileService/lifespan
    app.mount(
        "/uploads",
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on settings.host:settings.port."""
    import uvicorn

    uvicorn.run(
        "portfolio_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
