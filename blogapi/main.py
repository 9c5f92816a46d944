"""
Blog API — FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
How:   `create_app()` binds a Settings object and a Database handle to
       `app.state`, then registers middleware, exception handlers, and
       routers. Tests call it with their own Settings and an in-memory
       Database; uvicorn imports the module-level `app`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → CORS           │
    │                                                     │
    │  Routes:                                            │
    │    /auth/signup  /auth/login                        │
    │    /posts  /posts/{id}   (writes behind the guard)  │
    │    /health  /                                       │
    │                                                     │
    │  Exception Handlers:                                │
    │    BlogError → STATUS_TABLE │ 422 → 400 │ * → 500   │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blogapi import __version__
from blogapi.config import Settings, settings as default_settings
from blogapi.database import Database
from blogapi.exceptions import BlogError, StoreError, resolve_status
from blogapi.middleware.logging import RequestLoggingMiddleware
from blogapi.middleware.request_id import (
    RequestIDMiddleware,
    request_id_var,
    unexpected_error_response,
)
from blogapi.routes import auth, health, posts

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure the root logger once at startup.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging.
    Shutdown: dispose the database engine so pooled connections close.
    """
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)
    logger.info("Blog API %s starting up", __version__)

    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)

    yield

    logger.info("Blog API shutting down...")
    await app.state.database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_body(error: str, message: str, details=None) -> dict:
    body = {"error": error, "message": message, "request_id": request_id_var.get("")}
    if details is not None:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to the fixed JSON error shape.

    BlogError               → status from exceptions.STATUS_TABLE
    RequestValidationError  → 400 validation_error
    Exception (fallback)    → 500 internal_server_error
    """

    @app.exception_handler(BlogError)
    async def handle_blog_error(request: Request, exc: BlogError):
        status_code, error_code = resolve_status(exc)
        rid = request_id_var.get("")

        details = None
        if isinstance(exc, StoreError):
            details = exc.detail
            logger.error("[%s] %s: %s | Context: %s", rid, exc.message, exc.detail, exc.context)
        elif status_code >= 500:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
        else:
            logger.info("[%s] Rejected with %d: %s", rid, status_code, exc.message)

        return JSONResponse(
            status_code=status_code,
            content=error_body(error_code, exc.message, details),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.info("[%s] Request validation failed: %s", rid, exc.errors())
        return JSONResponse(
            status_code=400,
            content=error_body(
                "validation_error",
                "Request body or parameters are invalid",
                jsonable_encoder(exc.errors()),
            ),
        )

    # Last resort for errors raised outside RequestIDMiddleware, which
    # renders the 500 for anything escaping the routes.
    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = getattr(request.state, "request_id", "")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return unexpected_error_response(rid, exc)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Assemble the application.

    Args:
        app_settings: configuration; defaults to the environment-loaded settings
        database: store handle; defaults to one built from `app_settings`.
            The engine connects lazily, so construction does no I/O.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="Blog API",
        description=(
            "Minimal blog backend: signup/login with bearer tokens and CRUD for "
            "posts owned by the authenticated user.\n\n"
            "Auth: send `Authorization: Bearer <token>` on write routes."
        ),
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.database = database or Database.from_settings(app_settings)

    # Executes in reverse order of addition: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials="*" not in app_settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(posts.router)
    app.include_router(health.router)

    return app


app = create_app()
