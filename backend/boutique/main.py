"""
Boutique Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app(settings) builds the engine, the services
       and the middleware chain, and returns a configured FastAPI instance.
Who:   Called by uvicorn (boutique.main:app), `python -m boutique`, and the
       test suite with its own Settings.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │  Req ID  │→│  Logging        │→│  CORS        │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  /api/register  /api/login  /api/products           │
    │  /products  /products/{id}  /health  /images/*      │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ Auth→401 │ Authz→403 │ 404 │ 500  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration
    3. Probe the store (SELECT 1); failure aborts startup
    Shutdown:
    1. Dispose database engine (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from boutique import __version__
from boutique.config import Settings, settings as default_settings
from boutique.database import (
    create_engine_from_settings,
    create_session_factory,
    dispose_engine,
    ping,
)
from boutique.exceptions import (
    AuthError,
    AuthzError,
    FileStorageError,
    InvalidCredentialsError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from boutique.middleware.logging import RequestLoggingMiddleware
from boutique.middleware.request_id import RequestIDMiddleware, request_id_var
from boutique.routes import auth, catalog, health, products
from boutique.security import PasswordHasher, TokenIssuer
from boutique.services.auth_service import AuthService
from boutique.services.catalog_service import CatalogService
from boutique.services.image_store import ImageStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-query and per-request noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, configuration check, store probe.
    Shutdown: dispose the engine.

    An unreachable store is the one fatal condition: StoreError escapes the
    lifespan and uvicorn refuses to start.
    """
    config: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(config.log_level)
    logger.info("=" * 60)
    logger.info("Boutique Backend starting up...")

    # Reported loudly but not fatal: tokens still work, only with a weak key
    try:
        config.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        logger.error("Fix the configuration and restart the server.")

    try:
        await ping(app.state.engine)
    except Exception as e:
        logger.error("Database connection failed: %s", str(e))
        raise StoreError(
            message="Could not connect to the database.",
            context={"error_type": type(e).__name__},
        ) from e
    logger.info("Connected to the database")

    logger.info("Image directory: %s", app.state.image_store.image_dir)
    logger.info("Server ready at http://%s:%d", config.backend_host, config.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Boutique Backend shutting down...")
    await dispose_engine(app.state.engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error(status_code: int, error: str, message: str, details=None, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "message": message,
            "details": details,
            "request_id": request_id_var.get(""),
        },
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        ValidationError          → 400 Bad Request
        RequestValidationError   → 400 Bad Request (malformed body/form)
        InvalidCredentialsError  → 400 Bad Request (login)
        AuthError                → 401 Unauthorized
        AuthzError               → 403 Forbidden
        NotFoundError            → 404 Not Found
        StoreError               → 500 Internal Server Error
        FileStorageError         → 500 Internal Server Error
        Exception (fallback)     → 500 Internal Server Error

    Responses never carry stack traces, SQL or file paths; those go to the log.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error(400, "validation_error", exc.message, exc.context or None)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = [
            {"field": ".".join(str(part) for part in err["loc"][1:]), "message": err["msg"]}
            for err in exc.errors()
        ]
        logger.warning("[%s] Malformed request: %s", request_id_var.get(""), errors)
        return _error(400, "validation_error", "The request contains invalid fields.", {"errors": errors})

    @app.exception_handler(InvalidCredentialsError)
    async def handle_invalid_credentials(request: Request, exc: InvalidCredentialsError):
        return _error(400, "invalid_credentials", exc.message)

    @app.exception_handler(AuthError)
    async def handle_auth_error(request: Request, exc: AuthError):
        return _error(401, "auth_error", exc.message, headers={"WWW-Authenticate": "Bearer"})

    @app.exception_handler(AuthzError)
    async def handle_authz_error(request: Request, exc: AuthzError):
        return _error(403, "forbidden", exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error(404, "not_found", exc.message)

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        logger.error("[%s] Store error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return _error(500, "server_error", exc.message)

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        logger.error("[%s] File storage error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return _error(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True)
        return _error(500, "internal_server_error", "An unexpected error occurred. Please try again later.")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(config: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Every stateful collaborator (engine, session factory, hasher, token
    issuer, image store, services) is built here and stored on app.state;
    route handlers reach them through boutique.dependencies.
    """
    config = config or default_settings

    app = FastAPI(
        title="Boutique API",
        description="Product catalog, customer accounts and session tokens for the boutique storefront.",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Collaborators ─────────────────────────────────────────────────────
    engine = create_engine_from_settings(config)
    image_store = ImageStore(config.image_dir, config.max_image_size)
    token_issuer = TokenIssuer(config.jwt_secret, algorithm=config.jwt_algorithm)

    app.state.settings = config
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.image_store = image_store
    app.state.token_issuer = token_issuer
    app.state.auth_service = AuthService(PasswordHasher(), token_issuer)
    app.state.catalog_service = CatalogService(image_store, config.image_url_prefix)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added executes first: RequestID → Logging → CORS → routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_methods=config.cors_methods_list,
        allow_headers=config.cors_headers_list,
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(auth.router)
    app.include_router(products.router)
    app.include_router(catalog.router)
    app.include_router(health.router)

    # Uploaded product images
    app.mount(
        config.image_url_prefix,
        StaticFiles(directory=str(image_store.image_dir)),
        name="images",
    )

    return app


# uvicorn expects `boutique.main:app` to be importable
app = create_app()
