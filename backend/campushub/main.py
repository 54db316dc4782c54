"""
CampusHub Backend — FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers and routers;
       uvicorn serves the module-level `app` (uvicorn campushub.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware: Request ID → Logging → Rate Limit →         │
    │              Upload Limit → CORS                         │
    │                                                          │
    │  Routes:                                                 │
    │    /signup /login /clublogin /logout       (auth)        │
    │    /listings /makeproj                     (projects)    │
    │    /clubpost /clublisting                  (clubs)       │
    │    /userpage /people /userdetails          (profiles)    │
    │    /health                                               │
    │    /{path}                                 (frontend)    │
    │                                                          │
    │  Exception Handlers: CampusHubError family → 4xx/503     │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, configuration check, optional create_all, purge of
              expired sessions
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from campushub import __version__
from campushub.auth.sessions import session_gate
from campushub.config import settings
from campushub.database import async_session_factory, create_all, dispose_engine
from campushub.exceptions import (
    AuthFailureError,
    CampusHubError,
    DuplicateIdentityError,
    NotFoundError,
    StoreUnavailableError,
    UnauthorizedError,
    ValidationError,
)
from campushub.middleware.logging import RequestLoggingMiddleware
from campushub.middleware.rate_limit import RateLimitMiddleware
from campushub.middleware.upload_limit import UploadLimitMiddleware
from campushub.middleware.request_id import RequestIDMiddleware, request_id_var
from campushub.routes import auth, clubs, health, profiles, projects, spa

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, at startup.

    Format: 2024-01-15T12:00:00 [INFO] campushub.access: POST /login 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

async def _purge_expired_sessions() -> None:
    try:
        async with async_session_factory() as db:
            removed = await session_gate.purge_expired(db)
            await db.commit()
        logger.info("Purged %d expired sessions", removed)
    except (StoreUnavailableError, SQLAlchemyError, OSError) as e:
        # The server can start without the database; /health reports it
        logger.warning("Session purge skipped: %s", type(e).__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("CampusHub Backend %s starting up (%s)", __version__, settings.environment)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        logger.error("Fix the configuration and restart the server.")

    if settings.db_create_all:
        await create_all()

    await _purge_expired_sessions()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("CampusHub Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_body(
    error: str,
    message: str,
    details: Optional[List[str]] = None,
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "status": "error",
        "error": error,
        "message": message,
        "request_id": request_id_var.get(""),
    }
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to status codes and the shared error body.

        ValidationError / RequestValidationError → 400 validation_error
        DuplicateIdentityError                   → 409 signup_failed
        AuthFailureError                         → 401 auth_failed
        UnauthorizedError                        → 401 unauthorized
        NotFoundError                            → 404 not_found
        StoreUnavailableError / SQLAlchemyError  → 503 store_unavailable
        CampusHubError, Exception                → 500 internal_server_error

    429 rate_limit_exceeded and 413 payload_too_large are answered by the
    middleware before routing, so they have no handler here.

    Response messages are the exception's client-safe message; context dicts
    and driver errors only go to the server log.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        fields = exc.context.get("fields") or ([exc.field] if exc.field else None)
        return JSONResponse(
            status_code=400,
            content=error_body("validation_error", exc.message, fields),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        # Field names only; echoing the input could leak what the client sent
        fields = sorted({
            str(err["loc"][-1])
            for err in exc.errors()
            if err.get("loc")
        })
        logger.warning("[%s] Request validation failed on %s", request_id_var.get(""), fields)
        return JSONResponse(
            status_code=400,
            content=error_body("validation_error", "Invalid request.", fields),
        )

    @app.exception_handler(DuplicateIdentityError)
    async def handle_duplicate_identity(request: Request, exc: DuplicateIdentityError):
        logger.info("[%s] Signup rejected: %s", request_id_var.get(""), exc.context)
        return JSONResponse(
            status_code=409,
            content=error_body("signup_failed", exc.message),
        )

    @app.exception_handler(AuthFailureError)
    async def handle_auth_failure(request: Request, exc: AuthFailureError):
        logger.info("[%s] Authentication failed", request_id_var.get(""))
        return JSONResponse(
            status_code=401,
            content=error_body("auth_failed", exc.message),
        )

    @app.exception_handler(UnauthorizedError)
    async def handle_unauthorized(request: Request, exc: UnauthorizedError):
        return JSONResponse(
            status_code=401,
            content=error_body("unauthorized", exc.message),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=error_body("not_found", exc.message),
        )

    @app.exception_handler(StoreUnavailableError)
    async def handle_store_unavailable(request: Request, exc: StoreUnavailableError):
        logger.error("[%s] Store unavailable: %s", request_id_var.get(""), exc.context)
        return JSONResponse(
            status_code=503,
            content=error_body("store_unavailable", exc.message),
            headers={"Retry-After": "30"},
        )

    @app.exception_handler(SQLAlchemyError)
    async def handle_sqlalchemy_error(request: Request, exc: SQLAlchemyError):
        logger.error(
            "[%s] Unhandled database error: %s",
            request_id_var.get(""),
            type(exc).__name__,
        )
        return JSONResponse(
            status_code=503,
            content=error_body("store_unavailable", StoreUnavailableError().message),
            headers={"Retry-After": "30"},
        )

    @app.exception_handler(CampusHubError)
    async def handle_campushub_error(request: Request, exc: CampusHubError):
        logger.error("[%s] Unhandled application error: %s", request_id_var.get(""), exc.context)
        return JSONResponse(
            status_code=500,
            content=error_body("internal_server_error", "An unexpected error occurred."),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            type(exc).__name__,
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again later.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Build a fully configured application.

    Each call returns an independent app with its own rate-limit counters,
    which the tests rely on.
    """
    app = FastAPI(
        title="CampusHub API",
        description="Campus community backend: accounts, projects, clubs and member profiles.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first:
    # RequestID → Logging → RateLimit → UploadLimit → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,     # the session cookie must cross origins in dev
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(UploadLimitMiddleware)
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(projects.router)
    app.include_router(clubs.router)
    app.include_router(profiles.router)
    # Catch-all; must stay last
    app.include_router(spa.router)

    return app


app = create_app()
