"""
Produtos API — FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app(database) returns a configured FastAPI
       instance bound to the given storage handle.
Who:   uvicorn (`uvicorn produtos_api.main:app`), `python -m produtos_api`,
       and tests (with an in-memory database).

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                   FastAPI App                        │
    │                                                      │
    │  Middleware Chain:                                   │
    │  ┌──────────┐ ┌─────────────┐ ┌──────────┐           │
    │  │  Req ID  │→│  Logging    │→│  CORS    │           │
    │  └──────────┘ └─────────────┘ └──────────┘           │
    │                                                      │
    │  Routes:                                             │
    │  ┌────────┐ ┌──────────┐ ┌─────────────────────────┐ │
    │  │ GET /  │ │ /health  │ │ /produtos, /produtos/id │ │
    │  └────────┘ └──────────┘ └─────────────────────────┘ │
    │                                                      │
    │  Exception Handlers:                                 │
    │  ┌──────────────────────────────────────────────┐    │
    │  │ Validation→400 │ NotFound→404 │ DB/other→500 │    │
    │  └──────────────────────────────────────────────┘    │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log the listening address
    Shutdown: dispose the database engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from produtos_api import __version__
from produtos_api.config import settings
from produtos_api.database import Database
from produtos_api.exceptions import DatabaseError, NotFoundError, ValidationError
from produtos_api.middleware.logging import RequestLoggingMiddleware
from produtos_api.middleware.request_id import RequestIDMiddleware, request_id_var
from produtos_api.routes import health, produtos

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Erro interno do servidor"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout
    (Docker captures stdout). Called once at startup.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our own access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging and banner. Shutdown: close the connection pool.

    The database handle itself is created by create_app, not here, so that
    clients which skip lifespan events (httpx ASGITransport) still get it.
    """
    setup_logging()
    base_url = f"http://localhost:{settings.port}"
    logger.info("🚀 Servidor rodando na porta %d", settings.port)
    logger.info("📡 Health check: %s/health", base_url)
    logger.info("📦 Produtos: %s/produtos", base_url)

    yield

    logger.info("Produtos API shutting down...")
    await app.state.database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to the API's JSON envelopes.

    Handler table:
        ValidationError         → 400 {success: false, message}
        RequestValidationError  → 400 {success: false, message} (malformed body)
        NotFoundError           → 404 {success: false, message}
        DatabaseError           → 500 {success: false, error}
        Exception (fallback)    → 500 {success: false, error}

    500 bodies never contain driver messages; those are logged server-side.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Malformed request: %s", rid, exc.errors())
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": "Requisição inválida"},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content={"success": False, "message": exc.message},
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        # The traceback was already logged where the error was converted
        rid = request_id_var.get("")
        logger.error("[%s] Database error | Context: %s", rid, exc.context)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": INTERNAL_ERROR_MESSAGE},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": INTERNAL_ERROR_MESSAGE},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: Storage handle to serve requests from. Defaults to one built
                  from environment settings (PostgreSQL via asyncpg).

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Produtos API",
        description="CRUD de produtos sobre uma tabela relacional `produtos`.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.database = database or Database.from_settings(settings)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added executes first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(produtos.router)

    return app


# Module-level instance for `uvicorn produtos_api.main:app`
app = create_app()
