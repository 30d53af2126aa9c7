"""
PURPOSE: FastAPI application factory and lifecycle management for the Cosmocore service.

Initializes the FastAPI application with:
- The system (GET /health) and webhook (POST /webhook) routers
- Exception handlers for validation and unexpected errors
- Startup: logging setup, connection pool creation, database reachability probe
- Shutdown: connection pool disposal
- Version metadata from the installed distribution
"""

from contextlib import asynccontextmanager
from importlib import metadata
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cosmocore.api import api_router
from cosmocore.config.settings import Settings, get_settings
from cosmocore.db.engine import build_engine, build_session_factory, ping
from cosmocore.schemas.system import ServiceInfo
from cosmocore.utils.logger import setup_logging, get_logger


logger = get_logger(__name__)


# ════════════════════════════════════════════════════════════════
# Lifecycle Events
# ════════════════════════════════════════════════════════════════


async def on_startup(app: FastAPI) -> None:
    """
    PURPOSE: Build the shared connection pool and verify the database answers.

    CALLED BY: FastAPI lifespan startup

    Tasks:
        1. Setup logging with configured level
        2. Create the async engine and session factory, stored on app.state
        3. Run SELECT 1; an unreachable database aborts startup

    Raises:
        Exception: Driver error when the database cannot be reached.
    """
    settings: Settings = app.state.settings

    setup_logging(settings.LOG_LEVEL)
    logger.info(
        "application_startup_starting",
        version=app.version,
        log_level=settings.LOG_LEVEL,
        pool_size=settings.DB_POOL_SIZE,
    )

    engine = build_engine(settings)
    try:
        await ping(engine)
    except Exception as e:
        logger.critical(
            "database_connection_failed",
            error=str(e),
            exception_type=type(e).__name__,
        )
        await engine.dispose()
        raise

    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    logger.info("database_connected")

    logger.info("application_startup_complete")


async def on_shutdown(app: FastAPI) -> None:
    """
    PURPOSE: Close pooled database connections.

    CALLED BY: FastAPI lifespan shutdown
    """
    logger.info("application_shutdown_starting")

    engine = getattr(app.state, "engine", None)
    if engine is not None:
        await engine.dispose()
        logger.info("database_pool_disposed")

    logger.info("application_shutdown_complete")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    PURPOSE: Manage application lifespan with startup and shutdown events.

    CALLED BY: FastAPI during application startup and shutdown

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    # Startup
    await on_startup(app)

    yield

    # Shutdown
    await on_shutdown(app)


# ════════════════════════════════════════════════════════════════
# Exception Handlers
# ════════════════════════════════════════════════════════════════


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    PURPOSE: Handle Pydantic validation errors with consistent JSON response.

    CALLED BY: FastAPI when request validation fails

    Args:
        request: HTTP request that failed validation
        exc: RequestValidationError with validation details

    Returns:
        JSONResponse: 422 response with validation details
    """
    logger.warning(
        "request_validation_failed",
        path=request.url.path,
        method=request.method,
        error_count=len(exc.errors())
    )

    safe_errors = jsonable_encoder(
        exc.errors(),
        custom_encoder={
            ValueError: lambda e: str(e),
            Exception: lambda e: str(e),
        },
    )

    return JSONResponse(
        status_code=422,
        content={
            "status": "error",
            "detail": "Request validation failed",
            "errors": safe_errors,
        },
    )


async def general_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    PURPOSE: Handle unexpected exceptions with logging and safe error response.

    CALLED BY: FastAPI exception handler middleware

    Args:
        request: HTTP request that raised exception
        exc: Exception that was raised

    Returns:
        JSONResponse: Safe error response without exposing internals
    """
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exception_type=type(exc).__name__
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "status": "error",
            "detail": "Internal server error",
        },
    )


# ════════════════════════════════════════════════════════════════
# FastAPI Application Factory
# ════════════════════════════════════════════════════════════════


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    PURPOSE: Create and configure FastAPI application with routers and handlers.

    CALLED BY: run() through uvicorn's factory mode, tests

    Args:
        settings: Settings to use; loaded from the environment when omitted.

    Returns:
        FastAPI: Configured FastAPI application ready to run

    Raises:
        pydantic.ValidationError: If settings are loaded and DATABASE_URL is missing
    """
    if settings is None:
        settings = get_settings()

    try:
        version = metadata.version("cosmocore")
    except metadata.PackageNotFoundError:
        version = "unknown"

    app = FastAPI(
        title="Cosmocore",
        description="Trading signal ingestion",
        version=version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # ────────────────────────────────────────────────────────────
    # Routes
    # ────────────────────────────────────────────────────────────

    app.include_router(api_router)

    @app.get("/", tags=["root"], response_model=ServiceInfo)
    async def root() -> ServiceInfo:
        """
        PURPOSE: Root endpoint for API availability check.

        Returns:
            ServiceInfo: Service name and version
        """
        return ServiceInfo(status="ok", service="Cosmocore API", version=version)

    # ────────────────────────────────────────────────────────────
    # Exception Handlers
    # ────────────────────────────────────────────────────────────

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    return app


def run() -> None:
    """
    PURPOSE: Run the service with Uvicorn on the configured host and port.

    Usage:
        cosmocore
        OR
        python -m cosmocore.main
        OR
        uvicorn cosmocore.main:create_app --factory --host 0.0.0.0 --port 8000
    """
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "cosmocore.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
