# ==============================================================================
# MAIN APPLICATION - FastAPI Entry Point
# ==============================================================================
# Application factory with lifespan events, middleware, and routing
# ==============================================================================

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from app.core.constants import ErrorMessages, SuccessMessages
from app.core.settings import Settings, settings
from app.core.exceptions import AppException, DatabaseError, ValidationError
from app.database.adapters.base_adapter import BaseDatabaseAdapter
from app.database.factory import create_adapter
from app.database.setup import setup_database
from app.api.router import api_router
from app.middleware.request_logger import RequestLoggerMiddleware
from app.schemas.base import HealthResponse, StatusResponse

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)


# ==============================================================================
# LIFESPAN MANAGEMENT
# ==============================================================================

async def open_database(config: Settings) -> Optional[BaseDatabaseAdapter]:
    """
    Connect the configured engine and bring its schema up to date.

    Returns:
        Connected adapter, or None when the engine is unreachable outside production
    """
    adapter = create_adapter(config)
    try:
        await adapter.connect()
    except DatabaseError as e:
        logger.error(f"Failed to connect to {adapter.database_type.value}: {e.message}")
        # Serve health checks anyway outside production
        if config.is_production:
            raise
        return None

    await setup_database(adapter, config)
    return adapter


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Startup: connect the adapter, create schema, seed reference data
    - Shutdown: close the adapter
    """
    # Startup
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT.value}")
    logger.info(f"Database: {settings.database_type.value}")

    app.state.db = await open_database(settings)

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if app.state.db is not None:
        await app.state.db.disconnect()
        app.state.db = None
    logger.info("Application shutdown complete")


# ==============================================================================
# APPLICATION FACTORY
# ==============================================================================

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.db = None

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggerMiddleware)

    # Register exception handlers
    register_exception_handlers(app)

    # Include routers
    app.include_router(api_router)

    # Register health endpoints
    register_health_endpoints(app)

    return app


# ==============================================================================
# EXCEPTION HANDLERS
# ==============================================================================

def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> JSONResponse:
        """Handle application exceptions."""
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Report malformed request bodies in the common error shape."""
        errors = {
            ".".join(str(part) for part in error["loc"]): error["msg"]
            for error in exc.errors()
        }
        error = ValidationError(errors=errors)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(f"Unexpected error: {exc}")

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc) if settings.DEBUG else ErrorMessages.INTERNAL},
        )


# ==============================================================================
# HEALTH ENDPOINTS
# ==============================================================================

def register_health_endpoints(app: FastAPI) -> None:
    """Register health check endpoints."""

    @app.get(
        f"{settings.API_PREFIX}/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health check",
        description="Check application and database health.",
    )
    async def health_check(request: Request) -> HealthResponse:
        """Application health check."""
        adapter = request.app.state.db
        db_healthy = adapter is not None and await adapter.health_check()

        return HealthResponse(
            status="ok",
            message=SuccessMessages.API_RUNNING,
            database="connected" if db_healthy else "disconnected",
        )

    @app.get(
        "/",
        response_model=StatusResponse,
        tags=["Health"],
        summary="Root endpoint",
    )
    async def root() -> StatusResponse:
        """API status banner."""
        return StatusResponse(
            status=SuccessMessages.API_RUNNING,
            env=settings.ENVIRONMENT.value,
        )


# Create application instance
app = create_app()


# ==============================================================================
# DEVELOPMENT RUNNER
# ==============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
