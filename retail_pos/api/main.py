"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from retail_pos.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from retail_pos.api.middleware.error_handler import setup_exception_handlers
from retail_pos.api.routes import (
    dashboard_router,
    expenses_router,
    health_router,
    invoices_router,
    products_router,
    reports_router,
)
from retail_pos.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Runs migrations and opens the connection pool on startup, closes the
    pool on shutdown.
    """
    settings = get_settings()
    configure_logging()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        debug=settings.api.debug,
        db_path=str(settings.storage.db_path),
    )

    try:
        from retail_pos.infrastructure.storage.sqlite import get_pool
        from retail_pos.infrastructure.storage.sqlite.migrations import migrate

        await migrate()
        logger.info("database_initialized")

        await get_pool()
        logger.info("connection_pool_ready")

    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    logger.info("application_started")

    yield

    logger.info("application_stopping")

    try:
        from retail_pos.api.dependencies import reset_dashboard_use_case
        from retail_pos.infrastructure.storage.sqlite import close_pool, reset_stores

        reset_dashboard_use_case()
        reset_stores()
        await close_pool()

    except Exception as e:
        logger.warning("connection_pool_close_failed", error=str(e))

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Catalog, atomic checkout, expenses and sales reporting",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Setup exception handlers
    setup_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(products_router)
    app.include_router(invoices_router)
    app.include_router(expenses_router)
    app.include_router(dashboard_router)
    app.include_router(reports_router)

    # Root health endpoint (for k8s/docker health checks)
    @app.get("/health", tags=["health"])
    async def root_health() -> dict[str, str]:
        """Simple health check at root level."""
        return {
            "status": "healthy",
            "version": settings.app_version,
        }

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "retail_pos.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
