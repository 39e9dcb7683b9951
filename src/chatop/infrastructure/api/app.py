"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
and lifecycle handlers. There is no module-level application instance;
servers use ``create_app`` as a factory.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import RequestResponseEndpoint

from chatop.core.config import Settings, get_settings
from chatop.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
    new_correlation_id,
)
from chatop.infrastructure.api.errors import register_exception_handlers
from chatop.infrastructure.auth import Authenticator, JWTService
from chatop.infrastructure.auth.middleware import AuthenticationMiddleware
from chatop.infrastructure.persistence.database import DatabaseManager, init_database
from chatop.infrastructure.storage.picture_storage import PictureStorage

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events for the application.

    Args:
        app: FastAPI application instance.

    Yields:
        None: Control is yielded to the application during its lifetime.
    """
    settings: Settings = app.state.settings

    # Startup
    configure_logging(settings)
    logger.info(
        "Starting ChaTop",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Upload directory ready", path=str(upload_dir))

    try:
        await init_database(app.state.db)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    # Shutdown
    logger.info("Shutting down ChaTop")
    await app.state.db.disconnect()
    logger.info("Database connection closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Every long-lived collaborator (database manager, token service,
    authenticator, picture storage) is built here from ``settings`` and
    stored on ``app.state``.

    Args:
        settings: Application settings. Loaded from the environment when omitted.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Rental listing backend with bearer token authentication",
        docs_url=settings.docs_url,
        redoc_url=None,
        openapi_url=settings.openapi_url,
        lifespan=lifespan,
    )

    jwt_service = JWTService(settings.secret_key.get_secret_value())
    app.state.settings = settings
    app.state.db = DatabaseManager(settings)
    app.state.jwt_service = jwt_service
    app.state.authenticator = Authenticator(jwt_service, exempt_paths=settings.exempt_paths)
    app.state.picture_storage = PictureStorage(settings)

    register_health_check(app)
    register_routes(app)
    register_exception_handlers(app)
    register_middleware(app)

    return app


def register_health_check(app: FastAPI) -> None:
    """Register the health check endpoint.

    Args:
        app: FastAPI application instance.
    """
    settings: Settings = app.state.settings

    @app.get("/health", tags=["health"])
    async def health_check():
        """Health check endpoint, including database connectivity."""
        if await app.state.db.check_connection():
            return {
                "status": "healthy",
                "service": settings.app_name,
                "version": settings.app_version,
                "database": "connected",
            }
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "service": settings.app_name,
                "database": "disconnected",
            },
        )


def register_routes(app: FastAPI) -> None:
    """Register API routes and the picture directory.

    Args:
        app: FastAPI application instance.
    """
    from chatop.infrastructure.api.routes import (
        auth_router,
        messages_router,
        rentals_router,
        users_router,
    )

    settings: Settings = app.state.settings

    app.include_router(auth_router, prefix=settings.auth_prefix, tags=["auth"])
    app.include_router(users_router, prefix=f"{settings.api_prefix}/user", tags=["users"])
    app.include_router(rentals_router, prefix=f"{settings.api_prefix}/rentals", tags=["rentals"])
    app.include_router(messages_router, prefix=f"{settings.api_prefix}/messages", tags=["messages"])

    # Served behind the authentication gate like any other path
    app.mount(
        f"/{settings.upload_url_path}",
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )


def register_middleware(app: FastAPI) -> None:
    """Register middleware.

    Starlette runs the last added middleware first, so requests go through
    CORS, then request logging, then the authentication gate.

    Args:
        app: FastAPI application instance.
    """
    settings: Settings = app.state.settings

    app.add_middleware(AuthenticationMiddleware)

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Log all requests and add a correlation ID."""
        correlation_id = request.headers.get("X-Correlation-ID", new_correlation_id())
        bind_correlation_id(correlation_id)

        logger.info(
            "Request started",
            method=request.method,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
            )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
