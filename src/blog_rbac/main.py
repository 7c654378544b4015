"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from blog_rbac import __version__
from blog_rbac.api import api_router
from blog_rbac.config import settings
from blog_rbac.core.errors.handlers import register_exception_handlers
from blog_rbac.core.logging import RequestLoggingMiddleware, configure_logging
from blog_rbac.core.permissions import get_role_matrix


logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Builds the role matrix before the first request is served.
    """
    matrix = get_role_matrix()
    logger.info(
        "application_startup",
        app_name=settings.app_name,
        environment=settings.environment,
        roles=len(matrix.roles),
        permissions=len(matrix.catalog),
    )

    yield

    logger.info("application_shutdown")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Role-based access control for the blog CMS",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
    )

    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers for RFC 7807 error responses
    register_exception_handlers(app)

    app.include_router(api_router)

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
