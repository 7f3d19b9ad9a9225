"""
Map Explorer HTTP application.

Serves the geocode proxy, the viewer session API that drives server-held
map views, and a health check.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from contextlib import asynccontextmanager

from app.api import health_router, search_router, viewer_router
from app.config.loader import activate_environment
from app.core.dependencies import service_container
from app.core.error_handlers import setup_error_handlers
from app.core.logging import configure_logging
from app.middleware import RequestContextMiddleware

settings = activate_environment()

configure_logging(settings.log_level.value, settings.log_format)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the upstream clients and session registry; drop open sessions on shutdown."""
    logger.info(
        f"Starting {settings.app_name} v{settings.app_version}",
        extra={"environment": settings.environment.value},
    )
    service_container.initialize_services()
    app.state.service_container = service_container
    try:
        yield
    finally:
        service_container.cleanup_services()
        logger.info(f"{settings.app_name} stopped")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Place search, nearby encyclopedia content and map views",
        debug=settings.debug and not settings.is_production(),
        lifespan=lifespan,
    )

    app.add_middleware(CORSMiddleware, **settings.get_cors_config())
    app.add_middleware(RequestContextMiddleware)

    setup_error_handlers(app)

    app.include_router(search_router)
    app.include_router(viewer_router)
    app.include_router(health_router)

    @app.get("/")
    async def root():
        """Service banner."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "status": "running",
        }

    return app


app = create_app()
