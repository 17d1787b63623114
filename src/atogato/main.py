from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.atogato.api.middlewares import setup_middlewares
from src.atogato.api.v1.router import api_router
from src.atogato.core.config import get_settings
from src.atogato.core.db import dispose_engine, run_migrations_async
from src.atogato.core.exceptions import setup_exception_handlers
from src.atogato.core.health import setup_health_endpoint, setup_metrics
from src.atogato.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug, settings.log_level)
    logger.info(f"Starting {settings.app_name}")

    if settings.run_migrations_on_startup:
        logger.info("Running database migrations...")
        await run_migrations_async()

    yield

    logger.info("Closing connections...")
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "projects", "description": "Creator projects: listing, creation and owner updates"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Project listings for the atogato creator-matching platform",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )

    # Exception handlers to include request_id in error responses
    setup_exception_handlers(app)
    setup_middlewares(app, settings)

    app.include_router(api_router)

    setup_metrics(app)
    setup_health_endpoint(app)

    return app


app = create_app()
