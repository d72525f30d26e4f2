"""Application lifespan event handlers.

This module defines the lifespan context manager that handles:
- Application startup: configure logging, build the import service
- Application shutdown: release application state
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from recipe_importer.core.config import Settings, get_settings
from recipe_importer.observability.logging import get_logger, setup_logging
from recipe_importer.services.recipe_import import RecipeImportService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from fastapi import FastAPI

logger = get_logger(__name__)


def _get_app_settings(app: FastAPI) -> Settings:
    settings: Settings | None = getattr(app.state, "settings", None)
    return settings or get_settings()


async def _startup(app: FastAPI, settings: Settings) -> None:
    """Initialize application services during startup.

    Args:
        app: The FastAPI application instance.
        settings: Application settings.
    """
    setup_logging(
        log_level=settings.logging.level,
        log_format=settings.logging.format,
        is_development=settings.is_development,
    )

    logger.info(
        "Starting application",
        app_name=settings.app.name,
        environment=settings.APP_ENV,
        debug=settings.app.debug,
    )

    # The service holds no connections; each fetch opens and closes its own
    app.state.import_service = RecipeImportService(settings=settings)
    logger.info(
        "RecipeImportService initialized",
        fetch_timeout=settings.recipe_import.fetch_timeout,
        max_content_bytes=settings.recipe_import.max_content_bytes,
    )

    logger.info("Application startup complete")


async def _shutdown(app: FastAPI) -> None:
    """Shutdown application services.

    Args:
        app: The FastAPI application instance.
    """
    logger.info("Shutting down application")
    app.state.import_service = None
    logger.info("Application shutdown complete")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None - control returns to the application to handle requests.
    """
    await _startup(app, _get_app_settings(app))
    yield
    await _shutdown(app)
