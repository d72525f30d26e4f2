"""FastAPI dependencies for service access.

Services are initialized during application startup and stored in app.state.
"""

from __future__ import annotations

from fastapi import Request

from recipe_importer.core.exceptions import ServiceUnavailableException
from recipe_importer.services.recipe_import import RecipeImportService


async def get_import_service(request: Request) -> RecipeImportService:
    """Get the recipe import service from app state.

    Args:
        request: The incoming request.

    Returns:
        Initialized RecipeImportService.

    Raises:
        ServiceUnavailableException: 503 if the service is not initialized.
    """
    service: RecipeImportService | None = getattr(
        request.app.state, "import_service", None
    )
    if service is None:
        raise ServiceUnavailableException("Recipe import service not available")
    return service
