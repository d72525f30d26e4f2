"""Recipe import endpoints.

Provides:
- POST /recipes/import for extracting a recipe from a web page
- GET /recipes/import/supported-domains for the list of well-supported sites
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from recipe_importer.api.dependencies import get_import_service
from recipe_importer.core.exceptions import RecipeImportException
from recipe_importer.core.middleware import ImportOutcome
from recipe_importer.mappers import build_import_response
from recipe_importer.schemas import (
    ImportRecipeRequest,
    ImportRecipeResponse,
    SupportedDomainsResponse,
)
from recipe_importer.services.recipe_import import (
    RecipeImportError,
    RecipeImportService,
)


router = APIRouter(tags=["Recipes"])


def _error_example(code: str, message: str) -> dict[str, object]:
    return {
        "content": {
            "application/json": {
                "example": {"error": code, "message": message},
            }
        }
    }


@router.post(
    "/recipes/import",
    response_model=ImportRecipeResponse,
    status_code=status.HTTP_200_OK,
    summary="Import a recipe from a URL",
    description=(
        "Fetches the page at the given URL and extracts a recipe from its "
        "JSON-LD metadata, falling back to common recipe-site markup. "
        "The recipe is returned to the caller and not stored."
    ),
    responses={
        400: {
            "description": "Invalid or non-HTTP(S) URL",
            **_error_example(
                "INVALID_URL",
                "The URL is not valid. Only HTTP and HTTPS URLs are supported.",
            ),
        },
        404: {
            "description": "The recipe page does not exist",
            **_error_example("RECIPE_PAGE_NOT_FOUND", "Recipe page not found (404)."),
        },
        422: {
            "description": "No usable recipe, page too large, or invalid body",
            **_error_example(
                "EXTRACTION_FAILED",
                "Could not extract a usable recipe title from this page.",
            ),
        },
        502: {"description": "The remote site failed or could not be reached"},
        503: {"description": "Service unavailable"},
        504: {"description": "The remote site took too long to respond"},
    },
)
async def import_recipe(
    request: Request,
    request_body: ImportRecipeRequest,
    import_service: Annotated[RecipeImportService, Depends(get_import_service)],
) -> ImportRecipeResponse:
    """Import a recipe from a web page.

    Args:
        request: Incoming request; the import outcome is left on its state
            for the access log.
        request_body: Request containing the recipe page URL.
        import_service: Service running the import pipeline.

    Returns:
        The extracted recipe.

    Raises:
        RecipeImportException: Mapped HTTP error for any import failure.
    """
    url = request_body.url

    try:
        recipe = await import_service.import_recipe(url)
    except RecipeImportError as e:
        request.state.import_outcome = ImportOutcome.failed(url, e)
        raise RecipeImportException(e) from e

    request.state.import_outcome = ImportOutcome(url=url, title=recipe.title)
    return build_import_response(recipe)


@router.get(
    "/recipes/import/supported-domains",
    response_model=SupportedDomainsResponse,
    summary="List well-supported recipe sites",
    description=(
        "Sites known to import well. Informational only; "
        "any HTTP or HTTPS URL may be imported."
    ),
)
async def get_supported_domains(
    import_service: Annotated[RecipeImportService, Depends(get_import_service)],
) -> SupportedDomainsResponse:
    """Return the informational list of supported recipe domains."""
    return SupportedDomainsResponse(domains=import_service.supported_domains())
