"""Mappers from pipeline output to API response schemas."""

from __future__ import annotations

from typing import TYPE_CHECKING

from recipe_importer.schemas import ImportedRecipe, ImportRecipeResponse


if TYPE_CHECKING:
    from recipe_importer.services.recipe_import import NormalizedRecipe


def build_imported_recipe(recipe: NormalizedRecipe) -> ImportedRecipe:
    """Convert a normalized recipe into its API representation."""
    return ImportedRecipe.model_validate(recipe.model_dump())


def build_import_response(recipe: NormalizedRecipe) -> ImportRecipeResponse:
    """Wrap a normalized recipe in the import endpoint response.

    Args:
        recipe: Output of the import pipeline.

    Returns:
        Response body with camelCase field names.
    """
    return ImportRecipeResponse(recipe=build_imported_recipe(recipe))
