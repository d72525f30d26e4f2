"""Data mappers between pipeline models and API schemas."""

from recipe_importer.mappers.recipe_import import (
    build_import_response,
    build_imported_recipe,
)


__all__ = [
    "build_import_response",
    "build_imported_recipe",
]
