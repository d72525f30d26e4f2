"""API schemas."""

from recipe_importer.schemas.enums import Difficulty, ExtractionStatus
from recipe_importer.schemas.recipe_import import (
    CamelModel,
    HealthResponse,
    ImportedRecipe,
    ImportRecipeRequest,
    ImportRecipeResponse,
    SupportedDomainsResponse,
)


__all__ = [
    "CamelModel",
    "Difficulty",
    "ExtractionStatus",
    "HealthResponse",
    "ImportRecipeRequest",
    "ImportRecipeResponse",
    "ImportedRecipe",
    "SupportedDomainsResponse",
]
