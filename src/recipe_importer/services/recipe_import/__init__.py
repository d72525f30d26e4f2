"""Recipe import pipeline: fetch, extract, normalize."""

from recipe_importer.services.recipe_import.exceptions import (
    ExtractionFailedError,
    FetchTimeoutError,
    InvalidUrlError,
    NetworkUnreachableError,
    NotFoundError,
    PayloadTooLargeError,
    RecipeImportError,
    RemoteError,
)
from recipe_importer.services.recipe_import.models import (
    ExtractionCandidate,
    ExtractionResult,
    FetchedDocument,
    NormalizedRecipe,
)
from recipe_importer.services.recipe_import.service import RecipeImportService


__all__ = [
    "ExtractionCandidate",
    "ExtractionFailedError",
    "ExtractionResult",
    "FetchTimeoutError",
    "FetchedDocument",
    "InvalidUrlError",
    "NetworkUnreachableError",
    "NormalizedRecipe",
    "NotFoundError",
    "PayloadTooLargeError",
    "RecipeImportError",
    "RecipeImportService",
    "RemoteError",
]
