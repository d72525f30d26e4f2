"""Recipe import service.

Runs the import pipeline for a single URL:
1. Fetch the page under time and size limits
2. Extract JSON-LD recipe metadata
3. Fall back to heuristic HTML extraction when metadata is missing or untitled
4. Normalize and validate the result
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bs4 import BeautifulSoup

from recipe_importer.core.config import get_settings
from recipe_importer.schemas.enums import ExtractionStatus
from recipe_importer.services.recipe_import.fetcher import PageFetcher
from recipe_importer.services.recipe_import.heuristic import extract_heuristic
from recipe_importer.services.recipe_import.normalizer import (
    merge_candidates,
    normalize_candidate,
)
from recipe_importer.services.recipe_import.structured import extract_structured


if TYPE_CHECKING:
    from recipe_importer.core.config import Settings
    from recipe_importer.services.recipe_import.models import (
        ExtractionCandidate,
        FetchedDocument,
        NormalizedRecipe,
    )


def parse_document(document: FetchedDocument) -> BeautifulSoup:
    """Parse fetched bytes, honouring the charset from the response headers."""
    return BeautifulSoup(
        document.content,
        "lxml",
        from_encoding=document.encoding,
    )


class RecipeImportService:
    """Service for importing recipes from arbitrary web pages.

    Holds no per-request state, so one instance can serve concurrent imports.

    Example:
        ```python
        service = RecipeImportService()
        recipe = await service.import_recipe("https://example.com/pancakes")
        print(recipe.title, recipe.servings)
        ```
    """

    def __init__(
        self,
        settings: Settings | None = None,
        fetcher: PageFetcher | None = None,
    ) -> None:
        """Initialize the import service.

        Args:
            settings: Optional settings override. Defaults to get_settings().
            fetcher: Optional fetcher override.
        """
        self._settings = settings or get_settings()
        self._fetcher = fetcher or PageFetcher(self._settings.recipe_import)

    def supported_domains(self) -> list[str]:
        """Domains known to import well. Informational, not an allow-list."""
        return list(self._settings.recipe_import.supported_domains)

    async def import_recipe(self, url: str) -> NormalizedRecipe:
        """Import a recipe from a URL.

        Args:
            url: Recipe page URL.

        Returns:
            NormalizedRecipe whose source_url is the requested URL.

        Raises:
            RecipeImportError: One of its subclasses for every failure kind.
        """
        url = url.strip()
        document = await self._fetcher.fetch(url)
        candidate = self.extract(document)
        return normalize_candidate(candidate, source_url=url)

    def extract(self, document: FetchedDocument) -> ExtractionCandidate:
        """Run structured extraction, falling back to heuristics.

        A PARTIAL structured result (Recipe metadata without a usable title)
        is merged with the heuristic result: the title comes from the page
        markup, every other field prefers the structured value.
        """
        soup = parse_document(document)
        result = extract_structured(soup, document.url)

        if result.status is ExtractionStatus.COMPLETE and result.candidate:
            return result.candidate

        heuristic = extract_heuristic(soup, document.url)

        if result.status is ExtractionStatus.PARTIAL and result.candidate:
            untitled = result.candidate.model_copy(update={"title": None})
            return merge_candidates(untitled, heuristic)

        return heuristic
