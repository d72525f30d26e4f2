"""Normalization and validation of extraction candidates."""

from __future__ import annotations

from recipe_importer.services.recipe_import.exceptions import ExtractionFailedError
from recipe_importer.services.recipe_import.models import (
    ExtractionCandidate,
    NormalizedRecipe,
)
from recipe_importer.services.recipe_import.parsing import (
    clean_block,
    clean_line,
    is_usable_title,
    map_difficulty,
)


def normalize_candidate(
    candidate: ExtractionCandidate,
    source_url: str,
) -> NormalizedRecipe:
    """Clean a candidate and turn it into the final recipe record.

    Args:
        candidate: Output of whichever extractor succeeded.
        source_url: URL the caller asked to import.

    Returns:
        NormalizedRecipe with cleaned text and validated numbers.

    Raises:
        ExtractionFailedError: If no title of at least two characters remains
            after cleaning. A placeholder title is never substituted.
    """
    if not is_usable_title(candidate.title):
        raise ExtractionFailedError

    image_url = clean_line(candidate.image_url)

    return NormalizedRecipe(
        title=clean_line(candidate.title),
        description=clean_block(candidate.description),
        ingredients=clean_block(candidate.ingredients),
        instructions=clean_block(candidate.instructions),
        cooking_time=_non_negative(candidate.cooking_time),
        prep_time=_non_negative(candidate.prep_time),
        servings=_positive(candidate.servings),
        difficulty=map_difficulty(candidate.difficulty),
        source_url=source_url,
        image_url=image_url or None,
    )


def merge_candidates(
    primary: ExtractionCandidate,
    fallback: ExtractionCandidate,
) -> ExtractionCandidate:
    """Fill the gaps of one candidate with values from another.

    Values present in ``primary`` always win; empty strings count as missing.
    """
    fallback_values = fallback.model_dump()
    merged = {
        field: value if value not in (None, "") else fallback_values[field]
        for field, value in primary.model_dump().items()
    }
    return ExtractionCandidate.model_validate(merged)


def _non_negative(value: int | None) -> int | None:
    return value if value is not None and value >= 0 else None


def _positive(value: int | None) -> int | None:
    return value if value is not None and value > 0 else None
