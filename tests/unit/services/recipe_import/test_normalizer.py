"""Unit tests for candidate normalization and merging."""

from __future__ import annotations

import pytest

from recipe_importer.schemas.enums import Difficulty
from recipe_importer.services.recipe_import.exceptions import ExtractionFailedError
from recipe_importer.services.recipe_import.models import ExtractionCandidate
from recipe_importer.services.recipe_import.normalizer import (
    merge_candidates,
    normalize_candidate,
)
from tests.factories import ExtractionCandidateFactory


pytestmark = pytest.mark.unit

SOURCE_URL = "https://example.com/recipe"


class TestNormalizeCandidate:
    """Tests for normalize_candidate."""

    def test_cleans_text_fields(self) -> None:
        """Should collapse whitespace in every text field."""
        candidate = ExtractionCandidate(
            title="  Banana \n Bread ",
            description="Moist\n\n\n\nand sweet.  ",
            ingredients="  3 bananas \n\t2 cups   flour",
            instructions="1. Mash \n2.   Bake",
        )
        recipe = normalize_candidate(candidate, SOURCE_URL)

        assert recipe.title == "Banana Bread"
        assert recipe.description == "Moist\n\nand sweet."
        assert recipe.ingredients == "3 bananas\n2 cups flour"
        assert recipe.instructions == "1. Mash\n2. Bake"

    def test_defaults_missing_fields(self) -> None:
        """Should use empty text, no numbers, and medium difficulty."""
        recipe = normalize_candidate(ExtractionCandidate(title="Toast"), SOURCE_URL)

        assert recipe.description == ""
        assert recipe.ingredients == ""
        assert recipe.instructions == ""
        assert recipe.cooking_time is None
        assert recipe.prep_time is None
        assert recipe.servings is None
        assert recipe.difficulty is Difficulty.MEDIUM
        assert recipe.image_url is None

    def test_attaches_source_url(self) -> None:
        """Should attach the URL the caller requested."""
        recipe = normalize_candidate(ExtractionCandidate(title="Toast"), SOURCE_URL)

        assert recipe.source_url == SOURCE_URL

    def test_maps_difficulty(self) -> None:
        """Should map free-text difficulty onto the enum."""
        candidate = ExtractionCandidate(title="Souffle", difficulty="Expert level")

        assert normalize_candidate(candidate, SOURCE_URL).difficulty is Difficulty.HARD

    def test_drops_invalid_numbers(self) -> None:
        """Should treat negative times and non-positive servings as absent."""
        candidate = ExtractionCandidate(
            title="Odd", cooking_time=-5, prep_time=0, servings=0
        )
        recipe = normalize_candidate(candidate, SOURCE_URL)

        assert recipe.cooking_time is None
        assert recipe.prep_time == 0
        assert recipe.servings is None

    def test_blank_image_becomes_none(self) -> None:
        """Should not keep an empty image URL."""
        candidate = ExtractionCandidate(title="Plain", image_url="   ")

        assert normalize_candidate(candidate, SOURCE_URL).image_url is None

    @pytest.mark.parametrize("title", [None, "", "   ", "X", " \n y \n "])
    def test_rejects_unusable_title(self, title: str | None) -> None:
        """Should fail instead of substituting a placeholder title."""
        with pytest.raises(ExtractionFailedError) as exc_info:
            normalize_candidate(ExtractionCandidate(title=title), SOURCE_URL)

        assert exc_info.value.message == (
            "Could not extract a usable recipe title from this page."
        )

    def test_output_invariants_hold_for_generated_candidates(self) -> None:
        """Should always yield a titled recipe with valid numeric fields."""
        for candidate in ExtractionCandidateFactory.batch(size=25):
            recipe = normalize_candidate(candidate, SOURCE_URL)

            assert len(recipe.title) >= 2
            assert "\n" not in recipe.title
            assert recipe.cooking_time is None or recipe.cooking_time >= 0
            assert recipe.prep_time is None or recipe.prep_time >= 0
            assert recipe.servings is None or recipe.servings > 0
            assert recipe.difficulty in set(Difficulty)

    def test_is_idempotent_on_its_own_output(self) -> None:
        """Should leave an already normalized recipe unchanged."""
        for candidate in ExtractionCandidateFactory.batch(size=10):
            first = normalize_candidate(candidate, SOURCE_URL)
            again = normalize_candidate(
                ExtractionCandidate.model_validate(
                    first.model_dump(exclude={"source_url"})
                ),
                SOURCE_URL,
            )

            assert again == first


class TestMergeCandidates:
    """Tests for merge_candidates."""

    def test_primary_values_win(self) -> None:
        """Should keep every value present in the primary candidate."""
        primary = ExtractionCandidate(title="Primary", servings=2)
        fallback = ExtractionCandidate(title="Fallback", servings=8, prep_time=5)

        merged = merge_candidates(primary, fallback)

        assert merged.title == "Primary"
        assert merged.servings == 2
        assert merged.prep_time == 5

    def test_empty_strings_count_as_missing(self) -> None:
        """Should fill empty strings from the fallback."""
        primary = ExtractionCandidate(title="", ingredients="")
        fallback = ExtractionCandidate(title="Fallback", ingredients="salt")

        merged = merge_candidates(primary, fallback)

        assert merged.title == "Fallback"
        assert merged.ingredients == "salt"

    def test_zero_is_a_value(self) -> None:
        """Should keep numeric zero from the primary candidate."""
        merged = merge_candidates(
            ExtractionCandidate(prep_time=0),
            ExtractionCandidate(prep_time=20),
        )

        assert merged.prep_time == 0
