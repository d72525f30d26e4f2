"""Unit tests for the JSON-LD recipe extractor."""

from __future__ import annotations

import orjson
import pytest
from bs4 import BeautifulSoup

from recipe_importer.schemas.enums import ExtractionStatus
from recipe_importer.services.recipe_import.structured import extract_structured


pytestmark = pytest.mark.unit

BASE_URL = "https://example.com/recipes/pancakes"


def _page(*blocks: object, script_type: str = "application/ld+json") -> BeautifulSoup:
    """Build a parsed page holding one script tag per block."""
    scripts = "".join(
        f'<script type="{script_type}">'
        f"{block if isinstance(block, str) else orjson.dumps(block).decode()}"
        "</script>"
        for block in blocks
    )
    return BeautifulSoup(f"<html><head>{scripts}</head><body></body></html>", "lxml")


class TestExtractStructuredMatching:
    """Tests for locating Recipe nodes."""

    def test_returns_no_match_without_metadata(self) -> None:
        """Should report NO_MATCH when the page has no JSON-LD."""
        result = extract_structured(_page(), BASE_URL)

        assert result.status is ExtractionStatus.NO_MATCH
        assert result.candidate is None

    def test_ignores_non_recipe_nodes(self) -> None:
        """Should report NO_MATCH when no node is typed Recipe."""
        soup = _page({"@type": "WebSite", "name": "Cooking Site"})

        assert extract_structured(soup, BASE_URL).status is ExtractionStatus.NO_MATCH

    def test_matches_type_list(self) -> None:
        """Should match nodes whose @type is a list containing Recipe."""
        soup = _page({"@type": ["Recipe", "NewsArticle"], "name": "Stew"})
        result = extract_structured(soup, BASE_URL)

        assert result.status is ExtractionStatus.COMPLETE
        assert result.candidate is not None
        assert result.candidate.title == "Stew"

    def test_matches_inside_array(self) -> None:
        """Should search top-level arrays."""
        soup = _page([{"@type": "WebSite"}, {"@type": "Recipe", "name": "Array Recipe"}])
        result = extract_structured(soup, BASE_URL)

        assert result.candidate is not None
        assert result.candidate.title == "Array Recipe"

    def test_matches_inside_graph(self) -> None:
        """Should search @graph containers."""
        soup = _page(
            {
                "@context": "https://schema.org",
                "@graph": [
                    {"@type": "Organization", "name": "Site"},
                    {"@type": "Recipe", "name": "Graph Recipe"},
                ],
            }
        )
        result = extract_structured(soup, BASE_URL)

        assert result.candidate is not None
        assert result.candidate.title == "Graph Recipe"

    def test_script_type_is_case_insensitive(self) -> None:
        """Should accept type attributes with other casing and parameters."""
        soup = _page(
            {"@type": "Recipe", "name": "Loud Recipe"},
            script_type="Application/LD+JSON; charset=utf-8",
        )

        assert extract_structured(soup, BASE_URL).status is ExtractionStatus.COMPLETE

    def test_skips_malformed_block_and_continues(self) -> None:
        """Should skip unparsable blocks and use a later valid one."""
        soup = _page("{not json", {"@type": "Recipe", "name": "Survivor"})
        result = extract_structured(soup, BASE_URL)

        assert result.status is ExtractionStatus.COMPLETE
        assert result.candidate is not None
        assert result.candidate.title == "Survivor"

    def test_keeps_recipe_with_non_finite_numbers(self) -> None:
        """Should drop NaN or infinite numbers but keep the rest of the Recipe."""
        soup = _page(
            '{"@type": "Recipe", "name": "Stew", "recipeYield": NaN, '
            '"cookTime": 1e999, "prepTime": "PT10M"}'
        )
        result = extract_structured(soup, BASE_URL)

        assert result.status is ExtractionStatus.COMPLETE
        assert result.candidate is not None
        assert result.candidate.title == "Stew"
        assert result.candidate.servings is None
        assert result.candidate.cooking_time is None
        assert result.candidate.prep_time == 10

    def test_partial_when_recipe_has_no_title(self) -> None:
        """Should report PARTIAL for a Recipe node without a usable name."""
        soup = _page({"@type": "Recipe", "recipeIngredient": ["salt"]})
        result = extract_structured(soup, BASE_URL)

        assert result.status is ExtractionStatus.PARTIAL
        assert result.candidate is not None
        assert result.candidate.ingredients == "salt"

    def test_prefers_later_titled_recipe_over_untitled(self) -> None:
        """Should keep scanning past an untitled Recipe for a titled one."""
        soup = _page(
            {"@type": "Recipe", "name": " "},
            {"@type": "Recipe", "name": "Titled"},
        )
        result = extract_structured(soup, BASE_URL)

        assert result.status is ExtractionStatus.COMPLETE
        assert result.candidate is not None
        assert result.candidate.title == "Titled"


class TestExtractStructuredMapping:
    """Tests for mapping Recipe fields onto a candidate."""

    def test_maps_basic_recipe(self) -> None:
        """Should map every supported field."""
        soup = _page(
            {
                "@type": "Recipe",
                "name": "Pancakes",
                "description": "Fluffy &amp; light",
                "recipeIngredient": ["1 cup flour", "2 eggs"],
                "recipeInstructions": ["Mix", "Cook"],
                "cookTime": "PT10M",
                "prepTime": "PT5M",
                "recipeYield": "4 servings",
                "difficulty": "Easy",
                "image": "https://cdn.example.com/pancakes.jpg",
            }
        )
        result = extract_structured(soup, BASE_URL)
        candidate = result.candidate

        assert candidate is not None
        assert candidate.title == "Pancakes"
        assert candidate.description == "Fluffy & light"
        assert candidate.ingredients == "1 cup flour\n2 eggs"
        assert candidate.instructions == "1. Mix\n2. Cook"
        assert candidate.cooking_time == 10
        assert candidate.prep_time == 5
        assert candidate.servings == 4
        assert candidate.difficulty == "Easy"
        assert candidate.image_url == "https://cdn.example.com/pancakes.jpg"

    def test_ingredient_lines_preserve_count_and_order(self) -> None:
        """Should emit exactly one line per ingredient, in order."""
        ingredients = [f"{n} units of item {n}" for n in range(1, 8)]
        soup = _page({"@type": "Recipe", "name": "Many", "recipeIngredient": ingredients})
        candidate = extract_structured(soup, BASE_URL).candidate

        assert candidate is not None
        assert candidate.ingredients is not None
        assert candidate.ingredients.split("\n") == ingredients

    def test_accepts_ingredient_objects_and_legacy_key(self) -> None:
        """Should read text from ingredient objects and the old ingredients key."""
        soup = _page(
            {
                "@type": "Recipe",
                "name": "Legacy",
                "ingredients": [{"text": "1 lemon"}, {"name": "salt"}, "pepper"],
            }
        )
        candidate = extract_structured(soup, BASE_URL).candidate

        assert candidate is not None
        assert candidate.ingredients == "1 lemon\nsalt\npepper"

    def test_flattens_multi_line_ingredients(self) -> None:
        """Should keep one line per ingredient when an entry holds newlines."""
        soup = _page(
            {
                "@type": "Recipe",
                "name": "Soup",
                "recipeIngredient": ["1 cup\nbroth", {"text": "2 tsp\n\nsalt"}],
            }
        )
        candidate = extract_structured(soup, BASE_URL).candidate

        assert candidate is not None
        assert candidate.ingredients == "1 cup broth\n2 tsp salt"

    def test_numbers_instruction_steps(self) -> None:
        """Should number N steps 1..N, skipping empty entries."""
        soup = _page(
            {
                "@type": "Recipe",
                "name": "Steps",
                "recipeInstructions": [
                    {"@type": "HowToStep", "text": "Preheat"},
                    {"@type": "HowToStep", "text": ""},
                    {"@type": "HowToStep", "name": "Bake"},
                    "Cool",
                ],
            }
        )
        candidate = extract_structured(soup, BASE_URL).candidate

        assert candidate is not None
        assert candidate.instructions == "1. Preheat\n2. Bake\n3. Cool"

    def test_flattens_multi_line_steps(self) -> None:
        """Should give N steps exactly N numbered lines."""
        soup = _page(
            {
                "@type": "Recipe",
                "name": "Pasta",
                "recipeInstructions": [
                    "Boil water.\nAdd salt.",
                    {"@type": "HowToStep", "text": "Serve\n\nhot"},
                ],
            }
        )
        candidate = extract_structured(soup, BASE_URL).candidate

        assert candidate is not None
        assert candidate.instructions is not None
        lines = candidate.instructions.split("\n")
        assert lines == ["1. Boil water. Add salt.", "2. Serve hot"]

    def test_inlines_how_to_sections(self) -> None:
        """Should inline the steps of HowToSection objects."""
        soup = _page(
            {
                "@type": "Recipe",
                "name": "Sectioned",
                "recipeInstructions": [
                    {
                        "@type": "HowToSection",
                        "name": "Dough",
                        "itemListElement": [
                            {"@type": "HowToStep", "text": "Knead"},
                            {"@type": "HowToStep", "text": "Rest"},
                        ],
                    },
                    {"@type": "HowToStep", "text": "Shape"},
                ],
            }
        )
        candidate = extract_structured(soup, BASE_URL).candidate

        assert candidate is not None
        assert candidate.instructions == "1. Knead\n2. Rest\n3. Shape"

    def test_keeps_plain_string_instructions(self) -> None:
        """Should keep a single instruction string as-is."""
        soup = _page(
            {"@type": "Recipe", "name": "Plain", "recipeInstructions": "Mix and bake."}
        )
        candidate = extract_structured(soup, BASE_URL).candidate

        assert candidate is not None
        assert candidate.instructions == "Mix and bake."

    def test_missing_yield_leaves_servings_empty(self) -> None:
        """Should leave servings unset when recipeYield is absent."""
        soup = _page({"@type": "Recipe", "name": "No Yield"})
        candidate = extract_structured(soup, BASE_URL).candidate

        assert candidate is not None
        assert candidate.servings is None

    def test_uses_educational_level_for_difficulty(self) -> None:
        """Should fall back to educationalLevel for difficulty."""
        soup = _page({"@type": "Recipe", "name": "Souffle", "educationalLevel": "Expert"})
        candidate = extract_structured(soup, BASE_URL).candidate

        assert candidate is not None
        assert candidate.difficulty == "Expert"

    @pytest.mark.parametrize(
        ("image", "expected"),
        [
            ("/img/a.jpg", "https://example.com/img/a.jpg"),
            (["", "https://cdn.example.com/b.jpg"], "https://cdn.example.com/b.jpg"),
            ({"@type": "ImageObject", "url": "c.jpg"}, "https://example.com/recipes/c.jpg"),
            ([{"contentUrl": "https://cdn.example.com/d.jpg"}], "https://cdn.example.com/d.jpg"),
            (None, None),
        ],
    )
    def test_resolves_image(self, image: object, expected: str | None) -> None:
        """Should take the first image URL and resolve it against the page."""
        soup = _page({"@type": "Recipe", "name": "Pictured", "image": image})
        candidate = extract_structured(soup, BASE_URL).candidate

        assert candidate is not None
        assert candidate.image_url == expected
