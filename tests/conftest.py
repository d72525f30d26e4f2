"""Shared test fixtures for the recipe import service tests.

Provides settings tuned for tests and sample recipe pages covering the
JSON-LD path, the markup fallback path, and pages with nothing usable.
"""

from __future__ import annotations

import os

import pytest

from recipe_importer.core.config import RecipeImportSettings, Settings


os.environ.setdefault("APP_ENV", "test")


PANCAKES_JSONLD_PAGE = """
<!DOCTYPE html>
<html>
<head>
  <title>Pancakes | Example Kitchen</title>
  <script type="application/ld+json">
  {
    "@context": "https://schema.org",
    "@type": "Recipe",
    "name": "Pancakes",
    "recipeIngredient": ["1 cup flour", "2 eggs"],
    "recipeInstructions": [
      {"@type": "HowToStep", "text": "Mix"},
      {"@type": "HowToStep", "text": "Cook"}
    ],
    "cookTime": "PT10M",
    "recipeYield": "4 servings"
  }
  </script>
</head>
<body><h1>Pancakes</h1></body>
</html>
"""

MARKUP_ONLY_PAGE = """
<!DOCTYPE html>
<html>
<head>
  <title>Tomato Soup | Soup Site</title>
  <meta name="description" content="A warming soup.">
  <meta property="og:image" content="/images/soup.jpg">
</head>
<body>
  <h1 class="recipe-title">Tomato Soup</h1>
  <div class="recipe-description">Simple   and
     quick.</div>
  <ul class="ingredients">
    <li>4 tomatoes</li>
    <li>1 onion</li>
    <li>4 tomatoes</li>
  </ul>
  <ol class="instructions">
    <li>Chop everything</li>
    <li>Simmer for 20 minutes</li>
  </ol>
  <span class="prep-time">15 mins</span>
  <span class="cook-time">1 hour 15 min</span>
  <span class="servings">Serves 6</span>
  <span class="difficulty">Beginner friendly</span>
</body>
</html>
"""

EMPTY_PAGE = """
<!DOCTYPE html>
<html><head></head><body><p>Nothing to see here.</p></body></html>
"""


@pytest.fixture
def import_settings() -> RecipeImportSettings:
    """Fetch limits small enough to exercise in tests."""
    return RecipeImportSettings(
        fetch_timeout=5.0,
        max_content_bytes=64 * 1024,
        max_redirects=3,
    )


@pytest.fixture
def test_settings(import_settings: RecipeImportSettings) -> Settings:
    """Application settings for the test environment."""
    return Settings(APP_ENV="test", recipe_import=import_settings)


@pytest.fixture
def pancakes_page() -> str:
    """Page whose recipe is fully described by JSON-LD."""
    return PANCAKES_JSONLD_PAGE


@pytest.fixture
def markup_only_page() -> str:
    """Page without JSON-LD whose recipe is only in the HTML markup."""
    return MARKUP_ONLY_PAGE


@pytest.fixture
def empty_page() -> str:
    """Page with neither metadata nor recognizable recipe markup."""
    return EMPTY_PAGE
