"""E2E test fixtures.

Runs the full application, lifespan included, with remote recipe sites
mocked at the HTTP transport level.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fastapi.testclient import TestClient

from recipe_importer.core.config import RecipeImportSettings, Settings
from recipe_importer.core.config.settings import ApiSettings, AppSettings
from recipe_importer.factory import create_app


if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def e2e_settings() -> Settings:
    """Settings for the full-stack tests."""
    return Settings(
        APP_ENV="test",
        app=AppSettings(name="e2e-recipe-import", version="0.0.1-e2e"),
        api=ApiSettings(cors_origins=["http://localhost:3000"]),
        recipe_import=RecipeImportSettings(
            fetch_timeout=2.0,
            max_content_bytes=32 * 1024,
        ),
    )


@pytest.fixture
def app_client(e2e_settings: Settings) -> Iterator[TestClient]:
    """Client for an application that has completed startup."""
    with TestClient(create_app(e2e_settings)) as client:
        yield client


@pytest.fixture
def api_prefix(e2e_settings: Settings) -> str:
    """Versioned API prefix."""
    return e2e_settings.api.v1_prefix
