"""Request and response schemas for the recipe import endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from recipe_importer.schemas.enums import Difficulty


class CamelModel(BaseModel):
    """Schema exchanged with the web client in camelCase.

    Snake_case names are accepted on input as well.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
    )


class ImportRecipeRequest(CamelModel):
    """Request body for importing a recipe from a URL.

    The URL is accepted as a plain string; scheme and host checks happen in
    the import pipeline so that every bad URL gets the same INVALID_URL error.
    """

    url: str = Field(
        ...,
        min_length=1,
        description="Address of the recipe page to import",
        examples=["https://www.allrecipes.com/recipe/21014/good-old-fashioned-pancakes/"],
    )


class ImportedRecipe(CamelModel):
    """Recipe extracted from a web page, ready to be saved by the client."""

    model_config = ConfigDict(extra="forbid", use_enum_values=True)

    title: str = Field(..., description="Recipe title")
    description: str = Field("", description="Recipe description")
    ingredients: str = Field("", description="One ingredient per line")
    instructions: str = Field("", description="Numbered steps, one per line")
    cooking_time: int | None = Field(None, description="Cook time in minutes")
    prep_time: int | None = Field(None, description="Prep time in minutes")
    servings: int | None = Field(None, description="Number of servings")
    difficulty: Difficulty = Field(Difficulty.MEDIUM, description="Difficulty level")
    source_url: str = Field(..., description="URL the recipe was imported from")
    image_url: str | None = Field(None, description="Main recipe image URL")


class ImportRecipeResponse(CamelModel):
    """Response for a successful import."""

    recipe: ImportedRecipe


class SupportedDomainsResponse(CamelModel):
    """Domains known to import well. Other sites are still accepted."""

    domains: list[str] = Field(default_factory=list)


class HealthResponse(CamelModel):
    """Liveness report, including whether imports can be served yet."""

    status: str = Field(..., examples=["ok", "starting"])
    importer_ready: bool = Field(..., description="Import service is initialized")
    version: str
    environment: str
