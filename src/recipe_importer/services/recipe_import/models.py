"""Data models for the recipe import pipeline.

These models are the contracts between pipeline stages:
FetchedDocument (fetcher) -> ExtractionCandidate (extractors)
-> NormalizedRecipe (normalizer).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from recipe_importer.schemas.enums import Difficulty, ExtractionStatus


class FetchedDocument(BaseModel):
    """Raw page content retrieved by the fetcher."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="Final URL after redirects")
    requested_url: str = Field(..., description="URL the caller asked for")
    content: bytes = Field(..., description="Raw response body")
    content_type: str | None = Field(None, description="Declared Content-Type")
    encoding: str | None = Field(
        None, description="Charset declared in the Content-Type header"
    )


class ExtractionCandidate(BaseModel):
    """Not-yet-validated recipe produced by one of the extractors.

    Every field is optional since either extractor may partially fail.
    Ingredients and instructions are single newline-delimited blocks.
    """

    title: str | None = Field(None, description="Recipe title")
    description: str | None = Field(None, description="Recipe description")
    ingredients: str | None = Field(None, description="One ingredient per line")
    instructions: str | None = Field(None, description="One step per line")
    cooking_time: int | None = Field(None, description="Cook time in minutes")
    prep_time: int | None = Field(None, description="Prep time in minutes")
    servings: int | None = Field(None, description="Number of servings")
    difficulty: str | None = Field(None, description="Free-text difficulty")
    image_url: str | None = Field(None, description="Main recipe image URL")


class ExtractionResult(BaseModel):
    """Tagged outcome of structured extraction."""

    status: ExtractionStatus
    candidate: ExtractionCandidate | None = None

    @classmethod
    def no_match(cls) -> ExtractionResult:
        return cls(status=ExtractionStatus.NO_MATCH)

    @classmethod
    def partial(cls, candidate: ExtractionCandidate) -> ExtractionResult:
        return cls(status=ExtractionStatus.PARTIAL, candidate=candidate)

    @classmethod
    def complete(cls, candidate: ExtractionCandidate) -> ExtractionResult:
        return cls(status=ExtractionStatus.COMPLETE, candidate=candidate)


class NormalizedRecipe(BaseModel):
    """Final output of the import pipeline, handed to the persistence layer."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=2, description="Recipe title")
    description: str = Field("", description="Recipe description")
    ingredients: str = Field("", description="One ingredient per line")
    instructions: str = Field("", description="Numbered steps, one per line")
    cooking_time: int | None = Field(None, ge=0, description="Cook time in minutes")
    prep_time: int | None = Field(None, ge=0, description="Prep time in minutes")
    servings: int | None = Field(None, gt=0, description="Number of servings")
    difficulty: Difficulty = Field(Difficulty.MEDIUM, description="Difficulty level")
    source_url: str = Field(..., description="URL the recipe was imported from")
    image_url: str | None = Field(None, description="Main recipe image URL")
