"""Enumeration types shared by the import pipeline and the API schemas."""

from __future__ import annotations

from enum import StrEnum


class Difficulty(StrEnum):
    """Closed difficulty classification applied to every imported recipe."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class ExtractionStatus(StrEnum):
    """Outcome of the structured-metadata extraction stage.

    - NO_MATCH: no Recipe-typed metadata block was found
    - PARTIAL: a Recipe block was found but it has no usable title
    - COMPLETE: a Recipe block with a usable title was found
    """

    NO_MATCH = "no_match"
    PARTIAL = "partial"
    COMPLETE = "complete"
