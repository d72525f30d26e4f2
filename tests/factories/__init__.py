"""Test data factories."""

from tests.factories.recipe_import import ExtractionCandidateFactory


__all__ = ["ExtractionCandidateFactory"]
