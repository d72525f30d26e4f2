"""Application lifecycle events."""

from recipe_importer.core.events.lifespan import lifespan


__all__ = ["lifespan"]
