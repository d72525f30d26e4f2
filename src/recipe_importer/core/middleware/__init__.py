"""HTTP middleware components."""

from recipe_importer.core.middleware.request_context import (
    ImportOutcome,
    RequestContextMiddleware,
)


__all__ = [
    "ImportOutcome",
    "RequestContextMiddleware",
]
