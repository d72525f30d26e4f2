"""Recipe import exceptions.

Every failure of the import pipeline is one of these types. Each carries a
human-readable ``message`` that is safe to show to the end user verbatim, a
stable ``code`` for the API layer, and a ``retryable`` hint for callers that
want to offer a retry.
"""

from __future__ import annotations


class RecipeImportError(Exception):
    """Base exception for recipe import errors."""

    code = "RECIPE_IMPORT_ERROR"
    retryable = False
    default_message = "Failed to import the recipe."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidUrlError(RecipeImportError):
    """Raised when the URL cannot be parsed or uses a scheme other than HTTP(S)."""

    code = "INVALID_URL"
    default_message = "The URL is not valid. Only HTTP and HTTPS URLs are supported."


class NotFoundError(RecipeImportError):
    """Raised when the remote server answers 404."""

    code = "RECIPE_PAGE_NOT_FOUND"
    default_message = "Recipe page not found (404)."


class RemoteError(RecipeImportError):
    """Raised when the remote server answers with a non-success status other than 404."""

    code = "REMOTE_ERROR"
    retryable = True

    def __init__(self, status_code: int, message: str | None = None) -> None:
        self.status_code = status_code
        super().__init__(
            message or f"The website returned an error (HTTP {status_code})."
        )


class FetchTimeoutError(RecipeImportError):
    """Raised when fetching the page exceeds the time budget."""

    code = "FETCH_TIMEOUT"
    retryable = True
    default_message = "The website took too long to respond."


class PayloadTooLargeError(RecipeImportError):
    """Raised when the response body exceeds the size budget.

    The transfer is aborted as soon as the limit is crossed, so the
    body is never fully buffered.
    """

    code = "PAYLOAD_TOO_LARGE"

    def __init__(self, limit: int, message: str | None = None) -> None:
        self.limit = limit
        super().__init__(
            message or f"The page is too large to import (limit {limit} bytes)."
        )


class NetworkUnreachableError(RecipeImportError):
    """Raised on DNS, connection, or other transport-level failures."""

    code = "NETWORK_UNREACHABLE"
    retryable = True
    default_message = "Could not reach the website. Please check the URL."


class ExtractionFailedError(RecipeImportError):
    """Raised when the page was fetched but no usable title could be recovered."""

    code = "EXTRACTION_FAILED"
    default_message = "Could not extract a usable recipe title from this page."
