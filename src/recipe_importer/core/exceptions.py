"""Custom exceptions and exception handlers.

This module provides structured exception handling with:
- Application exception classes for HTTP-facing failures
- Translation of recipe import failures into HTTP error responses
- FastAPI exception handlers for consistent error bodies
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_importer.services.recipe_import.exceptions import (
    ExtractionFailedError,
    FetchTimeoutError,
    InvalidUrlError,
    NetworkUnreachableError,
    NotFoundError,
    PayloadTooLargeError,
    RecipeImportError,
    RemoteError,
)


if TYPE_CHECKING:
    from fastapi import Request


class ErrorDetail(BaseModel):
    """Structured error detail for validation errors."""

    code: str
    message: str
    field: str | None = None


class ErrorResponse(BaseModel):
    """Structured error response."""

    error: str
    message: str
    details: list[ErrorDetail] | None = None
    request_id: str | None = None


class AppException(Exception):
    """Base application exception.

    All HTTP-facing exceptions inherit from this class
    for consistent error handling.
    """

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        details: list[ErrorDetail] | None = None,
    ) -> None:
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details
        super().__init__(message)


class ServiceUnavailableException(AppException):
    """Service unavailable exception."""

    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error="SERVICE_UNAVAILABLE",
            message=message,
        )


# HTTP status returned for each import failure
IMPORT_ERROR_STATUS: dict[type[RecipeImportError], int] = {
    InvalidUrlError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    RemoteError: status.HTTP_502_BAD_GATEWAY,
    FetchTimeoutError: status.HTTP_504_GATEWAY_TIMEOUT,
    PayloadTooLargeError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    NetworkUnreachableError: status.HTTP_502_BAD_GATEWAY,
    ExtractionFailedError: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


class RecipeImportException(AppException):
    """HTTP-facing wrapper around a recipe import failure."""

    def __init__(self, error: RecipeImportError) -> None:
        super().__init__(
            status_code=IMPORT_ERROR_STATUS.get(
                type(error), status.HTTP_500_INTERNAL_SERVER_ERROR
            ),
            error=error.code,
            message=error.message,
        )


def _get_request_id(request: Request) -> str | None:
    """Extract request ID from request state."""
    return getattr(request.state, "request_id", None)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request,
        exc: AppException,
    ) -> ORJSONResponse:
        """Handle custom application exceptions."""
        return ORJSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error=exc.error,
                message=exc.message,
                details=exc.details,
                request_id=_get_request_id(request),
            ).model_dump(),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> ORJSONResponse:
        """Handle Starlette HTTP exceptions."""
        return ORJSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error="HTTP_ERROR",
                message=str(exc.detail),
                request_id=_get_request_id(request),
            ).model_dump(),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> ORJSONResponse:
        """Handle Pydantic validation errors."""
        details = [
            ErrorDetail(
                code="VALIDATION_ERROR",
                message=error["msg"],
                field=".".join(str(loc) for loc in error["loc"]),
            )
            for error in exc.errors()
        ]
        return ORJSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=ErrorResponse(
                error="VALIDATION_ERROR",
                message="Request validation failed",
                details=details,
                request_id=_get_request_id(request),
            ).model_dump(),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> ORJSONResponse:
        """Handle unexpected exceptions."""
        from recipe_importer.observability.logging import get_logger

        logger = get_logger(__name__)
        logger.exception("Unhandled exception", exc_info=exc)

        return ORJSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error="INTERNAL_SERVER_ERROR",
                message="An unexpected error occurred",
                request_id=_get_request_id(request),
            ).model_dump(),
        )
