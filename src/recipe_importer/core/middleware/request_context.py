"""Request context middleware.

Tags every request with an ID and writes a single access log line once the
response is ready. Import routes attach an ``ImportOutcome`` to
``request.state.import_outcome``; when present, the line carries the
imported URL and either the recipe title or the failure code, and a failed
import is logged as a warning.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from recipe_importer.observability.logging import (
    bind_context,
    clear_context,
    get_logger,
)


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

    from recipe_importer.services.recipe_import import RecipeImportError


logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Probes and browser noise, matched as path suffixes so prefixed routes count
QUIET_PATHS = frozenset({"/health", "/favicon.ico"})


@dataclass(frozen=True, slots=True)
class ImportOutcome:
    """What a single import request produced."""

    url: str
    title: str | None = None
    error_code: str | None = None
    retryable: bool | None = None

    @classmethod
    def failed(cls, url: str, error: RecipeImportError) -> ImportOutcome:
        return cls(url=url, error_code=error.code, retryable=error.retryable)

    @property
    def succeeded(self) -> bool:
        return self.error_code is None


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assign a request ID and log how the request ended.

    An incoming ``X-Request-ID`` header is reused, otherwise a UUID4 is
    generated. The ID lands in ``request.state.request_id`` (read by the
    error handlers), in the logging context, and on the response.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        header_name: str = REQUEST_ID_HEADER,
        quiet_paths: frozenset[str] = QUIET_PATHS,
    ) -> None:
        super().__init__(app)
        self.header_name = header_name
        self.quiet_paths = quiet_paths

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        # Context from a previous request on this task must not leak
        clear_context()

        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = request_id
        bind_context(request_id=request_id)

        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        response.headers[self.header_name] = request_id

        outcome = getattr(request.state, "import_outcome", None)
        if isinstance(outcome, ImportOutcome):
            self._log_import(outcome, response.status_code, duration_ms)
        elif not self._is_quiet(request.url.path):
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=duration_ms,
            )

        return response

    def _log_import(
        self,
        outcome: ImportOutcome,
        status_code: int,
        duration_ms: float,
    ) -> None:
        if outcome.succeeded:
            logger.info(
                "Recipe imported",
                url=outcome.url,
                title=outcome.title,
                status_code=status_code,
                duration_ms=duration_ms,
            )
            return

        logger.warning(
            "Recipe import failed",
            url=outcome.url,
            error_code=outcome.error_code,
            retryable=outcome.retryable,
            status_code=status_code,
            duration_ms=duration_ms,
        )

    def _is_quiet(self, path: str) -> bool:
        return any(path.endswith(quiet) for quiet in self.quiet_paths)
