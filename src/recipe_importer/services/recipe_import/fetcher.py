"""Resource-bounded page fetcher.

Downloads a single recipe page under a wall-clock timeout and a streaming
size cap. A new HTTP client is opened for every fetch and closed before
``fetch`` returns, so no connection outlives the call.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

import httpx

from recipe_importer.services.recipe_import.exceptions import (
    FetchTimeoutError,
    InvalidUrlError,
    NetworkUnreachableError,
    NotFoundError,
    PayloadTooLargeError,
    RemoteError,
)
from recipe_importer.services.recipe_import.models import FetchedDocument


if TYPE_CHECKING:
    from recipe_importer.core.config import RecipeImportSettings


ALLOWED_SCHEMES = frozenset({"http", "https"})


def validate_url(url: str) -> str:
    """Check that a URL is parsable and uses HTTP or HTTPS.

    Args:
        url: Candidate URL.

    Returns:
        The URL with surrounding whitespace removed.

    Raises:
        InvalidUrlError: If the URL is malformed, has no host, or uses
            any other scheme (file, ftp, data, ...).
    """
    candidate = url.strip() if isinstance(url, str) else ""
    try:
        parts = urlsplit(candidate)
        hostname = parts.hostname
    except ValueError as e:
        raise InvalidUrlError from e

    if parts.scheme.lower() not in ALLOWED_SCHEMES or not hostname:
        raise InvalidUrlError
    return candidate


class PageFetcher:
    """Fetch raw page content for the import pipeline.

    Example:
        ```python
        fetcher = PageFetcher(settings.recipe_import)
        document = await fetcher.fetch("https://example.com/recipe")
        ```
    """

    def __init__(
        self,
        settings: RecipeImportSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            settings: Timeout, size cap, redirect limit, and request headers.
            transport: Optional transport override, used by tests.
        """
        self._settings = settings
        self._transport = transport

    @property
    def max_content_bytes(self) -> int:
        return self._settings.max_content_bytes

    def _headers(self) -> dict[str, str]:
        return {
            "User-Agent": self._settings.user_agent,
            "Accept": self._settings.accept,
            "Accept-Language": self._settings.accept_language,
        }

    async def fetch(self, url: str) -> FetchedDocument:
        """Fetch a page with a single attempt.

        Args:
            url: Page URL; must be HTTP or HTTPS.

        Returns:
            FetchedDocument for a 2xx response.

        Raises:
            InvalidUrlError: Bad or disallowed URL.
            NotFoundError: Remote 404.
            RemoteError: Any other non-success status.
            FetchTimeoutError: The fetch exceeded the time budget.
            PayloadTooLargeError: The body exceeded the size budget.
            NetworkUnreachableError: DNS, connection, or transport failure.
        """
        url = validate_url(url)

        try:
            async with asyncio.timeout(self._settings.fetch_timeout):
                return await self._download(url)
        except TimeoutError as e:
            raise FetchTimeoutError from e

    async def _download(self, url: str) -> FetchedDocument:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(self._settings.fetch_timeout),
            follow_redirects=True,
            max_redirects=self._settings.max_redirects,
            headers=self._headers(),
            transport=self._transport,
        ) as client:
            try:
                async with client.stream("GET", url) as response:
                    self._raise_for_status(response)
                    self._check_declared_length(response)
                    content = await self._read_capped(response)

            except httpx.TimeoutException as e:
                raise FetchTimeoutError from e

            except (httpx.UnsupportedProtocol, httpx.InvalidURL) as e:
                raise InvalidUrlError from e

            except httpx.RequestError as e:
                raise NetworkUnreachableError from e

        return FetchedDocument(
            url=str(response.url),
            requested_url=url,
            content=content,
            content_type=response.headers.get("content-type"),
            encoding=response.charset_encoding,
        )

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        if response.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError
        raise RemoteError(response.status_code)

    def _check_declared_length(self, response: httpx.Response) -> None:
        declared = response.headers.get("content-length")
        if declared is None:
            return
        try:
            length = int(declared)
        except ValueError:
            return
        if length > self.max_content_bytes:
            raise PayloadTooLargeError(self.max_content_bytes)

    async def _read_capped(self, response: httpx.Response) -> bytes:
        """Read the body, aborting as soon as it crosses the size cap."""
        buffer = bytearray()
        async for chunk in response.aiter_bytes():
            buffer.extend(chunk)
            if len(buffer) > self.max_content_bytes:
                raise PayloadTooLargeError(self.max_content_bytes)
        return bytes(buffer)
