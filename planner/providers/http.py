"""HTTP client for provider APIs.

Handles raw HTTP requests. No data transformation - just fetch and
return (body, status). One attempt per request: an aggregation never
retries a provider.
"""

import logging
import ssl
from collections.abc import Mapping

import httpx

from planner.core.errors import NetworkError

logger = logging.getLogger(__name__)

USER_AGENT = "planner-timeline/0.1"


class HttpxFetcher:
    """Async HTTP client shared by all adapters."""

    def __init__(
        self,
        timeout: float = 10.0,
        max_connections: int = 20,
        max_keepalive_connections: int = 5,
    ):
        self._timeout = timeout
        self._limits = httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_keepalive_connections,
        )
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=self._limits,
                headers={"User-Agent": USER_AGENT},
                follow_redirects=True,
            )
        return self._client

    def _is_ssl_error(self, error: Exception) -> bool:
        """Check if an error is SSL-related."""
        if isinstance(error, ssl.SSLError):
            return True
        error_str = str(error).lower()
        return "ssl" in error_str or "eof occurred" in error_str

    async def fetch(
        self, url: str, headers: Mapping[str, str] | None = None
    ) -> tuple[bytes, int]:
        """Make one GET request.

        Returns:
            (body bytes, HTTP status code)

        Raises:
            NetworkError: Connection failure, timeout, or closed client
        """
        try:
            response = await self._get_client().get(url, headers=dict(headers or {}))
        except (httpx.RequestError, RuntimeError, OSError) as e:
            # RuntimeError: "Cannot send a request, as the client has been closed"
            # OSError: stale pooled connections
            logger.warning("Request failed for %s: %s", url, e)
            if self._is_ssl_error(e):
                logger.info("SSL error detected, resetting connection pool")
                await self._reset_client()
            raise NetworkError(str(e) or type(e).__name__, url=url) from e

        if response.status_code >= 400:
            logger.warning("HTTP %d for %s", response.status_code, url)
        return response.content, response.status_code

    async def _reset_client(self) -> None:
        """Reset the HTTP client to clear stale connections."""
        client, self._client = self._client, None
        if client is not None:
            try:
                await client.aclose()
            except (httpx.HTTPError, RuntimeError, OSError) as e:
                logger.debug("Ignoring error while closing client: %s", e)

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None
