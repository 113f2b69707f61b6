"""
HTTP transport backed by httpx.
"""

import logging

import httpx


logger = logging.getLogger(__name__)


class HttpxTransport:
    """
    Synchronous HttpTransport using an httpx.Client.

    Network errors (httpx.RequestError) are not caught: they reach the
    caller unchanged. Error status codes are returned, not raised, so the
    provider adapter can inspect them.
    """

    def __init__(self, client: httpx.Client | None = None, timeout: float = 10.0):
        self._client = client or httpx.Client(timeout=timeout)
        self._owns_client = client is None

    def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        data: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send one request and return the response."""
        logger.debug(f"{method} {url}")
        response = self._client.request(method, url, headers=headers, data=data)
        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
