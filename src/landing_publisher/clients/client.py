"""Async base client for the publisher's HTTP collaborators."""

import asyncio
import logging

import httpx

from .exceptions import (
    APIError,
    ConflictError,
    ConnectionError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
)

logger = logging.getLogger(__name__)

STATUS_ERRORS = {
    404: NotFoundError,
    409: ConflictError,
    429: RateLimitError,
}


class Client:
    """Base class for HTTP clients.

    Provides a lazily created httpx.AsyncClient with async context manager
    support, configurable timeout, retries and headers via dict config.

    Config keys:
        base_url (required): Base URL for all requests
        timeout: Request timeout in seconds (default: 30)
        retry_attempts: Number of attempts for transient failures (default: 3)
        retry_delay: Delay between retries in seconds (default: 1)
        headers: Additional headers to include in requests

    A ``transport`` may be supplied to route requests somewhere other than
    the network, e.g. an ``httpx.MockTransport`` in tests.
    """

    def __init__(self, config: dict, transport: httpx.AsyncBaseTransport | None = None):
        if "base_url" not in config:
            raise ValueError("config must include 'base_url'")

        self._config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return str(self._config["base_url"])

    @property
    def timeout(self) -> float:
        return float(self._config.get("timeout", 30))

    @property
    def retry_attempts(self) -> int:
        return int(self._config.get("retry_attempts", 3))

    @property
    def retry_delay(self) -> float:
        return float(self._config.get("retry_delay", 1))

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._config.get("headers", {}))

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-initialized httpx client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.headers,
                transport=self._transport,
            )
        return self._client

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        """Raise the client exception matching a non-2xx response.

        404, 409 and 429 map to NotFoundError, ConflictError and
        RateLimitError; any other failure status raises APIError.
        """
        if response.is_success:
            return response

        error_class = STATUS_ERRORS.get(response.status_code)
        if error_class is not None:
            raise error_class(
                f"{response.status_code} from {response.request.method} {response.url}"
            )
        raise APIError(
            f"Unexpected status {response.status_code} from {response.url}",
            status_code=response.status_code,
        )

    async def _request(
        self,
        method: str,
        path: str,
        **kwargs,
    ) -> httpx.Response:
        """Send a request, retrying network failures and timeouts.

        Args:
            method: HTTP method
            path: Path relative to base_url
            **kwargs: Passed through to httpx.AsyncClient.request

        Raises:
            RequestTimeoutError: If the final attempt timed out
            ConnectionError: If the final attempt could not connect
            APIError: On a non-2xx response (not retried)
        """
        failure: httpx.TransportError | None = None

        for attempt in range(1, self.retry_attempts + 1):
            try:
                response = await self.client.request(method, path, **kwargs)
            except (httpx.ConnectError, httpx.TimeoutException) as e:
                failure = e
                logger.warning(
                    f"{method} {path} failed ({type(e).__name__}), "
                    f"attempt {attempt}/{self.retry_attempts}"
                )
                if attempt < self.retry_attempts:
                    await asyncio.sleep(self.retry_delay)
                continue
            return self._handle_response(response)

        if isinstance(failure, httpx.TimeoutException):
            raise RequestTimeoutError(
                f"Request timed out after {self.retry_attempts} attempts"
            ) from failure
        raise ConnectionError(
            f"Connection failed after {self.retry_attempts} attempts"
        ) from failure

    async def get(self, path: str, **kwargs) -> httpx.Response:
        """Convenience method for GET requests."""
        return await self._request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> httpx.Response:
        """Convenience method for POST requests."""
        return await self._request("POST", path, **kwargs)

    async def patch(self, path: str, **kwargs) -> httpx.Response:
        """Convenience method for PATCH requests."""
        return await self._request("PATCH", path, **kwargs)
