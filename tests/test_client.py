"""Tests for the base Client class."""

import httpx
import pytest

from landing_publisher.clients import (
    APIError,
    Client,
    ConflictError,
    ConnectionError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
)


def make_client(handler, **config) -> Client:
    config = {"base_url": "https://api.example.com", "retry_delay": 0, **config}
    return Client(config, transport=httpx.MockTransport(handler))


class TestClientConfiguration:
    """Tests for Client configuration."""

    def test_requires_base_url(self):
        """Client raises ValueError if base_url is missing."""
        with pytest.raises(ValueError, match="base_url"):
            Client({})

    def test_defaults(self):
        """Client has 30s timeout, 3 attempts, 1s delay and no headers."""
        client = Client({"base_url": "https://api.example.com"})

        assert client.base_url == "https://api.example.com"
        assert client.timeout == 30
        assert client.retry_attempts == 3
        assert client.retry_delay == 1
        assert client.headers == {}

    def test_custom_values(self):
        """Client reads overrides from config."""
        client = Client(
            {
                "base_url": "https://api.example.com",
                "timeout": 5,
                "retry_attempts": 1,
                "retry_delay": 0.5,
                "headers": {"X-Test": "1"},
            }
        )

        assert client.timeout == 5
        assert client.retry_attempts == 1
        assert client.retry_delay == 0.5
        assert client.headers == {"X-Test": "1"}


class TestClientLifecycle:
    """Tests for Client lifecycle management."""

    def test_lazy_client_initialization(self):
        """httpx.AsyncClient is not created until accessed."""
        client = Client({"base_url": "https://api.example.com"})

        assert client._client is None

    @pytest.mark.asyncio
    async def test_context_manager_closes_client(self):
        """Async context manager closes the httpx client on exit."""
        async with Client({"base_url": "https://api.example.com"}) as client:
            assert isinstance(client.client, httpx.AsyncClient)

        assert client._client is None

    @pytest.mark.asyncio
    async def test_close_when_not_initialized(self):
        """Calling close when client not initialized is safe."""
        client = Client({"base_url": "https://api.example.com"})

        await client.close()

        assert client._client is None


class TestResponseHandling:
    """Tests for HTTP status mapping."""

    @pytest.mark.asyncio
    async def test_success(self):
        """2xx responses are returned."""
        client = make_client(lambda request: httpx.Response(200, json={"ok": True}))

        response = await client.get("/thing")

        assert response.json() == {"ok": True}
        await client.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status,error",
        [
            (404, NotFoundError),
            (409, ConflictError),
            (429, RateLimitError),
            (500, APIError),
        ],
    )
    async def test_error_statuses(self, status, error):
        """Non-2xx statuses map to exceptions carrying the status code."""
        client = make_client(lambda request: httpx.Response(status))

        with pytest.raises(error) as exc_info:
            await client.post("/thing", json={})

        assert exc_info.value.status_code == status
        await client.close()

    @pytest.mark.asyncio
    async def test_sends_configured_headers(self):
        """Configured headers are sent with every request."""
        seen = {}

        def handler(request):
            seen.update(request.headers)
            return httpx.Response(200)

        client = make_client(handler, headers={"X-Test": "yes"})
        await client.patch("/thing", json={"a": 1})

        assert seen["x-test"] == "yes"
        await client.close()


class TestRetries:
    """Tests for retry behaviour."""

    @pytest.mark.asyncio
    async def test_retries_connection_errors(self):
        """Transient connection errors are retried."""
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) < 3:
                raise httpx.ConnectError("down", request=request)
            return httpx.Response(200)

        client = make_client(handler)
        response = await client.get("/thing")

        assert response.status_code == 200
        assert len(calls) == 3
        await client.close()

    @pytest.mark.asyncio
    async def test_gives_up_after_attempts(self):
        """ConnectionError is raised once attempts are exhausted."""
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("down", request=request)

        client = make_client(handler, retry_attempts=2)

        with pytest.raises(ConnectionError, match="after 2 attempts"):
            await client.get("/thing")

        assert len(calls) == 2
        await client.close()

    @pytest.mark.asyncio
    async def test_timeouts_raise_request_timeout(self):
        """Exhausted timeouts raise RequestTimeoutError."""

        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        client = make_client(handler, retry_attempts=1)

        with pytest.raises(RequestTimeoutError):
            await client.get("/thing")
        await client.close()

    @pytest.mark.asyncio
    async def test_http_errors_not_retried(self):
        """Error responses are not retried."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500)

        client = make_client(handler)

        with pytest.raises(APIError):
            await client.get("/thing")

        assert len(calls) == 1
        await client.close()
