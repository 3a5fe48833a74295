"""Client for the site's on-demand cache revalidation endpoint."""

import logging

import httpx
from pydantic import ValidationError as PydanticValidationError

from schemas.publish import RevalidateRequest, RevalidateResponse

from .client import Client
from .exceptions import ValidationError

logger = logging.getLogger(__name__)


class RevalidateClient(Client):
    """Asks the public site to drop its cached copy of a landing page.

    The endpoint is authenticated with a shared secret sent in the
    ``x-revalidate-secret`` header. Requests are not retried by default
    and time out after five seconds.

    Example:
        config = {"base_url": "https://pages.example.com", "secret": "..."}
        async with RevalidateClient(config) as client:
            await client.revalidate("acme-vendor-1025")
    """

    API_PATH = "/api/revalidate"
    SECRET_HEADER = "x-revalidate-secret"
    DEFAULT_TIMEOUT = 5.0

    def __init__(self, config: dict, transport: httpx.AsyncBaseTransport | None = None):
        if not config.get("secret"):
            raise ValueError("config must include 'secret'")
        config = {"timeout": self.DEFAULT_TIMEOUT, "retry_attempts": 1, **config}
        super().__init__(config, transport=transport)

    @property
    def headers(self) -> dict[str, str]:
        headers = super().headers
        headers[self.SECRET_HEADER] = str(self._config["secret"])
        return headers

    async def revalidate(self, slug: str) -> RevalidateResponse:
        """Invalidate the cached page for a slug.

        Args:
            slug: Page key to revalidate

        Returns:
            The endpoint's parsed response

        Raises:
            ValueError: If the slug is not a valid page key
            ValidationError: If the endpoint returns an unexpected body
            APIError: If the endpoint returns a non-2xx response
            RequestTimeoutError: If the request timed out
            ConnectionError: If the endpoint is unreachable
        """
        try:
            request = RevalidateRequest(slug=slug)
        except PydanticValidationError as e:
            raise ValueError(f"Invalid slug for revalidation: {slug!r}") from e

        response = await self.post(self.API_PATH, json=request.model_dump())

        try:
            result = RevalidateResponse.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            raise ValidationError(
                f"Unexpected revalidation response for {slug}",
                errors=e.errors() if isinstance(e, PydanticValidationError) else [],
            ) from e

        logger.debug(f"Revalidated {slug}: {result.path or result.message}")
        return result
