"""Client for registering published pages with the analytics service.

The analytics service only records traffic from authorized URLs. Each
newly published landing page is added to the project's ``app_urls`` list
so that its traffic is counted without manual dashboard changes.
"""

import logging

import httpx

from .client import Client
from .exceptions import ValidationError

logger = logging.getLogger(__name__)


def normalize_url(url: str) -> str:
    """Normalize a URL for comparison against the authorized list.

    Examples:
        >>> normalize_url("pages.example.com/p/acme/")
        'https://pages.example.com/p/acme'
        >>> normalize_url(" http://localhost:3000 ")
        'http://localhost:3000'
    """
    normalized = url.strip()
    if not normalized.startswith(("http://", "https://")):
        normalized = f"https://{normalized}"
    if normalized.endswith("/") and len(normalized) > 1:
        normalized = normalized[:-1]
    return normalized


class DomainAuthorizationClient(Client):
    """Manages the analytics project's authorized URL list.

    Config keys (in addition to the base client keys):
        api_key (required): Personal API key sent as a bearer token
        project_id: Project identifier (default: "@current")
    """

    def __init__(self, config: dict, transport: httpx.AsyncBaseTransport | None = None):
        if not config.get("api_key"):
            raise ValueError("config must include 'api_key'")
        super().__init__(config, transport=transport)

    @property
    def project_id(self) -> str:
        return str(self._config.get("project_id", "@current"))

    @property
    def project_path(self) -> str:
        return f"/api/projects/{self.project_id}/"

    @property
    def headers(self) -> dict[str, str]:
        headers = super().headers
        headers["Authorization"] = f"Bearer {self._config['api_key']}"
        return headers

    async def get_authorized_urls(self) -> list[str]:
        """Fetch the project's current authorized URLs.

        Raises:
            ValidationError: If the project has no usable ``app_urls`` list
            APIError: If the service returns a non-2xx response
            ConnectionError: If the service is unreachable
        """
        response = await self.get(self.project_path)
        data = response.json()

        app_urls = data.get("app_urls") if isinstance(data, dict) else None
        if app_urls is None:
            return []
        if not isinstance(app_urls, list):
            raise ValidationError("Project app_urls is not a list")
        return [str(url) for url in app_urls]

    async def authorize_url(self, url: str) -> bool:
        """Add a URL to the authorized list if it is not already there.

        Args:
            url: URL to authorize

        Returns:
            True if the list was changed, False if the URL was already present
        """
        normalized = normalize_url(url)
        current = await self.get_authorized_urls()

        if normalized in current:
            logger.debug(f"URL already authorized: {normalized}")
            return False

        await self.patch(self.project_path, json={"app_urls": [*current, normalized]})
        logger.info(f"Authorized URL for analytics: {normalized}")
        return True

    async def authorize_landing_page(self, page_url: str) -> bool:
        """Authorize a published page's public URL."""
        return await self.authorize_url(page_url)
