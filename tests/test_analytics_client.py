"""Tests for the analytics domain authorization client."""

import json

import httpx
import pytest

from landing_publisher.clients import (
    DomainAuthorizationClient,
    NotFoundError,
    ValidationError,
    normalize_url,
)


class FakeProject:
    """Minimal stand-in for the analytics project endpoint."""

    def __init__(self, app_urls=None):
        self.app_urls = app_urls
        self.patches = []
        self.auth_headers = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.auth_headers.append(request.headers.get("authorization"))
        if request.url.path != "/api/projects/@current/":
            return httpx.Response(404)
        if request.method == "PATCH":
            body = json.loads(request.content)
            self.patches.append(body)
            self.app_urls = body["app_urls"]
            return httpx.Response(200, json={"app_urls": self.app_urls})
        data = {} if self.app_urls is None else {"app_urls": self.app_urls}
        return httpx.Response(200, json=data)


def make_client(project: FakeProject, **config) -> DomainAuthorizationClient:
    config = {"base_url": "https://us.posthog.com", "api_key": "phx_key", **config}
    return DomainAuthorizationClient(config, transport=httpx.MockTransport(project.handler))


class TestNormalizeUrl:
    """Tests for normalize_url."""

    def test_adds_scheme(self):
        """Bare hosts get https."""
        assert normalize_url("pages.example.com") == "https://pages.example.com"

    def test_strips_trailing_slash(self):
        """A trailing slash is removed."""
        assert normalize_url("https://pages.example.com/p/a/") == "https://pages.example.com/p/a"

    def test_keeps_http(self):
        """An explicit http scheme is kept."""
        assert normalize_url("http://localhost:3000") == "http://localhost:3000"


class TestDomainAuthorizationClient:
    """Tests for DomainAuthorizationClient."""

    def test_requires_api_key(self):
        """An API key is mandatory."""
        with pytest.raises(ValueError, match="api_key"):
            DomainAuthorizationClient({"base_url": "https://us.posthog.com"})

    @pytest.mark.asyncio
    async def test_get_authorized_urls(self):
        """The current app_urls list is returned."""
        project = FakeProject(["https://a.example.com"])

        async with make_client(project) as client:
            urls = await client.get_authorized_urls()

        assert urls == ["https://a.example.com"]
        assert project.auth_headers == ["Bearer phx_key"]

    @pytest.mark.asyncio
    async def test_missing_app_urls_is_empty(self):
        """A project without app_urls has none authorized."""
        async with make_client(FakeProject()) as client:
            assert await client.get_authorized_urls() == []

    @pytest.mark.asyncio
    async def test_malformed_app_urls(self):
        """A non-list app_urls raises ValidationError."""
        async with make_client(FakeProject("oops")) as client:
            with pytest.raises(ValidationError):
                await client.get_authorized_urls()

    @pytest.mark.asyncio
    async def test_authorize_new_url(self):
        """A new URL is appended to the list."""
        project = FakeProject(["https://a.example.com"])

        async with make_client(project) as client:
            changed = await client.authorize_landing_page("https://pages.example.com/p/acme/")

        assert changed is True
        assert project.patches == [
            {"app_urls": ["https://a.example.com", "https://pages.example.com/p/acme"]}
        ]

    @pytest.mark.asyncio
    async def test_already_authorized(self):
        """An already-authorized URL is not patched again."""
        project = FakeProject(["https://pages.example.com/p/acme"])

        async with make_client(project) as client:
            changed = await client.authorize_url("pages.example.com/p/acme")

        assert changed is False
        assert project.patches == []

    @pytest.mark.asyncio
    async def test_unknown_project(self):
        """An unknown project id raises NotFoundError."""
        async with make_client(FakeProject(), project_id="999") as client:
            with pytest.raises(NotFoundError):
                await client.get_authorized_urls()
