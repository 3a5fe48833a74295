"""Page store backed by a PostgREST endpoint (e.g. Supabase)."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from schemas.publish import PublishedPage

from ..clients.client import Client
from ..clients.exceptions import ClientError, ConflictError
from .store import PageStore, PersistenceError, WriteConflictError, utc_now

logger = logging.getLogger(__name__)


class RestPageStore(PageStore):
    """Stores records in the ``landing_pages`` table through PostgREST.

    Compare-and-swap is expressed as filtered writes: replacing a live
    record PATCHes only where ``content_sha`` still equals the expected
    hash, and a first publish INSERTs, relying on the unique constraint on
    ``page_url_key``. An empty PATCH result or a 409 means another writer
    got there first.

    Config keys:
        base_url (required): Project URL, e.g. "https://xyz.supabase.co"
        api_key (required): Service role key
        table: Table name (default: "landing_pages")
        plus any base client keys (timeout, retry_attempts, ...)
    """

    REST_PREFIX = "/rest/v1"
    RETURN_REPRESENTATION = {"Prefer": "return=representation"}

    def __init__(self, config: dict, transport: httpx.AsyncBaseTransport | None = None):
        if not config.get("api_key"):
            raise ValueError("config must include 'api_key'")
        api_key = str(config["api_key"])
        headers = {
            **config.get("headers", {}),
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
        }
        self._client = Client({**config, "headers": headers}, transport=transport)
        self.table = str(config.get("table", "landing_pages"))

    @property
    def table_path(self) -> str:
        return f"{self.REST_PREFIX}/{self.table}"

    async def close(self) -> None:
        await self._client.close()

    def _parse_rows(self, response: httpx.Response) -> list[PublishedPage]:
        try:
            return [PublishedPage.model_validate(row) for row in response.json()]
        except (ValueError, ValidationError) as e:
            raise PersistenceError(f"Unexpected rows from {self.table}: {e}") from e

    async def _select(self, params: dict[str, str]) -> list[PublishedPage]:
        try:
            response = await self._client.get(
                self.table_path, params={"select": "*", **params}
            )
        except ClientError as e:
            raise PersistenceError(f"Failed to query {self.table}: {e.message}") from e
        return self._parse_rows(response)

    async def _patch(self, params: dict[str, str], body: dict[str, Any]) -> list[PublishedPage]:
        try:
            response = await self._client.patch(
                self.table_path,
                params=params,
                json=body,
                headers=self.RETURN_REPRESENTATION,
            )
        except ClientError as e:
            raise PersistenceError(f"Failed to update {self.table}: {e.message}") from e
        return self._parse_rows(response)

    async def get(self, slug: str) -> PublishedPage | None:
        rows = await self._select({"page_url_key": f"eq.{slug}", "limit": "1"})
        return rows[0] if rows else None

    async def find_subdomain_owner(
        self, subdomain: str, exclude_slug: str
    ) -> PublishedPage | None:
        rows = await self._select(
            {
                "subdomain": f"eq.{subdomain}",
                "deleted_at": "is.null",
                "page_url_key": f"neq.{exclude_slug}",
                "limit": "1",
            }
        )
        return rows[0] if rows else None

    def _row(self, page: PublishedPage) -> dict[str, Any]:
        row = page.model_dump(mode="json", exclude={"created_at", "updated_at"})
        row["updated_at"] = utc_now().isoformat()
        return row

    async def upsert(
        self, page: PublishedPage, expected_sha: str | None
    ) -> PublishedPage:
        slug = page.page_url_key
        row = self._row(page)

        if expected_sha is not None:
            rows = await self._patch(
                {
                    "page_url_key": f"eq.{slug}",
                    "status": "eq.published",
                    "deleted_at": "is.null",
                    "content_sha": f"eq.{expected_sha}",
                },
                row,
            )
            if not rows:
                raise WriteConflictError(slug, expected_sha)
            return rows[0]

        # Revive an archived or draft row before falling back to an insert
        rows = await self._patch(
            {"page_url_key": f"eq.{slug}", "status": "neq.published"}, row
        )
        if rows:
            return rows[0]

        try:
            response = await self._client.post(
                self.table_path, json=row, headers=self.RETURN_REPRESENTATION
            )
        except ConflictError as e:
            raise WriteConflictError(slug, expected_sha) from e
        except ClientError as e:
            raise PersistenceError(f"Failed to insert into {self.table}: {e.message}") from e

        rows = self._parse_rows(response)
        if not rows:
            raise PersistenceError(f"Insert into {self.table} returned no row for {slug}")
        return rows[0]

    async def archive(self, slug: str) -> PublishedPage | None:
        now = utc_now().isoformat()
        rows = await self._patch(
            {"page_url_key": f"eq.{slug}"},
            {"status": "archived", "deleted_at": now, "updated_at": now},
        )
        if rows:
            logger.debug(f"Archived {slug} in {self.table}")
        return rows[0] if rows else None
