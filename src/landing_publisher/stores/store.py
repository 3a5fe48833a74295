"""Persistence interface for published landing pages."""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime, timezone

from schemas.publish import PublishedPage


class StoreError(Exception):
    """Base exception for page store failures."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class PersistenceError(StoreError):
    """Raised when the backing datastore cannot be read or written."""

    pass


class WriteConflictError(StoreError):
    """Raised when a conditional write lost a race with another writer.

    Attributes:
        slug: Page key that was being written
        expected_sha: Hash the writer expected to replace (None = no published row)
        actual_sha: Hash found at write time, when known
    """

    def __init__(
        self, slug: str, expected_sha: str | None, actual_sha: str | None = None
    ):
        self.slug = slug
        self.expected_sha = expected_sha
        self.actual_sha = actual_sha
        super().__init__(f"Concurrent write detected for {slug}")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_live(page: PublishedPage | None) -> bool:
    """True for a published, non-deleted record."""
    return page is not None and page.status == "published" and page.deleted_at is None


class PageStore(ABC):
    """Abstract store of PublishedPage records, unique per page key.

    Writes are compare-and-swap: ``upsert`` only succeeds when the hash of
    the currently published record still matches the hash the caller read.
    This turns the gap between the idempotency check and the write into a
    detectable conflict instead of a silent last-write-wins.
    """

    @abstractmethod
    async def get(self, slug: str) -> PublishedPage | None:
        """Return the record for a slug in any status, or None."""
        pass

    async def get_published(self, slug: str) -> PublishedPage | None:
        """Return the record for a slug only if it is live."""
        page = await self.get(slug)
        return page if is_live(page) else None

    @abstractmethod
    async def find_subdomain_owner(
        self, subdomain: str, exclude_slug: str
    ) -> PublishedPage | None:
        """Find a non-deleted record using a subdomain under a different key."""
        pass

    @abstractmethod
    async def upsert(
        self, page: PublishedPage, expected_sha: str | None
    ) -> PublishedPage:
        """Insert or replace the record for ``page.page_url_key``.

        Args:
            page: Record to write
            expected_sha: content_sha of the live record the caller observed,
                or None if the caller saw no live record

        Returns:
            The stored record

        Raises:
            WriteConflictError: If the live record changed since it was read
            PersistenceError: If the datastore fails
        """
        pass

    @abstractmethod
    async def archive(self, slug: str) -> PublishedPage | None:
        """Soft-delete a record. Returns the archived record, or None if absent."""
        pass

    async def close(self) -> None:
        """Release any resources held by the store."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False


class LocalPageStore(PageStore):
    """Shared logic for stores that hold records in this process.

    A single asyncio.Lock serializes the read-compare-write of ``upsert``
    so concurrent publishes within one process cannot both win.
    """

    def __init__(self):
        self._lock = asyncio.Lock()

    @abstractmethod
    def _load(self, slug: str) -> PublishedPage | None:
        pass

    @abstractmethod
    def _save(self, page: PublishedPage) -> None:
        pass

    @abstractmethod
    def _all(self) -> Iterable[PublishedPage]:
        pass

    async def get(self, slug: str) -> PublishedPage | None:
        return self._load(slug)

    async def find_subdomain_owner(
        self, subdomain: str, exclude_slug: str
    ) -> PublishedPage | None:
        for page in self._all():
            if (
                page.subdomain == subdomain
                and page.deleted_at is None
                and page.page_url_key != exclude_slug
            ):
                return page
        return None

    async def upsert(
        self, page: PublishedPage, expected_sha: str | None
    ) -> PublishedPage:
        async with self._lock:
            current = self._load(page.page_url_key)
            current_sha = current.content_sha if is_live(current) else None
            if current_sha != expected_sha:
                raise WriteConflictError(page.page_url_key, expected_sha, current_sha)

            now = utc_now()
            stored = page.model_copy(
                update={
                    "created_at": current.created_at if current else now,
                    "updated_at": now,
                }
            )
            self._save(stored)
            return stored

    async def archive(self, slug: str) -> PublishedPage | None:
        async with self._lock:
            current = self._load(slug)
            if current is None:
                return None
            now = utc_now()
            archived = current.model_copy(
                update={"status": "archived", "deleted_at": now, "updated_at": now}
            )
            self._save(archived)
            return archived
