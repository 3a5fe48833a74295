"""Publish workflow schemas.

Covers the metadata a caller supplies when publishing, the persisted page
record, the result returned to callers, and the wire shapes used to talk
to the cache revalidation endpoint.
"""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
ID_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
MMYY_PATTERN = re.compile(r"^(0[1-9]|1[0-2])\d{2}$")


class PublishMeta(BaseModel):
    """Tenant and location identifiers for a publish call.

    Either ``page_url_key`` or ``subdomain`` must be supplied. When a
    subdomain is given it also becomes the page key, so one buyer maps to
    exactly one subdomain.

    Attributes:
        page_url_key: Unique slug for path-based addressing
        subdomain: Subdomain for wildcard addressing
        campaign_id: Optional campaign the page belongs to
        buyer_id: Buyer identifier (lowercase alphanumeric with hyphens)
        seller_id: Seller identifier (lowercase alphanumeric with hyphens)
        mmyy: Month-year tag, e.g. "1025" for October 2025
        buyer_name: Optional buyer display name
        seller_name: Optional seller display name
    """

    page_url_key: str | None = Field(default=None, min_length=3, max_length=100)
    subdomain: str | None = Field(default=None, min_length=3, max_length=63)
    campaign_id: str | None = None
    buyer_id: str = Field(min_length=1, max_length=50)
    seller_id: str = Field(min_length=1, max_length=50)
    mmyy: str
    buyer_name: str | None = Field(default=None, min_length=1, max_length=100)
    seller_name: str | None = Field(default=None, min_length=1, max_length=100)

    @field_validator("page_url_key", "subdomain")
    @classmethod
    def _check_slug(cls, value: str | None) -> str | None:
        if value is not None and not SLUG_PATTERN.match(value):
            raise ValueError(
                'must be lowercase alphanumeric with hyphens (e.g., "buyer-seller-1025")'
            )
        return value

    @field_validator("buyer_id", "seller_id")
    @classmethod
    def _check_id(cls, value: str) -> str:
        if not ID_PATTERN.match(value):
            raise ValueError("must be lowercase alphanumeric with hyphens")
        return value

    @field_validator("mmyy")
    @classmethod
    def _check_mmyy(cls, value: str) -> str:
        if not MMYY_PATTERN.match(value):
            raise ValueError('must be in MMYY format (e.g., "1025" for October 2025)')
        return value

    @model_validator(mode="after")
    def _sync_slug(self) -> "PublishMeta":
        if self.subdomain is None and self.page_url_key is None:
            raise ValueError("either page_url_key or subdomain is required")
        if self.subdomain is not None:
            self.page_url_key = self.subdomain
        return self

    @property
    def slug(self) -> str:
        assert self.page_url_key is not None
        return self.page_url_key


PageStatus = Literal["draft", "published", "archived"]


class PageContent(BaseModel):
    """JSON blob stored with each page record."""

    normalized: dict[str, Any]
    original: dict[str, Any] | None = None


class PublishedPage(BaseModel):
    """A persisted landing page record, unique per ``page_url_key``."""

    page_url_key: str
    subdomain: str | None = None
    campaign_id: str | None = None
    page_url: str | None = None
    status: PageStatus = "draft"
    page_content: PageContent
    content_sha: str
    buyer_id: str
    seller_id: str
    mmyy: str | None = None
    buyer_name: str | None = None
    seller_name: str | None = None
    version: int = 1
    published_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    model_config = {"extra": "allow"}


class ValidationIssue(BaseModel):
    """A field-attributed problem reported back to a publishing caller."""

    path: str
    message: str
    code: str | None = None


class PublishFailureReason(str, Enum):
    """Why a publish call was rejected."""

    MISSING_INPUT = "missing_input"
    MISCONFIGURED = "misconfigured"
    UNAUTHORIZED = "unauthorized"
    INVALID_METADATA = "invalid_metadata"
    INVALID_TENANT = "invalid_tenant"
    TENANT_CONFLICT = "tenant_conflict"
    THROTTLED = "throttled"
    INVALID_CONTENT = "invalid_content"
    PERSISTENCE = "persistence"
    WRITE_CONFLICT = "write_conflict"
    NOT_FOUND = "not_found"
    UNEXPECTED = "unexpected"


class PublishResult(BaseModel):
    """Outcome of a publish call.

    Successful results carry ``url``, ``content_sha`` and ``changed``;
    failures carry ``error``, a ``reason`` and optionally field-level
    ``validation_errors``.
    """

    ok: bool
    url: str | None = None
    content_sha: str | None = Field(default=None, alias="contentSha")
    changed: bool | None = None
    error: str | None = None
    reason: PublishFailureReason | None = None
    validation_errors: list[ValidationIssue] | None = Field(
        default=None, alias="validationErrors"
    )

    model_config = {"populate_by_name": True}

    @classmethod
    def success(cls, url: str, content_sha: str, changed: bool) -> "PublishResult":
        return cls(ok=True, url=url, content_sha=content_sha, changed=changed)

    @classmethod
    def failure(
        cls,
        error: str,
        reason: PublishFailureReason,
        validation_errors: list[ValidationIssue] | None = None,
    ) -> "PublishResult":
        return cls(
            ok=False,
            error=error,
            reason=reason,
            validation_errors=validation_errors,
        )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


SideEffectName = Literal["cache_revalidation", "analytics_authorization"]
SideEffectStatus = Literal["success", "failure", "timeout", "skipped"]


class SideEffectOutcome(BaseModel):
    """Structured record of one best-effort side effect of a publish."""

    name: SideEffectName
    slug: str
    status: SideEffectStatus
    detail: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class RevalidateRequest(BaseModel):
    """Body of a cache revalidation request."""

    slug: str = Field(min_length=1, max_length=100)

    @field_validator("slug")
    @classmethod
    def _check_slug(cls, value: str) -> str:
        if not SLUG_PATTERN.match(value):
            raise ValueError(
                "Slug must contain only lowercase letters, numbers, and hyphens"
            )
        return value


class RevalidateResponse(BaseModel):
    """Body returned by the cache revalidation endpoint."""

    ok: bool
    slug: str | None = None
    path: str | None = None
    message: str | None = None
    error: str | None = None

    model_config = {"extra": "allow"}
