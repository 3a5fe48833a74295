"""Publish orchestration: gate, validate, persist, then best-effort side effects.

Every gate (auth, metadata, tenancy, throttle, content) runs before any
write and returns a failure result instead of raising. Cache revalidation
and analytics authorization happen only after a successful write; their
failures are logged and reported to the outcome sink but never fail the
publish.
"""

import hmac
import logging
import math
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from schemas.normalized import NormalizedContent
from schemas.publish import (
    PageContent,
    PublishedPage,
    PublishFailureReason,
    PublishMeta,
    PublishResult,
    SideEffectName,
    SideEffectOutcome,
    SideEffectStatus,
    ValidationIssue,
)

from ..clients.analytics_client import DomainAuthorizationClient
from ..clients.exceptions import RequestTimeoutError
from ..clients.revalidate_client import RevalidateClient
from ..config import PublisherSettings
from ..stores.file_store import JsonFilePageStore
from ..stores.rest_store import RestPageStore
from ..stores.store import PageStore, PersistenceError, WriteConflictError, is_live
from ..validation.orchestrator import format_error_location, validate_and_normalize
from ..validation.rules import LengthPolicy
from .content import extract_normalized_content
from .tenancy import generate_public_url, subdomain_conflict_message, validate_subdomain
from .throttle import InMemoryThrottle, PublishThrottle

logger = logging.getLogger(__name__)

OutcomeSink = Callable[[SideEffectOutcome], None]

MISSING_SECRET_MESSAGE = "Server configuration error: STUDIO_PUBLISH_SECRET not set"
UNAUTHORIZED_MESSAGE = "Unauthorized: Invalid publish secret"
UNEXPECTED_MESSAGE = "An unexpected error occurred while publishing"


class Publisher:
    """Publishes validated landing content for a tenant.

    Args:
        settings: Server configuration (secrets, site URL, throttle policy)
        store: Page persistence backend
        revalidate_client: Cache revalidation client; None skips revalidation
        analytics_client: Analytics authorization client; None skips it
        throttle: Per-slug cooldown; defaults to an in-memory throttle
        outcome_sink: Callable receiving a SideEffectOutcome per side effect
        policy: Length policy used for content validation

    Example:
        settings = PublisherSettings.from_env()
        async with Publisher.from_settings(settings) as publisher:
            result = await publisher.publish(raw, meta, secret)
    """

    def __init__(
        self,
        settings: PublisherSettings,
        store: PageStore,
        revalidate_client: RevalidateClient | None = None,
        analytics_client: DomainAuthorizationClient | None = None,
        throttle: PublishThrottle | None = None,
        outcome_sink: OutcomeSink | None = None,
        policy: LengthPolicy | None = None,
    ):
        self.settings = settings
        self.store = store
        self.revalidate_client = revalidate_client
        self.analytics_client = analytics_client
        # Explicit None check: an empty InMemoryThrottle has len 0
        if throttle is None:
            throttle = InMemoryThrottle(
                window=settings.throttle_window,
                cleanup_after=settings.throttle_cleanup,
            )
        self.throttle = throttle
        self.outcome_sink = outcome_sink
        self.policy = policy

    @classmethod
    def from_settings(
        cls,
        settings: PublisherSettings,
        store: PageStore | None = None,
        outcome_sink: OutcomeSink | None = None,
    ) -> "Publisher":
        """Wire collaborators from configuration.

        Uses the REST store when it is configured and the JSON-file store
        otherwise. Clients whose secrets are missing are left out, which
        makes their side effects report "skipped".
        """
        if store is None:
            if settings.uses_rest_store:
                store = RestPageStore(
                    {"base_url": settings.rest_url, "api_key": settings.rest_key}
                )
            else:
                store = JsonFilePageStore(settings.store_dir)

        revalidate_client = None
        if settings.revalidate_secret:
            revalidate_client = RevalidateClient(
                {
                    "base_url": settings.site_url,
                    "secret": settings.revalidate_secret,
                    "timeout": settings.revalidate_timeout,
                }
            )

        analytics_client = None
        if settings.analytics_api_key:
            analytics_client = DomainAuthorizationClient(
                {
                    "base_url": settings.analytics_host,
                    "api_key": settings.analytics_api_key,
                    "project_id": settings.analytics_project_id,
                }
            )

        return cls(
            settings,
            store,
            revalidate_client=revalidate_client,
            analytics_client=analytics_client,
            outcome_sink=outcome_sink,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False

    async def close(self) -> None:
        """Close the store and any HTTP clients."""
        for client in (self.revalidate_client, self.analytics_client):
            if client is not None:
                await client.close()
        await self.store.close()

    def _check_secret(self, secret: str | None) -> PublishResult | None:
        expected = self.settings.publish_secret
        if not expected:
            logger.error("STUDIO_PUBLISH_SECRET not configured")
            return PublishResult.failure(
                MISSING_SECRET_MESSAGE, PublishFailureReason.MISCONFIGURED
            )

        supplied = (secret or "").encode("utf-8")
        expected_bytes = expected.encode("utf-8")
        if len(supplied) != len(expected_bytes) or not hmac.compare_digest(
            supplied, expected_bytes
        ):
            logger.warning("Invalid publish secret provided")
            return PublishResult.failure(
                UNAUTHORIZED_MESSAGE, PublishFailureReason.UNAUTHORIZED
            )
        return None

    def _unexpected(self, action: str, error: Exception) -> PublishResult:
        logger.error(
            f"Unexpected error during {action}: {error}",
            exc_info=self.settings.is_development,
        )
        message = UNEXPECTED_MESSAGE
        if self.settings.is_development:
            message = f"{message}: {type(error).__name__}: {error}"
        return PublishResult.failure(message, PublishFailureReason.UNEXPECTED)

    def _emit(
        self,
        name: SideEffectName,
        slug: str,
        status: SideEffectStatus,
        detail: str | None = None,
    ) -> None:
        if self.outcome_sink is None:
            return
        outcome = SideEffectOutcome(name=name, slug=slug, status=status, detail=detail)
        try:
            self.outcome_sink(outcome)
        except Exception as e:
            logger.error(f"Outcome sink failed for {name} on {slug}: {e}")

    async def publish(
        self, raw_json: Any, meta: Any, secret: str | None
    ) -> PublishResult:
        """Validate and publish landing content.

        Args:
            raw_json: Untrusted raw content (decoded JSON)
            meta: Publish metadata, as a dict or PublishMeta
            secret: Caller's publish secret

        Returns:
            PublishResult; never raises
        """
        try:
            return await self._publish(raw_json, meta, secret)
        except Exception as e:
            return self._unexpected("publish", e)

    async def _publish(self, raw_json: Any, meta: Any, secret: str | None) -> PublishResult:
        if raw_json is None:
            return PublishResult.failure(
                "Content is required", PublishFailureReason.MISSING_INPUT
            )
        if meta is None:
            return PublishResult.failure(
                "Metadata is required", PublishFailureReason.MISSING_INPUT
            )

        if (denied := self._check_secret(secret)) is not None:
            return denied

        try:
            publish_meta = (
                meta if isinstance(meta, PublishMeta) else PublishMeta.model_validate(meta)
            )
        except ValidationError as e:
            logger.warning(f"Invalid publish metadata: {e.error_count()} issues")
            return PublishResult.failure(
                "Invalid publish metadata",
                PublishFailureReason.INVALID_METADATA,
                [
                    ValidationIssue(
                        path=format_error_location(error["loc"]), message=error["msg"]
                    )
                    for error in e.errors()
                ],
            )

        slug = publish_meta.slug

        if publish_meta.subdomain:
            if (failure := await self._check_subdomain(publish_meta)) is not None:
                return failure

        remaining = self.throttle.remaining(slug)
        if remaining > 0:
            logger.warning(f"Throttled publish of {slug}: {remaining:.1f}s remaining")
            return PublishResult.failure(
                f"Please wait {math.ceil(remaining)} seconds before publishing again",
                PublishFailureReason.THROTTLED,
            )

        validation = validate_and_normalize(
            raw_json, self.policy, detailed=self.settings.is_development
        )
        if not validation.is_valid or validation.normalized is None:
            logger.warning(
                f"Content validation failed for {slug}: "
                f"{[e.code for e in validation.errors]}"
            )
            return PublishResult.failure(
                "Content validation failed",
                PublishFailureReason.INVALID_CONTENT,
                [
                    ValidationIssue(
                        path=e.field or "unknown", message=e.message, code=e.code
                    )
                    for e in validation.errors
                ],
            )

        content_sha = validation.content_sha

        try:
            existing = await self.store.get(slug)
        except PersistenceError as e:
            logger.error(f"Idempotency check failed for {slug}: {e.message}")
            return PublishResult.failure(
                "Database error during idempotency check",
                PublishFailureReason.PERSISTENCE,
            )

        live = existing if is_live(existing) else None
        public_url = generate_public_url(
            self.settings.site_url, slug, publish_meta.subdomain
        )

        if live is not None and live.content_sha == content_sha:
            logger.info(f"Idempotent publish of {slug} (no changes)")
            return PublishResult.success(
                live.page_url or public_url, content_sha, changed=False
            )

        page = PublishedPage(
            page_url_key=slug,
            subdomain=publish_meta.subdomain,
            campaign_id=publish_meta.campaign_id,
            page_url=public_url,
            status="published",
            page_content=PageContent(
                normalized=validation.normalized.to_tree(),
                original=raw_json if isinstance(raw_json, dict) else None,
            ),
            content_sha=content_sha,
            buyer_id=publish_meta.buyer_id,
            seller_id=publish_meta.seller_id,
            mmyy=publish_meta.mmyy,
            buyer_name=publish_meta.buyer_name,
            seller_name=publish_meta.seller_name,
            version=existing.version + 1 if existing is not None else 1,
            published_at=datetime.now(timezone.utc),
        )

        try:
            await self.store.upsert(page, expected_sha=live.content_sha if live else None)
        except WriteConflictError as e:
            logger.warning(f"Write conflict publishing {slug}: {e.message}")
            return PublishResult.failure(
                f"Page {slug} was modified by another publish; please retry",
                PublishFailureReason.WRITE_CONFLICT,
            )
        except PersistenceError as e:
            logger.error(f"Failed to save {slug}: {e.message}")
            return PublishResult.failure(
                f"Failed to save to database: {e.message}",
                PublishFailureReason.PERSISTENCE,
            )

        logger.info(f"Published {slug} (version {page.version}, sha {content_sha})")

        await self._revalidate(slug)
        self.throttle.record(slug)
        await self._authorize_analytics(slug, public_url)

        return PublishResult.success(public_url, content_sha, changed=True)

    async def _check_subdomain(self, meta: PublishMeta) -> PublishResult | None:
        subdomain = meta.subdomain
        assert subdomain is not None

        if (message := validate_subdomain(subdomain)) is not None:
            logger.warning(f"Invalid subdomain {subdomain!r}: {message}")
            return PublishResult.failure(message, PublishFailureReason.INVALID_TENANT)

        try:
            owner = await self.store.find_subdomain_owner(subdomain, meta.slug)
        except PersistenceError as e:
            logger.error(f"Subdomain lookup failed for {subdomain}: {e.message}")
            return PublishResult.failure(
                "Failed to check subdomain availability",
                PublishFailureReason.PERSISTENCE,
            )

        if owner is not None:
            logger.warning(
                f"Subdomain {subdomain} already used by {owner.page_url_key}"
            )
            return PublishResult.failure(
                subdomain_conflict_message(subdomain, owner.buyer_id),
                PublishFailureReason.TENANT_CONFLICT,
            )
        return None

    async def _revalidate(self, slug: str) -> None:
        name: SideEffectName = "cache_revalidation"

        if self.revalidate_client is None:
            logger.warning(f"Skipping cache revalidation for {slug}: REVALIDATE_SECRET not set")
            self._emit(name, slug, "skipped", "REVALIDATE_SECRET not set")
            return

        try:
            response = await self.revalidate_client.revalidate(slug)
        except RequestTimeoutError as e:
            logger.warning(f"Revalidate request timed out for {slug}")
            self._emit(name, slug, "timeout", e.message)
            return
        except Exception as e:
            logger.error(f"Revalidate request failed for {slug}: {e}")
            logger.warning(f"Published {slug} but cache not invalidated")
            self._emit(name, slug, "failure", str(e))
            return

        if not response.ok:
            logger.warning(f"Revalidate endpoint refused {slug}: {response.error}")
            self._emit(name, slug, "failure", response.error or response.message)
            return

        logger.info(f"Cache revalidated for {slug}")
        self._emit(name, slug, "success", response.path)

    async def _authorize_analytics(self, slug: str, url: str) -> None:
        name: SideEffectName = "analytics_authorization"

        if self.analytics_client is None:
            logger.debug(f"Skipping analytics authorization for {slug}: no API key")
            self._emit(name, slug, "skipped", "POSTHOG_PERSONAL_API_KEY not set")
            return

        try:
            changed = await self.analytics_client.authorize_landing_page(url)
        except RequestTimeoutError as e:
            logger.warning(f"Analytics authorization timed out for {slug}")
            self._emit(name, slug, "timeout", e.message)
            return
        except Exception as e:
            logger.warning(f"Analytics authorization failed for {slug}: {e}")
            self._emit(name, slug, "failure", str(e))
            return

        detail = "authorized" if changed else "already authorized"
        logger.info(f"Landing page URL {url} {detail} for analytics")
        self._emit(name, slug, "success", detail)

    async def archive(self, slug: str, secret: str | None) -> PublishResult:
        """Take a page offline and revalidate its cache.

        Args:
            slug: Page key to archive
            secret: Caller's publish secret

        Returns:
            PublishResult with ``changed=True`` on success; never raises
        """
        try:
            if (denied := self._check_secret(secret)) is not None:
                return denied

            try:
                archived = await self.store.archive(slug)
            except PersistenceError as e:
                logger.error(f"Failed to archive {slug}: {e.message}")
                return PublishResult.failure(
                    f"Failed to save to database: {e.message}",
                    PublishFailureReason.PERSISTENCE,
                )

            if archived is None:
                return PublishResult.failure(
                    f"No landing page found for {slug}", PublishFailureReason.NOT_FOUND
                )

            logger.info(f"Archived {slug}")
            await self._revalidate(slug)
            url = archived.page_url or generate_public_url(
                self.settings.site_url, slug, archived.subdomain
            )
            return PublishResult.success(url, archived.content_sha, changed=True)
        except Exception as e:
            return self._unexpected("archive", e)

    async def get_published_content(self, slug: str) -> NormalizedContent | None:
        """Return the live content for a slug, or None if not published.

        Raises:
            PersistenceError: If the store cannot be read
        """
        return extract_normalized_content(await self.store.get_published(slug))
