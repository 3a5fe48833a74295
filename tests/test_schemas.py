"""Tests for schema definitions."""

import pytest
from pydantic import ValidationError

from schemas import (
    ErrorItem,
    NormalizedContent,
    PageContent,
    PublishedPage,
    PublishFailureReason,
    PublishMeta,
    PublishResult,
    RawContent,
    RevalidateRequest,
    RevalidateResponse,
    SideEffectOutcome,
    ValidationIssue,
    ValidationResult,
)


class TestRawContent:
    """Tests for RawContent."""

    def test_aliases(self, full_raw):
        """Authoring-tool keys map to named fields."""
        raw = RawContent.model_validate(full_raw)

        assert raw.buyers_name == "Acme Corp"
        assert raw.operational_benefit.benefits[1].statement == "Fewer incidents"
        assert raw.proof.quote_author_company == "Supplier Co"
        assert raw.brand.logo_url == "https://vendor.example.com/logo.svg"

    def test_unknown_keys_kept_as_extension_data(self, full_raw):
        """Unrecognised keys survive in model_extra."""
        raw = RawContent.model_validate(full_raw)

        assert raw.model_extra == {"internalNotes": "kept as extension data"}

    def test_empty_object_is_valid(self):
        """Every field is optional at the type level."""
        assert RawContent.model_validate({}).headline is None

    def test_wrong_types_rejected(self):
        """Type mismatches are schema errors."""
        with pytest.raises(ValidationError):
            RawContent.model_validate({"options": "not a list"})


class TestValidationResult:
    """Tests for ValidationResult invariants."""

    def test_invalid_result(self):
        """An invalid result carries errors but no content."""
        result = ValidationResult(
            errors=[ErrorItem(code="E-HERO-REQ", message="Required")],
            is_valid=False,
        )

        assert result.to_payload() == {
            "normalized": None,
            "contentSha": "",
            "errors": [{"code": "E-HERO-REQ", "message": "Required"}],
            "warnings": [],
            "isValid": False,
        }

    def test_is_valid_must_match_errors(self):
        """is_valid cannot disagree with the error list."""
        with pytest.raises(ValidationError):
            ValidationResult(
                errors=[ErrorItem(code="E-HERO-REQ", message="Required")],
                is_valid=True,
            )

    def test_valid_result_needs_content(self):
        """A valid result must carry normalized content and a hash."""
        with pytest.raises(ValidationError):
            ValidationResult(is_valid=True)

    def test_error_items_are_frozen(self):
        """Error items are immutable."""
        error = ErrorItem(code="E-URL-SCHED", message="bad", field="meetingSchedulerLink")

        with pytest.raises(ValidationError):
            error.code = "other"


class TestNormalizedContent:
    """Tests for NormalizedContent serialization."""

    def test_round_trips_through_tree(self):
        """A dumped tree validates back to an equal model."""
        content = NormalizedContent(
            title="T",
            hero={"headline": "T", "cta": {"text": "Book", "href": ""}, "buyerName": "A"},
        )

        assert NormalizedContent.model_validate(content.to_tree()) == content
        assert content.to_tree()["hero"]["buyerName"] == "A"


class TestPublishMeta:
    """Tests for PublishMeta."""

    def test_page_url_key_addressing(self, publish_meta):
        """A page key alone is enough."""
        meta = PublishMeta.model_validate(publish_meta)

        assert meta.slug == "acme-vendor-1025"
        assert meta.subdomain is None

    def test_subdomain_becomes_slug(self, publish_meta):
        """A subdomain overrides the page key."""
        publish_meta["subdomain"] = "acme"

        meta = PublishMeta.model_validate(publish_meta)

        assert meta.slug == "acme"
        assert meta.page_url_key == "acme"

    def test_requires_an_address(self, publish_meta):
        """Either a page key or a subdomain is required."""
        del publish_meta["page_url_key"]

        with pytest.raises(ValidationError, match="page_url_key or subdomain"):
            PublishMeta.model_validate(publish_meta)

    @pytest.mark.parametrize(
        "field,value",
        [
            ("page_url_key", "Acme_Vendor"),
            ("page_url_key", "ab"),
            ("page_url_key", "-acme"),
            ("subdomain", "ab"),
            ("buyer_id", "ACME"),
            ("buyer_id", ""),
            ("seller_id", "x" * 51),
            ("mmyy", "1325"),
            ("mmyy", "125"),
            ("buyer_name", ""),
        ],
    )
    def test_invalid_fields(self, publish_meta, field, value):
        """Malformed identifiers are rejected."""
        publish_meta[field] = value

        with pytest.raises(ValidationError):
            PublishMeta.model_validate(publish_meta)

    def test_mmyy_message(self, publish_meta):
        """The month-year error explains the format."""
        publish_meta["mmyy"] = "2599"

        with pytest.raises(ValidationError, match="MMYY"):
            PublishMeta.model_validate(publish_meta)


class TestPublishResult:
    """Tests for PublishResult."""

    def test_success_payload(self):
        """Success payloads use camelCase and omit failure fields."""
        result = PublishResult.success("https://x.example.com/p/a", "abc", changed=True)

        assert result.to_payload() == {
            "ok": True,
            "url": "https://x.example.com/p/a",
            "contentSha": "abc",
            "changed": True,
        }

    def test_failure_payload(self):
        """Failure payloads carry the reason and validation errors."""
        result = PublishResult.failure(
            "Content validation failed",
            PublishFailureReason.INVALID_CONTENT,
            [ValidationIssue(path="BuyersName", message="Required", code="E-HERO-REQ")],
        )

        assert result.to_payload() == {
            "ok": False,
            "error": "Content validation failed",
            "reason": "invalid_content",
            "validationErrors": [
                {"path": "BuyersName", "message": "Required", "code": "E-HERO-REQ"}
            ],
        }


class TestPublishedPage:
    """Tests for PublishedPage."""

    def test_defaults(self):
        """New records start as version 1 drafts."""
        page = PublishedPage(
            page_url_key="acme-vendor-1025",
            page_content=PageContent(normalized={"title": "T"}),
            content_sha="abc",
            buyer_id="acme",
            seller_id="vendor",
        )

        assert page.status == "draft"
        assert page.version == 1
        assert page.deleted_at is None

    def test_rejects_unknown_status(self):
        """Status is limited to draft, published and archived."""
        with pytest.raises(ValidationError):
            PublishedPage(
                page_url_key="a-b",
                status="live",
                page_content=PageContent(normalized={}),
                content_sha="abc",
                buyer_id="a",
                seller_id="b",
            )


class TestRevalidateSchemas:
    """Tests for the revalidation wire shapes."""

    def test_request_slug_pattern(self):
        """Slugs must be lowercase alphanumeric with hyphens."""
        assert RevalidateRequest(slug="acme-1025").slug == "acme-1025"
        with pytest.raises(ValidationError):
            RevalidateRequest(slug="Acme 1025")
        with pytest.raises(ValidationError):
            RevalidateRequest(slug="a" * 101)

    def test_response_allows_extra_fields(self):
        """Unknown response fields are tolerated."""
        response = RevalidateResponse.model_validate(
            {"ok": True, "slug": "a", "path": "/p/a", "revalidated": True}
        )

        assert response.ok is True
        assert response.path == "/p/a"


class TestSideEffectOutcome:
    """Tests for SideEffectOutcome."""

    def test_timestamp_defaults_to_now(self):
        """Outcomes are timestamped in UTC."""
        outcome = SideEffectOutcome(name="cache_revalidation", slug="a", status="success")

        assert outcome.timestamp.tzinfo is not None

    def test_rejects_unknown_status(self):
        """Status is one of the known outcomes."""
        with pytest.raises(ValidationError):
            SideEffectOutcome(name="cache_revalidation", slug="a", status="maybe")
