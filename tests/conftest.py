"""Pytest fixtures for Landing Publisher tests."""

import json

import pytest

from landing_publisher.config import PublisherSettings

PUBLISH_SECRET = "studio-secret-0123456789"


@pytest.fixture
def minimal_raw():
    """Smallest submission that passes every blocking rule."""
    return {
        "biggestBusinessBenefitBuyerStatement": "Reduce costs by 40%",
        "BuyersName": "Acme",
        "SellersName": "Vendor",
        "meetingSchedulerLink": "https://calendly.com/x",
        "highestOperationalBenefit": {
            "benefits": [{"statement": "Save time", "content": "desc"}],
        },
    }


@pytest.fixture
def full_raw():
    """Submission populating every section the normalizer understands."""
    return {
        "BuyersName": "Acme Corp",
        "SellersName": "Vendor Inc",
        "biggestBusinessBenefitBuyerStatement": "  Cut   warehouse costs “fast”  ",
        "synopsisBusinessBenefit": "Automate forklifts across every site.",
        "shortDescriptionBusinessBenefit": "Driverless tuggers that slot into your current flows.",
        "meetingSchedulerLink": "https://calendly.com/vendor/intro",
        "sellerLinkWebsite": "https://vendor.example.com",
        "quickDemoLinks": "https://vimeo.com/123456",
        "highestOperationalBenefit": {
            "highestOperationalBenefitStatement": "Operational wins",
            "benefits": [
                {"statement": "Save time", "content": "Fewer manual moves."},
                {"statement": "Fewer incidents", "content": "Sensors stop for people."},
            ],
        },
        "synopsisAutomationOptions": "Pick the path that fits.",
        "options": [
            {"title": "Pilot", "description": "One site, one quarter."},
            {"title": "Rollout", "description": "All sites."},
        ],
        "mostRelevantProof": {
            "title": "Case study",
            "summaryTitle": "Tier-1 supplier",
            "summaryContent": "Cut tugging labor by half.",
            "quoteContent": "It just works.",
            "quoteAuthorFullname": "Jane Doe",
            "quoteAuthorDesignation": "VP Operations",
            "quoteAuthorCompany": "Supplier Co",
        },
        "socialProofs": [
            {
                "type": "article",
                "description": "Featured in Logistics Weekly",
                "link": "https://news.example.com/story",
            },
        ],
        "secondHighestOperationalBenefitStatement": "Safer floors",
        "secondHighestOperationalBenefitDescription": "Fewer near misses.",
        "sellerDescription": "Vendor builds autonomous tuggers.",
        "sellerLinkReadMore": "https://vendor.example.com/about",
        "brand": {
            "logoUrl": "https://vendor.example.com/logo.svg",
            "colors": {"primary": "#0044cc", "bg": "#ffffff", "text": "#111111"},
            "fonts": {"heading": "Inter", "body": "Inter"},
        },
        "internalNotes": "kept as extension data",
    }


@pytest.fixture
def publish_meta():
    """Path-addressed publish metadata."""
    return {
        "page_url_key": "acme-vendor-1025",
        "buyer_id": "acme",
        "seller_id": "vendor",
        "mmyy": "1025",
        "buyer_name": "Acme",
        "seller_name": "Vendor",
    }


@pytest.fixture
def settings(tmp_path):
    """Publisher settings with a configured publish secret."""
    return PublisherSettings(
        publish_secret=PUBLISH_SECRET,
        site_url="https://pages.example.com",
        store_dir=tmp_path / "pages",
    )


@pytest.fixture
def publish_secret():
    return PUBLISH_SECRET


@pytest.fixture
def raw_file(tmp_path, minimal_raw):
    """Minimal submission written to a JSON file."""
    path = tmp_path / "landing.json"
    path.write_text(json.dumps(minimal_raw))
    return path
