"""Public read path helpers for stored landing pages."""

import logging
from typing import Any

from pydantic import ValidationError

from schemas.normalized import NormalizedContent
from schemas.publish import PublishedPage

logger = logging.getLogger(__name__)


def cache_tag(slug: str) -> str:
    """Cache tag under which the public site stores a page."""
    return f"landing:{slug}"


def extract_normalized_content(page: PublishedPage | None) -> NormalizedContent | None:
    """Pull the renderable content out of a stored record.

    Returns None for a missing record or one whose stored tree no longer
    matches the content model.
    """
    if page is None:
        return None

    try:
        return NormalizedContent.model_validate(page.page_content.normalized)
    except ValidationError as e:
        logger.error(
            f"Invalid page_content for {page.page_url_key}: {e.error_count()} errors"
        )
        return None


def metadata_from_content(content: NormalizedContent) -> dict[str, Any]:
    """Derive page-head metadata (title, description, social cards)."""
    title = content.title or content.hero.headline
    description = (content.seo.description if content.seo else None) or content.hero.subhead

    metadata: dict[str, Any] = {
        "title": title,
        "description": description,
        "openGraph": {"title": title, "description": description, "type": "website"},
        "twitter": {
            "card": "summary_large_image",
            "title": title,
            "description": description,
        },
    }
    if content.seo and content.seo.og_image:
        metadata["openGraph"]["images"] = [content.seo.og_image]
    return metadata
