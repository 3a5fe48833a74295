"""Publishing: tenancy rules, throttling and the publish orchestrator."""

from .content import cache_tag, extract_normalized_content, metadata_from_content
from .publisher import OutcomeSink, Publisher
from .tenancy import (
    RESERVED_SUBDOMAINS,
    generate_public_url,
    generate_slug,
    is_valid_slug,
    slugify,
    suggest_page_url_key,
    validate_subdomain,
)
from .throttle import InMemoryThrottle, PublishThrottle

__all__ = [
    "Publisher",
    "OutcomeSink",
    "PublishThrottle",
    "InMemoryThrottle",
    "RESERVED_SUBDOMAINS",
    "validate_subdomain",
    "generate_public_url",
    "slugify",
    "generate_slug",
    "suggest_page_url_key",
    "is_valid_slug",
    "cache_tag",
    "extract_normalized_content",
    "metadata_from_content",
]
