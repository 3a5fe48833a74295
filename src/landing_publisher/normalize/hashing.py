"""Content fingerprinting for normalized landing pages."""

import hashlib
from collections.abc import Mapping
from typing import Any

from schemas.normalized import NormalizedContent

from .canonical import stable_stringify


def compute_content_sha(normalized: NormalizedContent | Mapping[str, Any]) -> str:
    """Compute the SHA-256 fingerprint of normalized content.

    The digest is taken over the UTF-8 bytes of the canonical serialization,
    so it is stable across key ordering. It doubles as the idempotency key
    for publishing.

    Args:
        normalized: Normalized content model or its serialized tree

    Returns:
        64-character lowercase hex digest

    Raises:
        ValueError: If no content is given
    """
    if normalized is None:
        raise ValueError("Cannot compute SHA for missing content")

    tree = normalized.to_tree() if isinstance(normalized, NormalizedContent) else normalized
    return hashlib.sha256(stable_stringify(tree).encode("utf-8")).hexdigest()


def compare_sha(sha1: str | None, sha2: str | None) -> bool:
    """Return True when both hashes are present and equal."""
    if not sha1 or not sha2:
        return False
    return sha1 == sha2
