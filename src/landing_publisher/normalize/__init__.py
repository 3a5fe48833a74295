"""Normalization: mapping, canonical serialization and hashing."""

from .canonical import stable_stringify
from .hashing import compare_sha, compute_content_sha
from .mapper import map_raw_to_normalized
from .sanitize import sanitize_text, trim_text

__all__ = [
    "compare_sha",
    "compute_content_sha",
    "map_raw_to_normalized",
    "sanitize_text",
    "stable_stringify",
    "trim_text",
]
