"""Content validation: rule engine, taxonomy and orchestrator."""

from .contrast import contrast_ratio, ensure_readable_text_color
from .errors import create_error, create_warning
from .orchestrator import truncate_meta_description, validate_and_normalize
from .rules import DEFAULT_POLICY, LengthPolicy
from .urls import is_https_url, is_vimeo_url

__all__ = [
    "DEFAULT_POLICY",
    "LengthPolicy",
    "contrast_ratio",
    "create_error",
    "create_warning",
    "ensure_readable_text_color",
    "is_https_url",
    "is_vimeo_url",
    "truncate_meta_description",
    "validate_and_normalize",
]
