"""Schema definitions for Landing Publisher."""

from .normalized import (
    Benefits,
    Brand,
    CallToAction,
    Hero,
    NormalizedContent,
    Options,
    Proof,
    SocialProofs,
)
from .publish import (
    PageContent,
    PublishedPage,
    PublishFailureReason,
    PublishMeta,
    PublishResult,
    RevalidateRequest,
    RevalidateResponse,
    SideEffectOutcome,
    ValidationIssue,
)
from .raw_content import RawContent
from .validation import ErrorItem, ValidationResult, WarningItem

__all__ = [
    "Benefits",
    "Brand",
    "CallToAction",
    "ErrorItem",
    "Hero",
    "NormalizedContent",
    "Options",
    "PageContent",
    "Proof",
    "PublishedPage",
    "PublishFailureReason",
    "PublishMeta",
    "PublishResult",
    "RawContent",
    "RevalidateRequest",
    "RevalidateResponse",
    "SideEffectOutcome",
    "SocialProofs",
    "ValidationIssue",
    "ValidationResult",
    "WarningItem",
]
