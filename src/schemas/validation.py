"""Validation result schemas."""

from typing import Any

from pydantic import BaseModel, model_validator
from pydantic.alias_generators import to_camel

from .normalized import NormalizedContent


class ErrorItem(BaseModel):
    """A blocking validation problem.

    Attributes:
        code: Code from the fixed error taxonomy (e.g. "E-URL-SCHED")
        message: Human-readable explanation
        field: Raw field path the problem is attributed to, if any
    """

    code: str
    message: str
    field: str | None = None

    model_config = {"frozen": True}


class WarningItem(BaseModel):
    """An advisory validation note that never blocks publishing."""

    code: str
    message: str
    field: str | None = None

    model_config = {"frozen": True}


class ValidationResult(BaseModel):
    """Outcome of validating and normalizing one raw submission.

    ``normalized`` and ``content_sha`` are only populated when the
    submission is valid, and ``is_valid`` is true exactly when there are
    no errors.
    """

    normalized: NormalizedContent | None = None
    content_sha: str = ""
    errors: list[ErrorItem] = []
    warnings: list[WarningItem] = []
    is_valid: bool

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @model_validator(mode="after")
    def _check_consistency(self) -> "ValidationResult":
        if self.is_valid != (len(self.errors) == 0):
            raise ValueError("is_valid must be true exactly when there are no errors")
        if self.is_valid and (self.normalized is None or not self.content_sha):
            raise ValueError("valid results must carry normalized content and a hash")
        if not self.is_valid and (self.normalized is not None or self.content_sha):
            raise ValueError("invalid results must not carry normalized content")
        return self

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON shape returned by the validation endpoint."""
        return {
            "normalized": self.normalized.to_tree() if self.normalized else None,
            "contentSha": self.content_sha,
            "errors": [e.model_dump(exclude_none=True) for e in self.errors],
            "warnings": [w.model_dump(exclude_none=True) for w in self.warnings],
            "isValid": self.is_valid,
        }
