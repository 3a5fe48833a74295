"""Validate-then-normalize entry point for raw landing submissions."""

import logging
from typing import Any

from pydantic import ValidationError

from schemas.raw_content import RawContent
from schemas.validation import ErrorItem, ValidationResult, WarningItem

from ..normalize.hashing import compute_content_sha
from ..normalize.mapper import map_raw_to_normalized
from .errors import E_NORMALIZE, create_error
from .rules import DEFAULT_POLICY, LengthPolicy, run_advisory_rules, run_blocking_rules

logger = logging.getLogger(__name__)

ELLIPSIS = "..."
WORD_BOUNDARY_THRESHOLD = 0.8


def truncate_meta_description(
    description: str | None, max_length: int = DEFAULT_POLICY.meta_description
) -> str | None:
    """Shorten a meta description to a display cap.

    Cuts at the last space when that space falls in the final fifth of
    the allowed length, otherwise cuts hard. An ellipsis is appended in
    both cases.

    Args:
        description: Description text
        max_length: Maximum number of characters kept before the ellipsis

    Returns:
        The description, truncated if needed, or None if empty
    """
    if not description:
        return None
    if len(description) <= max_length:
        return description

    truncated = description[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > max_length * WORD_BOUNDARY_THRESHOLD:
        return truncated[:last_space] + ELLIPSIS
    return truncated + ELLIPSIS


def format_error_location(loc: tuple[int | str, ...]) -> str:
    """Render a pydantic error location as a field path.

    Examples:
        >>> format_error_location(("socialProofs", 2, "link"))
        'socialProofs[2].link'
    """
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def _structural_errors(exc: ValidationError) -> list[ErrorItem]:
    return [
        create_error(
            E_NORMALIZE,
            format_error_location(error["loc"]) or None,
            f"Could not normalize content: {error['msg']}",
        )
        for error in exc.errors()
    ]


def _invalid(errors: list[ErrorItem], warnings=None) -> ValidationResult:
    return ValidationResult(errors=errors, warnings=warnings or [], is_valid=False)


def validate_and_normalize(
    raw: Any, policy: LengthPolicy | None = None, detailed: bool = False
) -> ValidationResult:
    """Validate a raw submission and, if it passes, normalize and hash it.

    Warnings are computed even when blocking errors are found so that the
    author sees every problem at once. The meta description is truncated
    before hashing, so the hash commits to the publish-ready tree.

    Args:
        raw: Untrusted, already-decoded JSON value
        policy: Length policy; defaults to the standard caps
        detailed: Include exception text in unexpected-failure messages

    Returns:
        ValidationResult; never raises for bad input
    """
    if policy is None:
        policy = DEFAULT_POLICY

    if not isinstance(raw, dict):
        logger.warning(f"Rejected non-object content of type {type(raw).__name__}")
        return _invalid(
            [create_error(E_NORMALIZE, message="Content must be a JSON object.")]
        )

    try:
        content = RawContent.model_validate(raw)
    except ValidationError as e:
        logger.warning(f"Raw content failed structural validation: {e.error_count()} errors")
        return _invalid(_structural_errors(e))

    warnings: list[WarningItem] = []
    try:
        errors = run_blocking_rules(content, policy)
        warnings = run_advisory_rules(content, policy)

        if errors:
            logger.debug(f"Content rejected with {len(errors)} errors")
            return _invalid(errors, warnings)

        normalized = map_raw_to_normalized(content)
        if normalized.seo is not None:
            normalized.seo.description = truncate_meta_description(
                normalized.seo.description, policy.meta_description
            )

        content_sha = compute_content_sha(normalized)
        logger.debug(f"Content normalized with sha {content_sha}")
    except Exception as e:
        logger.error(f"Unexpected error normalizing content: {e}", exc_info=detailed)
        message = f"Normalization failed: {e}" if detailed else None
        return _invalid([create_error(E_NORMALIZE, message=message)], warnings)

    return ValidationResult(
        normalized=normalized,
        content_sha=content_sha,
        warnings=warnings,
        is_valid=True,
    )
