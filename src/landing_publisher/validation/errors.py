"""Error and warning taxonomy for landing content validation.

Errors block normalization and publishing; warnings are advisory only.
"""

from schemas.validation import ErrorItem, WarningItem

# Blocking error codes
E_HERO_REQ = "E-HERO-REQ"
E_MIN_SECTION = "E-MIN-SECTION"
E_URL_SCHED = "E-URL-SCHED"
E_URL_SELLER = "E-URL-SELLER"
E_URL_SOCIAL = "E-URL-SOCIAL"
E_URL_VIDEO = "E-URL-VIDEO"
E_TEXT_LIMIT = "E-TEXT-LIMIT"
E_NORMALIZE = "E-NORMALIZE"

# Advisory warning codes
W_HERO_LONG = "W-HERO-LONG"
W_SUBHEAD_LONG = "W-SUBHEAD-LONG"
W_BENEFIT_LONG = "W-BENEFIT-LONG"
W_QUOTE_LONG = "W-QUOTE-LONG"
W_VIDEO_HOST = "W-VIDEO-HOST"
W_CONTRAST = "W-CONTRAST"

ERROR_MESSAGES = {
    E_HERO_REQ: "Hero headline is required.",
    E_MIN_SECTION: "Provide at least one of Benefits, Options, or Proof.",
    E_URL_SCHED: "Meeting scheduler link must be a valid https URL.",
    E_URL_SELLER: "Seller website must be a valid https URL.",
    E_URL_SOCIAL: "One or more social proof links are not valid https URLs.",
    E_URL_VIDEO: "Demo link must be a valid https URL.",
    E_TEXT_LIMIT: "Text exceeds allowed length; please shorten.",
    E_NORMALIZE: "Could not normalize content. Check field names and structure.",
}

WARNING_MESSAGES = {
    W_HERO_LONG: "Hero headline is quite long; consider ≤ 90 characters.",
    W_SUBHEAD_LONG: "Subhead is quite long; consider shortening it.",
    W_BENEFIT_LONG: "Benefit description is long; consider ≤ 400 characters.",
    W_QUOTE_LONG: "Quote is long; consider ≤ 300 characters.",
    W_VIDEO_HOST: "Video host not supported for embed; we'll show a link.",
    W_CONTRAST: "Brand colors reduce text contrast; we've auto-adjusted text color.",
}


def create_error(
    code: str, field: str | None = None, message: str | None = None
) -> ErrorItem:
    """Build an ErrorItem, falling back to the default message for the code."""
    return ErrorItem(
        code=code,
        message=message or ERROR_MESSAGES.get(code, "Unknown error"),
        field=field,
    )


def create_warning(
    code: str, field: str | None = None, message: str | None = None
) -> WarningItem:
    """Build a WarningItem, falling back to the default message for the code."""
    return WarningItem(
        code=code,
        message=message or WARNING_MESSAGES.get(code, "Unknown warning"),
        field=field,
    )
