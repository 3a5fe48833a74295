"""Text cleanup applied to every seller-supplied string."""

import re

WHITESPACE_RUN = re.compile(r"\s+")
CURLY_DOUBLE_QUOTES = re.compile("[“”„‟]")
CURLY_SINGLE_QUOTES = re.compile("[‘’‚‛]")


def sanitize_text(text: str | None) -> str | None:
    """Trim, collapse whitespace runs and straighten curly quotes.

    Args:
        text: Raw text from the submission

    Returns:
        The cleaned text, or None if nothing remains

    Examples:
        >>> sanitize_text("  Save “more”   time ")
        'Save "more" time'
        >>> sanitize_text("   ") is None
        True
    """
    if not text:
        return None
    cleaned = WHITESPACE_RUN.sub(" ", text.strip())
    cleaned = CURLY_DOUBLE_QUOTES.sub('"', cleaned)
    cleaned = CURLY_SINGLE_QUOTES.sub("'", cleaned)
    return cleaned or None


def trim_text(link: str | None) -> str | None:
    """Trim surrounding whitespace without touching the contents (URLs, colors)."""
    if not link:
        return None
    return link.strip() or None
