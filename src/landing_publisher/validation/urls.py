"""URL hygiene checks for outbound links."""

from urllib.parse import urlsplit


def is_https_url(url: str | None) -> bool:
    """Check that a value is a well-formed absolute https URL.

    The value must start with ``https://`` (case-insensitive) and parse
    into a URL with an ``https`` scheme and a non-empty host. Protocol
    relative URLs, bare hostnames and other schemes are rejected.

    Examples:
        >>> is_https_url("https://example.com/path")
        True
        >>> is_https_url("//example.com")
        False
        >>> is_https_url("javascript:alert(1)")
        False
    """
    if not url or not isinstance(url, str):
        return False

    candidate = url.strip()
    if not candidate.lower().startswith("https://"):
        return False

    try:
        parts = urlsplit(candidate)
        hostname = parts.hostname
        _ = parts.port
    except ValueError:
        return False

    if parts.scheme.lower() != "https" or not hostname:
        return False
    if any(ch.isspace() for ch in candidate):
        return False
    return True


def is_vimeo_url(url: str | None) -> bool:
    """True when a link points at Vimeo and can be embedded."""
    return bool(url) and "vimeo.com" in url.lower()
