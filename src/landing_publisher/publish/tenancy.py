"""Tenant addressing: subdomain rules, public URLs and slug helpers."""

import re
from urllib.parse import urlsplit

from schemas.publish import SLUG_PATTERN

SUBDOMAIN_REGEX = re.compile(r"^[a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?$", re.IGNORECASE)
SUBDOMAIN_MAX_LENGTH = 63

RESERVED_SUBDOMAINS = frozenset(
    {
        "www",
        "api",
        "admin",
        "app",
        "studio",
        "cdn",
        "static",
        "assets",
        "files",
        "mail",
        "email",
        "smtp",
        "pop",
        "imap",
        "ftp",
        "sftp",
        "ssh",
        "vpn",
        "blog",
        "shop",
        "store",
        "support",
        "help",
        "docs",
        "status",
        "staging",
        "dev",
        "test",
        "demo",
    }
)

NON_SLUG_RUN = re.compile(r"[^a-z0-9]+")


def validate_subdomain(subdomain: str) -> str | None:
    """Check a subdomain's format and reserved status.

    Args:
        subdomain: Requested subdomain

    Returns:
        An error message, or None if the subdomain is acceptable
    """
    if not 1 <= len(subdomain) <= SUBDOMAIN_MAX_LENGTH:
        return f"Subdomain must be 1-{SUBDOMAIN_MAX_LENGTH} characters long"

    if not SUBDOMAIN_REGEX.match(subdomain):
        return (
            "Subdomain must start and end with a letter or digit, "
            "and can only contain letters, digits, and hyphens"
        )

    if subdomain.lower() in RESERVED_SUBDOMAINS:
        return f'Subdomain "{subdomain}" is reserved and cannot be used'

    return None


def subdomain_conflict_message(subdomain: str, buyer_id: str) -> str:
    return f'Subdomain "{subdomain}" is already used by another landing page ({buyer_id})'


def generate_public_url(site_url: str, slug: str, subdomain: str | None = None) -> str:
    """Build the public URL of a page.

    Subdomain addressing drops any port from the site host.

    Examples:
        >>> generate_public_url("https://pages.example.com", "acme", "acme")
        'https://acme.pages.example.com'
        >>> generate_public_url("http://localhost:3000", "acme-vendor-1025")
        'http://localhost:3000/p/acme-vendor-1025'
    """
    site_url = site_url.rstrip("/")
    if not subdomain:
        return f"{site_url}/p/{slug}"

    parts = urlsplit(site_url if "://" in site_url else f"http://{site_url}")
    protocol = "https" if parts.scheme == "https" else "http"
    return f"{protocol}://{subdomain}.{parts.hostname}"


def slugify(text: str) -> str:
    """Lowercase and collapse everything but letters and digits to hyphens.

    Examples:
        >>> slugify("Hello World!")
        'hello-world'
        >>> slugify("Foo---Bar")
        'foo-bar'
    """
    return NON_SLUG_RUN.sub("-", text.strip().lower()).strip("-")


def generate_slug(buyer: str, seller: str, mmyy: str) -> str:
    """Build the conventional ``buyer-seller-mmyy`` page key."""
    parts = [slugify(buyer), slugify(seller), slugify(mmyy)]
    return "-".join(part for part in parts if part)


def suggest_page_url_key(buyer: str, seller: str, mmyy: str, version: int = 1) -> str:
    """Suggest a versioned page key.

    Examples:
        >>> suggest_page_url_key("Acme Corp", "TechVendor Inc", "1024", 1)
        'acme-corp-techvendor-inc-1024-v1'
    """
    parts = [generate_slug(buyer, seller, mmyy), f"v{version}"]
    return "-".join(part for part in parts if part)


def is_valid_slug(slug: str) -> bool:
    return bool(SLUG_PATTERN.match(slug))
