"""Command-line interface for landing-publisher."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from landing_publisher.config import PublisherSettings
from landing_publisher.publish import (
    Publisher,
    metadata_from_content,
    suggest_page_url_key,
)
from landing_publisher.stores import JsonFilePageStore
from landing_publisher.validation import validate_and_normalize


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def _load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _publisher(args: argparse.Namespace) -> Publisher:
    settings = PublisherSettings.from_env()
    store = JsonFilePageStore(args.store_dir) if args.store_dir else None
    return Publisher.from_settings(settings, store=store)


def validate_content(args: argparse.Namespace) -> int:
    """Execute the validate command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 if the content is valid, 1 otherwise)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        raw = _load_json(args.file)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read {args.file}: {e}")
        return 1

    result = validate_and_normalize(raw)

    if args.json:
        _print_json(result.to_payload())
    else:
        for error in result.errors:
            logger.error(f"{error.code} {error.field or '-'}: {error.message}")
        for warning in result.warnings:
            logger.warning(f"{warning.code} {warning.field or '-'}: {warning.message}")
        if result.is_valid:
            logger.info(f"Valid content, sha {result.content_sha}")

    return 0 if result.is_valid else 1


def hash_content(args: argparse.Namespace) -> int:
    """Execute the hash command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        raw = _load_json(args.file)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read {args.file}: {e}")
        return 1

    result = validate_and_normalize(raw)
    if not result.is_valid:
        logger.error(f"Content is invalid ({len(result.errors)} errors); no hash")
        return 1

    print(result.content_sha)
    return 0


async def _publish(args: argparse.Namespace, raw: Any, meta: dict[str, Any]):
    async with _publisher(args) as publisher:
        secret = args.secret or publisher.settings.publish_secret
        return await publisher.publish(raw, meta, secret)


def publish_content(args: argparse.Namespace) -> int:
    """Execute the publish command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        raw = _load_json(args.file)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read {args.file}: {e}")
        return 1

    meta = {
        "page_url_key": args.page_url_key,
        "subdomain": args.subdomain,
        "campaign_id": args.campaign_id,
        "buyer_id": args.buyer_id,
        "seller_id": args.seller_id,
        "mmyy": args.mmyy,
        "buyer_name": args.buyer_name,
        "seller_name": args.seller_name,
    }
    meta = {key: value for key, value in meta.items() if value is not None}

    result = asyncio.run(_publish(args, raw, meta))
    _print_json(result.to_payload())

    if not result.ok:
        logger.error(f"Publish failed: {result.error}")
        for issue in result.validation_errors or []:
            logger.error(f"  - {issue.path}: {issue.message}")
        return 1

    logger.info(f"Published: {result.url}")
    logger.info(f"  Changed: {result.changed}")
    return 0


async def _show(args: argparse.Namespace):
    async with _publisher(args) as publisher:
        return await publisher.get_published_content(args.slug)


def show_page(args: argparse.Namespace) -> int:
    """Execute the show command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 if the page is not published)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        content = asyncio.run(_show(args))
    except Exception as e:
        logger.error(f"Failed to load {args.slug}: {e}")
        return 1

    if content is None:
        logger.error(f"No published page for {args.slug}")
        return 1

    if args.metadata:
        _print_json(metadata_from_content(content))
    else:
        _print_json(content.to_tree())
    return 0


async def _archive(args: argparse.Namespace):
    async with _publisher(args) as publisher:
        secret = args.secret or publisher.settings.publish_secret
        return await publisher.archive(args.slug, secret)


def archive_page(args: argparse.Namespace) -> int:
    """Execute the archive command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    result = asyncio.run(_archive(args))
    if not result.ok:
        logger.error(f"Archive failed: {result.error}")
        return 1

    logger.info(f"Archived: {args.slug}")
    return 0


def suggest_slug(args: argparse.Namespace) -> int:
    """Execute the suggest-slug command."""
    print(suggest_page_url_key(args.buyer, args.seller, args.mmyy, args.version))
    return 0


def _add_store_dir(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--store-dir",
        type=Path,
        default=None,
        help="Use the JSON-file page store in this directory instead of the configured store",
    )


def _add_secret(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--secret",
        type=str,
        default=None,
        help="Publish secret (default: STUDIO_PUBLISH_SECRET)",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="landing-publisher",
        description="Validate, normalize and publish tenant landing pages",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate raw landing content",
        description="Run the content rules on a raw landing JSON file and report errors and warnings.",
    )
    validate_parser.add_argument("file", type=Path, help="Raw landing JSON file")
    validate_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full validation result as JSON",
    )
    validate_parser.set_defaults(func=validate_content)

    hash_parser = subparsers.add_parser(
        "hash",
        help="Print the content hash of a landing file",
        description="Normalize a valid raw landing JSON file and print its SHA-256 content hash.",
    )
    hash_parser.add_argument("file", type=Path, help="Raw landing JSON file")
    hash_parser.set_defaults(func=hash_content)

    publish_parser = subparsers.add_parser(
        "publish",
        help="Publish a landing page",
        description="Validate, normalize and publish a raw landing JSON file for a tenant.",
    )
    publish_parser.add_argument("file", type=Path, help="Raw landing JSON file")
    address = publish_parser.add_mutually_exclusive_group(required=True)
    address.add_argument("--page-url-key", type=str, help="Path-based page key")
    address.add_argument("--subdomain", type=str, help="Tenant subdomain")
    publish_parser.add_argument("--buyer-id", type=str, required=True, help="Buyer identifier")
    publish_parser.add_argument("--seller-id", type=str, required=True, help="Seller identifier")
    publish_parser.add_argument("--mmyy", type=str, required=True, help="Month-year tag, e.g. 1025")
    publish_parser.add_argument("--buyer-name", type=str, help="Buyer display name")
    publish_parser.add_argument("--seller-name", type=str, help="Seller display name")
    publish_parser.add_argument("--campaign-id", type=str, help="Campaign identifier")
    _add_secret(publish_parser)
    _add_store_dir(publish_parser)
    publish_parser.set_defaults(func=publish_content)

    show_parser = subparsers.add_parser(
        "show",
        help="Print a published page",
        description="Print the normalized content of a published landing page.",
    )
    show_parser.add_argument("slug", type=str, help="Page key")
    show_parser.add_argument(
        "--metadata",
        action="store_true",
        help="Print page-head metadata instead of the content tree",
    )
    _add_store_dir(show_parser)
    show_parser.set_defaults(func=show_page)

    archive_parser = subparsers.add_parser(
        "archive",
        help="Archive a published page",
        description="Take a landing page offline and revalidate its cache.",
    )
    archive_parser.add_argument("slug", type=str, help="Page key")
    _add_secret(archive_parser)
    _add_store_dir(archive_parser)
    archive_parser.set_defaults(func=archive_page)

    slug_parser = subparsers.add_parser(
        "suggest-slug",
        help="Suggest a page key",
        description="Suggest a versioned page key from buyer, seller and month-year.",
    )
    slug_parser.add_argument("buyer", type=str, help="Buyer name")
    slug_parser.add_argument("seller", type=str, help="Seller name")
    slug_parser.add_argument("mmyy", type=str, help="Month-year tag")
    slug_parser.add_argument(
        "--version",
        type=int,
        default=1,
        help="Version number (default: 1)",
    )
    slug_parser.set_defaults(func=suggest_slug)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
