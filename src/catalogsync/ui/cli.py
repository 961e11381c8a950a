# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from catalogsync.app import compare_product_prices, reconcile_scrape_file
from catalogsync.config import ConfigurationError, configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reconcile scraped store listings into the catalog"
    )
    parser.add_argument(
        "--database-uri",
        type=str,
        default=None,
        help="SQLAlchemy database URI (defaults to DATABASE_URI or the data directory)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser("reconcile", help="Store a scrape results JSON file")
    reconcile.add_argument("path", type=Path, help="JSON file keyed by store and department")

    compare = subparsers.add_parser("compare", help="Compare one product's price across stores")
    compare.add_argument("product_name", type=str, help="Exact catalog product name")

    return parser.parse_args(list(argv))


def _validate_args(args: argparse.Namespace) -> None:
    if args.command == "reconcile" and not args.path.is_file():
        raise ValueError(f"Scrape results file not found: {args.path}")
    if args.command == "compare" and not args.product_name.strip():
        raise ValueError("Product name must not be blank")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    try:
        configure_logging()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)

    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        _validate_args(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "reconcile":
            result = reconcile_scrape_file(parsed_args.path, database_uri=parsed_args.database_uri)
            print(
                f"processed={result.processed} created={result.created} "
                f"home_updated={result.home_updated} "
                f"comparison_updated={result.comparison_updated} "
                f"comparison_appended={result.comparison_appended} "
                f"unchanged={result.unchanged} failed={result.failed}"
            )
            if result.aborted:
                log.error("Reconciliation aborted before the end of %s", parsed_args.path)
                sys.exit(1)
        elif parsed_args.command == "compare":
            listings = compare_product_prices(
                parsed_args.product_name, database_uri=parsed_args.database_uri
            )
            if listings is None:
                print(f"No catalog entry named {parsed_args.product_name!r}", file=sys.stderr)
                sys.exit(1)
            home, *others = listings
            print(home.product_name)
            print(f"  {home.store_name} (home): {home.product_price}  {home.product_link}")
            for listing in others:
                print(f"  {listing.store_name}: {listing.product_price}  {listing.product_link}")
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
