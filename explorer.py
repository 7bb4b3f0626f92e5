#!/usr/bin/env python3
"""Catalog Explorer CLI - search and inspect the sample library catalog."""
import argparse
import sys
from library_catalog.catalog import CatalogManager, get_catalog
from library_catalog.config import Config
from library_catalog.display import (
    FORMATS,
    render_analysis,
    render_groups,
    render_records,
    render_search_results,
    render_statistics,
)
from library_catalog.helpers import memoize
from library_catalog.query import filter_by_status, group_by_category, summarize, title_sequence
from library_catalog.store import CATEGORY_DESCRIPTIONS
import logging

logger = logging.getLogger(__name__)

cached_summary = memoize(summarize)


def list_records(args, catalog: CatalogManager, config: Config):
    """List all records, optionally filtered by status."""
    records = list(catalog.records())
    heading = "All Books"
    if args.status:
        records = filter_by_status(records, args.status)
        heading = f"Books ({args.status})"

    print(render_records(records, args.format, heading=heading, width=config.TRUNCATE_WIDTH))


def search_records(args, catalog: CatalogManager, config: Config):
    """Search by title, author and category."""
    case_sensitive = args.case_sensitive or config.CASE_SENSITIVE_SEARCH
    criteria = {"title": args.title, "author": args.author, "category": args.category}

    logger.info(f"Searching for: {criteria} (case sensitive: {case_sensitive})")
    results = catalog.search(case_sensitive=case_sensitive, **criteria)
    logger.info(f"Found {len(results)} records")

    if args.format == "table":
        print(render_search_results(results, criteria))
    else:
        print(render_records(results, args.format, heading="Search Results", width=config.TRUNCATE_WIDTH))


def show_stats(args, catalog: CatalogManager, config: Config):
    """Show catalog statistics."""
    print("\n" + render_statistics(catalog.statistics()) + "\n")


def show_groups(args, catalog: CatalogManager, config: Config):
    """Show records grouped by category."""
    print(render_groups(group_by_category(list(catalog.records())), CATEGORY_DESCRIPTIONS))


def show_titles(args, catalog: CatalogManager, config: Config):
    """Print every title, one per line."""
    for title in title_sequence(catalog.records()):
        print(title or "Unknown Title")


def show_summaries(args, catalog: CatalogManager, config: Config):
    """Print a one-line summary per record."""
    for record in catalog.records():
        print(cached_summary(record))


def show_analysis(args, catalog: CatalogManager, config: Config):
    """Print the collection analysis report."""
    print(render_analysis(catalog.records()))


COMMANDS = {
    "list": list_records,
    "search": search_records,
    "stats": show_stats,
    "groups": show_groups,
    "titles": show_titles,
    "summary": show_summaries,
    "analysis": show_analysis,
}


def build_parser(config: Config) -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Catalog Explorer - in-memory library catalog CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List available books
  %(prog)s list --status available

  # Case-insensitive search
  %(prog)s search --author "robert" --format compact

  # Show statistics
  %(prog)s stats
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # List command
    list_parser = subparsers.add_parser("list", help="List books")
    list_parser.add_argument("--status", help="Only books with this availability status")
    list_parser.add_argument("--format", choices=FORMATS, default=config.DEFAULT_FORMAT, help="Output format")

    # Search command
    search_parser = subparsers.add_parser("search", help="Search for books")
    search_parser.add_argument("--title", help="Title contains")
    search_parser.add_argument("--author", help="Author contains")
    search_parser.add_argument("--category", help="Category contains")
    search_parser.add_argument("--case-sensitive", action="store_true", help="Match case exactly")
    search_parser.add_argument("--format", choices=FORMATS, default=config.DEFAULT_FORMAT, help="Output format")

    subparsers.add_parser("stats", help="Show catalog statistics")
    subparsers.add_parser("groups", help="Group books by category")
    subparsers.add_parser("titles", help="List titles")
    subparsers.add_parser("summary", help="One-line summary per book")
    subparsers.add_parser("analysis", help="Collection analysis")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    config = Config()

    logging.basicConfig(
        level=config.LOG_LEVEL,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    parser = build_parser(config)
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        COMMANDS[args.command](args, get_catalog(), config)

    except KeyboardInterrupt:
        logger.info("\n⚠️  Interrupted by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"❌ Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
