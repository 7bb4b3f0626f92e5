"""Render catalog data as text for the terminal."""
import json
from typing import Any, Dict, List, Mapping, Optional, Sequence

from tabulate import tabulate

from library_catalog.models import STATUS_AVAILABLE, STATUS_CHECKED_OUT, STATUS_UNKNOWN, CatalogRecord
from library_catalog.parse import get_field, record_to_dict
from library_catalog.query import filter_by_status

FORMATS = ("table", "json", "compact")


def truncate(value: Any, width: int) -> str:
    """Shorten text to ``width`` characters, marking the cut with '...'."""
    text = "" if value is None else str(value)
    return text[:width] + "..." if len(text) > width else text


def format_availability(availability: Any) -> str:
    """Short availability label with shelf or due date."""
    status = get_field(availability, "status", STATUS_UNKNOWN)

    if status == STATUS_AVAILABLE:
        return f"Available - Shelf: {get_field(availability, 'location', 'Unknown location')}"
    if status == STATUS_CHECKED_OUT:
        return f"Checked Out - Due: {get_field(availability, 'due_date', 'Unknown due date')}"
    return "Availability Unknown"


def _line(index: int, record: CatalogRecord) -> str:
    return (
        f'{index}. "{record.title or "Unknown Title"}" by {record.author or "Unknown Author"} '
        f'({record.year or "Unknown Year"}) - {format_availability(record.availability)}'
    )


def render_statistics(stats: Mapping[str, Any]) -> str:
    """Statistics block followed by a per-category table."""
    lines = [
        "=" * 50,
        "LIBRARY STATISTICS",
        "=" * 50,
        f"Total books: {stats.get('total', 0)}",
        f"Available books: {stats.get('available', 0)}",
        f"Checked out books: {stats.get('checked_out', 0)}",
        f"Availability: {stats.get('percentage_available', 0)}%",
        f"Unique authors: {stats.get('unique_authors', 0)}",
    ]

    by_category = stats.get("by_category") or {}
    percentages = stats.get("category_percentages") or {}
    if by_category:
        rows = [
            [category, count, f"{percentages.get(category, 0)}%"]
            for category, count in by_category.items()
        ]
        lines.append("")
        lines.append(tabulate(rows, headers=["Category", "Books", "Share"], tablefmt="grid"))

    lines.append("=" * 50)
    return "\n".join(lines)


def render_records(
    records: Sequence[CatalogRecord],
    fmt: str = "table",
    heading: Optional[str] = "Books",
    width: int = 40
) -> str:
    """
    Render records in the given format.

    Args:
        records: Records to show
        fmt: One of "table", "json", "compact"
        heading: Title line (ignored for json)
        width: Column width for truncation in table mode

    Returns:
        Rendered text
    """
    if fmt == "json":
        return json.dumps([record_to_dict(record) for record in records], indent=2)

    lines = [heading, "=" * 25] if heading else []

    if fmt == "table":
        headers = ["ID", "Title", "Author", "Year", "Category", "Availability"]
        rows = [
            [
                record.id if record.id is not None else "N/A",
                truncate(record.title or "Unknown Title", width),
                truncate(record.author or "Unknown Author", width),
                record.year or "Unknown",
                record.category or "None",
                format_availability(record.availability)
            ]
            for record in records
        ]
        lines.append(tabulate(rows, headers=headers, tablefmt="grid"))

    elif fmt == "compact":
        lines.extend(_line(i, record) for i, record in enumerate(records, 1))

    else:
        raise ValueError(f"Unknown format: {fmt}")

    return "\n".join(lines)


def render_search_results(results: Sequence[CatalogRecord], criteria: Mapping[str, Any]) -> str:
    """Search header with the criteria used, then the numbered matches."""
    parts = []
    if criteria.get("title"):
        parts.append(f'Title: "{criteria["title"]}"')
    if criteria.get("author"):
        parts.append(f"Author: {criteria['author']}")
    if criteria.get("category"):
        parts.append(f"Category: {criteria['category']}")
    criteria_text = " | ".join(parts) if parts else "All Books"

    lines = [
        "Search Results",
        "=" * 25,
        f"Criteria: {criteria_text}",
        f"Matches Found: {len(results)}",
    ]
    if results:
        lines.extend(_line(i, record) for i, record in enumerate(results, 1))
    else:
        lines.append("No matches found.")

    return "\n".join(lines)


def render_analysis(records: Sequence[CatalogRecord]) -> str:
    """
    Collection insights: availability counts, books per decade, the most
    common decade and the category distribution.
    """
    if not records:
        return "No books available."

    lines = [
        "--- Book Availability ---",
        f"Available: {len(filter_by_status(records, STATUS_AVAILABLE))}",
        f"Checked Out: {len(filter_by_status(records, STATUS_CHECKED_OUT))}",
    ]

    decade_counts: Dict[int, int] = {}
    for record in records:
        if isinstance(record.year, int):
            decade = record.year // 10 * 10
            decade_counts[decade] = decade_counts.get(decade, 0) + 1

    lines.append("")
    lines.append("--- Publication by Decade ---")
    for decade, count in sorted(decade_counts.items()):
        lines.append(f"{decade}s: {count} book(s)")

    if decade_counts:
        # Ties go to the earliest decade
        top_decade, top_count = max(sorted(decade_counts.items()), key=lambda item: item[1])
        lines.append("")
        lines.append("--- Most Common Publication Decade ---")
        lines.append(f"{top_decade}s ({top_count} books)")

    category_counts: Dict[str, int] = {}
    for record in records:
        category = record.category or "Unknown"
        category_counts[category] = category_counts.get(category, 0) + 1

    lines.append("")
    lines.append("--- Category Distribution ---")
    lines.extend(f"{category}: {count}" for category, count in category_counts.items())

    return "\n".join(lines)


def render_groups(groups: Mapping[str, List[CatalogRecord]], descriptions: Mapping[str, str]) -> str:
    """Category headings with their description and titles."""
    lines = []
    for category, members in groups.items():
        description = descriptions.get(category)
        lines.append(f"{category} ({len(members)})" + (f" - {description}" if description else ""))
        lines.extend(f"  - {record.title or 'Unknown Title'}" for record in members)
    return "\n".join(lines) if lines else "No categories."
