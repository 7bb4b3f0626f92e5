"""Tests for text rendering."""
import json

import pytest

from library_catalog.display import (
    format_availability,
    render_analysis,
    render_groups,
    render_records,
    render_search_results,
    render_statistics,
    truncate,
)
from library_catalog.models import Availability, CatalogRecord
from library_catalog.query import group_by_category
from library_catalog.store import CATEGORY_DESCRIPTIONS


def test_truncate():
    """Test shortening long text."""
    assert truncate("abcdef", 3) == "abc..."
    assert truncate("abc", 3) == "abc"
    assert truncate(None, 3) == ""


def test_format_availability():
    """Test availability labels."""
    assert format_availability(Availability(status="available", location="A1-23")) == "Available - Shelf: A1-23"
    assert format_availability({"status": "checked_out"}) == "Checked Out - Due: Unknown due date"
    assert format_availability(None) == "Availability Unknown"
    assert format_availability(Availability(status="lost")) == "Availability Unknown"


def test_render_statistics(catalog):
    """Test the statistics block."""
    text = render_statistics(catalog.statistics())

    assert "Total books: 4" in text
    assert "Availability: 50%" in text
    assert "Unique authors: 3" in text
    assert "Software Engineering" in text
    assert "75%" in text


def test_render_records_table(records):
    """Test table output."""
    text = render_records(records, "table")

    assert text.startswith("Books")
    assert "The Clean Coder" in text
    assert "Available - Shelf: A1-23" in text
    assert "Availability Unknown" in text


def test_render_records_compact(records):
    """Test numbered one-line output."""
    lines = render_records(records, "compact", heading=None).splitlines()

    assert len(lines) == 4
    assert lines[1] == '2. "You Don\'t Know JS" by Kyle Simpson (2014) - Checked Out - Due: 2024-12-01'


def test_render_records_json(records):
    """Test JSON output."""
    data = json.loads(render_records(records, "json"))

    assert [book["id"] for book in data] == [1, 2, 3, 4]
    assert data[2]["availability"] is None


def test_render_records_unknown_format(records):
    """Test that an unknown format is rejected."""
    with pytest.raises(ValueError):
        render_records(records, "xml")


def test_render_search_results(records):
    """Test search results with criteria."""
    text = render_search_results(records[2:3], {"title": "Design Patterns", "author": None})

    assert 'Criteria: Title: "Design Patterns"' in text
    assert "Matches Found: 1" in text
    assert '1. "Design Patterns" by Gang of Four (1994)' in text


def test_render_search_results_empty():
    """Test search results with no matches and no criteria."""
    text = render_search_results((), {})

    assert "Criteria: All Books" in text
    assert "Matches Found: 0" in text
    assert text.endswith("No matches found.")


def test_render_analysis(records):
    """Test the analysis report."""
    text = render_analysis(records)

    assert "Available: 2" in text
    assert "Checked Out: 1" in text
    assert "1990s: 1 book(s)" in text
    assert "2010s: 3 book(s)" in text
    assert "2010s (3 books)" in text
    assert "Programming: 3" in text


def test_render_analysis_missing_years():
    """Test that records without a year are left out of decade counts."""
    text = render_analysis([CatalogRecord(title="Undated")])

    assert "Most Common" not in text
    assert "Unknown: 1" in text


def test_render_analysis_empty():
    """Test the empty collection message."""
    assert render_analysis([]) == "No books available."


def test_render_groups(records):
    """Test category listing with descriptions."""
    text = render_groups(group_by_category(records), CATEGORY_DESCRIPTIONS)

    assert text.splitlines()[0] == "Programming (3) - Books about programming languages and techniques"
    assert "  - Design Patterns" in text
    assert render_groups({}, {}) == "No categories."
