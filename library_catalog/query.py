"""Pure query functions over sequences of catalog records."""
from collections.abc import Mapping
from typing import Any, Dict, Iterator, List, Optional, Sequence
import logging

from library_catalog.errors import InvalidArgumentError
from library_catalog.models import (
    STATUS_AVAILABLE,
    STATUS_CHECKED_OUT,
    CatalogRecord,
)
from library_catalog.parse import get_field, is_record_sequence, parse_availability, parse_record

logger = logging.getLogger(__name__)

UNKNOWN_SUMMARY = "Unknown Title by Unknown Author (Unknown Year) - Status: Unknown"


def filter_by_status(records: Any, status: str) -> List[CatalogRecord]:
    """
    Keep records whose availability status equals ``status``.

    Records without availability never match. Anything that is not a
    sequence yields an empty list.

    Args:
        records: Sequence of records
        status: Status to match, e.g. "available"

    Returns:
        Matching records in their original order
    """
    if not is_record_sequence(records):
        logger.warning(f"filter_by_status: expected a sequence, got {type(records).__name__}")
        return []

    matches = []
    for record in records:
        availability = get_field(record, "availability")
        if availability is not None and get_field(availability, "status") == status:
            matches.append(record)

    return matches


def group_by_category(records: Any) -> Dict[str, List[CatalogRecord]]:
    """
    Group records by category, keeping first-seen order.

    Records without a category are left out of every group.

    Args:
        records: Sequence of records

    Returns:
        Dict mapping category to its records
    """
    if not is_record_sequence(records):
        logger.warning(f"group_by_category: expected a sequence, got {type(records).__name__}")
        return {}

    groups: Dict[str, List[CatalogRecord]] = {}
    for record in records:
        category = get_field(record, "category")
        if category:
            groups.setdefault(category, []).append(record)

    return groups


def _status_text(record: CatalogRecord) -> str:
    availability = parse_availability(record.availability)
    status = availability.status if availability else None
    if status is None:
        return "Unknown"

    status = str(status)
    if status.lower() == STATUS_AVAILABLE:
        return f"Available at {availability.location or 'Unknown Location'}"
    if status.lower() == STATUS_CHECKED_OUT:
        return f"Checked Out And Due at {availability.due_date or 'Unknown Time'}"
    return status


def summarize(record: Any) -> str:
    """
    One-line description of a record.

    Example: "The Clean Coder by Robert C. Martin (2011) - Status: Available at A1-23"

    Args:
        record: CatalogRecord or record dict; anything else gets a placeholder

    Returns:
        Summary string (never empty)
    """
    if isinstance(record, Mapping):
        record = parse_record(record)
    if not isinstance(record, CatalogRecord):
        return UNKNOWN_SUMMARY

    title = "Unknown Title" if record.title is None else record.title
    author = "Unknown Author" if record.author is None else record.author
    year = "Unknown Year" if record.year is None else record.year

    return f"{title} by {author} ({year}) - Status: {_status_text(record)}"


class TitleSequence:
    """Lazy, restartable iterable over record titles."""

    def __init__(self, records: Sequence):
        self._records = records

    def __iter__(self) -> Iterator[Optional[str]]:
        for record in self._records:
            yield get_field(record, "title")

    def __len__(self) -> int:
        return len(self._records)


def title_sequence(records: Any) -> TitleSequence:
    """
    Titles of ``records`` in order, pulled one at a time.

    Each ``iter()`` over the result starts again from the first record.

    Raises:
        InvalidArgumentError: if ``records`` is not a sequence
    """
    if not is_record_sequence(records):
        raise InvalidArgumentError(f"Expected a sequence of records, got {type(records).__name__}")
    return TitleSequence(records)
