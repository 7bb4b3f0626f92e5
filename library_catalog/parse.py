"""Parse and normalize catalog records from plain dicts."""
from collections.abc import Mapping, Sequence
from typing import Any, Dict, List, Optional
import logging

from library_catalog.models import Availability, CatalogRecord

logger = logging.getLogger(__name__)


def is_record_sequence(value: Any) -> bool:
    """True for lists, tuples and other sequences, but not strings."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def parse_availability(data: Any) -> Optional[Availability]:
    """
    Parse an availability block.

    Args:
        data: Mapping with status/location/dueDate keys, or an Availability

    Returns:
        Availability object or None if the block is missing
    """
    if isinstance(data, Availability):
        return data
    if not isinstance(data, Mapping):
        return None

    return Availability(
        status=data.get("status"),
        location=data.get("location"),
        due_date=data.get("due_date", data.get("dueDate"))
    )


def parse_record(item: Mapping) -> CatalogRecord:
    """
    Parse a single record dict.

    Missing keys stay None. The original sample data uses ``genre`` for the
    category and sometimes ``publicationYear`` for the year; both are accepted.

    A CatalogRecord is returned as the same object, with a dict
    availability converted in place (anything else malformed becomes None).

    Args:
        item: Record dict or CatalogRecord

    Returns:
        CatalogRecord object
    """
    if isinstance(item, CatalogRecord):
        item.availability = parse_availability(item.availability)
        return item

    category = item.get("category")
    if category is None:
        category = item.get("genre")

    year = item.get("year")
    if year is None:
        year = item.get("publicationYear")

    return CatalogRecord(
        id=item.get("id"),
        title=item.get("title"),
        author=item.get("author"),
        year=year,
        category=category,
        availability=parse_availability(item.get("availability"))
    )


def parse_records(items: Any) -> List[CatalogRecord]:
    """
    Parse a list of record dicts.

    Args:
        items: Sequence of dicts or CatalogRecord objects

    Returns:
        List of CatalogRecord objects (entries that are neither are skipped)
    """
    if not is_record_sequence(items):
        logger.warning(f"parse_records: expected a sequence, got {type(items).__name__}")
        return []

    records = []
    for item in items:
        if isinstance(item, (CatalogRecord, Mapping)):
            records.append(parse_record(item))
        else:
            logger.warning(f"Skipping non-record entry of type {type(item).__name__}")

    return records


def get_field(record: Any, name: str, default: Any = None) -> Any:
    """Read a field from a CatalogRecord or a plain dict."""
    if isinstance(record, Mapping):
        value = record.get(name)
    else:
        value = getattr(record, name, None)
    return default if value is None else value


def record_to_dict(record: CatalogRecord) -> Dict[str, Any]:
    """Convert a record to a JSON-friendly dict."""
    availability = None
    if record.availability is not None:
        availability = {
            "status": record.availability.status,
            "location": record.availability.location,
            "due_date": record.availability.due_date
        }

    return {
        "id": record.id,
        "title": record.title,
        "author": record.author,
        "year": record.year,
        "category": record.category,
        "availability": availability
    }
