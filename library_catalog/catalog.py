"""In-memory catalog manager with cached search and derived statistics."""
import math
from collections.abc import Mapping
import threading
from typing import Any, Dict, Iterable, Optional, Tuple
import logging

from library_catalog.models import (
    STATUS_AVAILABLE,
    STATUS_CHECKED_OUT,
    Availability,
    CatalogRecord,
)
from library_catalog.parse import get_field, parse_availability, parse_record
from library_catalog.store import sample_records

logger = logging.getLogger(__name__)

SearchKey = Tuple[Optional[str], Optional[str], Optional[str], bool]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _percentage(part: int, total: int) -> int:
    return _round_half_up(part / total * 100) if total > 0 else 0


def _contains(haystack: Optional[str], needle: str, case_sensitive: bool) -> bool:
    haystack = "" if haystack is None else str(haystack)
    if not case_sensitive:
        haystack = haystack.lower()
    return needle in haystack


class CatalogManager:
    """
    Owns a mutable list of catalog records.

    Statistics are recomputed and the search cache is cleared on every
    mutation. A single re-entrant lock guards records, statistics and cache
    together.
    """

    def __init__(self, initial_records: Iterable[Any] = ()):
        """
        Initialize the catalog.

        Args:
            initial_records: CatalogRecord objects or record dicts (shallow-copied)
        """
        self._lock = threading.RLock()
        self._records = [parse_record(record) for record in initial_records]
        self._search_cache: Dict[SearchKey, Tuple[CatalogRecord, ...]] = {}
        self._statistics: Dict[str, int] = {}
        self._update_statistics()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def records(self) -> Tuple[CatalogRecord, ...]:
        """Snapshot of the records in insertion order."""
        with self._lock:
            return tuple(self._records)

    def add(self, *records: Any) -> int:
        """
        Append records in order.

        Args:
            *records: CatalogRecord objects or record dicts

        Returns:
            New total number of records
        """
        parsed = [parse_record(record) for record in records]
        with self._lock:
            self._records.extend(parsed)
            self._invalidate()
            total = len(self._records)

        logger.info(f"Added {len(parsed)} record(s), catalog now holds {total}")
        return total

    def search(
        self,
        title: Optional[str] = None,
        author: Optional[str] = None,
        category: Optional[str] = None,
        case_sensitive: bool = False
    ) -> Tuple[CatalogRecord, ...]:
        """
        Substring search over title, author and category.

        Empty or missing criteria impose no constraint. Results are cached
        per normalized query, so repeating a query (differing only in case
        when ``case_sensitive`` is False) returns the same tuple.

        Args:
            title: Text the title must contain
            author: Text the author must contain
            category: Text the category must contain
            case_sensitive: Compare case-sensitively

        Returns:
            Tuple of matching records in insertion order
        """
        key = self._search_key(title, author, category, case_sensitive)

        with self._lock:
            cached = self._search_cache.get(key)
            if cached is not None:
                logger.debug(f"Search cache hit: {key}")
                return cached

            logger.debug(f"Search cache miss: {key}")
            want_title, want_author, want_category, _ = key
            results = tuple(
                record for record in self._records
                if (want_title is None or _contains(record.title, want_title, case_sensitive))
                and (want_author is None or _contains(record.author, want_author, case_sensitive))
                and (want_category is None or _contains(record.category, want_category, case_sensitive))
            )
            self._search_cache[key] = results
            return results

    def statistics(self) -> Dict[str, Any]:
        """
        Catalog statistics.

        Category percentages are relative to the total record count, so
        records without a category lower every category's share.

        Returns:
            Dict with total, available, checked_out, percentage_available,
            unique_authors, by_category and category_percentages
        """
        with self._lock:
            snapshot = dict(self._statistics)
            by_category: Dict[str, int] = {}
            for record in self._records:
                category = record.category or "Unknown"
                by_category[category] = by_category.get(category, 0) + 1
            authors = {record.author for record in self._records if record.author}

        total = snapshot["total"]
        snapshot["percentage_available"] = _percentage(snapshot["available"], total)
        snapshot["unique_authors"] = len(authors)
        snapshot["by_category"] = by_category
        snapshot["category_percentages"] = {
            category: _percentage(count, total)
            for category, count in by_category.items()
        }
        return snapshot

    def update_record(self, match_key: Any, updates: Any) -> bool:
        """
        Fill empty fields of a stored record from ``updates``.

        The record is located by identity, then by id, then by
        (title, author). Populated fields are never overwritten, but the
        emptiness test differs per field: title, category, year, location
        and due_date count as empty only when None; author and status also
        count as empty when falsy (e.g. ""). A missing status defaults to
        "available".

        Args:
            match_key: CatalogRecord or dict identifying the record
            updates: CatalogRecord or dict with new values

        Returns:
            True if a record was found and updated
        """
        with self._lock:
            record = self._find(match_key)
            if record is None:
                logger.debug(f"No record matches {match_key!r}")
                return False

            if isinstance(updates, Mapping):
                updates = parse_record(updates)

            if record.title is None:
                record.title = get_field(updates, "title")
            if record.category is None:
                record.category = get_field(updates, "category")
            if record.year is None:
                record.year = get_field(updates, "year")
            if not record.author:
                record.author = get_field(updates, "author", record.author)

            incoming = get_field(updates, "availability")
            availability = parse_availability(record.availability) or Availability()
            record.availability = availability
            if availability.location is None:
                availability.location = get_field(incoming, "location")
            if availability.due_date is None:
                availability.due_date = get_field(incoming, "due_date")
            if not availability.status:
                availability.status = get_field(incoming, "status") or STATUS_AVAILABLE

            self._invalidate()

        logger.info(f"Updated record {record.id!r} ({record.title})")
        return True

    def _find(self, match_key: Any) -> Optional[CatalogRecord]:
        if match_key is None:
            return None

        for record in self._records:
            if record is match_key:
                return record

        key_id = get_field(match_key, "id")
        if key_id is not None:
            for record in self._records:
                if record.id == key_id:
                    return record

        key_title = get_field(match_key, "title")
        key_author = get_field(match_key, "author")
        if key_title is None and key_author is None:
            return None
        for record in self._records:
            if record.title == key_title and record.author == key_author:
                return record

        return None

    @staticmethod
    def _search_key(
        title: Optional[str],
        author: Optional[str],
        category: Optional[str],
        case_sensitive: bool
    ) -> SearchKey:
        def normalize(value: Any) -> Optional[str]:
            if value is None:
                return None
            value = str(value)
            if not value:
                return None
            return value if case_sensitive else value.lower()

        return (normalize(title), normalize(author), normalize(category), bool(case_sensitive))

    def _invalidate(self) -> None:
        self._search_cache.clear()
        self._update_statistics()

    def _update_statistics(self) -> None:
        self._statistics = {
            "total": len(self._records),
            "available": sum(1 for r in self._records if r.status == STATUS_AVAILABLE),
            "checked_out": sum(1 for r in self._records if r.status == STATUS_CHECKED_OUT)
        }


def get_catalog() -> CatalogManager:
    """Process-wide catalog seeded with the sample records."""
    if not hasattr(get_catalog, "_instance"):
        get_catalog._instance = CatalogManager(sample_records())
    return get_catalog._instance
