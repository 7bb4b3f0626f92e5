"""Sample catalog data and static lookup tables."""
from typing import Any, Dict, FrozenSet, List

from library_catalog.models import CatalogRecord
from library_catalog.parse import parse_records

SAMPLE_BOOKS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "title": "The Clean Coder",
        "author": "Robert C. Martin",
        "year": 2011,
        "category": "Programming",
        "availability": {"status": "available", "location": "A1-23"}
    },
    {
        "id": 2,
        "title": "You Don't Know JS",
        "author": "Kyle Simpson",
        "year": 2014,
        "category": "Programming",
        "availability": {"status": "checked_out", "due_date": "2024-12-01"}
    },
    {
        # No availability block on purpose
        "id": 3,
        "title": "Design Patterns",
        "author": "Gang of Four",
        "year": 1994,
        "category": "Software Engineering"
    },
    {
        "id": 4,
        "title": "Clean Architecture",
        "author": "Robert C. Martin",
        "year": 2017,
        "category": "Programming",
        "availability": {"status": "available", "location": "A2-15"}
    }
]

CATEGORY_DESCRIPTIONS: Dict[str, str] = {
    "Programming": "Books about programming languages and techniques",
    "Software Engineering": "Books about software design and architecture"
}

UNIQUE_AUTHORS: FrozenSet[str] = frozenset(
    book["author"] for book in SAMPLE_BOOKS if book.get("author")
)


def sample_records() -> List[CatalogRecord]:
    """Fresh CatalogRecord objects for the sample data (safe to mutate)."""
    return parse_records(SAMPLE_BOOKS)
