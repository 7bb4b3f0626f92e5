"""Data models for catalog records."""
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Optional

STATUS_AVAILABLE = "available"
STATUS_CHECKED_OUT = "checked_out"
STATUS_UNKNOWN = "unknown"


@dataclass
class Availability:
    """Checkout/shelf state of a record."""
    status: Optional[str] = None
    location: Optional[str] = None
    due_date: Optional[str] = None


@dataclass
class CatalogRecord:
    """One book in the catalog. Every field may be missing."""
    id: Optional[int] = None
    title: Optional[str] = None
    author: Optional[str] = None
    year: Optional[int] = None
    category: Optional[str] = None
    availability: Optional[Availability] = None

    @property
    def status(self) -> Optional[str]:
        """Availability status, or None when availability is absent."""
        if isinstance(self.availability, Mapping):
            return self.availability.get("status")
        return getattr(self.availability, "status", None)
