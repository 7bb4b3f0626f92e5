"""Exceptions raised by the catalog package."""


class CatalogError(Exception):
    """Base class for catalog errors."""


class InvalidArgumentError(CatalogError, TypeError):
    """A sequence of records was required but something else was given."""
