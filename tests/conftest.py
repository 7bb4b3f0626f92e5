import pytest

from library_catalog.catalog import CatalogManager
from library_catalog.store import sample_records


@pytest.fixture
def records():
    return sample_records()


@pytest.fixture
def catalog(records):
    return CatalogManager(records)
