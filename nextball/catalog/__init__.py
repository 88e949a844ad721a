from nextball.catalog.base import Catalog, match_label, summarize_matches
from nextball.catalog.file_catalog import FileCatalog
from nextball.catalog.fixture_catalog import FixtureCatalog, SAMPLE_DATASET
from nextball.catalog.http_catalog import HttpCatalog
from nextball.catalog.factory import SOURCES, build_catalog

__all__ = [
    "Catalog",
    "match_label",
    "summarize_matches",
    "FileCatalog",
    "FixtureCatalog",
    "SAMPLE_DATASET",
    "HttpCatalog",
    "SOURCES",
    "build_catalog",
]
