from typing import Optional

from nextball.catalog.base import Catalog
from nextball.catalog.file_catalog import FileCatalog
from nextball.catalog.fixture_catalog import FixtureCatalog
from nextball.catalog.http_catalog import HttpCatalog
from nextball.config import settings

SOURCES = ("fixtures", "files", "http")


def build_catalog(source: Optional[str] = None, data_dir: Optional[str] = None,
                  url: Optional[str] = None) -> Catalog:
    """Pick a catalog; defaults follow NEXTBALL_APP_MODE (test = bundled fixtures)"""
    if source is None:
        source = "fixtures" if settings.APP_MODE == "test" else "files"

    if source == "fixtures":
        return FixtureCatalog()
    if source == "files":
        return FileCatalog(data_dir or settings.DATA_DIR)
    if source == "http":
        return HttpCatalog(url or settings.CATALOG_URL)
    raise ValueError(f"Unknown catalog source {source!r}; expected one of {', '.join(SOURCES)}")
