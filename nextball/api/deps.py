"""
FastAPI dependencies
"""
from nextball.catalog import Catalog, build_catalog


def get_catalog() -> Catalog:
    """Catalog for the configured app mode; tests override this"""
    return build_catalog()
