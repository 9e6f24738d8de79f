"""
FastAPI dependency injection wiring.

Route handlers receive the catalog and query builder through these functions,
so tests can swap them with app.dependency_overrides.
"""
from functools import lru_cache

from shopverse_listing.application.query_builder import QueryBuilder
from shopverse_listing.config import settings
from shopverse_listing.infrastructure.memory.in_memory_catalog import InMemoryCatalog


@lru_cache(maxsize=1)
def get_catalog() -> InMemoryCatalog:
    if settings.catalog_path:
        return InMemoryCatalog.from_json_file(settings.catalog_path)
    return InMemoryCatalog()


def get_query_builder() -> QueryBuilder:
    return QueryBuilder()
