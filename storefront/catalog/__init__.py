"""Product Catalog Service.

Provides slug generation, filter construction, product storage and
catalog query operations for the storefront.
"""

from storefront.catalog.filters import ProductFilter, build_filter, build_slug_filter
from storefront.catalog.hooks import BEFORE_VALIDATE_HOOKS, assign_slug, run_before_validate
from storefront.catalog.schemas import ProductType
from storefront.catalog.service import CatalogService, QueryOptions
from storefront.catalog.slugs import slugify, transliterate, transliterate_char
from storefront.catalog.store import (
    FindResult,
    InMemoryProductStore,
    ProductStore,
    SortSpec,
    get_memory_store,
)

__all__ = [
    # Slugs
    "slugify",
    "transliterate",
    "transliterate_char",
    # Hooks
    "BEFORE_VALIDATE_HOOKS",
    "assign_slug",
    "run_before_validate",
    # Filters
    "ProductFilter",
    "build_filter",
    "build_slug_filter",
    # Storage
    "FindResult",
    "InMemoryProductStore",
    "ProductStore",
    "SortSpec",
    "get_memory_store",
    # Service
    "CatalogService",
    "ProductType",
    "QueryOptions",
]
