"""Catalog service for product operations.

High-level service that combines filter construction, storage queries
and the catalog's visibility and lookup rules.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import structlog

from storefront.catalog.filters import build_filter, build_slug_filter
from storefront.catalog.schemas import ProductType
from storefront.catalog.store import PRODUCTS_COLLECTION, FindResult, ProductStore
from storefront.domain.exceptions import (
    CategoryNotFoundError,
    ProductNotFoundError,
    SlugRequiredError,
)
from storefront.infrastructure.config import settings

logger = structlog.get_logger()

# Query parameters listing endpoints pass through to the filter builder.
LISTING_PARAMS = ("inStock", "priceFrom", "priceTo")


@dataclass(frozen=True)
class QueryOptions:
    """Storage query options shared by public endpoints.

    Attributes:
        depth: Reference expansion depth.
        limit: Maximum documents returned.
        sort: Sort string (leading ``-`` for descending).
    """

    depth: int = 2
    limit: int = 1000
    sort: str | None = "-createdAt"

    @classmethod
    def from_settings(cls) -> "QueryOptions":
        """Build listing options from application settings."""
        return cls(
            depth=settings.query_depth,
            limit=settings.query_limit,
            sort=settings.query_sort,
        )


class CatalogService:
    """Service for catalog operations.

    Example usage:
        service = CatalogService(get_memory_store())
        result = await service.list_products({"inStock": "true"})
        product = await service.get_product_by_slug("tovar-2")
    """

    def __init__(self, store: ProductStore, options: QueryOptions | None = None) -> None:
        """Initialize service with a product store.

        Args:
            store: Storage collaborator.
            options: Query options for listings (defaults from settings).
        """
        self.store = store
        self.options = options or QueryOptions.from_settings()

    async def list_products(self, params: Mapping[str, str | None]) -> FindResult:
        """List active products filtered by stock state and price.

        Args:
            params: Raw ``inStock``/``priceFrom``/``priceTo`` values.

        Returns:
            Matching documents and total count.
        """
        return await self._find_listing(_listing_params(params))

    async def list_products_by_type(
        self,
        product_type: str | None,
        params: Mapping[str, str | None],
    ) -> FindResult:
        """List active products of one category.

        Args:
            product_type: Category from the request path.
            params: Raw ``inStock``/``priceFrom``/``priceTo`` values.

        Returns:
            Matching documents and total count.

        Raises:
            CategoryNotFoundError: If the category is not known.
        """
        if not ProductType.is_valid(product_type):
            logger.info("Unknown product type requested", type=product_type)
            raise CategoryNotFoundError(product_type)

        return await self._find_listing({**_listing_params(params), "type": product_type})

    async def get_product_by_slug(self, slug: str | None) -> dict[str, Any]:
        """Get the active product with the given slug.

        Args:
            slug: Slug from the request path.

        Returns:
            Product document.

        Raises:
            SlugRequiredError: If no slug was given.
            ProductNotFoundError: If no active product has that slug.
        """
        if not slug or not slug.strip():
            raise SlugRequiredError()

        product_filter = build_slug_filter(slug)
        result = await self.store.find(
            PRODUCTS_COLLECTION,
            product_filter,
            depth=self.options.depth,
            limit=1,
        )

        if not result.docs:
            raise ProductNotFoundError("slug", slug)

        return result.docs[0]

    async def create_product(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Create a product; the slug is derived from the name if missing."""
        return await self.store.create(data)

    async def update_product(
        self,
        product_id: str,
        patch: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Update a product; clearing ``slug`` regenerates it from the name."""
        return await self.store.update(product_id, patch)

    async def create_media(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Register a media asset."""
        return await self.store.create_media(data)

    async def _find_listing(self, params: Mapping[str, str | None]) -> FindResult:
        product_filter = build_filter(params)
        result = await self.store.find(
            PRODUCTS_COLLECTION,
            product_filter,
            depth=self.options.depth,
            limit=self.options.limit,
            sort=self.options.sort,
        )

        logger.debug(
            "Catalog query",
            where=product_filter.to_where(),
            total=result.total_docs,
        )
        return result


def _listing_params(params: Mapping[str, str | None]) -> dict[str, str | None]:
    """Keep only the parameters listing endpoints honour."""
    return {key: params.get(key) for key in LISTING_PARAMS}
