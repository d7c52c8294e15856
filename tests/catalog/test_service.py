"""Tests for the catalog service."""

from typing import Any

import pytest

from storefront.catalog.filters import ProductFilter, build_slug_filter
from storefront.catalog.service import CatalogService, QueryOptions
from storefront.catalog.store import FindResult
from storefront.domain.exceptions import (
    CategoryNotFoundError,
    ProductNotFoundError,
    SlugRequiredError,
)


class RecordingStore:
    """Store stub that records every query and returns canned docs."""

    def __init__(self, docs: list[dict[str, Any]] | None = None) -> None:
        self.docs = docs or []
        self.calls: list[dict[str, Any]] = []

    async def find(
        self,
        collection: str,
        filter: ProductFilter,
        *,
        depth: int = 0,
        limit: int = 10,
        sort: str | None = None,
    ) -> FindResult:
        self.calls.append(
            {
                "collection": collection,
                "filter": filter,
                "depth": depth,
                "limit": limit,
                "sort": sort,
            }
        )
        docs = [doc for doc in self.docs if filter.matches(doc)]
        return FindResult(docs=docs[:limit], total_docs=len(docs))

    async def create(self, data):
        return {"created": dict(data)}

    async def update(self, product_id, patch):
        return {"updated": product_id, **dict(patch)}

    async def create_media(self, data):
        return {"media": dict(data)}


def make_doc(**overrides) -> dict[str, Any]:
    doc = {
        "id": "p1",
        "type": "stickers",
        "active": True,
        "inStock": True,
        "name": "Товар 2",
        "slug": "tovar-2",
        "pricing": {"price": 100.0},
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def store() -> RecordingStore:
    """Create a recording store with one active product."""
    return RecordingStore([make_doc()])


@pytest.fixture
def service(store: RecordingStore) -> CatalogService:
    """Create a service with default query options."""
    return CatalogService(store, QueryOptions())


class TestQueryOptions:
    """Tests for query option defaults."""

    def test_defaults(self) -> None:
        """Listings expand two levels, cap at 1000, newest first."""
        options = QueryOptions()
        assert options.depth == 2
        assert options.limit == 1000
        assert options.sort == "-createdAt"

    def test_from_settings(self) -> None:
        """Settings defaults match the built-in defaults."""
        assert QueryOptions.from_settings() == QueryOptions()


class TestListProducts:
    """Tests for list_products."""

    @pytest.mark.asyncio
    async def test_query_options(self, service, store) -> None:
        """The store is queried with listing options."""
        result = await service.list_products({})
        assert result.total_docs == 1

        call = store.calls[0]
        assert call["collection"] == "products"
        assert call["depth"] == 2
        assert call["limit"] == 1000
        assert call["sort"] == "-createdAt"
        assert call["filter"].active is True

    @pytest.mark.asyncio
    async def test_ignores_type_and_slug(self, service, store) -> None:
        """Only stock and price parameters are honoured."""
        await service.list_products(
            {"type": "merch", "slug": "tovar-2", "inStock": "true", "priceTo": "500"}
        )
        product_filter = store.calls[0]["filter"]
        assert product_filter.product_type is None
        assert product_filter.slug is None
        assert product_filter.in_stock is True
        assert product_filter.is_slug_lookup is False

    @pytest.mark.asyncio
    async def test_malformed_price_returns_empty(self, service) -> None:
        """A malformed bound produces an empty listing, not an error."""
        result = await service.list_products({"priceFrom": "abc"})
        assert result.docs == []
        assert result.total_docs == 0


class TestListProductsByType:
    """Tests for list_products_by_type."""

    @pytest.mark.asyncio
    async def test_known_type(self, service, store) -> None:
        """Known categories add a type condition."""
        result = await service.list_products_by_type("stickers", {"inStock": "true"})
        assert result.total_docs == 1
        assert store.calls[0]["filter"].product_type == "stickers"
        assert store.calls[0]["sort"] == "-createdAt"

    @pytest.mark.asyncio
    async def test_known_type_without_products(self, service) -> None:
        """An empty category is not an error."""
        result = await service.list_products_by_type("merch", {})
        assert result.docs == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("product_type", ["books", "Stickers", "", None, "list"])
    async def test_unknown_type(self, service, store, product_type) -> None:
        """Unknown categories fail without querying the store."""
        with pytest.raises(CategoryNotFoundError) as exc_info:
            await service.list_products_by_type(product_type, {})
        assert exc_info.value.status_code == 404
        assert exc_info.value.error_code == "CATEGORY_NOT_FOUND"
        assert store.calls == []


class TestGetProductBySlug:
    """Tests for get_product_by_slug."""

    @pytest.mark.asyncio
    async def test_found(self, service, store) -> None:
        """A single product is returned."""
        product = await service.get_product_by_slug("tovar-2")
        assert product["id"] == "p1"

        call = store.calls[0]
        assert call["limit"] == 1
        assert call["depth"] == 2
        assert call["sort"] is None
        assert call["filter"] == build_slug_filter("tovar-2")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("slug", [None, "", "   "])
    async def test_missing_slug(self, service, store, slug) -> None:
        """Missing slug is rejected before any query."""
        with pytest.raises(SlugRequiredError) as exc_info:
            await service.get_product_by_slug(slug)
        assert exc_info.value.message == "Slug is required"
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_not_found(self, service) -> None:
        """Unknown slugs raise ProductNotFoundError."""
        with pytest.raises(ProductNotFoundError) as exc_info:
            await service.get_product_by_slug("nope")
        assert exc_info.value.details == {"slug": "nope"}

    @pytest.mark.asyncio
    async def test_inactive_is_not_found(self) -> None:
        """An inactive product behaves like a missing one."""
        service = CatalogService(RecordingStore([make_doc(active=False)]), QueryOptions())
        with pytest.raises(ProductNotFoundError):
            await service.get_product_by_slug("tovar-2")


class TestWrites:
    """Tests for write delegation."""

    @pytest.mark.asyncio
    async def test_delegates_to_store(self, service) -> None:
        """Writes go straight to the store."""
        assert await service.create_product({"name": "A"}) == {"created": {"name": "A"}}
        assert await service.update_product("p1", {"name": "B"}) == {
            "updated": "p1",
            "name": "B",
        }
        assert await service.create_media({"alt": "a"}) == {"media": {"alt": "a"}}
