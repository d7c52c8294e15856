"""Product API endpoints.

Public, read-only catalog queries:

- ``GET /products/list``: all active products
- ``GET /products/{type}``: active products of one category
- ``GET /products/i/{slug}``: one active product by slug

plus the API-key protected admin writes ``POST /products`` and
``PATCH /products/{product_id}``.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, status

from storefront.api.dependencies import domain_error_to_http, get_catalog_service
from storefront.api.schemas import ErrorResponse
from storefront.catalog.schemas import (
    ProductCategoryResponse,
    ProductListResponse,
    ProductSchema,
)
from storefront.catalog.service import CatalogService
from storefront.domain.exceptions import DomainError, SlugRequiredError

router = APIRouter(prefix="/products", tags=["Products"])

Service = Annotated[CatalogService, Depends(get_catalog_service)]

# Raw strings: the filter builder owns parsing and coercion.
InStockParam = Annotated[
    str | None,
    Query(alias="inStock", description="'true' or 'false'; other values are ignored"),
]
PriceFromParam = Annotated[
    str | None,
    Query(alias="priceFrom", description="Inclusive lower price bound"),
]
PriceToParam = Annotated[
    str | None,
    Query(alias="priceTo", description="Inclusive upper price bound"),
]


# ============================================================================
# Public Queries
# ============================================================================


@router.get(
    "/list",
    response_model=ProductListResponse,
    summary="List products",
    description="List active products, optionally filtered by stock state and price.",
)
async def list_products(
    service: Service,
    in_stock: InStockParam = None,
    price_from: PriceFromParam = None,
    price_to: PriceToParam = None,
) -> ProductListResponse:
    """List active products, newest first."""
    result = await service.list_products(
        {"inStock": in_stock, "priceFrom": price_from, "priceTo": price_to}
    )
    return ProductListResponse(
        docs=[ProductSchema.model_validate(doc) for doc in result.docs],
        total=result.total_docs,
    )


@router.get("/i", include_in_schema=False)
@router.get("/i/", include_in_schema=False)
async def get_product_without_slug() -> None:
    """Reject slug lookups with an empty slug segment."""
    raise domain_error_to_http(SlugRequiredError())


@router.get(
    "/i/{slug}",
    response_model=ProductSchema,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Get product by slug",
    description="Get one active product by its slug.",
)
async def get_product_by_slug(
    slug: str,
    service: Service,
) -> ProductSchema:
    """Get an active product by slug.

    Raises:
        HTTPException: 400 if the slug is empty, 404 if no active
            product has it.
    """
    try:
        doc = await service.get_product_by_slug(slug)
    except DomainError as e:
        raise domain_error_to_http(e) from e

    return ProductSchema.model_validate(doc)


@router.get(
    "/{product_type}",
    response_model=ProductCategoryResponse,
    responses={404: {"model": ErrorResponse}},
    summary="List products by category",
    description="List active products of one category (stickers, flavours, merch, frames).",
)
async def list_products_by_type(
    product_type: str,
    service: Service,
    in_stock: InStockParam = None,
    price_from: PriceFromParam = None,
    price_to: PriceToParam = None,
) -> ProductCategoryResponse:
    """List active products of a category, newest first.

    Raises:
        HTTPException: 404 for an unknown category.
    """
    try:
        result = await service.list_products_by_type(
            product_type,
            {"inStock": in_stock, "priceFrom": price_from, "priceTo": price_to},
        )
    except DomainError as e:
        raise domain_error_to_http(e) from e

    return ProductCategoryResponse(
        type=product_type,
        docs=[ProductSchema.model_validate(doc) for doc in result.docs],
        total=result.total_docs,
    )


# ============================================================================
# Admin Writes
# ============================================================================


@router.post(
    "",
    response_model=ProductSchema,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Create product",
    description="Create a product. Leave slug empty to derive it from the name.",
)
async def create_product(
    service: Service,
    data: Annotated[dict[str, Any], Body()],
) -> ProductSchema:
    """Create a product.

    Raises:
        HTTPException: 422 on validation errors, 409 on a taken slug.
    """
    try:
        doc = await service.create_product(data)
    except DomainError as e:
        raise domain_error_to_http(e) from e

    return ProductSchema.model_validate(doc)


@router.patch(
    "/{product_id}",
    response_model=ProductSchema,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Update product",
    description="Partially update a product. Send an empty slug to regenerate it.",
)
async def update_product(
    product_id: str,
    service: Service,
    patch: Annotated[dict[str, Any], Body()],
) -> ProductSchema:
    """Update a product.

    Raises:
        HTTPException: 404 for an unknown product, 422 on validation
            errors, 409 on a taken slug.
    """
    try:
        doc = await service.update_product(product_id, patch)
    except DomainError as e:
        raise domain_error_to_http(e) from e

    return ProductSchema.model_validate(doc)
