"""Product repository for database operations.

PostgreSQL implementation of the product store protocol: translates
filter predicates into SQL, handles reference expansion and turns
unique-index violations into domain errors.
"""

from collections.abc import Mapping
from typing import Any
from uuid import UUID

import structlog
from sqlalchemy import and_, false, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from storefront.catalog.filters import ProductFilter
from storefront.catalog.models import GalleryItem, Media, Product
from storefront.catalog.schemas import MediaCreateRequest, ProductDraft
from storefront.catalog.store import (
    FindResult,
    SortSpec,
    ensure_products_collection,
    merge_patch,
    prepare_draft,
    validate_media,
)
from storefront.domain.exceptions import (
    MediaNotFoundError,
    ProductNotFoundError,
    SlugConflictError,
)

logger = structlog.get_logger()


class ProductRepository:
    """Repository for Product database operations.

    Example usage:
        async with async_session_factory() as session:
            repo = ProductRepository(session)
            result = await repo.find(
                "products",
                build_filter({"inStock": "true"}),
                depth=2,
                limit=1000,
                sort="-createdAt",
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def find(
        self,
        collection: str,
        filter: ProductFilter,
        *,
        depth: int = 0,
        limit: int = 10,
        sort: str | None = None,
    ) -> FindResult:
        """Find products with filtering, sorting and a result limit.

        Args:
            collection: Collection name (only ``products``).
            filter: Filter predicate.
            depth: Reference expansion depth.
            limit: Maximum results.
            sort: Sort string such as ``"-createdAt"``.

        Returns:
            Matching documents and the total match count.
        """
        ensure_products_collection(collection)
        conditions = self._build_conditions(filter)

        count_query = select(func.count(Product.id)).where(and_(*conditions))
        total = (await self.session.execute(count_query)).scalar_one()

        query = select(Product).where(and_(*conditions))

        spec = SortSpec.parse(sort)
        if spec is not None:
            column = self._get_sort_column(spec.field)
            query = query.order_by(column.desc() if spec.descending else column.asc())

        query = query.limit(limit).options(*self._load_options())

        result = await self.session.execute(query)
        products = result.scalars().all()
        return FindResult(
            docs=[product.to_dict(depth) for product in products],
            total_docs=total,
        )

    async def create(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Create a product from a raw draft.

        Raises:
            ProductValidationError: If the draft is invalid.
            MediaNotFoundError: If a media reference is unknown.
            SlugConflictError: If the slug is already taken.
        """
        draft = prepare_draft(data)
        await self._check_media(draft)
        await self._check_slug(draft.slug)

        product = Product()
        self._apply(product, draft)
        self.session.add(product)
        await self._flush(draft.slug)

        logger.info("Product created", product_id=product.id, slug=product.slug)
        return await self._reload(product.id)

    async def update(self, product_id: str, patch: Mapping[str, Any]) -> dict[str, Any]:
        """Apply a partial update to a product.

        Raises:
            ProductNotFoundError: If the product does not exist.
            ProductValidationError: If the merged record is invalid.
            SlugConflictError: If the new slug belongs to another product.
        """
        product = await self._get(product_id)
        if product is None:
            raise ProductNotFoundError("id", product_id)

        draft = prepare_draft(merge_patch(product.to_dict(depth=0), patch))
        await self._check_media(draft)
        await self._check_slug(draft.slug, exclude_id=product_id)

        self._apply(product, draft)
        await self._flush(draft.slug)

        logger.info("Product updated", product_id=product_id, slug=product.slug)
        return await self._reload(product_id)

    async def create_media(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Register a media asset.

        Raises:
            MediaTypeNotAllowedError: If the MIME type is not accepted.
        """
        request = MediaCreateRequest.model_validate(data)
        validate_media(request)

        media = Media(
            alt=request.alt,
            filename=request.filename,
            mime_type=request.mime_type,
            url=request.url,
        )
        self.session.add(media)
        await self.session.flush()

        logger.info("Media registered", media_id=media.id, mime_type=media.mime_type)
        return media.to_dict()

    def _build_conditions(self, filter: ProductFilter) -> list[Any]:
        """Translate a filter predicate into SQL conditions."""
        if not filter.is_satisfiable:
            return [false()]

        conditions: list[Any] = [Product.active.is_(True)]

        if filter.slug is not None:
            conditions.append(Product.slug == filter.slug)
            return conditions

        if filter.product_type is not None:
            conditions.append(Product.type == filter.product_type)

        if filter.in_stock is not None:
            conditions.append(Product.in_stock.is_(filter.in_stock))

        if filter.price_from is not None:
            conditions.append(Product.price >= filter.price_from)

        if filter.price_to is not None:
            conditions.append(Product.price <= filter.price_to)

        return conditions

    def _load_options(self) -> list[Any]:
        return [
            selectinload(Product.main_image),
            selectinload(Product.gallery_items).selectinload(GalleryItem.media),
        ]

    def _apply(self, product: Product, draft: ProductDraft) -> None:
        """Copy validated draft values onto an ORM row."""
        product.type = draft.type.value
        product.active = draft.active
        product.in_stock = draft.in_stock
        product.name = draft.name
        product.slug = draft.slug
        product.main_image_id = draft.main_image
        product.price = draft.pricing.price
        product.old_price = draft.pricing.old_price
        product.characteristics = [c.model_dump(by_alias=True) for c in draft.characteristics]
        product.description = draft.description
        product.seo_text = draft.seo_text
        product.seo_title = draft.seo.title
        product.seo_description = draft.seo.description
        product.gallery_items = [
            GalleryItem(position=position, media_id=media_id)
            for position, media_id in enumerate(draft.gallery)
        ]

    async def _flush(self, slug: str) -> None:
        try:
            await self.session.flush()
        except IntegrityError as e:
            # Concurrent writer won the unique index on slug
            if "slug" in str(e.orig):
                raise SlugConflictError(slug) from e
            raise

    async def _check_media(self, draft: ProductDraft) -> None:
        references = [("mainImage", draft.main_image)] + [
            (f"gallery.{index}", media_id) for index, media_id in enumerate(draft.gallery)
        ]
        ids = {media_id for _, media_id in references if _is_uuid(media_id)}
        result = await self.session.execute(select(Media.id).where(Media.id.in_(ids)))
        found = set(result.scalars().all())
        for field, media_id in references:
            if media_id not in found:
                raise MediaNotFoundError(field, media_id)

    async def _check_slug(self, slug: str, exclude_id: str | None = None) -> None:
        query = select(Product.id).where(Product.slug == slug)
        if exclude_id is not None:
            query = query.where(Product.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        if result.scalar_one_or_none() is not None:
            raise SlugConflictError(slug)

    async def _get(self, product_id: str) -> Product | None:
        if not _is_uuid(product_id):
            return None
        query = select(Product).where(Product.id == product_id).options(*self._load_options())
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def _reload(self, product_id: str) -> dict[str, Any]:
        self.session.expire_all()
        product = await self._get(product_id)
        if product is None:
            raise ProductNotFoundError("id", product_id)
        return product.to_dict(depth=1)

    def _get_sort_column(self, sort_by: str) -> Any:
        """Get SQLAlchemy column for sorting.

        Args:
            sort_by: Document field path.

        Returns:
            SQLAlchemy column.
        """
        columns = {
            "createdAt": Product.created_at,
            "updatedAt": Product.updated_at,
            "name": Product.name,
            "slug": Product.slug,
            "pricing.price": Product.price,
        }
        return columns.get(sort_by, Product.created_at)


def _is_uuid(value: str) -> bool:
    """Check whether ``value`` can be bound to a UUID column."""
    try:
        UUID(value)
    except (TypeError, ValueError):
        return False
    return True
