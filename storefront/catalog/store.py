"""Product storage collaborator.

Defines the store protocol the catalog service depends on and an
in-memory implementation used for local development and tests. The
PostgreSQL implementation lives in :mod:`storefront.catalog.repository`.

Documents are plain dicts with camelCase keys, the same shape the public
API returns.
"""

import asyncio
import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol
from uuid import uuid4

import structlog
from pydantic import ValidationError as PydanticValidationError

from storefront.catalog.filters import ProductFilter
from storefront.catalog.hooks import run_before_validate
from storefront.catalog.schemas import MediaCreateRequest, ProductDraft
from storefront.domain.exceptions import (
    MediaNotFoundError,
    MediaTypeNotAllowedError,
    ProductNotFoundError,
    ProductValidationError,
    SlugConflictError,
)
from storefront.infrastructure.config import settings

logger = structlog.get_logger()

PRODUCTS_COLLECTION = "products"

# Server-managed fields dropped from incoming drafts.
READ_ONLY_FIELDS = ("id", "createdAt", "updatedAt")

# Groups merged key by key on update instead of being replaced.
MERGED_GROUPS = ("pricing", "seo")


# ============================================================================
# Query Types
# ============================================================================


@dataclass(frozen=True)
class SortSpec:
    """Sort order parsed from a ``"-createdAt"`` style string.

    Attributes:
        field: Document field path (``createdAt``, ``pricing.price``...).
        descending: Whether to sort newest/largest first.
    """

    field: str = "createdAt"
    descending: bool = True

    @classmethod
    def parse(cls, value: str | None) -> "SortSpec | None":
        """Parse a sort string; a leading ``-`` means descending."""
        if not value:
            return None
        if value.startswith("-"):
            return cls(field=value[1:], descending=True)
        return cls(field=value, descending=False)


@dataclass
class FindResult:
    """Result of a store query.

    Attributes:
        docs: Matching documents, at most ``limit`` of them.
        total_docs: Total number of matching documents.
    """

    docs: list[dict[str, Any]] = field(default_factory=list)
    total_docs: int = 0


class ProductStore(Protocol):
    """Storage collaborator for product and media documents."""

    async def find(
        self,
        collection: str,
        filter: ProductFilter,
        *,
        depth: int = 0,
        limit: int = 10,
        sort: str | None = None,
    ) -> FindResult:
        """Run a read-only query over a collection."""
        ...

    async def create(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Create a product from a raw draft."""
        ...

    async def update(self, product_id: str, patch: Mapping[str, Any]) -> dict[str, Any]:
        """Apply a partial update to a product."""
        ...

    async def create_media(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Register a media asset."""
        ...


# ============================================================================
# Shared Write Helpers
# ============================================================================


def ensure_products_collection(collection: str) -> None:
    """Reject queries against collections the store cannot filter."""
    if collection != PRODUCTS_COLLECTION:
        raise ValueError(f"Unsupported collection: {collection}")


def prepare_draft(data: Mapping[str, Any]) -> ProductDraft:
    """Run before-validate hooks on a raw draft and validate it.

    Args:
        data: Raw product draft (camelCase keys).

    Returns:
        Validated draft.

    Raises:
        ProductValidationError: If the draft is invalid.
    """
    draft = {k: v for k, v in copy.deepcopy(dict(data)).items() if k not in READ_ONLY_FIELDS}
    draft = run_before_validate(draft)
    try:
        return ProductDraft.model_validate(draft)
    except PydanticValidationError as e:
        raise ProductValidationError(
            [
                {
                    "field": ".".join(str(part) for part in error["loc"]),
                    "message": error["msg"],
                }
                for error in e.errors()
            ]
        ) from e


def merge_patch(existing: Mapping[str, Any], patch: Mapping[str, Any]) -> dict[str, Any]:
    """Merge an update patch into an existing document.

    Top-level keys are replaced; ``pricing`` and ``seo`` are merged key
    by key. Sending ``slug`` as blank or null clears it so the slug hook
    derives a fresh one from the name.
    """
    merged = copy.deepcopy(dict(existing))
    for key, value in patch.items():
        if key in MERGED_GROUPS and isinstance(value, Mapping):
            group = dict(merged.get(key) or {})
            group.update(value)
            merged[key] = group
        else:
            merged[key] = copy.deepcopy(value)
    if "slug" in patch and not str(patch["slug"] or "").strip():
        merged.pop("slug", None)
    return merged


def validate_media(request: MediaCreateRequest) -> None:
    """Check that a media asset uses an accepted MIME type."""
    if request.mime_type not in settings.media_mime_types:
        raise MediaTypeNotAllowedError(request.mime_type, settings.media_mime_types)


def _get_path(doc: Mapping[str, Any], path: str) -> Any:
    value: Any = doc
    for part in path.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(part)
    return value


# ============================================================================
# In-Memory Store
# ============================================================================


class InMemoryProductStore:
    """In-memory product store.

    Keeps product and media documents in dicts. Media references are
    stored as IDs and expanded on read according to ``depth``.
    """

    def __init__(self) -> None:
        self._products: dict[str, dict[str, Any]] = {}
        self._media: dict[str, dict[str, Any]] = {}
        self._sequence: dict[str, int] = {}
        self._lock = asyncio.Lock()

    async def find(
        self,
        collection: str,
        filter: ProductFilter,
        *,
        depth: int = 0,
        limit: int = 10,
        sort: str | None = None,
    ) -> FindResult:
        """Find products matching ``filter``.

        Args:
            collection: Collection name (only ``products``).
            filter: Filter predicate.
            depth: Reference expansion depth (0 keeps media IDs).
            limit: Maximum documents returned.
            sort: Sort string such as ``"-createdAt"``.

        Returns:
            Matching documents and their total count.
        """
        ensure_products_collection(collection)
        if not filter.is_satisfiable:
            return FindResult()

        matched = [doc for doc in self._products.values() if filter.matches(doc)]

        spec = SortSpec.parse(sort)
        if spec is not None:
            matched.sort(
                key=lambda d: (
                    _get_path(d, spec.field) is not None,
                    _get_path(d, spec.field) or 0,
                    self._sequence[d["id"]],
                ),
                reverse=spec.descending,
            )

        return FindResult(
            docs=[self._populate(doc, depth) for doc in matched[:limit]],
            total_docs=len(matched),
        )

    async def create(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Create a product.

        Raises:
            ProductValidationError: If the draft is invalid.
            MediaNotFoundError: If a media reference is unknown.
            SlugConflictError: If the slug is already taken.
        """
        draft = prepare_draft(data)
        async with self._lock:
            self._check_media(draft)
            self._check_slug(draft.slug)

            now = datetime.now(timezone.utc)
            doc = draft.model_dump(by_alias=True, mode="json")
            doc.update(id=str(uuid4()), createdAt=now, updatedAt=now)

            self._products[doc["id"]] = doc
            self._sequence[doc["id"]] = len(self._sequence)

        logger.info("Product created", product_id=doc["id"], slug=doc["slug"])
        return self._populate(doc, depth=1)

    async def update(self, product_id: str, patch: Mapping[str, Any]) -> dict[str, Any]:
        """Apply a partial update to a product.

        Raises:
            ProductNotFoundError: If the product does not exist.
            ProductValidationError: If the merged record is invalid.
            SlugConflictError: If the new slug belongs to another product.
        """
        async with self._lock:
            existing = self._products.get(product_id)
            if existing is None:
                raise ProductNotFoundError("id", product_id)

            draft = prepare_draft(merge_patch(existing, patch))
            self._check_media(draft)
            self._check_slug(draft.slug, exclude_id=product_id)

            doc = draft.model_dump(by_alias=True, mode="json")
            doc.update(
                id=product_id,
                createdAt=existing["createdAt"],
                updatedAt=datetime.now(timezone.utc),
            )
            self._products[product_id] = doc

        logger.info("Product updated", product_id=product_id, slug=doc["slug"])
        return self._populate(doc, depth=1)

    async def create_media(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Register a media asset.

        Raises:
            MediaTypeNotAllowedError: If the MIME type is not accepted.
        """
        request = MediaCreateRequest.model_validate(data)
        validate_media(request)

        doc = {"id": str(uuid4()), **request.model_dump(by_alias=True)}
        async with self._lock:
            self._media[doc["id"]] = doc

        logger.info("Media registered", media_id=doc["id"], mime_type=request.mime_type)
        return dict(doc)

    def _check_media(self, draft: ProductDraft) -> None:
        if draft.main_image not in self._media:
            raise MediaNotFoundError("mainImage", draft.main_image)
        for index, media_id in enumerate(draft.gallery):
            if media_id not in self._media:
                raise MediaNotFoundError(f"gallery.{index}", media_id)

    def _check_slug(self, slug: str, exclude_id: str | None = None) -> None:
        for doc in self._products.values():
            if doc["slug"] == slug and doc["id"] != exclude_id:
                raise SlugConflictError(slug)

    def _populate(self, doc: dict[str, Any], depth: int) -> dict[str, Any]:
        result = copy.deepcopy(doc)
        if depth < 1:
            return result
        result["mainImage"] = self._expand(result.get("mainImage"))
        result["gallery"] = [self._expand(media_id) for media_id in result.get("gallery") or []]
        return result

    def _expand(self, media_id: Any) -> Any:
        media = self._media.get(media_id) if isinstance(media_id, str) else None
        return dict(media) if media is not None else media_id


# Global store instance
_memory_store: InMemoryProductStore | None = None


def get_memory_store() -> InMemoryProductStore:
    """Get in-memory store singleton."""
    global _memory_store
    if _memory_store is None:
        _memory_store = InMemoryProductStore()
    return _memory_store
