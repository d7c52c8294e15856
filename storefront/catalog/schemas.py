"""Pydantic schemas for catalog documents.

Documents travel as camelCase JSON (``inStock``, ``mainImage``,
``pricing.oldPrice``) because that is what the storefront consumes; the
Python side uses snake_case attribute names.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    StringConstraints,
)
from pydantic.alias_generators import to_camel

# Prices are stored as NUMERIC(12, 2).
PRICE_LIMIT = Decimal(10) ** 10
PRICE_QUANTUM = Decimal("0.01")


def _float_to_decimal(value: Any) -> Any:
    """Convert floats through their shortest repr, so 99.99 stays 99.99."""
    if isinstance(value, float):
        return Decimal(str(value))
    return value


Price = Annotated[
    Decimal,
    BeforeValidator(_float_to_decimal),
    Field(ge=0, lt=PRICE_LIMIT, decimal_places=2),
    PlainSerializer(float, return_type=float, when_used="json"),
]

Slug = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ProductType(str, Enum):
    """Product categories exposed by the storefront."""

    STICKERS = "stickers"
    FLAVOURS = "flavours"
    MERCH = "merch"
    FRAMES = "frames"

    @classmethod
    def values(cls) -> list[str]:
        """Get all category values."""
        return [member.value for member in cls]

    @classmethod
    def is_valid(cls, value: str | None) -> bool:
        """Check whether ``value`` is a known category."""
        return value in cls.values()


class CamelModel(BaseModel):
    """Base model serialising field names as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ============================================================================
# Media
# ============================================================================


class MediaSchema(CamelModel):
    """Media asset reference."""

    id: str
    alt: str
    filename: str | None = None
    mime_type: str | None = None
    url: str | None = None


class MediaCreateRequest(CamelModel):
    """Request to register an uploaded media asset."""

    alt: str = Field(..., min_length=1, description="Alternative text")
    filename: str = Field(..., min_length=1, description="Stored file name")
    mime_type: str = Field(..., description="Asset MIME type")
    url: str | None = Field(default=None, description="Public asset URL")


# ============================================================================
# Product
# ============================================================================


class PricingSchema(CamelModel):
    """Product pricing group."""

    price: Price
    old_price: Price | None = None


class CharacteristicValueSchema(CamelModel):
    """One ``label: value`` row of a characteristic."""

    label: str
    value: str


class CharacteristicSchema(CamelModel):
    """Group of attribute rows, e.g. "Material"."""

    category: str
    values: list[CharacteristicValueSchema] = Field(default_factory=list)


class SeoSchema(CamelModel):
    """Meta tags."""

    title: str | None = None
    description: str | None = None


class ProductSchema(CamelModel):
    """Product document as returned by the public API.

    ``main_image`` and ``gallery`` hold media documents when the query
    expanded references and bare media IDs otherwise.
    """

    id: str
    type: ProductType = ProductType.STICKERS
    active: bool = False
    in_stock: bool = False
    name: str
    slug: str
    main_image: MediaSchema | str | None = None
    gallery: list[MediaSchema | str] = Field(default_factory=list)
    pricing: PricingSchema
    characteristics: list[CharacteristicSchema] = Field(default_factory=list)
    description: Any = None
    seo_text: str | None = None
    seo: SeoSchema = Field(default_factory=SeoSchema)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductDraft(CamelModel):
    """Validated product record ready for persistence.

    Built from the raw draft after before-validate hooks have run.
    """

    type: ProductType = ProductType.STICKERS
    active: bool = False
    in_stock: bool = False
    name: str = Field(..., min_length=1)
    slug: Slug
    main_image: str
    gallery: list[str] = Field(default_factory=list)
    pricing: PricingSchema
    characteristics: list[CharacteristicSchema] = Field(default_factory=list)
    description: Any = None
    seo_text: str | None = None
    seo: SeoSchema = Field(default_factory=SeoSchema)


class ProductListResponse(BaseModel):
    """Response for ``GET /products/list``."""

    docs: list[ProductSchema]
    total: int


class ProductCategoryResponse(BaseModel):
    """Response for ``GET /products/{type}``."""

    type: ProductType
    docs: list[ProductSchema]
    total: int
