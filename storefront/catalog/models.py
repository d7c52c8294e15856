"""SQLAlchemy models for the product catalog.

Defines Media, Product and the ordered product gallery.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any
from uuid import uuid4

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.infrastructure.database import Base

JSONType = JSON().with_variant(JSONB(), "postgresql")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Media(Base):
    """Uploaded media asset.

    The binary itself is owned by the upload pipeline; this row only
    keeps what products need to reference and render it.

    Attributes:
        id: Unique media identifier (UUID).
        alt: Alternative text.
        filename: Stored file name.
        mime_type: Asset MIME type.
        url: Public URL of the asset.
        created_at: Creation timestamp.
    """

    __tablename__ = "media"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    alt: Mapped[str] = mapped_column(String(500), nullable=False)
    filename: Mapped[str | None] = mapped_column(String(500), nullable=True)
    mime_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Media(id={self.id}, filename={self.filename})>"

    def to_dict(self) -> dict[str, Any]:
        """Convert to document dictionary."""
        return {
            "id": self.id,
            "alt": self.alt,
            "filename": self.filename,
            "mimeType": self.mime_type,
            "url": self.url,
        }


class Product(Base):
    """Product entity in the catalog.

    Attributes:
        id: Unique product identifier (UUID).
        type: Category (stickers, flavours, merch, frames).
        active: Whether the product is publicly visible.
        in_stock: Whether the product is available.
        name: Display name.
        slug: Unique URL identifier derived from the name.
        main_image_id: Main media reference.
        price: Current price.
        old_price: Previous price, shown crossed out.
        characteristics: Free-form attribute table.
        description: Rich text description (JSON document).
        seo_text: Long SEO text.
        seo_title: Meta title.
        seo_description: Meta description.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False, default="stickers", index=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    in_stock: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    slug: Mapped[str] = mapped_column(String(500), nullable=False, unique=True, index=True)
    main_image_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("media.id", ondelete="RESTRICT"),
        nullable=False,
    )
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    old_price: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    characteristics: Mapped[list[dict[str, Any]]] = mapped_column(
        JSONType, nullable=False, default=list
    )
    description: Mapped[Any] = mapped_column(JSONType, nullable=True)
    seo_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    seo_title: Mapped[str | None] = mapped_column(String(500), nullable=True)
    seo_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    # Relationships
    main_image: Mapped[Media] = relationship("Media")
    gallery_items: Mapped[list["GalleryItem"]] = relationship(
        "GalleryItem",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="GalleryItem.position",
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, slug={self.slug})>"

    def to_dict(self, depth: int = 0) -> dict[str, Any]:
        """Convert to document dictionary.

        Args:
            depth: Reference expansion depth; 0 keeps media IDs.

        Returns:
            Dictionary representation.
        """
        if depth >= 1:
            main_image: Any = self.main_image.to_dict() if self.main_image else self.main_image_id
            gallery: list[Any] = [item.media.to_dict() for item in self.gallery_items]
        else:
            main_image = self.main_image_id
            gallery = [item.media_id for item in self.gallery_items]

        return {
            "id": self.id,
            "type": self.type,
            "active": self.active,
            "inStock": self.in_stock,
            "name": self.name,
            "slug": self.slug,
            "mainImage": main_image,
            "gallery": gallery,
            "pricing": {
                "price": float(self.price),
                "oldPrice": float(self.old_price) if self.old_price is not None else None,
            },
            "characteristics": self.characteristics or [],
            "description": self.description,
            "seoText": self.seo_text,
            "seo": {
                "title": self.seo_title,
                "description": self.seo_description,
            },
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


class GalleryItem(Base):
    """Ordered gallery entry linking a product to a media asset."""

    __tablename__ = "product_gallery"

    product_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    )
    position: Mapped[int] = mapped_column(Integer, primary_key=True)
    media_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("media.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Relationships
    product: Mapped["Product"] = relationship("Product", back_populates="gallery_items")
    media: Mapped[Media] = relationship("Media")
