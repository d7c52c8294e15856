#!/usr/bin/env python3
"""Seed product catalog script.

Creates the catalog tables and seeds a small demo catalog through the
regular write path, so slugs are derived from the product names.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --inactive
"""

import argparse
import asyncio

from storefront.catalog import models  # noqa: F401  (registers tables)
from storefront.catalog.repository import ProductRepository
from storefront.catalog.service import CatalogService
from storefront.domain.exceptions import SlugConflictError
from storefront.infrastructure.database import Base, async_session_factory, engine

DEMO_PRODUCTS = [
    {
        "type": "stickers",
        "name": "Стикер №1",
        "inStock": True,
        "pricing": {"price": 150, "oldPrice": 200},
        "characteristics": [
            {
                "category": "Материал",
                "values": [{"label": "Плёнка", "value": "Винил"}],
            }
        ],
    },
    {
        "type": "flavours",
        "name": "Ароматизатор «Дождь»",
        "inStock": True,
        "pricing": {"price": 350},
    },
    {
        "type": "merch",
        "name": "Худи чёрное",
        "inStock": False,
        "pricing": {"price": 4500},
    },
    {
        "type": "frames",
        "name": "Номерная рамка Щит",
        "inStock": True,
        "pricing": {"price": 900},
    },
]


async def create_tables() -> None:
    """Create database tables if they don't exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed(active: bool = True) -> dict:
    """Seed the demo catalog.

    Args:
        active: Whether seeded products are publicly visible.

    Returns:
        Seeding result with counts.
    """
    created = 0
    skipped = 0

    async with async_session_factory() as session:
        service = CatalogService(ProductRepository(session))
        image = await service.create_media(
            {
                "alt": "Demo image",
                "filename": "demo.webp",
                "mimeType": "image/webp",
            }
        )

        for data in DEMO_PRODUCTS:
            try:
                async with session.begin_nested():
                    await service.create_product(
                        {**data, "active": active, "mainImage": image["id"]}
                    )
                created += 1
            except SlugConflictError:
                skipped += 1

        await session.commit()

    return {"created": created, "skipped": skipped}


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the storefront demo catalog",
    )
    parser.add_argument(
        "--inactive",
        action="store_true",
        help="Seed products as unpublished (active = false)",
    )

    args = parser.parse_args()

    print("=" * 60)
    print("Storefront Catalog Seeder")
    print("=" * 60)

    print("Creating database tables...")
    await create_tables()
    print("Tables ready.")
    print()

    result = await seed(active=not args.inactive)

    print(f"  ✓ Created: {result['created']} products")
    print(f"  ✓ Skipped (slug taken): {result['skipped']}")
    print()
    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
