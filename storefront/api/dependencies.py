"""FastAPI dependencies for the catalog routers.

The storage collaborator is resolved here and injected into the
catalog service, so handlers never reach for global state and tests can
swap the store with ``app.dependency_overrides``.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, HTTPException

from storefront.catalog.service import CatalogService
from storefront.catalog.store import ProductStore, get_memory_store
from storefront.domain.exceptions import DomainError
from storefront.infrastructure.config import settings


async def get_product_store() -> AsyncGenerator[ProductStore, None]:
    """Get the configured product store.

    Yields:
        In-memory store, or a database-backed repository whose session is
        committed after the request and rolled back on error.
    """
    if settings.storage_backend != "database":
        yield get_memory_store()
        return

    from storefront.catalog.repository import ProductRepository
    from storefront.infrastructure.database import async_session_factory

    async with async_session_factory() as session:
        try:
            yield ProductRepository(session)
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_catalog_service(
    store: Annotated[ProductStore, Depends(get_product_store)],
) -> CatalogService:
    """Get catalog service bound to the request's store."""
    return CatalogService(store)


def domain_error_to_http(error: DomainError) -> HTTPException:
    """Convert a domain error into an HTTP exception with the error envelope."""
    return HTTPException(
        status_code=error.status_code,
        detail={
            "error_code": error.error_code,
            "message": error.message,
            "details": error.details,
        },
    )
