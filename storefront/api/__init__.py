"""API layer module.

Contains FastAPI routers, dependencies and middleware.
"""

from storefront.api.health import router as health_router
from storefront.api.media import router as media_router
from storefront.api.products import router as products_router

__all__ = [
    "health_router",
    "media_router",
    "products_router",
]
