"""API layer module.

Contains FastAPI routers, dependencies and request/response schemas.
"""

from app.api.categories import router as categories_router
from app.api.products import router as products_router

__all__ = [
    "categories_router",
    "products_router",
]
