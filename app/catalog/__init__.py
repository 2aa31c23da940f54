"""Catalog Service.

Provides category and product management whose image lists are filled
by the media ingestion pipeline.
"""

from app.catalog.models import CategoryRow, ProductRow
from app.catalog.repository import (
    CatalogRepository,
    InMemoryCatalogRepository,
    SqlCatalogRepository,
    get_memory_repository,
)
from app.catalog.service import CatalogService

__all__ = [
    # Models
    "CategoryRow",
    "ProductRow",
    # Repository
    "CatalogRepository",
    "InMemoryCatalogRepository",
    "SqlCatalogRepository",
    "get_memory_repository",
    # Service
    "CatalogService",
]
