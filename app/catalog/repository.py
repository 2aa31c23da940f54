"""Catalog repositories.

Provides CRUD operations for categories and products. Two
implementations share one interface: an in-memory store (default) and
an async SQLAlchemy store.
"""

import copy
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.catalog.models import CategoryRow, ProductRow
from app.domain.entities import Category, Product


class CatalogRepository(Protocol):
    """Persistence interface for catalog records.

    Records returned by ``get_*`` and ``list_*`` are detached copies:
    mutating them has no effect until they are passed to ``save_*``.
    """

    async def save_category(self, category: Category) -> Category: ...

    async def get_category(self, category_id: str) -> Category | None: ...

    async def list_categories(self) -> list[Category]: ...

    async def delete_category(self, category_id: str) -> bool: ...

    async def save_product(self, product: Product) -> Product: ...

    async def get_product(self, product_id: str) -> Product | None: ...

    async def list_products(self, category_id: str | None = None) -> list[Product]: ...

    async def delete_product(self, product_id: str) -> bool: ...


# ============================================================================
# In-Memory Repository
# ============================================================================


class InMemoryCatalogRepository:
    """In-memory repository for categories and products."""

    def __init__(self) -> None:
        self._categories: dict[str, Category] = {}
        self._products: dict[str, Product] = {}

    async def save_category(self, category: Category) -> Category:
        """Save a category."""
        self._categories[category.id] = copy.deepcopy(category)
        return category

    async def get_category(self, category_id: str) -> Category | None:
        """Get category by ID."""
        category = self._categories.get(category_id)
        return copy.deepcopy(category) if category else None

    async def list_categories(self) -> list[Category]:
        """List categories, oldest first."""
        categories = sorted(self._categories.values(), key=lambda c: c.created_at)
        return [copy.deepcopy(c) for c in categories]

    async def delete_category(self, category_id: str) -> bool:
        """Delete a category."""
        return self._categories.pop(category_id, None) is not None

    async def save_product(self, product: Product) -> Product:
        """Save a product."""
        self._products[product.id] = copy.deepcopy(product)
        return product

    async def get_product(self, product_id: str) -> Product | None:
        """Get product by ID."""
        product = self._products.get(product_id)
        return copy.deepcopy(product) if product else None

    async def list_products(self, category_id: str | None = None) -> list[Product]:
        """List products, oldest first, optionally for one category."""
        products = [
            p for p in self._products.values()
            if category_id is None or p.category_id == category_id
        ]
        products.sort(key=lambda p: p.created_at)
        return [copy.deepcopy(p) for p in products]

    async def delete_product(self, product_id: str) -> bool:
        """Delete a product."""
        return self._products.pop(product_id, None) is not None


# Global repository instance
_catalog_repo: InMemoryCatalogRepository | None = None


def get_memory_repository() -> InMemoryCatalogRepository:
    """Get in-memory catalog repository singleton."""
    global _catalog_repo
    if _catalog_repo is None:
        _catalog_repo = InMemoryCatalogRepository()
    return _catalog_repo


# ============================================================================
# SQLAlchemy Repository
# ============================================================================


class SqlCatalogRepository:
    """Repository for catalog records backed by SQLAlchemy.

    Every write commits before returning; a failed commit is raised from
    the write call.

    Example usage:
        async with get_session_factory()() as session:
            repo = SqlCatalogRepository(session)
            category = await repo.get_category(category_id)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save_category(self, category: Category) -> Category:
        """Insert or update a category.

        Args:
            category: Category to save.

        Returns:
            Saved category.
        """
        await self.session.merge(CategoryRow.from_entity(category))
        await self.session.commit()
        return category

    async def get_category(self, category_id: str) -> Category | None:
        """Get category by ID."""
        row = await self.session.get(CategoryRow, category_id)
        return row.to_entity() if row else None

    async def list_categories(self) -> list[Category]:
        """List categories, oldest first."""
        result = await self.session.execute(
            select(CategoryRow).order_by(CategoryRow.created_at.asc())
        )
        return [row.to_entity() for row in result.scalars().all()]

    async def delete_category(self, category_id: str) -> bool:
        """Delete a category.

        Returns:
            True if a row was deleted.
        """
        row = await self.session.get(CategoryRow, category_id)
        if row is None:
            return False
        await self.session.delete(row)
        await self.session.commit()
        return True

    async def save_product(self, product: Product) -> Product:
        """Insert or update a product.

        Args:
            product: Product to save.

        Returns:
            Saved product.
        """
        await self.session.merge(ProductRow.from_entity(product))
        await self.session.commit()
        return product

    async def get_product(self, product_id: str) -> Product | None:
        """Get product by ID."""
        row = await self.session.get(ProductRow, product_id)
        return row.to_entity() if row else None

    async def list_products(self, category_id: str | None = None) -> list[Product]:
        """List products, oldest first, optionally for one category."""
        query = select(ProductRow)
        if category_id is not None:
            query = query.where(ProductRow.category_id == category_id)
        query = query.order_by(ProductRow.created_at.asc())

        result = await self.session.execute(query)
        return [row.to_entity() for row in result.scalars().all()]

    async def delete_product(self, product_id: str) -> bool:
        """Delete a product.

        Returns:
            True if a row was deleted.
        """
        row = await self.session.get(ProductRow, product_id)
        if row is None:
            return False
        await self.session.delete(row)
        await self.session.commit()
        return True
