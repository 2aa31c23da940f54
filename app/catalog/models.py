"""SQLAlchemy models for the catalog.

Each record is stored as one row; the ordered image URL list is kept as
a JSON document column so it round-trips in submission order.
"""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.base import utcnow
from app.domain.entities import Category, Product
from app.infrastructure.database import Base


class CategoryRow(Base):
    """Category table row."""

    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    color: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<CategoryRow(id={self.id}, name={self.name})>"

    @classmethod
    def from_entity(cls, category: Category) -> "CategoryRow":
        """Build a row from a Category entity."""
        return cls(
            id=category.id,
            name=category.name,
            color=category.color,
            images=list(category.images),
            version=category.version,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )

    def to_entity(self) -> Category:
        """Convert to a Category entity."""
        return Category(
            id=self.id,
            name=self.name,
            color=self.color,
            images=list(self.images or []),
            version=self.version,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


class ProductRow(Base):
    """Product table row."""

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    category_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    brand: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    old_price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    rating: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    num_reviews: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductRow(id={self.id}, name={self.name[:30]})>"

    @classmethod
    def from_entity(cls, product: Product) -> "ProductRow":
        """Build a row from a Product entity."""
        return cls(
            id=product.id,
            category_id=product.category_id,
            name=product.name,
            description=product.description,
            brand=product.brand,
            price=product.price,
            old_price=product.old_price,
            rating=product.rating,
            num_reviews=product.num_reviews,
            is_featured=product.is_featured,
            images=list(product.images),
            version=product.version,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )

    def to_entity(self) -> Product:
        """Convert to a Product entity."""
        return Product(
            id=self.id,
            category_id=self.category_id,
            name=self.name,
            description=self.description,
            brand=self.brand,
            price=self.price,
            old_price=self.old_price,
            rating=self.rating,
            num_reviews=self.num_reviews,
            is_featured=self.is_featured,
            images=list(self.images or []),
            version=self.version,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
