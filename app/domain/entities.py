"""Domain entities for the catalog service.

Entities are domain objects with identity that persists across state changes.
This module contains the catalog aggregates (Category, Product) and the
per-request IngestionRequest that tracks one create/update through upload
and persistence.
"""

from dataclasses import dataclass, field
from typing import Any

from app.domain.base import AggregateRoot, Entity, new_id
from app.domain.state_machines import IngestionStatus, validate_ingestion_transition
from app.domain.value_objects import CategoryDetails, ProductDetails


# ============================================================================
# Category Aggregate
# ============================================================================


@dataclass(kw_only=True, eq=False)
class Category(AggregateRoot[str]):
    """Catalog category owning an ordered list of image URLs.

    Attributes:
        id: Unique category identifier.
        name: Display name.
        color: Display color.
        images: Remote image URLs in submission order.
    """

    name: str
    color: str = ""
    images: list[str] = field(default_factory=list)

    @classmethod
    def create(cls, details: CategoryDetails, images: list[str]) -> "Category":
        """Create a new category from validated details.

        Args:
            details: Validated category fields.
            images: Uploaded image URLs, already ordered.

        Returns:
            New Category instance.
        """
        return cls(
            id=new_id(),
            name=details.name,
            color=details.color,
            images=list(images),
        )

    def details(self) -> CategoryDetails:
        """Get the current descriptive fields."""
        return CategoryDetails(name=self.name, color=self.color)

    def apply(self, details: CategoryDetails, images: list[str] | None = None) -> None:
        """Apply updated fields.

        Args:
            details: Validated category fields.
            images: Replacement image list; None or empty keeps the current list.
        """
        self.name = details.name
        self.color = details.color
        if images:
            self.images = list(images)
        self._touch()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "images": list(self.images),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


# ============================================================================
# Product Aggregate
# ============================================================================


@dataclass(kw_only=True, eq=False)
class Product(AggregateRoot[str]):
    """Catalog product owning an ordered list of image URLs.

    Attributes:
        id: Unique product identifier.
        category_id: Owning category.
        images: Remote image URLs in submission order.
        Remaining attributes mirror ProductDetails.
    """

    name: str
    description: str
    category_id: str
    brand: str = ""
    price: float = 0.0
    old_price: float = 0.0
    rating: float = 0.0
    num_reviews: int = 0
    is_featured: bool = False
    images: list[str] = field(default_factory=list)

    @classmethod
    def create(cls, details: ProductDetails, images: list[str]) -> "Product":
        """Create a new product from validated details.

        Args:
            details: Validated product fields.
            images: Uploaded image URLs, already ordered.

        Returns:
            New Product instance.
        """
        return cls(
            id=new_id(),
            images=list(images),
            **_product_fields(details),
        )

    def details(self) -> ProductDetails:
        """Get the current descriptive fields."""
        return ProductDetails(
            name=self.name,
            description=self.description,
            category_id=self.category_id,
            brand=self.brand,
            price=self.price,
            old_price=self.old_price,
            rating=self.rating,
            num_reviews=self.num_reviews,
            is_featured=self.is_featured,
        )

    def apply(self, details: ProductDetails, images: list[str] | None = None) -> None:
        """Apply updated fields.

        Args:
            details: Validated product fields.
            images: Replacement image list; None or empty keeps the current list.
        """
        for name, value in _product_fields(details).items():
            setattr(self, name, value)
        if images:
            self.images = list(images)
        self._touch()

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Dictionary representation.
        """
        return {
            "id": self.id,
            **_product_fields(self.details()),
            "images": list(self.images),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


def _product_fields(details: ProductDetails) -> dict[str, Any]:
    return {
        "name": details.name,
        "description": details.description,
        "category_id": details.category_id,
        "brand": details.brand,
        "price": details.price,
        "old_price": details.old_price,
        "rating": details.rating,
        "num_reviews": details.num_reviews,
        "is_featured": details.is_featured,
    }


CatalogRecord = Category | Product


# ============================================================================
# Ingestion Request Entity
# ============================================================================


@dataclass(eq=False)
class IngestionRequest(Entity[str]):
    """Lifecycle of one catalog create/update request.

    Attributes:
        id: Request identifier (correlates with the HTTP request ID).
        entity_type: "category" or "product".
        image_count: Number of images submitted.
        status: Current status (state machine).
        failure_reason: Why the request was aborted, if it was.
        record_id: ID of the persisted record, once persisted.
    """

    entity_type: str
    image_count: int = 0
    status: IngestionStatus = IngestionStatus.PENDING
    failure_reason: str | None = None
    record_id: str | None = None

    @classmethod
    def start(
        cls,
        entity_type: str,
        image_count: int,
        request_id: str | None = None,
    ) -> "IngestionRequest":
        """Begin tracking a new request in PENDING state."""
        return cls(
            id=request_id or new_id(),
            entity_type=entity_type,
            image_count=image_count,
        )

    def begin_upload(self) -> None:
        """Move to UPLOADING.

        Raises:
            InvalidStateTransitionError: If not in valid state.
        """
        validate_ingestion_transition(self.id, self.status, IngestionStatus.UPLOADING)
        self.status = IngestionStatus.UPLOADING

    def mark_persisted(self, record_id: str) -> None:
        """Move to PERSISTED.

        Args:
            record_id: ID of the written record.

        Raises:
            InvalidStateTransitionError: If not in valid state.
        """
        validate_ingestion_transition(self.id, self.status, IngestionStatus.PERSISTED)
        self.status = IngestionStatus.PERSISTED
        self.record_id = record_id

    def abort(self, reason: str) -> None:
        """Move to ABORTED.

        Args:
            reason: Why the request was aborted.

        Raises:
            InvalidStateTransitionError: If not in valid state.
        """
        validate_ingestion_transition(self.id, self.status, IngestionStatus.ABORTED)
        self.status = IngestionStatus.ABORTED
        self.failure_reason = reason
