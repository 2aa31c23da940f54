"""Domain layer - Entities, value objects, state machines, exceptions.

This module exports the core domain building blocks:

- **Entities**: Objects with identity (Category, Product, IngestionRequest)
- **Value Objects**: Immutable objects compared by value (ImagePayload,
  UploadSuccess, UploadFailure, CategoryDetails, ProductDetails)
- **State Machines**: Deterministic state transitions (IngestionStatus)
- **Exceptions**: Domain-specific errors and invariant violations

Example usage:
    from app.domain import Category, CategoryDetails

    category = Category.create(
        CategoryDetails(name="Pizza", color="#ff0000"),
        images=["https://res.cloudinary.com/demo/image/upload/pizza.jpg"],
    )
"""

# Base classes
from app.domain.base import AggregateRoot, Entity, ValueObject

# Entities
from app.domain.entities import CatalogRecord, Category, IngestionRequest, Product

# Exceptions
from app.domain.exceptions import (
    CatalogError,
    CatalogValidationError,
    DomainError,
    IngestionError,
    InvalidStateTransitionError,
    PersistenceError,
    RecordNotFoundError,
    StorageUploadError,
    TokenAlreadyReleasedError,
)

# State Machines
from app.domain.state_machines import IngestionStatus, validate_ingestion_transition

# Value Objects
from app.domain.value_objects import (
    CategoryDetails,
    ImagePayload,
    ProductDetails,
    UploadErrorKind,
    UploadFailure,
    UploadResult,
    UploadSuccess,
)

__all__ = [
    # Base
    "AggregateRoot",
    "Entity",
    "ValueObject",
    # Entities
    "CatalogRecord",
    "Category",
    "IngestionRequest",
    "Product",
    # Exceptions
    "CatalogError",
    "CatalogValidationError",
    "DomainError",
    "IngestionError",
    "InvalidStateTransitionError",
    "PersistenceError",
    "RecordNotFoundError",
    "StorageUploadError",
    "TokenAlreadyReleasedError",
    # State Machines
    "IngestionStatus",
    "validate_ingestion_transition",
    # Value Objects
    "CategoryDetails",
    "ImagePayload",
    "ProductDetails",
    "UploadErrorKind",
    "UploadFailure",
    "UploadResult",
    "UploadSuccess",
]
