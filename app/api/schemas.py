"""API schemas for the catalog API.

Pydantic models for request/response validation and serialization.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from app.domain.entities import Category, Product


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    context: dict[str, Any] = Field(
        default_factory=dict, description="Structured error context"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class DeleteResponse(BaseModel):
    """Response for a successful delete."""

    success: bool = Field(default=True)
    message: str = Field(..., description="Confirmation message")


ImageList = list[str]

_IMAGES_DESCRIPTION = (
    "Encoded images (data URI, base64 or remote URL) in display order"
)


# ============================================================================
# Category Schemas
# ============================================================================


class CategoryCreateRequest(BaseModel):
    """Request to create a category."""

    name: str = Field(..., min_length=1, max_length=200, description="Category name")
    color: str = Field(default="", max_length=50, description="Display color")
    images: ImageList = Field(default_factory=list, description=_IMAGES_DESCRIPTION)


class CategoryUpdateRequest(BaseModel):
    """Request to update a category.

    Omitted fields keep their value. An empty or omitted ``images`` list
    keeps the current images; a non-empty one replaces them.
    """

    name: str | None = Field(default=None, min_length=1, max_length=200)
    color: str | None = Field(default=None, max_length=50)
    images: ImageList | None = Field(default=None, description=_IMAGES_DESCRIPTION)


class CategoryResponse(BaseModel):
    """Response for a category."""

    id: str = Field(..., description="Unique category identifier")
    name: str
    color: str
    images: list[str] = Field(..., description="Remote image URLs in display order")
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, category: Category) -> "CategoryResponse":
        """Convert Category entity to response schema."""
        return cls(**category.to_dict())


# ============================================================================
# Product Schemas
# ============================================================================


class ProductCreateRequest(BaseModel):
    """Request to create a product."""

    name: str = Field(..., min_length=1, max_length=200, description="Product name")
    description: str = Field(..., min_length=1, description="Product description")
    category_id: str = Field(..., min_length=1, description="Owning category ID")
    brand: str = Field(default="", max_length=200, description="Brand or restaurant")
    price: float = Field(default=0.0, ge=0)
    old_price: float = Field(default=0.0, ge=0)
    rating: float = Field(default=0.0, ge=0, le=5)
    num_reviews: int = Field(default=0, ge=0)
    is_featured: bool = False
    images: ImageList = Field(default_factory=list, description=_IMAGES_DESCRIPTION)


class ProductUpdateRequest(BaseModel):
    """Request to update a product.

    Omitted fields keep their value. An empty or omitted ``images`` list
    keeps the current images; a non-empty one replaces them.
    """

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1)
    category_id: str | None = Field(default=None, min_length=1)
    brand: str | None = Field(default=None, max_length=200)
    price: float | None = Field(default=None, ge=0)
    old_price: float | None = Field(default=None, ge=0)
    rating: float | None = Field(default=None, ge=0, le=5)
    num_reviews: int | None = Field(default=None, ge=0)
    is_featured: bool | None = None
    images: ImageList | None = Field(default=None, description=_IMAGES_DESCRIPTION)


class ProductResponse(BaseModel):
    """Response for a product."""

    id: str = Field(..., description="Unique product identifier")
    name: str
    description: str
    category_id: str
    brand: str
    price: float
    old_price: float
    rating: float
    num_reviews: int
    is_featured: bool
    images: list[str] = Field(..., description="Remote image URLs in display order")
    category: CategoryResponse | None = Field(
        default=None, description="Owning category, embedded in list responses"
    )
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(
        cls, product: Product, category: Category | None = None
    ) -> "ProductResponse":
        """Convert Product entity to response schema.

        Args:
            product: Product entity.
            category: Owning category to embed, if loaded.
        """
        return cls(
            **product.to_dict(),
            category=CategoryResponse.from_entity(category) if category else None,
        )
