"""Value Objects for the domain layer.

Value objects are immutable objects that are defined by their attributes
rather than identity. This module holds the transient objects of the
media ingestion pipeline: image payloads and tagged upload results.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Self

from app.domain.base import ValueObject
from app.domain.exceptions import CatalogValidationError


# ============================================================================
# Image Payloads
# ============================================================================


@dataclass(frozen=True)
class ImagePayload(ValueObject):
    """One encoded image of a submitted batch.

    Attributes:
        position: One-based index of the image in the submitted batch.
        data: Encoded image (data URI, base64 string or remote URL).
    """

    position: int
    data: str

    def __repr__(self) -> str:
        """Return a representation that does not dump the blob."""
        return f"ImagePayload(position={self.position}, size={len(self.data)})"

    @classmethod
    def batch(cls, images: Sequence[str]) -> list[Self]:
        """Tag a list of encoded images with positions 1..n.

        Args:
            images: Encoded images in submission order.

        Returns:
            Payloads in the same order.
        """
        return [cls(position=i, data=image) for i, image in enumerate(images, start=1)]


# ============================================================================
# Upload Results
# ============================================================================


class UploadErrorKind(str, Enum):
    """Failure category of a single upload."""

    NETWORK = "network"
    STORAGE = "storage"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class UploadSuccess(ValueObject):
    """Image uploaded and reachable at ``remote_url``."""

    position: int
    remote_url: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class UploadFailure(ValueObject):
    """Image could not be uploaded.

    Attributes:
        position: Position of the failed payload.
        error_kind: Failure category.
        cause: Description of the underlying error.
    """

    position: int
    error_kind: UploadErrorKind
    cause: str

    @property
    def ok(self) -> bool:
        return False


UploadResult = UploadSuccess | UploadFailure


# ============================================================================
# Catalog Metadata
# ============================================================================


def _require_text(field_name: str, value: str, max_length: int) -> None:
    if not value or not value.strip():
        raise CatalogValidationError(field_name, "must not be empty")
    if len(value) > max_length:
        raise CatalogValidationError(field_name, f"must be at most {max_length} characters")


def _require_non_negative(field_name: str, value: float) -> None:
    if value < 0:
        raise CatalogValidationError(field_name, "must not be negative")


@dataclass(frozen=True)
class CategoryDetails(ValueObject):
    """Descriptive fields of a category, validated on construction.

    Attributes:
        name: Display name.
        color: Display color (free-form, e.g. "#ffcc00").
    """

    name: str
    color: str = ""

    def __post_init__(self) -> None:
        _require_text("name", self.name, 200)
        if len(self.color) > 50:
            raise CatalogValidationError("color", "must be at most 50 characters")


@dataclass(frozen=True)
class ProductDetails(ValueObject):
    """Descriptive fields of a product, validated on construction.

    Attributes:
        name: Display name.
        description: Product description.
        category_id: Owning category.
        brand: Brand or restaurant name.
        price: Current price.
        old_price: Price before discount.
        rating: Average rating (0.0-5.0).
        num_reviews: Number of reviews.
        is_featured: Whether the product is featured.
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

    def __post_init__(self) -> None:
        _require_text("name", self.name, 200)
        _require_text("description", self.description, 5000)
        _require_text("category_id", self.category_id, 100)
        _require_non_negative("price", self.price)
        _require_non_negative("old_price", self.old_price)
        _require_non_negative("num_reviews", self.num_reviews)
        if not 0.0 <= self.rating <= 5.0:
            raise CatalogValidationError("rating", "must be between 0 and 5")
