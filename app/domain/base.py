"""Base classes for domain layer.

Catalog records are aggregates identified by a 32-character hex ID. They
carry a version counter and creation/update timestamps that every
persistence backend round-trips unchanged. Transient pipeline objects
(payloads, upload results, validated field sets) are value objects.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Generic, TypeVar
from uuid import uuid4


def utcnow() -> datetime:
    """Current time, timezone-aware UTC."""
    return datetime.now(timezone.utc)


def new_id() -> str:
    """Generate a record identifier."""
    return uuid4().hex


@dataclass(frozen=True)
class ValueObject:
    """Immutable object compared by its attributes.

    Example:
        @dataclass(frozen=True)
        class ImagePayload(ValueObject):
            position: int
            data: str
    """


T = TypeVar("T")


@dataclass(eq=False)
class Entity(Generic[T]):
    """Object with identity.

    Two entities are equal when they are of the same type and share an
    ``id``, whatever their other attributes.
    """

    id: T

    def __eq__(self, other: object) -> bool:
        return isinstance(other, type(self)) and self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))


@dataclass(eq=False, kw_only=True)
class AggregateRoot(Entity[T]):
    """Unit that repositories load and save.

    Attributes:
        version: Incremented on every applied change.
        created_at: When the aggregate was first created.
        updated_at: When the aggregate last changed.
    """

    version: int = 1
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def _touch(self) -> None:
        """Record a change: bump the version and the update time."""
        self.updated_at = utcnow()
        self.version += 1
