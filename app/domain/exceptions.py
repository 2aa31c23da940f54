"""Domain exceptions.

All domain-level errors raised by the catalog and media ingestion layers.
The API layer maps each of them to a transport status code; nothing below
the API layer knows about HTTP.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# State Machine Errors
# ============================================================================


class InvalidStateTransitionError(DomainError):
    """Raised when an invalid state transition is attempted."""

    def __init__(
        self,
        entity_type: str,
        entity_id: str,
        current_state: str,
        target_state: str,
        allowed_transitions: list[str] | None = None,
    ) -> None:
        """Initialize invalid state transition error.

        Args:
            entity_type: Type of entity (e.g., "Ingestion").
            entity_id: ID of the entity.
            current_state: Current state of the entity.
            target_state: Attempted target state.
            allowed_transitions: List of allowed target states from current state.
        """
        allowed = allowed_transitions or []
        message = (
            f"Cannot transition {entity_type}({entity_id}) "
            f"from '{current_state}' to '{target_state}'. "
            f"Allowed transitions: {allowed}"
        )
        super().__init__(
            message,
            details={
                "entity_type": entity_type,
                "entity_id": entity_id,
                "current_state": current_state,
                "target_state": target_state,
                "allowed_transitions": allowed,
            },
        )


# ============================================================================
# Catalog Errors
# ============================================================================


class CatalogError(DomainError):
    """Base class for catalog-related errors."""

    pass


class CatalogValidationError(CatalogError):
    """Raised when catalog metadata is malformed.

    Always raised before any image upload begins.
    """

    def __init__(self, field: str, reason: str) -> None:
        """Initialize catalog validation error.

        Args:
            field: Name of the offending field.
            reason: Explanation of why the value is invalid.
        """
        super().__init__(
            f"Invalid value for '{field}': {reason}",
            details={"field": field, "reason": reason},
        )
        self.field = field
        self.reason = reason


class RecordNotFoundError(CatalogError):
    """Raised when a catalog record does not exist."""

    def __init__(self, entity_type: str, entity_id: str) -> None:
        """Initialize record not found error.

        Args:
            entity_type: Type of record ("category" or "product").
            entity_id: ID that was looked up.
        """
        super().__init__(
            f"{entity_type.capitalize()} not found: {entity_id}",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class PersistenceError(CatalogError):
    """Raised when a durable write fails after uploads succeeded.

    The uploaded objects listed in ``orphaned_urls`` are referenced by
    no record and remain in the object store.
    """

    def __init__(
        self,
        entity_type: str,
        cause: Exception,
        orphaned_urls: list[str] | None = None,
    ) -> None:
        """Initialize persistence error.

        Args:
            entity_type: Type of record being written.
            cause: Underlying storage exception.
            orphaned_urls: Remote URLs uploaded for the aborted write.
        """
        orphaned = list(orphaned_urls or [])
        super().__init__(
            f"Failed to persist {entity_type}: {cause}",
            details={
                "entity_type": entity_type,
                "cause": str(cause),
                "orphaned_urls": orphaned,
            },
        )
        self.entity_type = entity_type
        self.cause = cause
        self.orphaned_urls = orphaned


# ============================================================================
# Media Ingestion Errors
# ============================================================================


class IngestionError(DomainError):
    """Base class for media ingestion errors."""

    pass


class StorageUploadError(IngestionError):
    """Raised when one or more images of a batch failed to upload.

    ``position`` is the lowest failing position in the batch; ``positions``
    lists every failing position in ascending order.
    """

    def __init__(
        self,
        position: int,
        error_kind: str,
        cause: str,
        positions: list[int] | None = None,
    ) -> None:
        """Initialize storage upload error.

        Args:
            position: Lowest failing position in the batch.
            error_kind: Failure category of that position.
            cause: Description of the underlying failure.
            positions: All failing positions, ascending.
        """
        failing = list(positions) if positions else [position]
        super().__init__(
            f"Image at position {position} failed to upload ({error_kind}): {cause}",
            details={
                "position": position,
                "positions": failing,
                "error_kind": error_kind,
                "cause": cause,
            },
        )
        self.position = position
        self.positions = failing
        self.error_kind = error_kind
        self.cause = cause


class TokenAlreadyReleasedError(IngestionError):
    """Raised when a limiter token is released more than once."""

    def __init__(self, token_id: int) -> None:
        """Initialize token already released error.

        Args:
            token_id: Serial number of the token.
        """
        super().__init__(
            f"Limiter token {token_id} was already released",
            details={"token_id": token_id},
        )
