"""State machines for domain entities.

Deterministic state machine for the per-request catalog ingestion
lifecycle. It enforces that persistence only follows a completed upload
and that an aborted request never moves again.
"""

from enum import Enum

from app.domain.exceptions import InvalidStateTransitionError


# ============================================================================
# Ingestion State Machine
# ============================================================================


class IngestionStatus(str, Enum):
    """Catalog write request lifecycle states.

    State diagram:
        PENDING ─────────────────────────┐
          │                              │ validation / not found
          │ start_upload                 │
          ▼                              ▼
        UPLOADING ──────────────────► ABORTED
          │               batch failed / write failed
          │ persist
          ▼
        PERSISTED
    """

    PENDING = "pending"
    UPLOADING = "uploading"
    PERSISTED = "persisted"
    ABORTED = "aborted"

    def can_transition_to(self, target: "IngestionStatus") -> bool:
        """Check if transition to target state is valid.

        Args:
            target: Target state to transition to.

        Returns:
            True if transition is valid.
        """
        return target in _INGESTION_TRANSITIONS.get(self, set())

    def allowed_transitions(self) -> list["IngestionStatus"]:
        """Get list of valid target states.

        Returns:
            List of states that can be transitioned to.
        """
        return list(_INGESTION_TRANSITIONS.get(self, set()))

    def is_terminal(self) -> bool:
        """Check if this is a terminal (final) state.

        Returns:
            True if no further transitions are possible.
        """
        return len(_INGESTION_TRANSITIONS.get(self, set())) == 0


# Ingestion state transitions (defined outside enum to avoid Enum restrictions)
_INGESTION_TRANSITIONS: dict[IngestionStatus, set[IngestionStatus]] = {
    IngestionStatus.PENDING: {IngestionStatus.UPLOADING, IngestionStatus.ABORTED},
    IngestionStatus.UPLOADING: {IngestionStatus.PERSISTED, IngestionStatus.ABORTED},
    IngestionStatus.PERSISTED: set(),  # Terminal state
    IngestionStatus.ABORTED: set(),  # Terminal state
}


def validate_ingestion_transition(
    request_id: str,
    current: IngestionStatus,
    target: IngestionStatus,
) -> None:
    """Validate an ingestion state transition.

    Args:
        request_id: Identifier of the ingestion request.
        current: Current status.
        target: Target status.

    Raises:
        InvalidStateTransitionError: If transition is not allowed.
    """
    if not current.can_transition_to(target):
        raise InvalidStateTransitionError(
            entity_type="Ingestion",
            entity_id=request_id,
            current_state=current.value,
            target_state=target.value,
            allowed_transitions=[s.value for s in current.allowed_transitions()],
        )
