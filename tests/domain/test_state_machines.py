"""Tests for domain state machines."""

import pytest

from app.domain import IngestionStatus
from app.domain.exceptions import InvalidStateTransitionError
from app.domain.state_machines import validate_ingestion_transition


class TestIngestionStatus:
    """Tests for IngestionStatus state machine."""

    def test_pending_can_start_upload(self) -> None:
        """PENDING can transition to UPLOADING."""
        assert IngestionStatus.PENDING.can_transition_to(IngestionStatus.UPLOADING)

    def test_pending_can_abort(self) -> None:
        """PENDING can be aborted by validation or lookup failures."""
        assert IngestionStatus.PENDING.can_transition_to(IngestionStatus.ABORTED)

    def test_pending_cannot_persist(self) -> None:
        """Nothing is persisted without passing through UPLOADING."""
        assert not IngestionStatus.PENDING.can_transition_to(IngestionStatus.PERSISTED)

    def test_uploading_can_persist_or_abort(self) -> None:
        """UPLOADING ends in PERSISTED or ABORTED."""
        assert IngestionStatus.UPLOADING.can_transition_to(IngestionStatus.PERSISTED)
        assert IngestionStatus.UPLOADING.can_transition_to(IngestionStatus.ABORTED)

    def test_persisted_is_terminal(self) -> None:
        """PERSISTED is a terminal state."""
        assert IngestionStatus.PERSISTED.is_terminal()
        assert IngestionStatus.PERSISTED.allowed_transitions() == []

    def test_aborted_is_terminal(self) -> None:
        """ABORTED never moves again."""
        assert IngestionStatus.ABORTED.is_terminal()
        assert not IngestionStatus.ABORTED.can_transition_to(IngestionStatus.PERSISTED)


class TestValidateIngestionTransition:
    """Tests for validate_ingestion_transition."""

    def test_valid_transition_passes(self) -> None:
        """Allowed transitions do not raise."""
        validate_ingestion_transition("req-1", IngestionStatus.PENDING, IngestionStatus.UPLOADING)

    def test_invalid_transition_raises_with_details(self) -> None:
        """Disallowed transitions raise with the allowed targets."""
        with pytest.raises(InvalidStateTransitionError) as exc_info:
            validate_ingestion_transition(
                "req-1", IngestionStatus.ABORTED, IngestionStatus.PERSISTED
            )

        details = exc_info.value.details
        assert details["entity_id"] == "req-1"
        assert details["current_state"] == "aborted"
        assert details["target_state"] == "persisted"
        assert details["allowed_transitions"] == []
