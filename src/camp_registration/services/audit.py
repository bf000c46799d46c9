"""Audit logging service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from camp_registration.domain.audit import RegistrationEvent


class AuditRepository(Protocol):
    """Persistence interface for registration events."""

    def create_event(
        self,
        registration_id: UUID,
        event_type: str,
        before: dict[str, object] | None,
        after: dict[str, object] | None,
    ) -> None:
        """Create an event row."""

    def list_events(self, registration_id: UUID, limit: int) -> list[RegistrationEvent]:
        """Return recent events for a registration, newest first."""


@dataclass
class AuditService:
    """Service for recording staff changes to registrations."""

    repository: AuditRepository

    def record_event(
        self,
        registration_id: UUID,
        event_type: str,
        before: dict[str, object] | None,
        after: dict[str, object] | None,
    ) -> None:
        """Persist an audit event."""
        self.repository.create_event(
            registration_id=registration_id,
            event_type=event_type,
            before=before,
            after=after,
        )

    def list_events(
        self, registration_id: UUID, limit: int = 50
    ) -> list[RegistrationEvent]:
        """Return the change history of a registration."""
        return self.repository.list_events(registration_id, limit)
