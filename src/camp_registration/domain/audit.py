"""Audit domain models."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class RegistrationEvent:
    """A recorded staff change to a registration."""

    id: UUID
    registration_id: UUID
    event_type: str
    before: dict[str, object] | None
    after: dict[str, object] | None
    created_at: datetime
