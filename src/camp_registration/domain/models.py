"""Domain models shared across services."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Principal:
    """An authenticated identity resolved from an access token."""

    id: UUID
    email: str | None
