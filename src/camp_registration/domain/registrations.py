"""Domain models for camp registrations."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID


class RegistrationStatus(StrEnum):
    """Review status of a registration; every state is reachable from any other."""

    PENDING = "pending"
    APPROVE = "approve"
    DECLINE = "decline"


@dataclass(frozen=True)
class RegistrationForm:
    """Fields a camper submits for a camp."""

    first_name: str
    last_name: str
    nickname: str
    gender: str
    birth_date: str
    answers: list[str]
    email: str | None = None


@dataclass(frozen=True)
class CampRegistration:
    """A camper's application to one camp."""

    id: UUID
    camper_id: UUID
    camp_slug: str
    first_name: str
    last_name: str
    nickname: str
    gender: str
    birth_date: date
    email: str | None
    answers: list[str]
    status: RegistrationStatus
    comment: str | None
    certificate: bool
    certificate_url: str | None
    created_at: datetime
    submitted_at: datetime | None


@dataclass(frozen=True)
class ApplicationFilter:
    """Staff dashboard filter; None means no constraint."""

    camp_slug: str | None = None
    status: RegistrationStatus | None = None
    search: str | None = None


@dataclass(frozen=True)
class ApplicationStats:
    """Aggregate counts for the review dashboard."""

    total: int
    pending: int
    approved: int
    declined: int
    certificates_enabled: int
    by_camp: dict[str, int] = field(default_factory=dict)
