"""Domain models for the camp catalog and camp questions."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID


class CampStatus(StrEnum):
    ACTIVE = "active"
    UPCOMING = "upcoming"


class QuestionKind(StrEnum):
    TEXT = "text"
    CHOICE = "choice"
    FILE = "file"


@dataclass(frozen=True)
class Camp:
    """A camp offering listed in the catalog."""

    id: UUID
    slug: str
    title: str
    description: str
    cover_image_url: str | None
    status: CampStatus
    start_date: date | None
    end_date: date | None
    registration_closes_at: datetime | None
    requires_email: bool = True


@dataclass(frozen=True)
class Countdown:
    """Time left until registration closes."""

    days: int
    hours: int
    minutes: int
    seconds: int


@dataclass(frozen=True)
class QuestionDraft:
    """Staff input for creating or editing a camp question."""

    prompt: str
    kind: str = QuestionKind.TEXT
    required: bool = True
    choices: list[str] = field(default_factory=list)
    position: int | None = None


@dataclass(frozen=True)
class CampQuestion:
    """An application question shown on a camp's registration form."""

    id: UUID
    camp_slug: str
    prompt: str
    kind: QuestionKind
    required: bool
    choices: list[str]
    position: int


@dataclass(frozen=True)
class CampInquiry:
    """A question sent in by an applicant, triaged by staff."""

    id: UUID
    camp_slug: str
    title: str
    description: str
    is_liked: bool
    is_approved: bool
    created_at: datetime
