"""Domain models for camper profiles."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID


class Gender(StrEnum):
    """Gender options offered on profile and registration forms."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ProfileState(StrEnum):
    """Result of the profile setup gate."""

    MISSING = "missing"
    PRESENT = "present"


@dataclass(frozen=True)
class ProfileForm:
    """Fields a camper submits when setting up a profile."""

    first_name: str
    last_name: str
    nickname: str
    birth_date: str
    gender: str
    email: str
    strengths: str = ""
    past_activities: str = ""


@dataclass(frozen=True)
class ProfilePhoto:
    """Uploaded profile photo."""

    content: bytes
    filename: str
    content_type: str | None = None


@dataclass(frozen=True)
class CamperProfile:
    """Represents a camper profile stored in the database."""

    id: UUID
    first_name: str
    last_name: str
    nickname: str
    birth_date: date
    gender: Gender
    strengths: str
    past_activities: str
    profile_url: str | None
    email: str
    created_at: datetime
