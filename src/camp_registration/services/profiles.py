"""Profile setup gate for authenticated campers."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from camp_registration.adapters.supabase_object_store import ObjectStore
from camp_registration.domain.profiles import (
    CamperProfile,
    Gender,
    ProfileForm,
    ProfilePhoto,
    ProfileState,
)
from camp_registration.errors import (
    ProfileAlreadyExists,
    ProfileRequired,
    Unauthenticated,
    ValidationError,
)
from camp_registration.validation import (
    blank_fields,
    file_extension,
    is_image,
    is_valid_email,
    parse_iso_date,
)

logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for camper profiles."""

    def get_profile(self, camper_id: UUID) -> CamperProfile | None:
        """Return the profile for a camper, if present."""

    def create_profile(
        self,
        camper_id: UUID,
        form: ProfileForm,
        profile_url: str | None,
        created_at: datetime,
    ) -> CamperProfile:
        """Insert a profile; raise ProfileAlreadyExists on a primary key conflict."""


@dataclass
class ProfileService:
    """Ensures every camper has exactly one profile."""

    repository: ProfileRepository
    object_store: ObjectStore
    photo_bucket: str = "camper"

    def ensure_profile(self, camper_id: UUID) -> ProfileState:
        """Return whether the camper has completed profile setup."""
        if self.repository.get_profile(camper_id) is None:
            return ProfileState.MISSING
        return ProfileState.PRESENT

    def get_profile(self, camper_id: UUID) -> CamperProfile | None:
        """Return the camper's profile, if present."""
        return self.repository.get_profile(camper_id)

    def require_profile(self, camper_id: UUID) -> CamperProfile:
        """Return the camper's profile or raise ProfileRequired."""
        profile = self.repository.get_profile(camper_id)
        if profile is None:
            raise ProfileRequired
        return profile

    def create_profile(
        self,
        camper_id: UUID | None,
        form: ProfileForm,
        photo: ProfilePhoto | None = None,
    ) -> CamperProfile:
        """Create the camper's profile, uploading the photo first when given."""
        if camper_id is None:
            raise Unauthenticated
        if self.repository.get_profile(camper_id) is not None:
            raise ProfileAlreadyExists
        invalid = validate_profile_form(form)
        if photo is not None and photo.content_type and not is_image(
            photo.content_type
        ):
            invalid.append("photo")
        if invalid:
            raise ValidationError(invalid)

        profile_url = None
        if photo is not None and photo.content:
            profile_url = self._upload_photo(camper_id, photo)

        profile = self.repository.create_profile(
            camper_id=camper_id,
            form=form,
            profile_url=profile_url,
            created_at=datetime.now(tz=UTC),
        )
        logger.info("Created profile for camper %s", camper_id)
        return profile

    def _upload_photo(self, camper_id: UUID, photo: ProfilePhoto) -> str:
        key = f"{camper_id}-{uuid4().hex}.{file_extension(photo.filename, 'jpg')}"
        self.object_store.upload(
            self.photo_bucket, key, photo.content, photo.content_type
        )
        return self.object_store.get_public_url(self.photo_bucket, key)


def validate_profile_form(form: ProfileForm) -> list[str]:
    """Return the names of invalid fields in a profile form."""
    invalid = blank_fields(
        {
            "first_name": form.first_name,
            "last_name": form.last_name,
            "nickname": form.nickname,
            "birth_date": form.birth_date,
        }
    )
    if form.gender not in set(Gender):
        invalid.append("gender")
    if "birth_date" not in invalid and parse_iso_date(form.birth_date) is None:
        invalid.append("birth_date")
    if not is_valid_email(form.email):
        invalid.append("email")
    return invalid
