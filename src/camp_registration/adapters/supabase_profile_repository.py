"""Supabase-backed camper profile repository."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from camp_registration.adapters.supabase_errors import store_errors
from camp_registration.adapters.supabase_rows import (
    MISSING_TIMESTAMP,
    optional_str,
    parse_timestamp,
)
from camp_registration.domain.profiles import CamperProfile, Gender, ProfileForm
from camp_registration.errors import ProfileAlreadyExists
from camp_registration.services.profiles import ProfileRepository

_COLUMNS = (
    "id, first_name, last_name, nickname, birth_date, gender, strengths, "
    "past_activities, profile_url, email, created_at"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for the campers table."""

    client: Client

    def get_profile(self, camper_id: UUID) -> CamperProfile | None:
        """Return the profile for a camper, if present."""
        with store_errors("get_profile"):
            response = (
                self.client.table("campers")
                .select(_COLUMNS)
                .eq("id", str(camper_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_profile(
        self,
        camper_id: UUID,
        form: ProfileForm,
        profile_url: str | None,
        created_at: datetime,
    ) -> CamperProfile:
        """Insert a profile row keyed by the principal id."""
        with store_errors("create_profile", conflict=ProfileAlreadyExists):
            response = (
                self.client.table("campers")
                .insert(
                    {
                        "id": str(camper_id),
                        "first_name": form.first_name,
                        "last_name": form.last_name,
                        "nickname": form.nickname,
                        "birth_date": form.birth_date,
                        "gender": form.gender,
                        "strengths": form.strengths,
                        "past_activities": form.past_activities,
                        "profile_url": profile_url,
                        "email": form.email,
                        "created_at": created_at.isoformat(),
                    }
                )
                .execute()
            )
        if not response.data:
            raise RuntimeError("Failed to create camper profile")
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> CamperProfile:
    return CamperProfile(
        id=UUID(str(row["id"])),
        first_name=str(row.get("first_name") or ""),
        last_name=str(row.get("last_name") or ""),
        nickname=str(row.get("nickname") or ""),
        birth_date=date.fromisoformat(str(row["birth_date"])),
        gender=Gender(row.get("gender") or Gender.OTHER),
        strengths=str(row.get("strengths") or ""),
        past_activities=str(row.get("past_activities") or ""),
        profile_url=optional_str(row.get("profile_url")),
        email=str(row.get("email") or ""),
        created_at=parse_timestamp(row.get("created_at")) or MISSING_TIMESTAMP,
    )
