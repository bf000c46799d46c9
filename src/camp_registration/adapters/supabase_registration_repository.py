"""Supabase-backed registration repository."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from camp_registration.adapters.supabase_errors import store_errors
from camp_registration.adapters.supabase_rows import (
    MISSING_TIMESTAMP,
    optional_str,
    parse_timestamp,
    str_list,
)
from camp_registration.domain.registrations import (
    CampRegistration,
    RegistrationForm,
    RegistrationStatus,
)
from camp_registration.errors import AlreadyRegistered
from camp_registration.services.registrations import RegistrationRepository

_TABLE = "camp_registrations"
_COLUMNS = (
    "id, camper_id, camp_slug, first_name, last_name, nickname, gender, "
    "birth_date, email, answers, status, comment, certificate, certificate_url, "
    "created_at, submitted_at"
)


@dataclass
class SupabaseRegistrationRepository(RegistrationRepository):
    """Supabase implementation for camp registrations."""

    client: Client

    def create_registration(
        self,
        camper_id: UUID,
        camp_slug: str,
        form: RegistrationForm,
        created_at: datetime,
    ) -> CampRegistration:
        """Insert a registration; the unique constraint rejects duplicates."""
        with store_errors("create_registration", conflict=AlreadyRegistered):
            response = (
                self.client.table(_TABLE)
                .insert(
                    {
                        "camper_id": str(camper_id),
                        "camp_slug": camp_slug,
                        "first_name": form.first_name,
                        "last_name": form.last_name,
                        "nickname": form.nickname,
                        "gender": form.gender,
                        "birth_date": form.birth_date,
                        "email": form.email,
                        "answers": list(form.answers),
                        "status": RegistrationStatus.PENDING.value,
                        "certificate": False,
                        "created_at": created_at.isoformat(),
                        "submitted_at": created_at.isoformat(),
                    }
                )
                .execute()
            )
        if not response.data:
            raise RuntimeError("Failed to create registration in Supabase")
        return _parse_row(response.data[0])

    def get_registration(self, registration_id: UUID) -> CampRegistration | None:
        """Return a registration by id, if present."""
        with store_errors("get_registration"):
            response = (
                self.client.table(_TABLE)
                .select(_COLUMNS)
                .eq("id", str(registration_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def get_latest_for_camper(self, camper_id: UUID) -> CampRegistration | None:
        """Return the camper's most recently created registration."""
        with store_errors("get_latest_for_camper"):
            response = (
                self.client.table(_TABLE)
                .select(_COLUMNS)
                .eq("camper_id", str(camper_id))
                .order("created_at", desc=True)
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def get_for_camp(
        self, camper_id: UUID, camp_slug: str
    ) -> CampRegistration | None:
        """Return the camper's registration for a camp, if present."""
        with store_errors("get_for_camp"):
            response = (
                self.client.table(_TABLE)
                .select(_COLUMNS)
                .eq("camper_id", str(camper_id))
                .eq("camp_slug", camp_slug)
                .order("created_at", desc=True)
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def list_registrations(
        self, camp_slug: str | None, status: RegistrationStatus | None
    ) -> list[CampRegistration]:
        """Return registrations, newest submission first."""
        query = self.client.table(_TABLE).select(_COLUMNS)
        if camp_slug is not None:
            query = query.eq("camp_slug", camp_slug)
        if status == RegistrationStatus.PENDING:
            query = query.or_("status.eq.pending,status.is.null")
        elif status is not None:
            query = query.eq("status", status.value)
        with store_errors("list_registrations"):
            response = query.order("submitted_at", desc=True).execute()
        return [_parse_row(row) for row in response.data or []]

    def update_registration(
        self, registration_id: UUID, changes: dict[str, object]
    ) -> None:
        """Apply column changes to one registration."""
        with store_errors("update_registration"):
            self.client.table(_TABLE).update(changes).eq(
                "id", str(registration_id)
            ).execute()

    def update_all_registrations(self, changes: dict[str, object]) -> int:
        """Apply column changes to every registration."""
        with store_errors("update_all_registrations"):
            response = (
                self.client.table(_TABLE)
                .update(changes)
                .not_.is_("id", "null")
                .execute()
            )
        return len(response.data or [])


def _parse_row(row: dict[str, object]) -> CampRegistration:
    return CampRegistration(
        id=UUID(str(row["id"])),
        camper_id=UUID(str(row["camper_id"])),
        camp_slug=str(row["camp_slug"]),
        first_name=str(row.get("first_name") or ""),
        last_name=str(row.get("last_name") or ""),
        nickname=str(row.get("nickname") or ""),
        gender=str(row.get("gender") or ""),
        birth_date=date.fromisoformat(str(row["birth_date"])),
        email=optional_str(row.get("email")),
        answers=str_list(row.get("answers")),
        status=RegistrationStatus(row.get("status") or RegistrationStatus.PENDING),
        comment=optional_str(row.get("comment")),
        certificate=bool(row.get("certificate")),
        certificate_url=optional_str(row.get("certificate_url")),
        created_at=parse_timestamp(row.get("created_at")) or MISSING_TIMESTAMP,
        submitted_at=parse_timestamp(row.get("submitted_at")),
    )

