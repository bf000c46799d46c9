"""Supabase repository for the camp catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from camp_registration.adapters.supabase_errors import store_errors
from camp_registration.adapters.supabase_rows import (
    optional_str,
    parse_date,
    parse_timestamp,
)
from camp_registration.domain.camps import Camp, CampStatus
from camp_registration.services.camps import CampRepository

_COLUMNS = (
    "id, slug, title, description, cover_image_url, status, start_date, "
    "end_date, registration_closes_at, requires_email"
)


@dataclass
class SupabaseCampRepository(CampRepository):
    """Supabase implementation for camp queries."""

    client: Client

    def list_camps(self) -> list[Camp]:
        """Return all camps ordered by start date."""
        with store_errors("list_camps"):
            response = (
                self.client.table("camps")
                .select(_COLUMNS)
                .order("start_date", desc=False)
                .execute()
            )
        return [_parse_row(row) for row in response.data or []]

    def get_camp(self, slug: str) -> Camp | None:
        """Return a camp by slug."""
        with store_errors("get_camp"):
            response = (
                self.client.table("camps")
                .select(_COLUMNS)
                .eq("slug", slug)
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> Camp:
    requires_email = row.get("requires_email")
    return Camp(
        id=UUID(str(row["id"])),
        slug=str(row["slug"]),
        title=str(row.get("title") or ""),
        description=str(row.get("description") or ""),
        cover_image_url=optional_str(row.get("cover_image_url")),
        status=CampStatus(row.get("status") or CampStatus.UPCOMING),
        start_date=parse_date(row.get("start_date")),
        end_date=parse_date(row.get("end_date")),
        registration_closes_at=parse_timestamp(row.get("registration_closes_at")),
        requires_email=True if requires_email is None else bool(requires_email),
    )
