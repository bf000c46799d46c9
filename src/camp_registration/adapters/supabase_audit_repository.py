"""Supabase repository for registration events."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from camp_registration.adapters.supabase_errors import store_errors
from camp_registration.adapters.supabase_rows import MISSING_TIMESTAMP, parse_timestamp
from camp_registration.domain.audit import RegistrationEvent
from camp_registration.services.audit import AuditRepository

_COLUMNS = "id, registration_id, event_type, before_json, after_json, created_at"


@dataclass
class SupabaseAuditRepository(AuditRepository):
    """Supabase-backed audit repository."""

    client: Client

    def create_event(
        self,
        registration_id: UUID,
        event_type: str,
        before: dict[str, object] | None,
        after: dict[str, object] | None,
    ) -> None:
        """Create an event row."""
        with store_errors("create_event"):
            self.client.table("registration_events").insert(
                {
                    "registration_id": str(registration_id),
                    "event_type": event_type,
                    "before_json": before,
                    "after_json": after,
                }
            ).execute()

    def list_events(self, registration_id: UUID, limit: int) -> list[RegistrationEvent]:
        """Return recent events for a registration."""
        with store_errors("list_events"):
            response = (
                self.client.table("registration_events")
                .select(_COLUMNS)
                .eq("registration_id", str(registration_id))
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
        return [
            RegistrationEvent(
                id=UUID(str(row["id"])),
                registration_id=UUID(str(row["registration_id"])),
                event_type=str(row["event_type"]),
                before=row.get("before_json"),
                after=row.get("after_json"),
                created_at=parse_timestamp(row.get("created_at")) or MISSING_TIMESTAMP,
            )
            for row in response.data or []
        ]
