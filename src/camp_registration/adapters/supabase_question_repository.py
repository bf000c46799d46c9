"""Supabase repository for camp questions and applicant inquiries."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from camp_registration.adapters.supabase_errors import store_errors
from camp_registration.adapters.supabase_rows import (
    MISSING_TIMESTAMP,
    parse_timestamp,
    str_list,
)
from camp_registration.domain.camps import CampInquiry, CampQuestion, QuestionKind
from camp_registration.services.questions import QuestionRepository

_QUESTION_COLUMNS = "id, camp_slug, prompt, kind, required, choices, position"
_INQUIRY_COLUMNS = (
    "id, camp_slug, title, description, is_liked, is_approved, created_at"
)


@dataclass
class SupabaseQuestionRepository(QuestionRepository):
    """Supabase implementation for question management."""

    client: Client

    def list_questions(self, camp_slug: str) -> list[CampQuestion]:
        """Return a camp's questions ordered by position."""
        with store_errors("list_questions"):
            response = (
                self.client.table("camp_questions")
                .select(_QUESTION_COLUMNS)
                .eq("camp_slug", camp_slug)
                .order("position", desc=False)
                .execute()
            )
        return [_parse_question(row) for row in response.data or []]

    def create_question(
        self, camp_slug: str, payload: dict[str, object]
    ) -> CampQuestion:
        """Create a question row."""
        with store_errors("create_question"):
            response = (
                self.client.table("camp_questions")
                .insert({"camp_slug": camp_slug, **payload})
                .execute()
            )
        if not response.data:
            raise RuntimeError("Failed to create camp question")
        return _parse_question(response.data[0])

    def update_question(
        self, question_id: UUID, payload: dict[str, object]
    ) -> CampQuestion | None:
        """Update a question row and return it."""
        with store_errors("update_question"):
            response = (
                self.client.table("camp_questions")
                .update(payload)
                .eq("id", str(question_id))
                .execute()
            )
        if not response.data:
            return None
        return _parse_question(response.data[0])

    def delete_question(self, question_id: UUID) -> bool:
        """Delete a question row."""
        with store_errors("delete_question"):
            response = (
                self.client.table("camp_questions")
                .delete()
                .eq("id", str(question_id))
                .execute()
            )
        return bool(response.data)

    def list_inquiries(self, camp_slug: str) -> list[CampInquiry]:
        """Return a camp's inquiries, newest first."""
        with store_errors("list_inquiries"):
            response = (
                self.client.table("camp_inquiries")
                .select(_INQUIRY_COLUMNS)
                .eq("camp_slug", camp_slug)
                .order("created_at", desc=True)
                .execute()
            )
        return [_parse_inquiry(row) for row in response.data or []]

    def get_inquiry(self, inquiry_id: UUID) -> CampInquiry | None:
        """Return an inquiry by id."""
        with store_errors("get_inquiry"):
            response = (
                self.client.table("camp_inquiries")
                .select(_INQUIRY_COLUMNS)
                .eq("id", str(inquiry_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_inquiry(response.data[0])

    def update_inquiry(self, inquiry_id: UUID, payload: dict[str, object]) -> None:
        """Update inquiry flags."""
        with store_errors("update_inquiry"):
            self.client.table("camp_inquiries").update(payload).eq(
                "id", str(inquiry_id)
            ).execute()


def _parse_question(row: dict[str, object]) -> CampQuestion:
    return CampQuestion(
        id=UUID(str(row["id"])),
        camp_slug=str(row["camp_slug"]),
        prompt=str(row.get("prompt") or ""),
        kind=QuestionKind(row.get("kind") or QuestionKind.TEXT),
        required=bool(row.get("required")),
        choices=str_list(row.get("choices")),
        position=int(row.get("position") or 0),
    )


def _parse_inquiry(row: dict[str, object]) -> CampInquiry:
    return CampInquiry(
        id=UUID(str(row["id"])),
        camp_slug=str(row["camp_slug"]),
        title=str(row.get("title") or ""),
        description=str(row.get("description") or ""),
        is_liked=bool(row.get("is_liked")),
        is_approved=bool(row.get("is_approved")),
        created_at=parse_timestamp(row.get("created_at")) or MISSING_TIMESTAMP,
    )
