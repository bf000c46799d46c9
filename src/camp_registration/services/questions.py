"""Per-camp application questions and the applicant inquiry board."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from camp_registration.domain.camps import (
    CampInquiry,
    CampQuestion,
    QuestionDraft,
    QuestionKind,
)
from camp_registration.errors import InquiryNotFound, QuestionNotFound, ValidationError

logger = logging.getLogger(__name__)

INQUIRY_VIEWS = {"all", "liked", "unliked"}


class QuestionRepository(Protocol):
    """Persistence interface for camp questions and inquiries."""

    def list_questions(self, camp_slug: str) -> list[CampQuestion]:
        """Return a camp's questions ordered by position."""

    def create_question(
        self, camp_slug: str, payload: dict[str, object]
    ) -> CampQuestion:
        """Create a question and return it."""

    def update_question(
        self, question_id: UUID, payload: dict[str, object]
    ) -> CampQuestion | None:
        """Update a question and return it, or None when it does not exist."""

    def delete_question(self, question_id: UUID) -> bool:
        """Delete a question; return False when it did not exist."""

    def list_inquiries(self, camp_slug: str) -> list[CampInquiry]:
        """Return a camp's inquiries."""

    def get_inquiry(self, inquiry_id: UUID) -> CampInquiry | None:
        """Return an inquiry by id, if present."""

    def update_inquiry(self, inquiry_id: UUID, payload: dict[str, object]) -> None:
        """Update inquiry flags."""


@dataclass
class QuestionService:
    """Service for staff question management."""

    repository: QuestionRepository

    def list_questions(self, camp_slug: str) -> list[CampQuestion]:
        """Return the questions shown on a camp's registration form."""
        return self.repository.list_questions(camp_slug)

    def add_question(self, camp_slug: str, draft: QuestionDraft) -> CampQuestion:
        """Validate and append a question to a camp's form."""
        payload = _question_payload(draft)
        if draft.position is None:
            payload["position"] = len(self.repository.list_questions(camp_slug))
        question = self.repository.create_question(camp_slug, payload)
        logger.info("Added question %s to camp %s", question.id, camp_slug)
        return question

    def update_question(self, question_id: UUID, draft: QuestionDraft) -> CampQuestion:
        """Replace a question's content."""
        updated = self.repository.update_question(
            question_id, _question_payload(draft)
        )
        if updated is None:
            raise QuestionNotFound
        return updated

    def delete_question(self, question_id: UUID) -> None:
        """Remove a question from its camp."""
        if not self.repository.delete_question(question_id):
            raise QuestionNotFound
        logger.info("Deleted question %s", question_id)

    def list_inquiries(
        self, camp_slug: str, view: str = "all", search: str = ""
    ) -> list[CampInquiry]:
        """Return inquiries filtered by like state and text, newest first."""
        if view not in INQUIRY_VIEWS:
            raise ValidationError(["view"])
        needle = search.strip().lower()
        inquiries = [
            inquiry
            for inquiry in self.repository.list_inquiries(camp_slug)
            if (
                view == "all"
                or (view == "liked" and inquiry.is_liked)
                or (view == "unliked" and not inquiry.is_liked)
            )
            and (
                not needle
                or needle in inquiry.title.lower()
                or needle in inquiry.description.lower()
            )
        ]
        return sorted(inquiries, key=lambda inquiry: inquiry.created_at, reverse=True)

    def toggle_inquiry_like(self, inquiry_id: UUID) -> CampInquiry:
        """Flip the liked flag on an inquiry."""
        inquiry = self._require_inquiry(inquiry_id)
        self.repository.update_inquiry(inquiry_id, {"is_liked": not inquiry.is_liked})
        return self._require_inquiry(inquiry_id)

    def toggle_inquiry_approval(self, inquiry_id: UUID) -> CampInquiry:
        """Flip the approved flag on an inquiry."""
        inquiry = self._require_inquiry(inquiry_id)
        self.repository.update_inquiry(
            inquiry_id, {"is_approved": not inquiry.is_approved}
        )
        return self._require_inquiry(inquiry_id)

    def _require_inquiry(self, inquiry_id: UUID) -> CampInquiry:
        inquiry = self.repository.get_inquiry(inquiry_id)
        if inquiry is None:
            raise InquiryNotFound
        return inquiry


def _question_payload(draft: QuestionDraft) -> dict[str, object]:
    invalid = []
    if not draft.prompt or not draft.prompt.strip():
        invalid.append("prompt")
    if draft.kind not in set(QuestionKind):
        invalid.append("kind")
    choices = [choice.strip() for choice in draft.choices if choice.strip()]
    if draft.kind == QuestionKind.CHOICE and not choices:
        invalid.append("choices")
    if invalid:
        raise ValidationError(invalid)
    payload: dict[str, object] = {
        "prompt": draft.prompt.strip(),
        "kind": str(draft.kind),
        "required": draft.required,
        "choices": choices if draft.kind == QuestionKind.CHOICE else [],
    }
    if draft.position is not None:
        payload["position"] = draft.position
    return payload
